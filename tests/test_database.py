from __future__ import annotations

from pathlib import Path

import pytest

from accounts.database import Database, resolve_database_path
from accounts.exceptions import DuplicateUser
from accounts.models import UserRecord


@pytest.fixture()
def database(tmp_path: Path) -> Database:
    db_path = tmp_path / "accounts.sqlite3"
    db = Database(db_path)
    db.initialize()
    return db


def test_save_assigns_id_and_round_trips(database: Database) -> None:
    saved = database.save(UserRecord(name="Alice", email="alice@example.com", password_hash="h1"))

    assert saved.id is not None
    found = database.find_by_email("alice@example.com")
    assert found == saved


def test_save_with_existing_id_updates_in_place(database: Database) -> None:
    saved = database.save(UserRecord(name="Alice", email="alice@example.com", password_hash="h1"))
    saved.name = "Alice Smith"
    saved.email = "alice.smith@example.com"

    database.save(saved)

    assert len(database.find_all()) == 1
    assert database.find_by_email("alice@example.com") is None
    refreshed = database.find_by_email("alice.smith@example.com")
    assert refreshed is not None
    assert refreshed.id == saved.id
    assert refreshed.name == "Alice Smith"


def test_email_uniqueness_is_enforced(database: Database) -> None:
    database.save(UserRecord(name="Alice", email="alice@example.com", password_hash="h1"))

    with pytest.raises(DuplicateUser):
        database.save(UserRecord(name="Other", email="alice@example.com", password_hash="h2"))


def test_email_lookup_is_exact(database: Database) -> None:
    database.save(UserRecord(name="Alice", email="alice@example.com", password_hash="h1"))
    assert database.find_by_email("ALICE@example.com") is None


def test_find_all_preserves_insertion_order(database: Database) -> None:
    for index, name in enumerate(["Zed", "Amy", "Max"]):
        database.save(UserRecord(name=name, email=f"user{index}@example.com", password_hash="h"))

    assert [record.name for record in database.find_all()] == ["Zed", "Amy", "Max"]


def test_delete_by_email(database: Database) -> None:
    database.save(UserRecord(name="Alice", email="alice@example.com", password_hash="h1"))

    assert database.delete_by_email("alice@example.com") is True
    assert database.delete_by_email("alice@example.com") is False
    assert database.find_all() == []


def test_resolve_database_path(tmp_path: Path) -> None:
    explicit = resolve_database_path(str(tmp_path / "custom.sqlite3"))
    assert explicit == (tmp_path / "custom.sqlite3").resolve()

    default = resolve_database_path(None)
    assert default.name == "accounts.sqlite3"
    assert default.parent.name == "data"
