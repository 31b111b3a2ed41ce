"""SQLite-backed persistence for user accounts."""
from __future__ import annotations

import sqlite3
import uuid
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .exceptions import DuplicateUser
from .models import UserRecord


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the accounts database."""

    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "accounts.sqlite3").resolve(strict=False)


def _generate_id() -> str:
    return str(uuid.uuid4())


class Database:
    """Simple wrapper around SQLite for persisting user records.

    Lookups, updates and deletes are keyed by email. Uniqueness of the email
    column is enforced by an index so that two concurrent creates for the same
    address cannot both be stored.
    """

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def initialize(self) -> None:
        """Create the required tables if they do not already exist."""

        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL,
                    password_hash TEXT NOT NULL
                );

                CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email ON users(email);
                """
            )

    # ------------------------------------------------------------------
    # User store
    # ------------------------------------------------------------------
    def find_by_email(self, email: str) -> Optional[UserRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def find_all(self) -> List[UserRecord]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY rowid").fetchall()
        return [self._row_to_user(row) for row in rows]

    def save(self, record: UserRecord) -> UserRecord:
        """Insert ``record`` or overwrite the row sharing its id.

        A record without an id is assigned a fresh one. The returned record is
        a copy carrying the persisted values.
        """

        stored = record if record.id is not None else replace(record, id=_generate_id())

        with self._connect() as conn:
            try:
                conn.execute(
                    """
                    INSERT INTO users (id, name, email, password_hash)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name = excluded.name,
                        email = excluded.email,
                        password_hash = excluded.password_hash
                    """,
                    (stored.id, stored.name, stored.email, stored.password_hash),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateUser(stored.email) from exc

        return replace(stored)

    def delete_by_email(self, email: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM users WHERE email = ?", (email,))
            return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _row_to_user(self, row: sqlite3.Row) -> UserRecord:
        return UserRecord(
            id=str(row["id"]),
            name=str(row["name"]),
            email=str(row["email"]),
            password_hash=str(row["password_hash"]),
        )


__all__ = ["Database", "resolve_database_path"]
