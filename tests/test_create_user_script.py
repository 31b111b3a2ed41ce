from pathlib import Path
from unittest import mock

from accounts.database import Database
from scripts import create_user


def test_create_user_script_creates_account(tmp_path: Path, capsys) -> None:
    db_path = tmp_path / "script.sqlite3"

    with mock.patch.object(create_user.getpass, "getpass", side_effect=["Password123!", "Password123!"]):
        exit_code = create_user.main(["John Doe", "john@example.com", "--db", str(db_path)])

    assert exit_code == 0
    database = Database(db_path)
    record = database.find_by_email("john@example.com")
    assert record is not None
    assert record.name == "John Doe"
    assert "Created user" in capsys.readouterr().out


def test_create_user_script_rejects_duplicates(tmp_path: Path, capsys) -> None:
    db_path = tmp_path / "script.sqlite3"

    with mock.patch.object(create_user.getpass, "getpass", side_effect=["Password123!"] * 4):
        assert create_user.main(["John Doe", "john@example.com", "--db", str(db_path)]) == 0
        assert create_user.main(["John Doe", "john@example.com", "--db", str(db_path)]) == 1

    assert "already exists" in capsys.readouterr().err
