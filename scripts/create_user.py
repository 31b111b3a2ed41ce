import argparse
import getpass
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from accounts.database import Database, resolve_database_path
from accounts.exceptions import AccountsError
from accounts.models import PersonFields
from accounts.validation import validate_user_request
from accounts.workflow import UserWorkflow


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("name", help="Display name for the user")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument(
        "--db",
        dest="db_path",
        default=None,
        help="Path to the SQLite database (defaults to ACCOUNTS_DB_PATH or data/accounts.sqlite3)",
    )
    return parser.parse_args(argv)


def prompt_for_password() -> str:
    for _ in range(3):
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match. Try again.", file=sys.stderr)
            continue
        return password
    raise SystemExit("Failed to set password after three attempts.")


def main(argv=None) -> int:
    args = parse_args(argv)
    password = prompt_for_password()

    db_env = args.db_path or os.getenv("ACCOUNTS_DB_PATH")
    database = Database(resolve_database_path(db_env))
    database.initialize()

    try:
        fields = validate_user_request(PersonFields(name=args.name, email=args.email, password=password))
        record = UserWorkflow(database).create(fields)
    except AccountsError as exc:  # validation failures, duplicates, etc.
        print(f"Error: {exc.message}", file=sys.stderr)
        for detail in exc.details:
            print(f"  {detail}", file=sys.stderr)
        return 1

    print(f"Created user {record.id}: {record.name} <{record.email}>")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
