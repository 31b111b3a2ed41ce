"""Command-line interface for the user account service."""

from __future__ import annotations
import argparse
import logging
import os
import sys
from getpass import getpass
from pathlib import Path
from typing import Sequence

import httpx

from accounts.config import ServiceConfig, load_service_config, resolve_config_path
from accounts.database import Database
from accounts.exceptions import AccountsError
from accounts.models import PersonFields
from accounts.validation import validate_user_request
from accounts.workflow import UserWorkflow

logger = logging.getLogger("accounts.main")

_DEFAULT_SERVICE_URL = "http://localhost:8080"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User account service utilities")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML settings file (default: ACCOUNTS_CONFIG or config/accounts.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    subparsers.add_parser("init-db", help="Initialise the accounts database")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP account service")
    serve_parser.add_argument("--host", default=None, help="Bind address for the API")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the HTTP API (default: 8080)",
    )

    admin_parser = subparsers.add_parser(
        "admin", help="Launch the interactive administration console"
    )
    admin_parser.add_argument(
        "--service-url",
        default=None,
        help=f"Base URL of a running account service (default: {_DEFAULT_SERVICE_URL})",
    )

    args_list = list(argv) if argv is not None else sys.argv[1:]
    known_commands = {"serve", "admin", "init-db"}

    # Global options must stay ahead of the subcommand name.
    global_args: list[str] = []
    while args_list and (args_list[0] == "--config" or args_list[0].startswith("--config=")):
        take = 1 if "=" in args_list[0] else 2
        global_args.extend(args_list[:take])
        args_list = args_list[take:]

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args([*global_args, *args_list])
        if first not in known_commands:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args([*global_args, *args_list])
            args_list = ["serve", *args_list]

    return parser.parse_args([*global_args, *args_list])


def _load_config(config_arg: str | None) -> ServiceConfig:
    config_path = resolve_config_path(config_arg or os.getenv("ACCOUNTS_CONFIG"))
    return load_service_config(config_path)


def _initialise_database(config: ServiceConfig) -> Database:
    database = Database(config.database_path)
    database.initialize()
    logger.info("Database initialised at %s", config.database_path)
    return database


def _serve(*, database: Database, config: ServiceConfig, host: str | None, port: int | None) -> None:
    from accounts.service import create_app
    import uvicorn

    bind_host = host or config.host
    bind_port = port or config.port
    logger.info("Starting account API on http://%s:%s", bind_host, bind_port)

    app = create_app(database=database, config=config)
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=config.log_level)


def _run_admin_cli(database: Database, *, service_url: str | None = None) -> None:
    """Provide an interactive management console for administrators."""

    workflow = UserWorkflow(database)
    base_url = service_url or _DEFAULT_SERVICE_URL

    print("User Accounts Administration Console")
    print("Press Ctrl+C at any time to exit.\n")

    try:
        while True:
            print("Select an option:")
            print("  1) List all users")
            print("  2) Add a new user")
            print("  3) Query a running service")
            print("  4) Exit")

            choice = input("Enter choice [1-4]: ").strip()

            if choice == "1":
                _list_users(workflow)
            elif choice == "2":
                _add_user(workflow)
            elif choice == "3":
                _show_remote_users(base_url)
            elif choice == "4":
                print("Goodbye!")
                return
            else:
                print("Invalid selection. Please choose a number from the menu.\n")

            print()
    except KeyboardInterrupt:
        print("\nExiting administration console.")


def _list_users(workflow: UserWorkflow) -> None:
    users = workflow.preview_all()
    if not users:
        print("No users are currently registered.")
        return

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':<36}  {'Name':<24}  Email")
    print("-" * 80)
    for user in users:
        print(f"{user.id or '':<36}  {user.name:<24}  {user.email}")


def _add_user(workflow: UserWorkflow) -> None:
    print("\nCreate a new user (leave the name blank to cancel).")
    name = input("Name: ")
    if not name.strip():
        print("User creation cancelled.")
        return

    email = input("Email address: ")
    password = _prompt_for_password()
    if password is None:
        print("Aborted creating user.")
        return

    try:
        fields = validate_user_request(PersonFields(name=name, email=email, password=password))
        record = workflow.create(fields)
    except AccountsError as exc:
        print(f"Failed to create user: {exc.message}")
        for detail in exc.details:
            print(f"  - {detail}")
        return

    print(f"Created user {record.id}: {record.name} <{record.email}>")


def _prompt_for_password() -> str | None:
    for _ in range(3):
        password = getpass("Password (min 8 characters, mixed case, digit and symbol): ")
        confirmation = getpass("Confirm password: ")
        if password != confirmation:
            print("Passwords do not match. Please try again.")
            continue
        return password
    return None


def _show_remote_users(base_url: str) -> None:
    endpoint = base_url.rstrip("/") + "/users/all"

    try:
        response = httpx.get(endpoint, timeout=10.0)
    except httpx.HTTPError as exc:
        print(f"Failed to contact account service: {exc}")
        return

    if response.status_code == 204:
        print("The service has no registered users.")
        return
    if response.status_code != 200:
        print(f"Service responded with {response.status_code}: {response.text.strip()}")
        return

    try:
        users = response.json()
    except ValueError:
        print("Service returned an unexpected response format.")
        return

    print(f"Service at {base_url} reports {len(users)} user(s):")
    for user in users:
        print(f"- {user.get('name', '?')} <{user.get('email', '?')}> ({user.get('id', 'unknown id')})")


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for CLI usage."""

    args = _parse_args(argv)
    config = _load_config(args.config)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    database = _initialise_database(config)

    if args.command == "serve":
        _serve(
            database=database,
            config=config,
            host=getattr(args, "host", None),
            port=getattr(args, "port", None),
        )
    elif args.command == "admin":
        _run_admin_cli(database, service_url=getattr(args, "service_url", None))
    elif args.command == "init-db":
        print(f"Database initialisation complete: {Path(config.database_path)}")


if __name__ == "__main__":
    main()
