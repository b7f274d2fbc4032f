"""
Name: Admin Bootstrap Script

Responsibilities:
  - Create the first admin user (idempotent)
  - Hash passwords with Argon2 (same hasher as /register)
  - Store the user directly in PostgreSQL

Notes:
  - /register accepts role=admin too; this script exists for deployments
    that want the admin provisioned out of band
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

import psycopg

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from taskboard.identity.auth_users import hash_password  # noqa: E402
from taskboard.identity.users import UserRole  # noqa: E402


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt_username() -> str:
    username = input("Username: ").strip()
    if not username:
        raise SystemExit("Username is required.")
    return username


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create the first admin user (idempotent)."
    )
    parser.add_argument("--username", help="Login name (must be unique)")
    parser.add_argument(
        "--password",
        help="User password (omit to be prompted securely)",
    )
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[role.value for role in UserRole],
        help="User role (default: admin)",
    )
    return parser.parse_args(argv)


def _maybe_create_user(db_url: str, username: str, password: str, role: str) -> None:
    with psycopg.connect(db_url) as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, role FROM users WHERE username = %s",
                (username,),
            )
            row = cur.fetchone()
            if row:
                print(f"User already exists: id={row[0]} username={username} role={row[1]}")
                return

            cur.execute(
                """
                INSERT INTO users (username, password, role)
                VALUES (%s, %s, %s)
                RETURNING id
                """,
                (username, hash_password(password), role),
            )
            user_id = cur.fetchone()[0]
            conn.commit()
            print(f"Created user: id={user_id} username={username} role={role}")


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    db_url = _require_database_url()
    username = args.username.strip() if args.username else _prompt_username()
    if not username:
        raise SystemExit("Username is required.")
    password = args.password or _prompt_password()
    _maybe_create_user(db_url, username=username, password=password, role=args.role)


if __name__ == "__main__":
    main()
