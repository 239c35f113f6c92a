"""
Create a user without going through the HTTP signup. Run from project root:
  python -m worldapi.scripts.create_user USERNAME PASSWORD
"""
import argparse
import sys

from worldapi.core.config import get_settings
from worldapi.core.database import build_engine, build_session_factory
from worldapi.core.security import hash_password
from worldapi.services.users import UserAlreadyExistsError, UserStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a World API user.")
    parser.add_argument("username", help="Username (non-empty)")
    parser.add_argument("password", help="Password (non-empty)")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or not args.password:
        print("Username and password are required.", file=sys.stderr)
        return 1

    settings = get_settings()
    db = build_session_factory(build_engine(settings))()
    try:
        store = UserStore(db)
        if store.count_users(username) > 0:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        try:
            store.insert_user(username, hash_password(args.password, rounds=settings.BCRYPT_ROUNDS))
        except UserAlreadyExistsError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created user '{username}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
