"""Create an ADMIN account.

Run after database migration:

    python scripts/create_admin.py admin@example.org --name "Ops Lead"

The password is read from --password or prompted for.
"""

import argparse
import asyncio
import getpass
import sys

from eventcare.db.init_db import create_admin
from eventcare.db.session import AsyncSessionLocal, engine

MIN_PASSWORD_LENGTH = 8


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or promote an ADMIN account")
    parser.add_argument("email", help="Email address of the admin")
    parser.add_argument("--name", default="System Admin", help="Display name")
    parser.add_argument("--password", help="Password (prompted if omitted)")
    return parser.parse_args(argv)


async def run(email: str, name: str, password: str) -> None:
    async with AsyncSessionLocal() as session:
        user = await create_admin(session, email, password, name=name)
    await engine.dispose()

    print("=" * 60)
    print("ADMIN ACCOUNT READY")
    print("=" * 60)
    print(f"  Email: {user.email}")
    print(f"  Name:  {user.name}")
    print(f"  ID:    {user.id}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", file=sys.stderr)
        return 1

    asyncio.run(run(args.email, args.name, password))
    return 0


if __name__ == "__main__":
    sys.exit(main())
