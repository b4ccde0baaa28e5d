#!/usr/bin/env python
"""Create an admin user who can log in through /admin/login."""

import argparse
import asyncio
import getpass

from src.catalog_service.app.core.config import get_settings
from src.catalog_service.app.db.database import close_db, init_db
from src.catalog_service.app.services.auth import AuthService


async def create_admin(email: str, password: str, name: str | None, role: str) -> None:
    await init_db()
    try:
        user = await AuthService(get_settings()).create_admin(
            email=email, password=password, name=name, role=role
        )
        print(f"Created admin user {user.id} ({user.email}, role={user.role})")
    finally:
        await close_db()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a catalog admin user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default=None)
    parser.add_argument("--role", default="admin")
    parser.add_argument(
        "--password", default=None, help="Prompted for when not given"
    )
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    asyncio.run(create_admin(args.email, password, args.name, args.role))


if __name__ == "__main__":
    main()
