#!/usr/bin/env python3
"""
Create a user or change the role of an existing one.
Usage:
    python scripts/create_user.py --username admin --password secret --name "Administrator" --role ADMIN
    python scripts/create_user.py --username ivanov --role SENIOR
"""

import argparse
import asyncio
import sys
from typing import Optional

from outage_journal.core.constants import Role
from outage_journal.core.database import get_session_factory, init_db
from outage_journal.core.exceptions import ValidationException
from outage_journal.schemas.user import UserCreate
from outage_journal.services.user import UserService


async def set_role(username: str, role: Role) -> bool:
    """Change the role of an existing user."""
    async with get_session_factory()() as db:
        user_service = UserService(db)
        user = await user_service.get_by_username(username)
        if not user:
            print(f"Error: No user found with username '{username}'")
            return False

        user.role = role.value
        await db.commit()
        print(f"User {user.username} now has role {user.role}")
        return True


async def create_user(username: str, password: str, name: Optional[str], role: Role) -> bool:
    """Create a new user account."""
    async with get_session_factory()() as db:
        user_service = UserService(db)
        try:
            user = await user_service.create(
                UserCreate(username=username, password=password, name=name or username, role=role)
            )
        except ValidationException as e:
            print(f"Error: {e.message}")
            return False

        print(f"Created user {user.username} (id={user.id}, role={user.role})")
        return True


async def main() -> int:
    parser = argparse.ArgumentParser(description="Create a journal user or change a user's role")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", help="Password for a new user; omit to only change the role")
    parser.add_argument("--name", help="Display name (defaults to the username)")
    parser.add_argument(
        "--role",
        choices=[role.value for role in Role],
        default=Role.READER.value,
    )
    args = parser.parse_args()

    await init_db()
    role = Role(args.role)
    if args.password:
        ok = await create_user(args.username, args.password, args.name, role)
    else:
        ok = await set_role(args.username, role)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
