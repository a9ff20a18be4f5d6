#!/usr/bin/env python3
"""
User management CLI for Recipe Site.
Run this script to add, list, or remove users.

Usage:
    python manage_users.py add <username> <email> <password> [first_name] [last_name]
    python manage_users.py list
    python manage_users.py delete <username>
    python manage_users.py passwd <username> <new_password>
"""

import asyncio
import sys

from fastapi import HTTPException

from recipe_site import config
from recipe_site.application.services import UserService
from recipe_site.infrastructure.database import init_schema, open_connection
from recipe_site.infrastructure.identity import UserManager
from recipe_site.infrastructure.repositories import UserRepository


def print_usage():
    print(__doc__)


async def cmd_add(service: UserService, args):
    if len(args) < 3:
        print("Error: add requires <username> <email> <password>")
        print("Example: python manage_users.py add chef chef@example.com mypassword Anna Svensson")
        return 1

    username, email, password = args[0], args[1], args[2]
    first_name = args[3] if len(args) > 3 else ""
    last_name = args[4] if len(args) > 4 else ""

    try:
        user = await service.register_user(username, email, password, first_name, last_name)
    except HTTPException as e:
        print(f"Error: {e.detail}")
        return 1

    print(f"User '{username}' created successfully (ID: {user['id']})")
    return 0


async def cmd_list(service: UserService, args):
    users = await service.user_repo.list_all()
    if not users:
        print("No users found. Create one with: python manage_users.py add <username> <email> <password>")
        return 0

    print(f"{'ID':<38} {'Username':<20} {'Email':<30} {'Created'}")
    print("-" * 110)
    for user in users:
        print(f"{user['id']:<38} {user['username']:<20} {user['email']:<30} {user['created_at']}")
    return 0


async def cmd_delete(service: UserService, args):
    if len(args) < 1:
        print("Error: delete requires <username>")
        return 1

    username = args[0]
    user = await service.get_user_by_username(username)

    if not user:
        print(f"Error: User '{username}' not found")
        return 1

    # Confirm deletion
    confirm = input(f"Delete user '{username}' ({user['email']})? [y/N]: ")
    if confirm.lower() != 'y':
        print("Cancelled")
        return 0

    await service.user_repo.delete(user['id'])
    print(f"User '{username}' deleted")
    return 0


async def cmd_passwd(service: UserService, args):
    if len(args) < 2:
        print("Error: passwd requires <username> <new_password>")
        return 1

    username, new_password = args[0], args[1]

    if len(new_password) < config.MIN_PASSWORD_LENGTH:
        print(f"Error: Password must be at least {config.MIN_PASSWORD_LENGTH} characters")
        return 1

    user = await service.get_user_by_username(username)
    if not user:
        print(f"Error: User '{username}' not found")
        return 1

    await service.user_manager.change_password(user['id'], new_password)
    print(f"Password updated for '{username}'")
    return 0


COMMANDS = {
    'add': cmd_add,
    'list': cmd_list,
    'delete': cmd_delete,
    'passwd': cmd_passwd,
}


async def run(command: str, args: list[str]) -> int:
    conn = await open_connection(config.DATABASE_PATH)
    try:
        await init_schema(conn)
        service = UserService(conn, UserManager(UserRepository(conn)))
        return await COMMANDS[command](service, args)
    finally:
        await conn.close()


def main():
    if len(sys.argv) < 2:
        print_usage()
        return 1

    command = sys.argv[1].lower()
    args = sys.argv[2:]

    if command == 'help':
        print_usage()
        return 0

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print_usage()
        return 1

    return asyncio.run(run(command, args))


if __name__ == "__main__":
    sys.exit(main())
