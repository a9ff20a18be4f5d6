"""Identity management - password hashing and user store access.

UserManager is the only place that touches password hashes. It works
against any object satisfying UserStore; UserRepository is the
production store.
"""
import logging
from typing import Protocol

import bcrypt

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Protocol for the persistence side of identity management."""

    async def get_by_id(self, user_id: str) -> dict | None: ...
    async def get_by_username(self, username: str) -> dict | None: ...
    async def get_by_email(self, email: str) -> dict | None: ...
    async def get_credentials(self, user_id: str) -> dict | None: ...
    async def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        first_name: str = "",
        last_name: str = "",
        user_id: str | None = None
    ) -> str: ...
    async def update_password_hash(self, user_id: str, password_hash: str) -> bool: ...


class UserManager:
    """Creates users and verifies their passwords.

    Examples:
        >>> manager = UserManager(UserRepository(conn))
        >>> user_id = await manager.create("alice", "alice@example.com", "secret")
        >>> user = await manager.find_by_login("alice@example.com")
    """

    def __init__(self, store: UserStore):
        self.store = store

    async def find_by_login(self, username_or_email: str) -> dict | None:
        """Resolve a login name that may be a username or an email.

        Args:
            username_or_email: Value typed into the login form

        Returns:
            User dict or None
        """
        login = username_or_email.strip()
        if not login:
            return None
        if "@" in login:
            user = await self.store.get_by_email(login)
            if user:
                return user
        return await self.store.get_by_username(login)

    async def create(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        user_id: str | None = None
    ) -> str:
        """Hash password and store a new user.

        Returns:
            New user ID
        """
        user_id = await self.store.create(
            username,
            email,
            self.hash_password(password),
            first_name=first_name,
            last_name=last_name,
            user_id=user_id
        )
        logger.info("Created user %s", username)
        return user_id

    async def check_password(self, user: dict, password: str) -> bool:
        """Verify password for an already resolved user.

        Args:
            user: User dict (needs "id")
            password: Plain text password

        Returns:
            True if password matches
        """
        credentials = await self.store.get_credentials(user["id"])
        if not credentials or not credentials.get("password_hash"):
            return False
        return self.verify_password(password, credentials["password_hash"])

    async def change_password(self, user_id: str, new_password: str) -> bool:
        """Store a new password hash.

        Returns:
            True if user existed
        """
        return await self.store.update_password_hash(user_id, self.hash_password(new_password))

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash password using bcrypt."""
        hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
        return hashed.decode('utf-8')

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """Verify password against bcrypt hash."""
        if not (hashed.startswith("$2b$") or hashed.startswith("$2a$")):
            return False
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
