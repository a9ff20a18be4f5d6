"""User service - user lookup, search and registration."""
import logging
import sqlite3

from fastapi import HTTPException

from ...config import MIN_PASSWORD_LENGTH, USER_SEARCH_LIMIT
from ...infrastructure.identity import UserManager
from ...infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Service for user operations.

    Lookups go straight to the user table; anything touching
    passwords goes through the UserManager.
    """

    def __init__(self, connection, user_manager: UserManager):
        self.user_repo = UserRepository(connection)
        self.user_manager = user_manager

    async def get_user_by_id(self, user_id: str) -> dict | None:
        """Get user by ID, None if missing."""
        return await self.user_repo.get_by_id(user_id)

    async def get_user_by_username(self, username: str) -> dict | None:
        """Get user by username, None if missing."""
        return await self.user_repo.get_by_username(username)

    async def search_users(
        self,
        term: str,
        exclude_user_id: str | None = None,
        limit: int = USER_SEARCH_LIMIT
    ) -> list[dict]:
        """Find users whose username contains the term.

        Args:
            term: Substring to look for (case-insensitive)
            exclude_user_id: Optional user to leave out (usually the caller)
            limit: Maximum results

        Returns:
            Matching users ordered by username
        """
        term = (term or "").strip()
        if not term:
            return []
        return await self.user_repo.search(term, exclude_user_id=exclude_user_id, limit=limit)

    async def register_user(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = ""
    ) -> dict:
        """Register a new user.

        Returns:
            The created user dict

        Raises:
            HTTPException: 400 on invalid input, 409 if username or email is taken
        """
        username = username.strip()
        email = email.strip()
        if not username or "@" not in email:
            raise HTTPException(status_code=400, detail="Username and a valid email are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(
                status_code=400,
                detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        if await self.user_repo.get_by_username(username):
            raise HTTPException(status_code=409, detail=f"Username '{username}' is already taken")
        if await self.user_repo.get_by_email(email):
            raise HTTPException(status_code=409, detail=f"Email '{email}' is already registered")

        try:
            user_id = await self.user_manager.create(
                username, email, password, first_name=first_name, last_name=last_name
            )
        except sqlite3.IntegrityError:
            # Lost a race with a concurrent registration
            raise HTTPException(status_code=409, detail="Username or email is already registered")
        return await self.user_repo.get_by_id(user_id)
