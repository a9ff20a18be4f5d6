"""Authentication service - handles login/logout and session management."""
import logging
from typing import Optional

from ...config import REMEMBER_ME_DAYS, SESSION_HOURS
from ...infrastructure.identity import UserManager
from ...infrastructure.repositories import SessionRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations.

    Responsibilities:
    - User authentication by username or email
    - Session management
    """

    def __init__(
        self,
        user_manager: UserManager,
        session_repository: SessionRepository
    ):
        self.user_manager = user_manager
        self.session_repo = session_repository

    async def authenticate(self, username_or_email: str, password: str) -> Optional[dict]:
        """Authenticate user.

        Args:
            username_or_email: Username or email
            password: Password

        Returns:
            User dict if authenticated, None otherwise
        """
        user = await self.user_manager.find_by_login(username_or_email)
        if user and await self.user_manager.check_password(user, password):
            logger.info("Login succeeded for %s", user["username"])
            return user

        logger.warning("Login failed for %r", username_or_email)
        return None

    @staticmethod
    def session_hours(remember_me: bool) -> int:
        """Session lifetime in hours."""
        return REMEMBER_ME_DAYS * 24 if remember_me else SESSION_HOURS

    async def create_session(self, user_id: str, remember_me: bool = False) -> str:
        """Create new session for user.

        Returns:
            Session ID
        """
        return await self.session_repo.create(user_id, self.session_hours(remember_me))

    async def get_session(self, session_id: str) -> Optional[dict]:
        """Get valid session by ID, None if missing or expired."""
        return await self.session_repo.get_valid(session_id)

    async def delete_session(self, session_id: str) -> bool:
        """Delete session (logout)."""
        return await self.session_repo.delete(session_id)

    async def cleanup_expired_sessions(self) -> int:
        """Delete expired sessions.

        Returns:
            Number of sessions removed
        """
        removed = await self.session_repo.cleanup_expired()
        if removed:
            logger.info("Removed %d expired sessions", removed)
        return removed
