"""Session repository - handles all session-related database operations.

Sessions are temporary authentication tokens for logged-in users.
"""
import secrets

from .base import AsyncRepository


class SessionRepository(AsyncRepository):
    """Repository for session management.

    Sessions track logged-in users via secure tokens stored in cookies.

    Examples:
        >>> repo = SessionRepository(conn)
        >>> session_id = await repo.create("user1", expires_hours=24)
        >>> session = await repo.get_valid(session_id)
        >>> await repo.delete(session_id)  # logout
    """

    async def create(self, user_id: str, expires_hours: int = 12) -> str:
        """Create new session for user.

        Args:
            user_id: User ID to create session for
            expires_hours: Session lifetime in hours

        Returns:
            Secure random session ID
        """
        session_id = secrets.token_urlsafe(32)

        await self._execute(
            """INSERT INTO sessions (id, user_id, expires_at)
               VALUES (?, ?, datetime('now', '+' || ? || ' hours'))""",
            (session_id, user_id, expires_hours)
        )
        await self._commit()
        return session_id

    async def get_valid(self, session_id: str) -> dict | None:
        """Get session if valid (not expired).

        Args:
            session_id: Session ID from cookie

        Returns:
            Session dict with user info, or None if invalid/expired
        """
        return await self._fetchone(
            """SELECT s.*, u.username, u.email, u.first_name, u.last_name
               FROM sessions s
               JOIN users u ON s.user_id = u.id
               WHERE s.id = ? AND s.expires_at > datetime('now')""",
            (session_id,)
        )

    async def delete(self, session_id: str) -> bool:
        """Delete session (logout).

        Returns:
            True if session existed and was deleted
        """
        cursor = await self._execute(
            "DELETE FROM sessions WHERE id = ?",
            (session_id,)
        )
        await self._commit()
        return cursor.rowcount > 0

    async def cleanup_expired(self) -> int:
        """Delete all expired sessions.

        Returns:
            Number of sessions cleaned up
        """
        cursor = await self._execute(
            "DELETE FROM sessions WHERE expires_at <= datetime('now')"
        )
        await self._commit()
        return cursor.rowcount
