"""User repository - handles all user-related database operations."""
import uuid

from .base import AsyncRepository

# Columns safe to hand out to templates and API responses
PUBLIC_COLUMNS = "id, username, email, first_name, last_name, created_at"


def fold_key(value: str) -> str:
    """Comparison key for usernames and emails.

    SQLite's LOWER() only folds ASCII, so the folded form is computed
    here and stored next to the original value.
    """
    return value.strip().casefold()


class UserRepository(AsyncRepository):
    """Repository for user entity operations.

    Usernames and emails are unique and matched case-insensitively
    through their folded *_key columns. Lookups return public columns
    only; the password hash is read through get_credentials().

    Examples:
        >>> repo = UserRepository(conn)
        >>> user = await repo.get_by_username("Åsa")
        >>> matches = await repo.search("bob")
    """

    async def get_by_id(self, user_id: str) -> dict | None:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User dict or None if not found
        """
        return await self._fetchone(
            f"SELECT {PUBLIC_COLUMNS} FROM users WHERE id = ?",
            (user_id,)
        )

    async def get_by_username(self, username: str) -> dict | None:
        """Get user by username (case-insensitive)."""
        return await self._fetchone(
            f"SELECT {PUBLIC_COLUMNS} FROM users WHERE username_key = ?",
            (fold_key(username),)
        )

    async def get_by_email(self, email: str) -> dict | None:
        """Get user by email (case-insensitive)."""
        return await self._fetchone(
            f"SELECT {PUBLIC_COLUMNS} FROM users WHERE email_key = ?",
            (fold_key(email),)
        )

    async def get_credentials(self, user_id: str) -> dict | None:
        """Get user row including password hash.

        Args:
            user_id: User ID

        Returns:
            Full user dict or None
        """
        return await self._fetchone(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        )

    async def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        first_name: str = "",
        last_name: str = "",
        user_id: str | None = None
    ) -> str:
        """Create new user.

        Args:
            username: Unique username
            email: Unique email address
            password_hash: Already hashed password
            first_name: First name
            last_name: Last name
            user_id: Explicit ID (generated when omitted)

        Returns:
            New user ID

        Raises:
            sqlite3.IntegrityError: If the username or email is taken
        """
        user_id = user_id or str(uuid.uuid4())
        try:
            await self._execute(
                """INSERT INTO users
                   (id, username, username_key, email, email_key,
                    first_name, last_name, password_hash)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (user_id, username.strip(), fold_key(username), email.strip(), fold_key(email),
                 first_name.strip(), last_name.strip(), password_hash)
            )
        except Exception:
            await self._rollback()
            raise
        await self._commit()
        return user_id

    async def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        """Replace stored password hash.

        Returns:
            True if user existed and was updated
        """
        cursor = await self._execute(
            "UPDATE users SET password_hash = ? WHERE id = ?",
            (password_hash, user_id)
        )
        await self._commit()
        return cursor.rowcount > 0

    async def delete(self, user_id: str) -> bool:
        """Delete user together with sessions and favorites.

        Args:
            user_id: User ID to delete

        Returns:
            True if user existed and was deleted
        """
        # Foreign keys are not enforced, clean dependents by hand
        await self._execute("DELETE FROM sessions WHERE user_id = ?", (user_id,))
        await self._execute("DELETE FROM favorites WHERE user_id = ?", (user_id,))

        cursor = await self._execute("DELETE FROM users WHERE id = ?", (user_id,))
        await self._commit()
        return cursor.rowcount > 0

    async def list_all(self) -> list[dict]:
        """List all users ordered by username."""
        return await self._fetchall(
            f"SELECT {PUBLIC_COLUMNS} FROM users ORDER BY username"
        )

    async def search(self, query: str, exclude_user_id: str | None = None, limit: int = 10) -> list[dict]:
        """Search users by username substring (case-insensitive).

        Args:
            query: Search string
            exclude_user_id: Optional user ID to exclude from results
            limit: Maximum results

        Returns:
            List of matching users
        """
        # Escape LIKE wildcards so "%" and "_" match literally
        escaped = fold_key(query).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        search_pattern = f"%{escaped}%"

        if exclude_user_id:
            return await self._fetchall(
                f"""SELECT {PUBLIC_COLUMNS}
                   FROM users
                   WHERE id != ? AND username_key LIKE ? ESCAPE '\\'
                   ORDER BY username_key
                   LIMIT ?""",
                (exclude_user_id, search_pattern, limit)
            )

        return await self._fetchall(
            f"""SELECT {PUBLIC_COLUMNS}
               FROM users
               WHERE username_key LIKE ? ESCAPE '\\'
               ORDER BY username_key
               LIMIT ?""",
            (search_pattern, limit)
        )
