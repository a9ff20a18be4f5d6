"""Favorite repository - user/recipe favorite pairs."""
from .base import AsyncRepository


class FavoriteRepository(AsyncRepository):
    """Repository for the favorites join table.

    A row pairs one user with one recipe; the composite primary key
    rejects duplicates with sqlite3.IntegrityError.
    """

    async def list_recipes_for_user(self, user_id: str) -> list[dict]:
        """Get recipes a user has favorited, oldest favorite first.

        Args:
            user_id: User ID

        Returns:
            List of recipe dicts
        """
        return await self._fetchall(
            """SELECT r.*
               FROM favorites f
               JOIN recipes r ON r.id = f.recipe_id
               WHERE f.user_id = ?
               ORDER BY f.created_at, f.rowid""",
            (user_id,)
        )

    async def list_recipe_ids_for_user(self, user_id: str) -> set[str]:
        """Get IDs of recipes a user has favorited."""
        rows = await self._fetchall(
            "SELECT recipe_id FROM favorites WHERE user_id = ?",
            (user_id,)
        )
        return {row["recipe_id"] for row in rows}

    async def exists(self, user_id: str, recipe_id: str) -> bool:
        """Check whether the pair is favorited."""
        row = await self._fetchone(
            "SELECT 1 AS found FROM favorites WHERE user_id = ? AND recipe_id = ?",
            (user_id, recipe_id)
        )
        return row is not None

    async def add(self, user_id: str, recipe_id: str) -> None:
        """Insert a favorite row.

        Raises:
            sqlite3.IntegrityError: If the pair already exists
        """
        try:
            await self._execute(
                "INSERT INTO favorites (user_id, recipe_id) VALUES (?, ?)",
                (user_id, recipe_id)
            )
        except Exception:
            await self._rollback()
            raise
        await self._commit()

    async def remove(self, user_id: str, recipe_id: str) -> bool:
        """Delete a favorite row if present.

        Returns:
            True if a row was deleted
        """
        cursor = await self._execute(
            "DELETE FROM favorites WHERE user_id = ? AND recipe_id = ?",
            (user_id, recipe_id)
        )
        await self._commit()
        return cursor.rowcount > 0
