"""Recipe repository - recipes with their ingredients, instructions and tags."""
import uuid

from .base import AsyncRepository


class RecipeRepository(AsyncRepository):
    """Repository for recipe entity operations.

    A recipe row owns ordered ingredient and instruction rows plus a
    set of tags. create() writes all of them in one transaction.
    """

    async def get_by_id(self, recipe_id: str) -> dict | None:
        """Get recipe by ID.

        Args:
            recipe_id: Recipe ID

        Returns:
            Recipe dict (with owner username) or None
        """
        return await self._fetchone(
            """SELECT r.*, u.username AS author
               FROM recipes r
               LEFT JOIN users u ON u.id = r.user_id
               WHERE r.id = ?""",
            (recipe_id,)
        )

    async def exists(self, recipe_id: str) -> bool:
        """Check whether a recipe exists."""
        row = await self._fetchone("SELECT 1 AS found FROM recipes WHERE id = ?", (recipe_id,))
        return row is not None

    async def create(
        self,
        title: str,
        description: str = "",
        category: str | None = None,
        cook_time: int | None = None,
        difficulty: str | None = None,
        user_id: str | None = None,
        ingredients: list[dict] | None = None,
        instructions: list[str] | None = None,
        tags: list[str] | None = None,
        recipe_id: str | None = None
    ) -> str:
        """Create recipe with child rows.

        Args:
            title: Recipe title
            description: Free text description
            category: Category name
            cook_time: Cooking time in minutes
            difficulty: Difficulty level
            user_id: Owner user ID
            ingredients: Dicts with quantity, unit, ingredient_name
            instructions: Instruction texts in order
            tags: Normalized tag strings
            recipe_id: Explicit ID (generated when omitted)

        Returns:
            New recipe ID
        """
        recipe_id = recipe_id or str(uuid.uuid4())
        try:
            await self._execute(
                """INSERT INTO recipes
                   (id, title, description, category, cook_time, difficulty, user_id)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (recipe_id, title, description, category, cook_time, difficulty, user_id)
            )
            if ingredients:
                await self._execute_many(
                    """INSERT INTO recipe_ingredients
                       (recipe_id, position, quantity, unit, ingredient_name)
                       VALUES (?, ?, ?, ?, ?)""",
                    [
                        (recipe_id, position, item.get("quantity", ""),
                         item.get("unit", ""), item["ingredient_name"])
                        for position, item in enumerate(ingredients)
                    ]
                )
            if instructions:
                await self._execute_many(
                    """INSERT INTO recipe_instructions (recipe_id, position, instruction_text)
                       VALUES (?, ?, ?)""",
                    [(recipe_id, position, text) for position, text in enumerate(instructions)]
                )
            if tags:
                await self._execute_many(
                    "INSERT OR IGNORE INTO recipe_tags (recipe_id, tag) VALUES (?, ?)",
                    [(recipe_id, tag) for tag in tags]
                )
        except Exception:
            await self._rollback()
            raise
        await self._commit()
        return recipe_id

    async def get_ingredients(self, recipe_id: str) -> list[dict]:
        """Get ingredient rows in form order."""
        return await self._fetchall(
            """SELECT position, quantity, unit, ingredient_name
               FROM recipe_ingredients
               WHERE recipe_id = ?
               ORDER BY position""",
            (recipe_id,)
        )

    async def get_instructions(self, recipe_id: str) -> list[dict]:
        """Get instruction rows in step order."""
        return await self._fetchall(
            """SELECT position, instruction_text
               FROM recipe_instructions
               WHERE recipe_id = ?
               ORDER BY position""",
            (recipe_id,)
        )

    async def get_tags(self, recipe_id: str) -> list[str]:
        """Get recipe tags sorted alphabetically."""
        rows = await self._fetchall(
            "SELECT tag FROM recipe_tags WHERE recipe_id = ? ORDER BY tag",
            (recipe_id,)
        )
        return [row["tag"] for row in rows]

    async def list_recent(self, limit: int = 20) -> list[dict]:
        """List newest recipes first.

        Args:
            limit: Maximum results

        Returns:
            List of recipe dicts
        """
        return await self._fetchall(
            """SELECT r.*, u.username AS author
               FROM recipes r
               LEFT JOIN users u ON u.id = r.user_id
               ORDER BY r.created_at DESC, r.rowid DESC
               LIMIT ?""",
            (limit,)
        )

    async def list_by_user(self, user_id: str) -> list[dict]:
        """List recipes owned by a user, newest first."""
        return await self._fetchall(
            """SELECT * FROM recipes
               WHERE user_id = ?
               ORDER BY created_at DESC, rowid DESC""",
            (user_id,)
        )

    async def delete(self, recipe_id: str) -> bool:
        """Delete recipe and everything hanging off it.

        Returns:
            True if recipe existed and was deleted
        """
        for table in ("recipe_ingredients", "recipe_instructions", "recipe_tags", "favorites"):
            await self._execute(f"DELETE FROM {table} WHERE recipe_id = ?", (recipe_id,))
        cursor = await self._execute("DELETE FROM recipes WHERE id = ?", (recipe_id,))
        await self._commit()
        return cursor.rowcount > 0
