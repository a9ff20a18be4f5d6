"""Favorite service - handles users' favorite recipes.

This service encapsulates business logic for:
- Listing a user's favorite recipes
- Adding and removing favorites
- Checking and toggling favorite state
"""
import logging
import sqlite3
from typing import Mapping

from fastapi import HTTPException

from ...infrastructure.repositories import FavoriteRepository, RecipeRepository

logger = logging.getLogger(__name__)


class FavoriteService:
    """Service for favorite recipe operations.

    Responsibilities:
    - Project a user's favorites to recipe records
    - Keep each user/recipe pair unique
    """

    def __init__(self, connection):
        self.favorite_repo = FavoriteRepository(connection)
        self.recipe_repo = RecipeRepository(connection)

    async def get_favorite_recipes(self, user_id: str) -> list[dict]:
        """Get recipes favorited by a user.

        Args:
            user_id: User ID

        Returns:
            List of recipe dicts, empty if the user has none
        """
        return await self.favorite_repo.list_recipes_for_user(user_id)

    async def get_user_favorites(self, user: Mapping) -> list[dict]:
        """Get favorite recipes for a user record."""
        return await self.get_favorite_recipes(user["id"])

    async def add_favorite(self, favorite: Mapping) -> None:
        """Store a favorite pair.

        Args:
            favorite: Mapping with user_id and recipe_id

        Raises:
            HTTPException: 409 if the pair is already favorited
        """
        user_id, recipe_id = favorite["user_id"], favorite["recipe_id"]
        try:
            await self.favorite_repo.add(user_id, recipe_id)
        except sqlite3.IntegrityError:
            raise HTTPException(status_code=409, detail="Recipe is already a favorite")
        logger.info("User %s favorited recipe %s", user_id, recipe_id)

    async def remove_favorite(self, user_id: str, recipe_id: str) -> bool:
        """Remove a favorite pair if present.

        Returns:
            True if a favorite was removed
        """
        removed = await self.favorite_repo.remove(user_id, recipe_id)
        if removed:
            logger.info("User %s unfavorited recipe %s", user_id, recipe_id)
        return removed

    async def is_recipe_favorited(self, user_id: str, recipe_id: str) -> bool:
        """Check whether a user has favorited a recipe."""
        return await self.favorite_repo.exists(user_id, recipe_id)

    async def get_favorite_ids(self, user_id: str) -> set[str]:
        """Get IDs of a user's favorite recipes (for marking lists)."""
        return await self.favorite_repo.list_recipe_ids_for_user(user_id)

    async def toggle_favorite(self, user_id: str, recipe_id: str) -> bool:
        """Flip favorite state for a recipe.

        Returns:
            True if the recipe is now a favorite

        Raises:
            HTTPException: 404 if the recipe does not exist
        """
        if not await self.recipe_repo.exists(recipe_id):
            raise HTTPException(status_code=404, detail="Recipe not found")

        if await self.remove_favorite(user_id, recipe_id):
            return False

        await self.add_favorite({"user_id": user_id, "recipe_id": recipe_id})
        return True
