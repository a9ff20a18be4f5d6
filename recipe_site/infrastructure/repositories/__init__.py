# Repository Pattern Implementation
"""
Repositories abstract database operations.
Each entity has its own repository.

Usage:
    repo = FavoriteRepository(conn)
    recipes = await repo.list_recipes_for_user(user_id)
"""
from .base import AsyncRepository, AsyncConnectionProtocol
from .user_repository import UserRepository
from .session_repository import SessionRepository
from .recipe_repository import RecipeRepository
from .favorite_repository import FavoriteRepository

__all__ = [
    "AsyncRepository",
    "AsyncConnectionProtocol",
    "UserRepository",
    "SessionRepository",
    "RecipeRepository",
    "FavoriteRepository",
]
