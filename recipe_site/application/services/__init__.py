"""Application services - business logic layer."""

from .auth_service import AuthService
from .favorite_service import FavoriteService
from .recipe_service import RecipeService, RecipeForm
from .user_service import UserService

__all__ = [
    "AuthService",
    "FavoriteService",
    "RecipeService",
    "RecipeForm",
    "UserService",
]
