"""Favorite recipe routes."""
from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates

from ..application.services import FavoriteService
from ..config import TEMPLATES_DIR
from ..dependencies import get_csrf_token, get_favorite_service, require_user, template_globals

router = APIRouter()
templates = Jinja2Templates(directory=TEMPLATES_DIR, context_processors=[template_globals])


@router.get("/favorites")
async def favorites_page(
    request: Request,
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    """Show the current user's favorite recipes."""
    user = require_user(request)
    recipes = await favorite_service.get_user_favorites(user)
    return templates.TemplateResponse(
        request,
        "favorites.html",
        {
            "user": user,
            "csrf_token": get_csrf_token(request),
            "recipes": recipes,
            "favorite_ids": {recipe["id"] for recipe in recipes},
            "empty_message": "You have no favorite recipes yet.",
        }
    )


@router.post("/favorites/{recipe_id}")
async def toggle_favorite(
    request: Request,
    recipe_id: str,
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    """Toggle favorite state for a recipe."""
    user = require_user(request)
    favorited = await favorite_service.toggle_favorite(user["id"], recipe_id)
    return {"recipe_id": recipe_id, "favorited": favorited}
