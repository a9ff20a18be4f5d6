"""Shared FastAPI dependencies."""
from typing import AsyncIterator

import aiosqlite
from fastapi import Depends, HTTPException, Request

from .application.services import AuthService, FavoriteService, RecipeService, UserService
from .infrastructure.identity import UserManager
from .infrastructure.repositories import SessionRepository, UserRepository


def get_current_user(request: Request) -> dict | None:
    """Get current user from request state."""
    return getattr(request.state, "user", None)


def require_user(request: Request) -> dict:
    """Require authenticated user, raise 401 if not authenticated."""
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def get_csrf_token(request: Request) -> str:
    """Get CSRF token from request state."""
    return getattr(request.state, "csrf_token", "")


def get_root_path(request: Request) -> str:
    """URL prefix the app is mounted under ("" at the site root)."""
    return request.scope.get("root_path", "").rstrip("/")


def template_globals(request: Request) -> dict:
    """Context processor giving every template the URL prefix as base_url."""
    return {"base_url": get_root_path(request)}


async def get_db(request: Request) -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a pooled connection for the duration of a request."""
    pool = request.app.state.db_pool
    conn = await pool.acquire()
    try:
        yield conn
    finally:
        await pool.release(conn)


# Service factory functions

def get_user_manager(db: aiosqlite.Connection = Depends(get_db)) -> UserManager:
    """Create UserManager backed by the user repository."""
    return UserManager(UserRepository(db))


def get_auth_service(
    db: aiosqlite.Connection = Depends(get_db),
    user_manager: UserManager = Depends(get_user_manager)
) -> AuthService:
    """Create AuthService with repositories."""
    return AuthService(user_manager, SessionRepository(db))


def get_user_service(
    db: aiosqlite.Connection = Depends(get_db),
    user_manager: UserManager = Depends(get_user_manager)
) -> UserService:
    """Create UserService."""
    return UserService(db, user_manager)


def get_recipe_service(db: aiosqlite.Connection = Depends(get_db)) -> RecipeService:
    """Create RecipeService."""
    return RecipeService(db)


def get_favorite_service(db: aiosqlite.Connection = Depends(get_db)) -> FavoriteService:
    """Create FavoriteService."""
    return FavoriteService(db)
