"""User API routes."""
from fastapi import APIRouter, Depends, HTTPException, Request

from ..application.services import UserService
from ..config import USER_SEARCH_LIMIT, USER_SEARCH_MIN_LENGTH
from ..dependencies import get_user_service, require_user

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/search")
async def search_users_route(
    request: Request,
    q: str = "",
    user_service: UserService = Depends(get_user_service)
):
    """Search users by username."""
    user = require_user(request)

    if len(q.strip()) < USER_SEARCH_MIN_LENGTH:
        return {"users": []}

    users = await user_service.search_users(q, exclude_user_id=user["id"], limit=USER_SEARCH_LIMIT)
    return {"users": users}


@router.get("/{user_id}")
async def get_user_route(
    request: Request,
    user_id: str,
    user_service: UserService = Depends(get_user_service)
):
    """Get a user's public profile."""
    require_user(request)
    user = await user_service.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
