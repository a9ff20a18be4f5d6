"""Application middleware."""
import logging
import secrets

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import (
    LOGIN_PATH, PUBLIC_PATHS, SESSION_COOKIE,
    CSRF_TOKEN_NAME, CSRF_HEADER_NAME, CSRF_COOKIE_NAME
)
from .dependencies import get_root_path
from .infrastructure.repositories import SessionRepository

logger = logging.getLogger(__name__)


def route_path(request: Request) -> str:
    """Request path without the mount prefix."""
    path = request.scope["path"]
    root_path = get_root_path(request)
    if root_path and (path == root_path or path.startswith(root_path + "/")):
        return path[len(root_path):] or "/"
    return path


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware to check authentication on all routes."""

    async def dispatch(self, request: Request, call_next):
        path = route_path(request)

        # Allow public paths
        if path in PUBLIC_PATHS or path.startswith("/static/"):
            return await call_next(request)

        # Check session cookie
        session_id = request.cookies.get(SESSION_COOKIE)
        if session_id:
            session = await self._load_session(request, session_id)
            if session:
                # Valid session - attach user info to request state
                request.state.user = {
                    "id": session["user_id"],
                    "username": session["username"],
                    "email": session["email"],
                    "first_name": session["first_name"],
                    "last_name": session["last_name"],
                }
                return await call_next(request)

        # No valid session - redirect to login
        if request.method == "GET" and not path.startswith("/api/"):
            return RedirectResponse(url=get_root_path(request) + LOGIN_PATH, status_code=302)

        # For API calls, return 401
        return JSONResponse(status_code=401, content={"detail": "Not authenticated"})

    @staticmethod
    async def _load_session(request: Request, session_id: str) -> dict | None:
        pool = request.app.state.db_pool
        conn = await pool.acquire()
        try:
            return await SessionRepository(conn).get_valid(session_id)
        finally:
            await pool.release(conn)


class CSRFMiddleware(BaseHTTPMiddleware):
    """Middleware to protect against CSRF attacks."""

    # Methods that require CSRF protection
    PROTECTED_METHODS = {"POST", "PUT", "DELETE", "PATCH"}

    async def dispatch(self, request: Request, call_next):
        # Generate CSRF token if not present
        csrf_token = request.cookies.get(CSRF_COOKIE_NAME)
        if not csrf_token:
            csrf_token = secrets.token_urlsafe(32)

        # Store token in request state for templates
        request.state.csrf_token = csrf_token

        # Public paths (login) are exempt
        if request.method in self.PROTECTED_METHODS and route_path(request) not in PUBLIC_PATHS:
            # Header for fetch() calls, query param for plain forms
            request_token = (
                request.headers.get(CSRF_HEADER_NAME)
                or request.query_params.get(CSRF_TOKEN_NAME)
            )

            stored_token = request.cookies.get(CSRF_COOKIE_NAME)
            if not stored_token or not request_token or stored_token != request_token:
                logger.warning("CSRF check failed for %s %s", request.method, route_path(request))
                return JSONResponse(
                    status_code=403,
                    content={"detail": "CSRF token missing or invalid"}
                )

        response = await call_next(request)
        return self._set_csrf_cookie(response, csrf_token)

    def _set_csrf_cookie(self, response, token: str):
        """Set CSRF cookie on response."""
        response.set_cookie(
            key=CSRF_COOKIE_NAME,
            value=token,
            httponly=False,  # JavaScript needs to read this
            samesite="lax",
            secure=False,
            max_age=60 * 60 * 24  # 24 hours
        )
        return response
