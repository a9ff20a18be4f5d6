"""Recipe Site Application - FastAPI Entry Point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from . import config
from .application.services import AuthService
from .infrastructure.database import AsyncConnectionPool
from .infrastructure.identity import UserManager
from .infrastructure.repositories import SessionRepository, UserRepository
from .middleware import AuthMiddleware, CSRFMiddleware

# Import routers
from .routes.auth import router as auth_router
from .routes.recipes import router as recipes_router
from .routes.favorites import router as favorites_router
from .routes.users import router as users_router


def configure_logging() -> None:
    """Set up root logging for the served app."""
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()

    # Read at startup so tests can point DATABASE_PATH elsewhere
    pool = AsyncConnectionPool(config.DATABASE_PATH, config.DB_MAX_CONNECTIONS)
    await pool.init_db()

    conn = await pool.acquire()
    try:
        auth_service = AuthService(UserManager(UserRepository(conn)), SessionRepository(conn))
        await auth_service.cleanup_expired_sessions()
    finally:
        await pool.release(conn)

    app.state.db_pool = pool
    yield
    await pool.close_all()


app = FastAPI(title="Recipe Site", lifespan=lifespan, root_path=config.ROOT_PATH)

# Add middleware (order matters - first added = last executed)
app.add_middleware(AuthMiddleware)
app.add_middleware(CSRFMiddleware)

# Static files
app.mount("/static", StaticFiles(directory=config.STATIC_DIR), name="static")

# Include routers
app.include_router(auth_router)
app.include_router(recipes_router)
app.include_router(favorites_router)
app.include_router(users_router)
