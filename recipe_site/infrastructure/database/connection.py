"""Async database connection management.

Provides async database connectivity using aiosqlite.
"""
import asyncio
import logging
import uuid
from pathlib import Path

import aiosqlite

logger = logging.getLogger(__name__)


SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        username TEXT NOT NULL,
        username_key TEXT NOT NULL UNIQUE,
        email TEXT NOT NULL,
        email_key TEXT NOT NULL UNIQUE,
        first_name TEXT NOT NULL DEFAULT '',
        last_name TEXT NOT NULL DEFAULT '',
        password_hash TEXT NOT NULL DEFAULT '',
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sessions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        expires_at TIMESTAMP NOT NULL,
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS recipes (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        category TEXT,
        cook_time INTEGER,
        difficulty TEXT,
        user_id TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS recipe_ingredients (
        recipe_id TEXT NOT NULL,
        position INTEGER NOT NULL,
        quantity TEXT NOT NULL DEFAULT '',
        unit TEXT NOT NULL DEFAULT '',
        ingredient_name TEXT NOT NULL,
        PRIMARY KEY (recipe_id, position),
        FOREIGN KEY (recipe_id) REFERENCES recipes(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS recipe_instructions (
        recipe_id TEXT NOT NULL,
        position INTEGER NOT NULL,
        instruction_text TEXT NOT NULL,
        PRIMARY KEY (recipe_id, position),
        FOREIGN KEY (recipe_id) REFERENCES recipes(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS recipe_tags (
        recipe_id TEXT NOT NULL,
        tag TEXT NOT NULL,
        PRIMARY KEY (recipe_id, tag),
        FOREIGN KEY (recipe_id) REFERENCES recipes(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS favorites (
        user_id TEXT NOT NULL,
        recipe_id TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (user_id, recipe_id),
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
        FOREIGN KEY (recipe_id) REFERENCES recipes(id) ON DELETE CASCADE
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_recipes_user ON recipes(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_favorites_recipe ON favorites(recipe_id)",
    "CREATE INDEX IF NOT EXISTS idx_sessions_user ON sessions(user_id)",
)


async def init_schema(conn: aiosqlite.Connection) -> None:
    """Create all tables if they don't exist.

    Args:
        conn: Open async connection
    """
    for statement in SCHEMA:
        await conn.execute(statement)
    await conn.commit()


async def open_connection(db_path: Path | str, uri: bool = False) -> aiosqlite.Connection:
    """Open a configured aiosqlite connection.

    Args:
        db_path: Database file path (or URI when uri=True)
        uri: Treat db_path as an SQLite URI

    Returns:
        Connection with aiosqlite.Row row factory
    """
    conn = await aiosqlite.connect(db_path, uri=uri)
    conn.row_factory = aiosqlite.Row
    return conn


async def open_memory_connection(name: str | None = None) -> aiosqlite.Connection:
    """Open a fresh in-memory database with the schema applied.

    Each call gets its own private database, named with a random
    identifier unless one is given.

    Args:
        name: Optional database name

    Returns:
        Connection to an empty, initialized database
    """
    name = name or uuid.uuid4().hex
    conn = await open_connection(f"file:{name}?mode=memory", uri=True)
    await init_schema(conn)
    return conn


class AsyncConnectionPool:
    """Small async connection pool for aiosqlite.

    At most max_connections connections are checked out at once; a
    further acquire() waits until one is released. Released connections
    are kept open for reuse.
    """

    def __init__(self, db_path: Path, max_connections: int = 10):
        self.db_path = db_path
        self.max_connections = max_connections
        self._connections: list[aiosqlite.Connection] = []
        self._semaphore = asyncio.Semaphore(max_connections)
        self._lock = asyncio.Lock()

    async def acquire(self) -> aiosqlite.Connection:
        """Check out a connection, waiting while the pool is exhausted."""
        await self._semaphore.acquire()
        try:
            async with self._lock:
                if self._connections:
                    return self._connections.pop()
            return await open_connection(self.db_path)
        except Exception:
            self._semaphore.release()
            raise

    async def release(self, conn: aiosqlite.Connection) -> None:
        """Return a connection and free its slot."""
        try:
            async with self._lock:
                if len(self._connections) < self.max_connections:
                    self._connections.append(conn)
                    return
            await conn.close()
        finally:
            self._semaphore.release()

    async def close_all(self) -> None:
        """Close all connections in the pool."""
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
        logger.debug("Closed connection pool for %s", self.db_path)

    async def init_db(self) -> None:
        """Initialize database schema."""
        conn = await self.acquire()
        try:
            await init_schema(conn)
        finally:
            await self.release(conn)
        logger.info("Database ready at %s", self.db_path)
