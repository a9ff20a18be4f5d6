"""Shared plumbing for the SQLite repositories."""
from typing import Protocol

import aiosqlite


class AsyncConnectionProtocol(Protocol):
    """The slice of aiosqlite.Connection the repositories rely on."""

    async def execute(self, sql: str, parameters: tuple = ...) -> aiosqlite.Cursor: ...
    async def executemany(self, sql: str, parameters: list[tuple]) -> aiosqlite.Cursor: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


class AsyncRepository:
    """Base for repositories sharing one connection.

    Rows come back as plain dicts. Subclasses decide when to commit;
    write methods that can fail halfway roll back before re-raising.
    """

    def __init__(self, connection: AsyncConnectionProtocol):
        self._conn = connection

    async def _execute(self, sql: str, parameters: tuple = ()) -> aiosqlite.Cursor:
        return await self._conn.execute(sql, parameters)

    async def _execute_many(self, sql: str, parameters_list: list[tuple]) -> aiosqlite.Cursor:
        return await self._conn.executemany(sql, parameters_list)

    async def _commit(self) -> None:
        await self._conn.commit()

    async def _rollback(self) -> None:
        await self._conn.rollback()

    async def _fetchone(self, sql: str, parameters: tuple = ()) -> dict | None:
        """First matching row as a dict, or None."""
        cursor = await self._execute(sql, parameters)
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def _fetchall(self, sql: str, parameters: tuple = ()) -> list[dict]:
        """All matching rows as dicts."""
        cursor = await self._execute(sql, parameters)
        return [dict(row) for row in await cursor.fetchall()]
