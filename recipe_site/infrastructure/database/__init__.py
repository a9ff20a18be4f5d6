"""Async database infrastructure.

This module provides async database connectivity using aiosqlite.
"""
from .connection import AsyncConnectionPool, open_connection, open_memory_connection, init_schema

__all__ = [
    'AsyncConnectionPool',
    'open_connection',
    'open_memory_connection',
    'init_schema',
]
