"""
SQLite backend (development) on top of aiosqlite.

One connection is shared by all requests. Each statement and its commit or
rollback run under one lock, so a failing request never rolls back another
request's uncommitted write. Foreign keys are declared in the
schema but not enforced (SQLite's default).

SQL parameter style: `?`
"""

from __future__ import annotations

import asyncio
import sqlite3
from pathlib import Path
from typing import Any, Sequence

import aiosqlite

from .db import Backend, ExecResult


class SqliteBackend(Backend):
    name = "sqlite"
    primary_key_ddl = "INTEGER PRIMARY KEY AUTOINCREMENT"

    def __init__(self, *, path: str) -> None:
        self.path = path
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    def placeholder(self, index: int) -> str:
        return "?"

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("SQLite connection is not open.")
        return self._conn

    async def connect(self) -> None:
        if self._conn is not None:
            return None
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(self.path)
        self._conn.row_factory = aiosqlite.Row

    async def close(self) -> None:
        if self._conn is None:
            return None
        await self._conn.close()
        self._conn = None

    async def execute(self, sql: str, args: Sequence[Any], *, returning_id: bool = False) -> ExecResult:
        conn = self._connection()
        async with self._lock:
            try:
                async with conn.execute(sql, tuple(args)) as cursor:
                    last_id = cursor.lastrowid if returning_id else None
                    changes = max(cursor.rowcount, 0)
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise
        return ExecResult(last_id=last_id, changes=changes)

    async def fetch_one(self, sql: str, args: Sequence[Any]) -> dict[str, Any] | None:
        async with self._lock, self._connection().execute(sql, tuple(args)) as cursor:
            row = await cursor.fetchone()
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, args: Sequence[Any]) -> list[dict[str, Any]]:
        async with self._lock, self._connection().execute(sql, tuple(args)) as cursor:
            rows = await cursor.fetchall()
        return [dict(r) for r in rows]

    def is_duplicate_column(self, exc: BaseException) -> bool:
        return isinstance(exc, sqlite3.OperationalError) and "duplicate column" in str(exc).lower()

    def is_unique_violation(self, exc: BaseException) -> bool:
        return isinstance(exc, sqlite3.IntegrityError) and "unique constraint failed" in str(exc).lower()
