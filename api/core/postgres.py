"""
PostgreSQL backend (production) using an asyncpg pool.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

from typing import Any, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .db import Backend, ExecResult

DUPLICATE_COLUMN = "42701"
DUPLICATE_TABLE = "42P07"
UNIQUE_VIOLATION = "23505"


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _affected_rows(status: str) -> int:
    """
    Parse the command tag asyncpg returns from `execute`.

    "INSERT 0 1" -> 1, "UPDATE 3" -> 3, "DELETE 0" -> 0, "ALTER TABLE" -> 0
    """
    last = (status or "").rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class PostgresBackend(Backend):
    name = "postgres"
    primary_key_ddl = "SERIAL PRIMARY KEY"

    def __init__(self, *, dsn: str, min_size: int = 1, max_size: int = 5, command_timeout: int = 30) -> None:
        if not dsn:
            raise RuntimeError("DATABASE_URL is not set.")
        self.dsn = _sanitize_database_url(dsn)
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    def placeholder(self, index: int) -> str:
        return f"${index}"

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
        return self._pool

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    async def execute(self, sql: str, args: Sequence[Any], *, returning_id: bool = False) -> ExecResult:
        if returning_id:
            new_id = await self.pool().fetchval(f"{sql.rstrip().rstrip(';')} RETURNING id", *args)
            return ExecResult(last_id=new_id, changes=1 if new_id is not None else 0)
        status = await self.pool().execute(sql, *args)
        return ExecResult(last_id=None, changes=_affected_rows(status))

    async def fetch_one(self, sql: str, args: Sequence[Any]) -> dict[str, Any] | None:
        row = await self.pool().fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, args: Sequence[Any]) -> list[dict[str, Any]]:
        rows = await self.pool().fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    def is_duplicate_column(self, exc: BaseException) -> bool:
        sqlstate = getattr(exc, "sqlstate", "") or ""
        return sqlstate in {DUPLICATE_COLUMN, DUPLICATE_TABLE} or "already exists" in str(exc).lower()

    def is_unique_violation(self, exc: BaseException) -> bool:
        return (getattr(exc, "sqlstate", "") or "") == UNIQUE_VIOLATION
