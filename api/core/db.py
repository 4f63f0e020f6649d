"""
Async database access helpers (raw SQL) over two interchangeable backends.

This module owns the active backend. FastAPI opens it on startup and closes it
on shutdown (see `api/main.py`). Which backend is used is decided once, from
configuration (see `core/config.py`):

- `sqlite`: aiosqlite against a local file (development)
- `postgres`: asyncpg connection pool (production)

SQL parameter style differs per backend, so callers never hard-code
placeholders. Build statements with `param(i)` / `params(n)`:

    f"SELECT * FROM notes WHERE user_email = {db.param(1)}"

Every backend exception is converted into `StoreError` (or `ConflictError` for
unique-key violations) before it reaches feature code.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from typing import Any, Sequence

from . import config
from .errors import ConflictError, StoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Outcome of an INSERT/UPDATE/DELETE, uniform across backends."""

    last_id: int | None
    changes: int


class Backend(abc.ABC):
    name: str = ""
    primary_key_ddl: str = ""

    @abc.abstractmethod
    def placeholder(self, index: int) -> str:
        """Return the placeholder for the 1-based parameter `index`."""

    def placeholders(self, count: int) -> str:
        return ", ".join(self.placeholder(i) for i in range(1, count + 1))

    @abc.abstractmethod
    async def connect(self) -> None: ...

    @abc.abstractmethod
    async def close(self) -> None: ...

    @abc.abstractmethod
    async def execute(self, sql: str, args: Sequence[Any], *, returning_id: bool = False) -> ExecResult: ...

    @abc.abstractmethod
    async def fetch_one(self, sql: str, args: Sequence[Any]) -> dict[str, Any] | None: ...

    @abc.abstractmethod
    async def fetch_all(self, sql: str, args: Sequence[Any]) -> list[dict[str, Any]]: ...

    @abc.abstractmethod
    def is_duplicate_column(self, exc: BaseException) -> bool:
        """True when `exc` means ALTER TABLE ADD COLUMN hit an existing column."""

    @abc.abstractmethod
    def is_unique_violation(self, exc: BaseException) -> bool: ...


_backend: Backend | None = None


def create_backend() -> Backend:
    # Imported lazily so only the selected driver needs to be importable.
    if config.db_backend() == config.POSTGRES:
        from .postgres import PostgresBackend

        return PostgresBackend(
            dsn=config.database_url(),
            min_size=config.pool_min_size(),
            max_size=config.pool_max_size(),
            command_timeout=config.command_timeout(),
        )

    from .sqlite import SqliteBackend

    return SqliteBackend(path=config.sqlite_path())


async def init_pool() -> None:
    global _backend
    if _backend is not None:
        return None
    candidate = create_backend()
    await candidate.connect()
    _backend = candidate
    logger.info("db_ready backend=%s", candidate.name)


async def close_pool() -> None:
    global _backend
    if _backend is None:
        return None
    await _backend.close()
    _backend = None


def backend() -> Backend:
    if _backend is None:
        raise RuntimeError("DB backend is not initialized. Call init_pool() on startup.")
    return _backend


def param(index: int) -> str:
    return backend().placeholder(index)


def params(count: int) -> str:
    return backend().placeholders(count)


def _convert(exc: Exception, sql: str) -> StoreError:
    if backend().is_unique_violation(exc):
        return ConflictError(str(exc))
    logger.error("db_error backend=%s sql=%r error=%s", backend().name, " ".join(sql.split())[:200], exc)
    return StoreError(str(exc))


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        return await backend().fetch_one(sql, args)
    except Exception as exc:
        raise _convert(exc, sql) from exc


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        return await backend().fetch_all(sql, args)
    except Exception as exc:
        raise _convert(exc, sql) from exc


async def execute(sql: str, *args: Any, returning_id: bool = False) -> ExecResult:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL).

    `returning_id=True` is for single-row INSERTs into tables with an `id`
    column; the new id comes back as `ExecResult.last_id`.
    """
    try:
        return await backend().execute(sql, args, returning_id=returning_id)
    except Exception as exc:
        raise _convert(exc, sql) from exc


async def add_column(table: str, column: str, ddl: str) -> bool:
    """
    Additively patch `table` with `column`. Returns False if it already existed.
    """
    sql = f"ALTER TABLE {table} ADD COLUMN {column} {ddl}"
    try:
        await backend().execute(sql, ())
    except Exception as exc:
        if backend().is_duplicate_column(exc):
            return False
        raise _convert(exc, sql) from exc
    return True
