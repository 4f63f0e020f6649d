from __future__ import annotations

import asyncio

import pytest

from core import db, schema
from core.errors import ConflictError, StoreError


def _run(coro_fn):
    async def wrapper():
        await db.init_pool()
        try:
            await schema.init_schema()
            return await coro_fn()
        finally:
            await db.close_pool()

    return asyncio.run(wrapper())


def test_execute_reports_last_id_and_changes(sqlite_env):
    async def scenario():
        inserted = await db.execute(
            f"INSERT INTO notes (user_email, title) VALUES ({db.params(2)})",
            "a@b.com",
            "hello",
            returning_id=True,
        )
        updated = await db.execute(f"UPDATE notes SET title = {db.param(1)} WHERE user_email = {db.param(2)}", "hi", "a@b.com")
        missing = await db.execute(f"DELETE FROM notes WHERE id = {db.param(1)}", 987654)
        row = await db.fetch_one(f"SELECT title FROM notes WHERE id = {db.param(1)}", inserted.last_id)
        return inserted, updated, missing, row

    inserted, updated, missing, row = _run(scenario)
    assert isinstance(inserted.last_id, int)
    assert updated.changes == 1
    assert missing.changes == 0
    assert row == {"title": "hi"}


def test_fetch_one_returns_none_when_absent(sqlite_env):
    async def scenario():
        return await db.fetch_one(f"SELECT id FROM users WHERE email = {db.param(1)}", "nobody@b.com")

    assert _run(scenario) is None


def test_unique_violation_becomes_conflict(sqlite_env):
    async def scenario():
        sql = f"INSERT INTO users (email, password) VALUES ({db.params(2)})"
        await db.execute(sql, "a@b.com", "x")
        await db.execute(sql, "a@b.com", "y")

    with pytest.raises(ConflictError):
        _run(scenario)


def test_other_failures_become_store_errors(sqlite_env):
    async def scenario():
        await db.fetch_all("SELECT * FROM no_such_table")

    with pytest.raises(StoreError) as excinfo:
        _run(scenario)
    assert not isinstance(excinfo.value, ConflictError)


def test_add_column_tolerates_only_duplicates(sqlite_env):
    async def scenario():
        assert await db.add_column("notes", "mood", "TEXT") is True
        assert await db.add_column("notes", "mood", "TEXT") is False
        await db.add_column("no_such_table", "mood", "TEXT")

    with pytest.raises(StoreError):
        _run(scenario)


def test_backend_must_be_initialized():
    with pytest.raises(RuntimeError):
        db.backend()


def test_failed_write_does_not_discard_concurrent_writes(sqlite_env):
    async def scenario():
        user_sql = f"INSERT INTO users (email, password) VALUES ({db.params(2)})"
        await db.execute(user_sql, "a@b.com", "x")

        async def good():
            result = await db.execute(
                f"INSERT INTO notes (user_email, title) VALUES ({db.params(2)})",
                "a@b.com",
                "kept",
                returning_id=True,
            )
            return result.last_id

        async def bad():
            await db.execute(user_sql, "a@b.com", "y")

        results = await asyncio.gather(good(), bad(), good(), bad(), good(), return_exceptions=True)
        stored = await db.fetch_all("SELECT id FROM notes ORDER BY id")
        return results, [row["id"] for row in stored]

    results, stored = _run(scenario)
    reported = [results[0], results[2], results[4]]
    assert all(isinstance(exc, ConflictError) for exc in (results[1], results[3]))
    assert sorted(reported) == stored
