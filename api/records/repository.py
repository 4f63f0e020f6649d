"""
Generic persistence for owner-scoped records.

Every statement is built from a `Resource` descriptor; table and column names
come from the descriptor only, never from client input.
"""

from __future__ import annotations

from typing import Any

from core import db

from .resources import Resource


async def create(resource: Resource, values: dict[str, Any]) -> dict[str, Any]:
    """
    Insert one record. `values` must already hold every insert column.
    Returns the stored record, including the new `id`.
    """
    columns = resource.insert_columns
    result = await db.execute(
        f"""
        INSERT INTO {resource.table} ({", ".join(columns)})
        VALUES ({db.params(len(columns))})
        """,
        *[values.get(col) for col in columns],
        returning_id=True,
    )
    return {"id": result.last_id, **{col: values.get(col) for col in columns}}


async def list_by_owner(resource: Resource, owner_email: str) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {", ".join(resource.all_columns)}
        FROM {resource.table}
        WHERE {resource.owner_column} = {db.param(1)}
        ORDER BY {resource.order_clause}
        """,
        owner_email,
    )


async def update(resource: Resource, record_id: int, values: dict[str, Any]) -> int:
    """
    Replace every mutable column of one record. Returns the affected row count.
    """
    columns = resource.mutable_columns
    assignments = ", ".join(f"{col} = {db.param(i)}" for i, col in enumerate(columns, start=1))
    result = await db.execute(
        f"""
        UPDATE {resource.table}
        SET {assignments}
        WHERE id = {db.param(len(columns) + 1)}
        """,
        *[values.get(col) for col in columns],
        record_id,
    )
    return result.changes


async def delete(resource: Resource, record_id: int) -> int:
    result = await db.execute(
        f"""
        DELETE FROM {resource.table}
        WHERE id = {db.param(1)}
        """,
        record_id,
    )
    return result.changes
