"""
Project persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db

from .schemas import DESCRIPTION_COLUMNS

_PROJECT_COLUMNS = ("id", "name", "owner_email", "colleagues", *DESCRIPTION_COLUMNS)


async def create_project(*, name: str, owner_email: str, colleagues_json: str) -> int | None:
    result = await db.execute(
        f"""
        INSERT INTO projects (name, owner_email, colleagues)
        VALUES ({db.params(3)})
        """,
        name,
        owner_email,
        colleagues_json,
        returning_id=True,
    )
    return result.last_id


async def list_projects_by_owner(owner_email: str) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {", ".join(_PROJECT_COLUMNS)}
        FROM projects
        WHERE owner_email = {db.param(1)}
        ORDER BY id ASC
        """,
        owner_email,
    )


async def update_project(project_id: int, *, name: str | None, colleagues_json: str) -> int:
    result = await db.execute(
        f"""
        UPDATE projects
        SET name = {db.param(1)},
            colleagues = {db.param(2)}
        WHERE id = {db.param(3)}
        """,
        name,
        colleagues_json,
        project_id,
    )
    return result.changes


async def delete_project(project_id: int) -> int:
    result = await db.execute(
        f"""
        DELETE FROM projects
        WHERE id = {db.param(1)}
        """,
        project_id,
    )
    return result.changes


async def get_description(project_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {", ".join(DESCRIPTION_COLUMNS)}
        FROM projects
        WHERE id = {db.param(1)}
        """,
        project_id,
    )


async def update_description(project_id: int, values: dict[str, Any]) -> int:
    assignments = ",\n            ".join(
        f"{column} = {db.param(i)}" for i, column in enumerate(DESCRIPTION_COLUMNS, start=1)
    )
    result = await db.execute(
        f"""
        UPDATE projects
        SET {assignments}
        WHERE id = {db.param(len(DESCRIPTION_COLUMNS) + 1)}
        """,
        *[values.get(column) for column in DESCRIPTION_COLUMNS],
        project_id,
    )
    return result.changes
