"""
Project business logic.

`colleagues` is persisted as JSON text and must always decode to a list, so
every write path goes through `encode_colleagues`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import HTTPException, status

from core.errors import StoreError

from . import repository, schemas

logger = logging.getLogger(__name__)


def _store_failure(action: str, exc: StoreError) -> HTTPException:
    logger.error("project_%s_failed error=%s", action.split()[0], exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error {action}.",
    )


def parse_colleagues(value: list[str] | str | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return value

    raw = value.strip()
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="colleagues must be a JSON list.",
        ) from exc
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="colleagues must be a JSON list.",
        )
    return parsed


def encode_colleagues(value: list[str] | str | None) -> str:
    return json.dumps(parse_colleagues(value))


def decode_colleagues(raw: str | None, *, project_id: int | None = None) -> list[str]:
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        logger.warning("project_colleagues_unreadable project_id=%s", project_id)
        return []
    return parsed if isinstance(parsed, list) else []


def _to_project(row: dict[str, Any]) -> schemas.Project:
    return schemas.Project(
        id=int(row["id"]),
        name=row.get("name"),
        owner_email=row.get("owner_email"),
        colleagues=decode_colleagues(row.get("colleagues"), project_id=row.get("id")),
        description=schemas.ProjectDescription.from_row(row),
    )


async def create_project(payload: schemas.CreateProjectRequest) -> dict:
    name = (payload.name or "").strip()
    owner_email = (payload.owner_email or "").strip()
    if not name or not owner_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project name and owner email are required.",
        )

    colleagues = parse_colleagues(payload.colleagues)
    try:
        project_id = await repository.create_project(
            name=name,
            owner_email=owner_email,
            colleagues_json=json.dumps(colleagues),
        )
    except StoreError as exc:
        raise _store_failure("creating project", exc) from exc

    logger.info("project_created project_id=%s owner=%s", project_id, owner_email)
    return {
        "id": project_id,
        "name": name,
        "owner_email": owner_email,
        "colleagues": colleagues,
    }


async def list_projects(owner_email: str) -> list[dict]:
    try:
        rows = await repository.list_projects_by_owner(owner_email)
    except StoreError as exc:
        raise _store_failure("fetching projects", exc) from exc
    return [_to_project(row).model_dump(by_alias=True) for row in rows]


async def update_project(project_id: int, payload: schemas.UpdateProjectRequest) -> dict[str, int]:
    colleagues_json = encode_colleagues(payload.colleagues)
    try:
        changes = await repository.update_project(project_id, name=payload.name, colleagues_json=colleagues_json)
    except StoreError as exc:
        raise _store_failure("updating project", exc) from exc
    return {"updated": changes}


async def delete_project(project_id: int) -> dict[str, int]:
    try:
        changes = await repository.delete_project(project_id)
    except StoreError as exc:
        raise _store_failure("deleting project", exc) from exc
    return {"deleted": changes}


async def get_description(project_id: int) -> dict:
    try:
        row = await repository.get_description(project_id)
    except StoreError as exc:
        raise _store_failure("fetching description", exc) from exc
    if row is None:
        return {}
    return schemas.ProjectDescription.from_row(row).to_external()


async def update_description(project_id: int, payload: schemas.ProjectDescription) -> dict[str, int]:
    try:
        changes = await repository.update_description(project_id, payload.to_columns())
    except StoreError as exc:
        raise _store_failure("updating description", exc) from exc
    return {"updated": changes}
