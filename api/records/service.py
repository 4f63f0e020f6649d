"""
Record business logic: defaults on create, full-replace on update, and the
mapping of store failures to client errors.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.errors import StoreError

from . import repository
from .resources import Resource

logger = logging.getLogger(__name__)


def _store_failure(resource: Resource, action: str, exc: StoreError) -> HTTPException:
    logger.error("record_%s_failed resource=%s error=%s", action, resource.name, exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error {action} {resource.label}.",
    )


def build_create_values(
    resource: Resource,
    payload: dict[str, Any],
    *,
    owner_field: str | None = None,
) -> dict[str, Any]:
    """
    `owner_field` is the owner key as the caller sent it, for the error message.
    """
    owner = payload.get(resource.owner_column)
    if resource.owner_required and not owner:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{owner_field or resource.owner_column} is required.",
        )

    values: dict[str, Any] = {resource.owner_column: owner}
    for col in resource.columns:
        values[col.name] = col.value_for_create(payload.get(col.name))
    if resource.timestamp_column:
        values[resource.timestamp_column] = payload.get(resource.timestamp_column) or resource.clock()
    return values


def build_update_values(resource: Resource, payload: dict[str, Any]) -> dict[str, Any]:
    return {col.name: col.coerce(payload.get(col.name)) for col in resource.columns}


async def create_record(
    resource: Resource,
    payload: dict[str, Any],
    *,
    owner_field: str | None = None,
) -> dict[str, Any]:
    values = build_create_values(resource, payload, owner_field=owner_field)
    try:
        return await repository.create(resource, values)
    except StoreError as exc:
        raise _store_failure(resource, "creating", exc) from exc


async def list_records(resource: Resource, owner_email: str) -> list[dict[str, Any]]:
    try:
        return await repository.list_by_owner(resource, owner_email)
    except StoreError as exc:
        raise _store_failure(resource, "fetching", exc) from exc


async def update_record(resource: Resource, record_id: int, payload: dict[str, Any]) -> int:
    try:
        return await repository.update(resource, record_id, build_update_values(resource, payload))
    except StoreError as exc:
        raise _store_failure(resource, "updating", exc) from exc


async def delete_record(resource: Resource, record_id: int) -> int:
    try:
        return await repository.delete(resource, record_id)
    except StoreError as exc:
        raise _store_failure(resource, "deleting", exc) from exc
