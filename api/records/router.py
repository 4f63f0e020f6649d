"""
Router factory for owner-scoped record resources.

`build_router(resource)` yields the four standard endpoints:

    POST   /<prefix>            create
    GET    /<prefix>/{email}    list by owner
    PUT    /<prefix>/{id}       full replace of mutable fields
    DELETE /<prefix>/{id}       delete

Request models are generated from the descriptor, so this module does not use
postponed annotations: FastAPI must see the generated classes directly.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field, create_model

from . import service
from .resources import CALENDAR_EVENTS, EVENTS_VIEW, FLAG, INTEGER, RESOURCES, TEXT, Resource, View

_PLAIN = View(renames={})

_FIELD_TYPES: dict[str, Any] = {
    TEXT: str | None,
    INTEGER: int | None,
    FLAG: bool | int | None,
}


def _model_name(prefix: str, suffix: str) -> str:
    return "".join(part.title() for part in prefix.split("_")) + suffix


def _request_model(resource: Resource, view: View, *, name: str, for_create: bool) -> type[BaseModel]:
    fields: dict[str, Any] = {}
    if for_create:
        fields[resource.owner_column] = (
            str | None,
            Field(default=None, alias=view.external_name(resource.owner_column)),
        )
    for col in resource.columns:
        fields[col.name] = (
            _FIELD_TYPES[col.kind],
            Field(default=None, alias=view.external_name(col.name)),
        )
    if for_create and resource.timestamp_column:
        fields[resource.timestamp_column] = (
            str | None,
            Field(default=None, alias=view.external_name(resource.timestamp_column)),
        )
    return create_model(
        name,
        __config__=ConfigDict(coerce_numbers_to_str=True, extra="ignore"),
        **fields,
    )


def build_router(resource: Resource, *, prefix: str | None = None, view: View | None = None) -> APIRouter:
    prefix = prefix or resource.name
    view = view or _PLAIN
    CreateRequest = _request_model(resource, view, name=_model_name(prefix, "CreateRequest"), for_create=True)
    UpdateRequest = _request_model(resource, view, name=_model_name(prefix, "UpdateRequest"), for_create=False)

    router = APIRouter()

    async def create_record(request: CreateRequest) -> dict:
        row = await service.create_record(
            resource,
            request.model_dump(),
            owner_field=view.external_name(resource.owner_column),
        )
        return view.to_external(row)

    async def list_records(email: str) -> list[dict]:
        rows = await service.list_records(resource, email)
        return [view.to_external(row, columns=view.list_columns) for row in rows]

    async def update_record(record_id: int, request: UpdateRequest) -> dict:
        changes = await service.update_record(resource, record_id, request.model_dump())
        return {"updated": changes}

    async def delete_record(record_id: int) -> dict:
        changes = await service.delete_record(resource, record_id)
        return {"deleted": changes}

    router.add_api_route(f"/{prefix}", create_record, methods=["POST"], name=f"create_{prefix}")
    router.add_api_route(f"/{prefix}/{{email}}", list_records, methods=["GET"], name=f"list_{prefix}")
    for alias in resource.list_aliases if view is _PLAIN else ():
        # Same query under a second path; the dashboard still calls these.
        router.add_api_route(f"/{alias}/{{email}}", list_records, methods=["GET"], name=f"list_{alias}")
    router.add_api_route(f"/{prefix}/{{record_id}}", update_record, methods=["PUT"], name=f"update_{prefix}")
    router.add_api_route(f"/{prefix}/{{record_id}}", delete_record, methods=["DELETE"], name=f"delete_{prefix}")
    return router


def build_routers() -> list[APIRouter]:
    routers = [build_router(resource) for resource in RESOURCES]
    # Calendar events are served twice: the legacy snake_case surface above
    # and the dashboard's renamed view, both over the same table.
    routers.append(build_router(CALENDAR_EVENTS, prefix="events", view=EVENTS_VIEW))
    return routers
