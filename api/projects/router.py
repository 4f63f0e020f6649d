"""
Project API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import schemas, service

router = APIRouter()


@router.post("/projects")
async def create_project(request: schemas.CreateProjectRequest) -> dict:
    return await service.create_project(request)


@router.get("/projects/{email}")
async def list_projects(email: str) -> list[dict]:
    """
    List projects owned by `email`, with the description questionnaire nested.
    """
    return await service.list_projects(email)


@router.put("/projects/{project_id}")
async def update_project(project_id: int, request: schemas.UpdateProjectRequest) -> dict:
    return await service.update_project(project_id, request)


@router.delete("/projects/{project_id}")
async def delete_project(project_id: int) -> dict:
    return await service.delete_project(project_id)


@router.get("/projects/{project_id}/description")
async def get_project_description(project_id: int) -> dict:
    """
    Flat camelCase questionnaire, or `{}` for an unknown project.
    """
    return await service.get_description(project_id)


@router.put("/projects/{project_id}/description")
async def update_project_description(project_id: int, request: schemas.ProjectDescription) -> dict:
    return await service.update_description(project_id, request)
