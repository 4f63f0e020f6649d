"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=schemas.SignupResponse)
async def signup(request: schemas.SignupRequest) -> schemas.SignupResponse:
    return await service.signup(request)


@router.post("/login", response_model=schemas.LoginResponse)
async def login(request: schemas.LoginRequest) -> schemas.LoginResponse:
    return await service.login(request)
