"""
Auth business logic.

Identity is the normalized email. Login failures never reveal whether the
account exists: unknown email and wrong password share one message.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from fastapi.concurrency import run_in_threadpool

from core.errors import ConflictError, StoreError

from . import repository, schemas, security

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


def _require_credentials(email: str | None, password: str | None) -> tuple[str, str]:
    email = repository.normalize_email(email or "")
    if not email or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required.",
        )
    return email, password


async def signup(payload: schemas.SignupRequest) -> schemas.SignupResponse:
    email, password = _require_credentials(payload.email, payload.password)
    if len(password) < security.MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {security.MIN_PASSWORD_LENGTH} characters long.",
        )
    if len(password.encode("utf-8")) > security.MAX_PASSWORD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at most {security.MAX_PASSWORD_BYTES} bytes long.",
        )

    # bcrypt is CPU-bound; keep it off the event loop.
    password_hash = await run_in_threadpool(security.hash_password, password)
    try:
        user_id = await repository.create_user(email=email, password_hash=password_hash)
    except ConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists.",
        ) from exc
    except StoreError as exc:
        logger.error("signup_failed email=%s error=%s", email, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user.",
        ) from exc

    logger.info("user_created user_id=%s", user_id)
    return schemas.SignupResponse(id=user_id, email=email)


async def login(payload: schemas.LoginRequest) -> schemas.LoginResponse:
    email, password = _require_credentials(payload.email, payload.password)
    try:
        user_row = await repository.get_user_by_email(email)
    except StoreError as exc:
        logger.error("login_failed email=%s error=%s", email, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed.",
        ) from exc

    if user_row is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS)

    is_valid = await run_in_threadpool(
        security.verify_password,
        password,
        str(user_row.get("password") or ""),
    )
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS)

    return schemas.LoginResponse(email=str(user_row["email"]))
