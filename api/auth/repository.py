"""
Auth persistence helpers.
"""

from __future__ import annotations

from core import db


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(*, email: str, password_hash: str) -> int | None:
    """
    Insert a user and return its id. Raises `ConflictError` if the email is taken.
    """
    result = await db.execute(
        f"""
        INSERT INTO users (email, password)
        VALUES ({db.params(2)})
        """,
        normalize_email(email),
        password_hash,
        returning_id=True,
    )
    return result.last_id


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT id, email, password
        FROM users
        WHERE email = {db.param(1)}
        """,
        normalize_email(email),
    )
