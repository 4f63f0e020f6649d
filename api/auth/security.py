"""
Password hashing helpers (bcrypt).
"""

from __future__ import annotations

import bcrypt

from core import config

MIN_PASSWORD_LENGTH = 6
# bcrypt only accepts up to 72 bytes of input.
MAX_PASSWORD_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


def hash_password(plain_password: str, *, rounds: int | None = None) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds())
    return bcrypt.hashpw(password, salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False
