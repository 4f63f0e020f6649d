"""
Auth API schemas (request/response models).

Presence and length rules live in the service so each failure carries its own
message; the models only bound sizes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=128)


class LoginRequest(BaseModel):
    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=128)


class SignupResponse(BaseModel):
    id: int | None
    email: str
    message: str = "Account created successfully!"


class LoginResponse(BaseModel):
    email: str
    message: str = "Login successful!"
