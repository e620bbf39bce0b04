"""Models for the admin password gate and its session tokens."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    password: str = Field(..., min_length=1, max_length=256)


class SessionToken(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AdminSession(BaseModel):
    session_id: str
    role: str = "admin"
    expires_at: int
