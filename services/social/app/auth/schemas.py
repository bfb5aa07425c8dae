"""
Social service — Pydantic V2 request/response schemas for the auth domain.

Separation of concerns:
  - *Request  models:  input from the client (strict extra="forbid")
  - *Response models:  output to the client (no write-only fields exposed)
"""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ── Requests ──────────────────────────────────────────────────────────────────

class RegisterRequest(_Base):
    """Body for POST /auth/register."""

    email: EmailStr
    # Normalised to lower case server-side before the format check
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=8, max_length=128)


class VerifyRequest(_Base):
    """Body for POST /auth/verify — the 4-digit code from the email."""

    email: EmailStr
    code: str = Field(pattern=r"^\d{4}$")


class LoginRequest(_Base):
    """Body for POST /auth/login."""

    email: EmailStr
    password: str


# ── Responses ─────────────────────────────────────────────────────────────────

class AuthUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    username: str


class RegisterResponse(BaseModel):
    message: str
    user: AuthUser


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: AuthUser
