"""
Social service — auth router.

Only HTTP concerns live here:
  - Route declarations, HTTP methods, status codes, response_model
  - Dependency injection (session, settings)
  - Forwarding to the controller

Zero business logic. Zero DB queries.
"""
from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.controller import (
    login as login_controller,
    register as register_controller,
    verify as verify_controller,
)
from app.auth.schemas import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    VerifyRequest,
)
from app.config import Settings, get_settings
from app.database import get_db
from app.rate_limit import limiter

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account (email + username + password)",
)
@limiter.limit("5/hour")
async def register(
    request: Request,
    body: RegisterRequest,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RegisterResponse:
    return await register_controller(session, body, settings, background_tasks)


@router.post(
    "/verify",
    response_model=TokenResponse,
    summary="Confirm the emailed 4-digit code and receive an access token",
)
@limiter.limit("10/15minutes")
async def verify(
    request: Request,
    body: VerifyRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    return await verify_controller(session, body, settings)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email + password",
)
@limiter.limit("5/15minutes")
async def login(
    request: Request,
    body: LoginRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    return await login_controller(session, body, settings)
