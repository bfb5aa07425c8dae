"""
Social service — auth controller (request orchestration layer).

Responsibilities:
  - Receive validated input from the router.
  - Call service functions (which own business logic).
  - Schedule side effects (verification email) as background tasks.
  - Compose and return the response model.
"""
from __future__ import annotations

import logging

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.exceptions import InvalidVerificationCode
from app.auth.models import User
from app.auth.schemas import (
    AuthUser,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    VerifyRequest,
)
from app.auth.service import (
    authenticate_user,
    create_access_token,
    create_verification_code,
    register_user,
    verify_email_code,
)
from app.config import Settings
from app.email import send as email

logger = logging.getLogger(__name__)


def _token_response(user: User, settings: Settings) -> TokenResponse:
    access_token = create_access_token(
        user,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        expire_seconds=settings.jwt_expire_seconds,
    )
    return TokenResponse(
        access_token=access_token,
        expires_in=settings.jwt_expire_seconds,
        user=AuthUser.model_validate(user),
    )


async def register(
    session: AsyncSession,
    body: RegisterRequest,
    settings: Settings,
    background_tasks: BackgroundTasks,
) -> RegisterResponse:
    user = await register_user(
        session,
        email=body.email,
        username=body.username,
        password=body.password,
    )
    code = await create_verification_code(session, user.email)
    background_tasks.add_task(
        email.send_verification_code, user.email, user.username, code, settings
    )
    logger.info("Registered user %s, verification code queued", user.id)
    return RegisterResponse(
        message="Account created. Check your email for the verification code.",
        user=AuthUser.model_validate(user),
    )


async def verify(
    session: AsyncSession,
    body: VerifyRequest,
    settings: Settings,
) -> TokenResponse:
    try:
        user = await verify_email_code(session, body.email, body.code)
    except InvalidVerificationCode:
        # The burned attempt must survive the request's rollback.
        await session.commit()
        raise
    return _token_response(user, settings)


async def login(
    session: AsyncSession,
    body: LoginRequest,
    settings: Settings,
) -> TokenResponse:
    user = await authenticate_user(session, body.email, body.password)
    return _token_response(user, settings)
