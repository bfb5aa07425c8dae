"""
Social service — pure business logic for authentication.

Rules:
  - Zero FastAPI imports.
  - Only the SQLAlchemy async session passed in; no global state.
  - Guard clauses first, happy path last.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.constants import (
    USERNAME_PATTERN,
    VERIFICATION_CODE_ATTEMPTS,
    VERIFICATION_CODE_EXPIRE_SECONDS,
    normalize_username,
)
from app.auth.exceptions import (
    AccountNotVerified,
    EmailAlreadyRegistered,
    InvalidCredentials,
    InvalidUsername,
    InvalidVerificationCode,
    UsernameTaken,
)
from app.auth.models import EmailVerificationCode, User
from app.auth.utils import generate_verification_code, hash_password, verify_password
from shared.constants import Role


# ── User queries (identity store lookups) ─────────────────────────────────────

async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    # Case-insensitive so mixed-case sign-ups still match at login.
    result = await session.execute(
        select(User).where(func.lower(User.email) == email.lower())
    )
    return result.scalar_one_or_none()


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(
        select(User).where(User.username == normalize_username(username))
    )
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


def validate_username(raw: str) -> str:
    """Return the normalised username or raise InvalidUsername."""
    username = normalize_username(raw)
    if not USERNAME_PATTERN.match(username):
        raise InvalidUsername()
    return username


# ── Registration ──────────────────────────────────────────────────────────────

async def register_user(
    session: AsyncSession,
    *,
    email: str,
    username: str,
    password: str,
) -> User:
    """
    Create an unverified account.

    Uses flush() so the caller can use user.id without committing.
    """
    username = validate_username(username)
    if await get_user_by_email(session, email) is not None:
        raise EmailAlreadyRegistered()
    if await get_user_by_username(session, username) is not None:
        raise UsernameTaken()

    user = User(
        email=email,
        username=username,
        password_hash=hash_password(password),
        roles=[Role.USER.value],
    )
    session.add(user)
    await session.flush()
    return user


# ── Email verification code ───────────────────────────────────────────────────

async def create_verification_code(
    session: AsyncSession,
    email: str,
    expire_seconds: int = VERIFICATION_CODE_EXPIRE_SECONDS,
) -> str:
    """
    Invalidate any live code for this email, store a fresh hashed one and
    return the plain code for the caller to email.
    """
    email = email.lower()
    now = datetime.now(timezone.utc)
    await session.execute(
        update(EmailVerificationCode)
        .where(
            EmailVerificationCode.email == email,
            EmailVerificationCode.is_used.is_(False),
        )
        .values(is_used=True)
    )
    plain_code = generate_verification_code()
    session.add(
        EmailVerificationCode(
            email=email,
            code_hash=hash_password(plain_code),
            attempts_remaining=VERIFICATION_CODE_ATTEMPTS,
            expires_at=now + timedelta(seconds=expire_seconds),
        )
    )
    await session.flush()
    return plain_code


async def _get_active_code(session: AsyncSession, email: str) -> EmailVerificationCode | None:
    email = email.lower()
    now = datetime.now(timezone.utc)
    result = await session.execute(
        select(EmailVerificationCode)
        .where(
            EmailVerificationCode.email == email,
            EmailVerificationCode.is_used.is_(False),
            EmailVerificationCode.attempts_remaining > 0,
            EmailVerificationCode.expires_at > now,
        )
        .order_by(EmailVerificationCode.created_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def verify_email_code(session: AsyncSession, email: str, code: str) -> User:
    """
    Check the code, mark the user verified and consume the code.

    A wrong code burns one attempt; the same generic error covers missing,
    expired, exhausted and wrong codes.
    """
    user = await get_user_by_email(session, email)
    record = await _get_active_code(session, email)
    if user is None or record is None:
        raise InvalidVerificationCode()

    if not verify_password(code, record.code_hash):
        record.attempts_remaining -= 1
        await session.flush()
        raise InvalidVerificationCode()

    record.is_used = True
    user.is_verified = True
    await session.flush()
    return user


# ── Authentication ────────────────────────────────────────────────────────────

async def authenticate_user(session: AsyncSession, email: str, password: str) -> User:
    """
    Verify credentials and return the User.

    Same generic error for unknown email and wrong password so accounts
    can't be enumerated; the unverified state is reported separately.
    """
    user = await get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    if not user.is_verified:
        raise AccountNotVerified()
    return user


# ── JWT access token ──────────────────────────────────────────────────────────

def create_access_token(
    user: User,
    secret: str,
    algorithm: str,
    issuer: str,
    audience: str,
    expire_seconds: int,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "username": user.username,
        "roles": list(user.roles),
        "iat": now,
        "exp": now + timedelta(seconds=expire_seconds),
        "iss": issuer,
        "aud": audience,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)
