"""
Social service — SQLAlchemy ORM models for the auth domain.

Tables owned by this module:
  - users                     Accounts, public profile fields and the privacy flag
  - email_verification_codes  Hashed 4-digit codes emailed at registration
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.constants import Role
from shared.database.postgres import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    # ── Primary key ──────────────────────────────────────────────────────────
    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ── Authentication identifiers ────────────────────────────────────────────
    email: Mapped[str] = mapped_column(
        sa.String(255), unique=True, nullable=False, index=True
    )
    # Unique lower-case handle, ^[a-z0-9_]{3,20}$
    username: Mapped[str] = mapped_column(
        sa.String(20), unique=True, nullable=False, index=True
    )
    password_hash: Mapped[str] = mapped_column(sa.String(255), nullable=False)

    # ── Profile fields ────────────────────────────────────────────────────────
    bio: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)

    # ── Account flags ─────────────────────────────────────────────────────────
    # Flipped to True once the emailed verification code is confirmed.
    is_verified: Mapped[bool] = mapped_column(
        sa.Boolean(),
        nullable=False,
        default=False,
        server_default=sa.false(),
    )
    # Private accounts can't be followed directly and gate new conversations.
    is_private: Mapped[bool] = mapped_column(
        sa.Boolean(),
        nullable=False,
        default=False,
        server_default=sa.false(),
    )

    # ── JWT authorization roles ───────────────────────────────────────────────
    roles: Mapped[list[str]] = mapped_column(
        sa.JSON(),
        nullable=False,
        default=lambda: [Role.USER.value],
    )

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        nullable=False,
        default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        nullable=False,
        default=_now,
        onupdate=_now,
    )

    media = relationship(
        "UserMedia",
        back_populates="user",
        lazy="raise",
        order_by="UserMedia.created_at.desc()",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"


class EmailVerificationCode(Base):
    """
    Email-keyed verification code for the registration flow.

    Hashed at rest.  Single-use: is_used set True on successful verify.
    Max 5 verify attempts before the code is invalidated.
    """

    __tablename__ = "email_verification_codes"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(
        sa.String(255), nullable=False, index=True
    )
    code_hash: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    is_used: Mapped[bool] = mapped_column(
        sa.Boolean(),
        nullable=False,
        default=False,
        server_default=sa.false(),
    )
    attempts_remaining: Mapped[int] = mapped_column(
        sa.SmallInteger(),
        nullable=False,
        default=5,
        server_default=sa.text("5"),
    )
    expires_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        nullable=False,
        default=_now,
    )
