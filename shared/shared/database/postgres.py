"""
Async SQLAlchemy plumbing shared by every service, plus a bulk insert that
tolerates unique-key conflicts.
"""
import os
import ssl
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from sqlalchemy import insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _build_ssl_connect_args() -> dict[str, Any]:
    """Return asyncpg ``connect_args`` for SSL when DATABASE_SSL is set."""
    mode = os.environ.get("DATABASE_SSL", "").lower()
    if not mode or mode == "disable":
        return {}

    cert_path = os.environ.get("RDS_SSL_CERT", "")
    if cert_path and Path(cert_path).exists():
        ctx = ssl.create_default_context(cafile=cert_path)
        return {"connect_args": {"ssl": ctx}}

    # Fall back to simple 'require' (encrypted, no cert verification)
    return {"connect_args": {"ssl": "require"}}


def get_async_engine(database_url: str, **kwargs: Any) -> Any:
    if database_url.startswith("sqlite"):
        # SQLite pools don't accept size/overflow tuning
        return create_async_engine(database_url, **kwargs)
    ssl_kwargs = _build_ssl_connect_args()
    merged = {**ssl_kwargs, **kwargs}
    return create_async_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,
        **merged,
    )


def get_async_session_factory(
    database_url: str,
    *,
    expire_on_commit: bool = False,
    **engine_kwargs: Any,
) -> async_sessionmaker[AsyncSession]:
    engine = get_async_engine(database_url, **engine_kwargs)
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=expire_on_commit,
        autoflush=False,
        autocommit=False,
    )


async def insert_ignoring_conflicts(
    session: AsyncSession,
    model: Any,
    rows: list[dict[str, Any]],
    conflict_columns: Sequence[str],
) -> None:
    """
    Bulk-insert rows, silently skipping any that hit the unique key
    ``conflict_columns``.

    PostgreSQL and SQLite get a native ``ON CONFLICT DO NOTHING``; other
    dialects fall back to inserting one row at a time inside a savepoint.
    Runs inside the caller's transaction.
    """
    if not rows:
        return
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = pg_insert(model).values(rows).on_conflict_do_nothing(
            index_elements=list(conflict_columns)
        )
        await session.execute(stmt)
        return
    if dialect == "sqlite":
        stmt = sqlite_insert(model).values(rows).on_conflict_do_nothing(
            index_elements=list(conflict_columns)
        )
        await session.execute(stmt)
        return

    for row in rows:
        try:
            async with session.begin_nested():
                await session.execute(insert(model).values(**row))
        except IntegrityError:
            continue
