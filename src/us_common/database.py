"""Async SQLAlchemy engine, session factory and the users/card_info declarative base.

Services own their transactions: every write path ends in
``await db.commit()`` or ``await db.rollback()`` before any cache update.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from config.settings import settings
from src.us_common.errors import DataIntegrityError


class Base(DeclarativeBase):
    """Declarative base shared by UserModel and CardInfoModel."""


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
)

# expire_on_commit=False: DTOs are built from entities after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one AsyncSession per request."""
    async with async_session_factory() as session:
        yield session


@asynccontextmanager
async def write_transaction(
    db: AsyncSession, integrity_message: str
) -> AsyncGenerator[None, None]:
    """Commit the block's writes, or roll back and re-raise.

    IntegrityError (e.g. duplicate email) surfaces as DataIntegrityError.
    Callers touch the cache only after this block exits cleanly.
    """
    try:
        yield
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise DataIntegrityError(integrity_message) from exc
    except Exception:
        await db.rollback()
        raise


async def ping_database() -> None:
    """Fail fast at startup when the store is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
