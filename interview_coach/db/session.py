from __future__ import annotations
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import DATABASE_URL
from .base import Base

# Importing the model modules registers their tables on Base.metadata.
from . import models_user, models_document, models_interview, models_feedback  # noqa: F401


# ───────────────────────── engine & session factory ─────────────────────────
engine = create_async_engine(DATABASE_URL, echo=False)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields one AsyncSession per request."""
    async with async_session() as session:
        yield session


# ───────────────────────── schema initialisation ────────────────────────────
async def init_models() -> None:
    """
    Creates every table registered on Base.metadata that does not exist yet.
    Safe to run repeatedly (idempotent).
    """
    async with engine.begin() as conn:
        # create_all is synchronous, so run it via run_sync
        await conn.run_sync(Base.metadata.create_all)
