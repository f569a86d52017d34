# app/db/session.py
# -----------------------------------------------------------------------------
# SQLAlchemy async engine / session factory / declarative base
# - routers receive a session through Depends(get_session)
# - DATABASE_URL selects the backend (aiosqlite by default)
# -----------------------------------------------------------------------------
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from app.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=False)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)
Base = declarative_base()


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create any missing tables."""
    # models must be imported so their tables are registered on Base.metadata
    from app.db import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
