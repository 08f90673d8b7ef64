# trend_dashboard/database.py
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import Settings, get_settings

# Base declarative
Base = declarative_base()


def create_engine(settings: Optional[Settings] = None, url: Optional[str] = None) -> AsyncEngine:
    """Build an async engine from settings; ``url`` overrides DATABASE_URL."""
    settings = settings or get_settings()
    return create_async_engine(
        url or settings.DATABASE_URL,
        echo=settings.SQL_ECHO,
        pool_pre_ping=True,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def create_tables(engine: AsyncEngine) -> None:
    # import models so their tables are registered on Base.metadata
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
