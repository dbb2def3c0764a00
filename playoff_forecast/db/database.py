"""
Async engine and sessions for the forecast cache.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from .models import Base
from ..core.config import DATABASE_URL as CONFIGURED_URL, SQL_ECHO


def async_database_url(url: str) -> str:
    """
    Point a database URL at an async driver.

    Hosted Postgres usually hands out postgres:// or postgresql:// URLs,
    which SQLAlchemy would open with a sync driver.
    """
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


DATABASE_URL = async_database_url(CONFIGURED_URL)

engine = create_async_engine(DATABASE_URL, echo=SQL_ECHO, pool_pre_ping=True)

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables() -> None:
    """Create the cache table if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Session dependency for routes that read or write cached forecasts."""
    async with async_session_maker() as session:
        yield session
