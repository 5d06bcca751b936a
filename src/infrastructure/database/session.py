"""Database engine and session factory."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings


def _connect_args(database_url: str) -> dict[str, Any]:
    """Driver options for the configured database.

    The Supabase pooler (Supavisor) runs in transaction mode, which breaks
    asyncpg's prepared statement cache.
    """
    if "pooler.supabase.com" in database_url or "supabase.com" in database_url:
        return {"statement_cache_size": 0}
    return {}


engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.async_database_url),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency yielding a session for ad-hoc queries such as health checks."""
    async with async_session_factory() as session:
        yield session
