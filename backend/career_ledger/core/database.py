"""Async database engine, session management and schema setup.

Every connection runs with the PostgreSQL session time zone pinned to
UTC, so timestamptz values come back as UTC no matter how the server is
configured. The schema is created from the ORM metadata; there is no
migration history.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from career_ledger.core.config import settings
from career_ledger.models.base import Base

# asyncpg forwards server_settings as SET commands on connect.
_CONNECT_ARGS = {"server_settings": {"timezone": "UTC"}}


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine with the ledger's connection settings.

    Args:
        url: postgresql+asyncpg URL.
        echo: Log every SQL statement.

    Returns:
        AsyncEngine with pre-ping enabled and UTC sessions.
    """
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=_CONNECT_ARGS,
    )


engine = build_engine(settings.database_url, echo=settings.database_echo)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def create_schema(bind: AsyncEngine) -> None:
    """Create the accounts, applications and application_events tables."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(bind: AsyncEngine) -> None:
    """Drop every table created by create_schema()."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session whose transaction commits on success.

    Any exception raised by the consumer rolls the transaction back,
    releasing row locks taken by record_status_change, and propagates.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
