import socket
import uuid
from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from career_ledger.core.clock import Clock, fixed_clock
from career_ledger.core.config import settings
from career_ledger.core.database import build_engine, create_schema, drop_schema

# Use separate test database
TEST_DATABASE_URL = (
    settings.database_url.rsplit("/", 1)[0] + f"/{settings.database_name}_test"
)

# Stable IDs and instants shared across tests
TEST_ACCOUNT_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
OTHER_ACCOUNT_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
FROZEN_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _is_postgres_available() -> bool:
    """Check if PostgreSQL is accepting connections.

    Returns:
        True if PostgreSQL is reachable on the configured port, False otherwise.
    """
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex((settings.database_host, settings.database_port))
        sock.close()
        return result == 0
    except OSError:
        return False


# Check once at module load time
_POSTGRES_AVAILABLE = _is_postgres_available()


def skip_if_no_postgres() -> None:
    """Skip test if PostgreSQL is not available.

    Called by fixtures that require database connection.
    Provides clear skip message to help diagnose CI/local issues.
    """
    if not _POSTGRES_AVAILABLE:
        pytest.skip(
            "PostgreSQL not available. "
            "Start database with: docker compose up -d"
        )


@pytest.fixture
def clock() -> Clock:
    """Clock pinned to FROZEN_NOW."""
    return fixed_clock(FROZEN_NOW)


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine.

    Skips test if PostgreSQL is not available (e.g., Docker not running).
    """
    skip_if_no_postgres()

    engine = build_engine(TEST_DATABASE_URL)
    await create_schema(engine)

    yield engine

    await drop_schema(engine)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()
