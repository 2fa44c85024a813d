"""Shared fixtures for unit tests that need persisted accounts.

Names chosen to avoid shadowing top-level conftest fixtures
(clock, db_engine, db_session).
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from career_ledger.models import Account, Application
from career_ledger.repositories.account_repository import AccountRepository
from career_ledger.repositories.application_repository import ApplicationRepository


@pytest_asyncio.fixture
async def account_a(db_session: AsyncSession) -> Account:
    """Create Account A for repository tests."""
    account = Account.create("usera@test.com", "hashed-password-a")
    return await AccountRepository.create(db_session, account)


@pytest_asyncio.fixture
async def other_account(db_session: AsyncSession) -> Account:
    """Create a second account for cross-account ownership tests."""
    account = Account.create("other@test.com", "hashed-password-b")
    return await AccountRepository.create(db_session, account)


@pytest_asyncio.fixture
async def application_a(db_session: AsyncSession, account_a: Account) -> Application:
    """Create a persisted application owned by Account A."""
    application = Application.create(account_a.id, "TechCorp", "Senior Engineer")
    return await ApplicationRepository.create(db_session, application)
