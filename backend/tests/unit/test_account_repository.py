"""Tests for AccountRepository.

Tests cover persistence, primary-key and email lookup, and the unique
email constraint.
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from career_ledger.models import Account
from career_ledger.repositories.account_repository import AccountRepository

_MISSING_UUID = uuid.UUID("99999999-9999-9999-9999-999999999999")


class TestCreate:
    """Test AccountRepository.create()."""

    @pytest.mark.asyncio
    async def test_persists_account(self, db_session: AsyncSession):
        """A created account can be read back by id."""
        account = await AccountRepository.create(
            db_session, Account.create("new@test.com", "hashed")
        )
        db_session.expunge_all()

        found = await AccountRepository.get_by_id(db_session, account.id)
        assert found is not None
        assert found.email == "new@test.com"
        assert found.is_active is True
        assert found.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_rejects_duplicate_email(self, db_session: AsyncSession, account_a):
        """uq_accounts_email prevents two accounts with one email."""
        with pytest.raises(IntegrityError):
            await AccountRepository.create(
                db_session, Account.create("USERA@test.com", "other-hash")
            )


class TestGetById:
    """Test AccountRepository.get_by_id()."""

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(self, db_session: AsyncSession):
        """Unknown ids return None."""
        assert await AccountRepository.get_by_id(db_session, _MISSING_UUID) is None


class TestGetByEmail:
    """Test AccountRepository.get_by_email()."""

    @pytest.mark.asyncio
    async def test_matches_case_insensitively(
        self, db_session: AsyncSession, account_a
    ):
        """Lookup normalizes the email the same way create() does."""
        found = await AccountRepository.get_by_email(db_session, "  UserA@Test.com ")
        assert found is not None
        assert found.id == account_a.id

    @pytest.mark.asyncio
    async def test_returns_none_when_unregistered(
        self, db_session: AsyncSession, account_a
    ):
        """Unregistered emails return None."""
        assert await AccountRepository.get_by_email(db_session, "nobody@test.com") is None
