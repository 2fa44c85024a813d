"""Repository for Account persistence.

Provides database access for the accounts table. Accounts are built and
validated by Account.create(); this layer only stores and fetches them.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from career_ledger.models.account import Account


class AccountRepository:
    """Stateless repository for Account table operations.

    All methods are static — no instance state. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def create(db: AsyncSession, account: Account) -> Account:
        """Persist a new account.

        Args:
            db: Async database session.
            account: Account built by Account.create().

        Returns:
            The same Account, now pending in the session and flushed.

        Raises:
            sqlalchemy.exc.IntegrityError: If the email already exists.
        """
        db.add(account)
        await db.flush()
        return account

    @staticmethod
    async def get_by_id(db: AsyncSession, account_id: uuid.UUID) -> Account | None:
        """Fetch an account by primary key.

        Args:
            db: Async database session.
            account_id: UUID primary key.

        Returns:
            Account if found, None otherwise.
        """
        return await db.get(Account, account_id)

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Account | None:
        """Fetch an account by email address (case-insensitive).

        Args:
            db: Async database session.
            email: Email address to look up; trimmed and lowercased first.

        Returns:
            Account if found, None otherwise.
        """
        stmt = select(Account).where(Account.email == email.strip().lower())
        result = await db.execute(stmt)
        return result.scalar_one_or_none()
