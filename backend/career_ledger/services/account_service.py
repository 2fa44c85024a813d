"""Account service — registration and soft delete.

Email uniqueness is enforced by the uq_accounts_email constraint; the
pre-check here only produces a friendlier error for the common case.
"""

import uuid

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from career_ledger.core.clock import Clock, utc_now
from career_ledger.core.errors import ConflictError, NotFoundError
from career_ledger.models.account import Account
from career_ledger.repositories.account_repository import AccountRepository

logger = structlog.get_logger()

_EMAIL_CONFLICT_MESSAGE = "An account with this email already exists"


async def register_account(
    db: AsyncSession,
    *,
    email: str,
    password_hash: str,
    clock: Clock = utc_now,
) -> Account:
    """Create and persist a new account.

    Args:
        db: Async database session.
        email: Email address; normalized by Account.create().
        password_hash: Already-hashed password.
        clock: Source of the creation timestamp.

    Returns:
        The persisted Account.

    Raises:
        InvalidArgumentError: If email or password hash is invalid.
        ConflictError: If the email is already registered.
    """
    account = Account.create(email, password_hash, clock=clock)

    if await AccountRepository.get_by_email(db, account.email) is not None:
        raise ConflictError("EMAIL_ALREADY_REGISTERED", _EMAIL_CONFLICT_MESSAGE)

    try:
        await AccountRepository.create(db, account)
    except IntegrityError as e:
        # Concurrent registration won the race between check and insert
        raise ConflictError(
            "EMAIL_ALREADY_REGISTERED", _EMAIL_CONFLICT_MESSAGE
        ) from e

    logger.info("account_registered", account_id=str(account.id))
    return account


async def deactivate_account(db: AsyncSession, account_id: uuid.UUID) -> Account:
    """Soft delete an account. Owned applications are untouched.

    Raises:
        NotFoundError: If the account does not exist.
    """
    account = await AccountRepository.get_by_id(db, account_id)
    if account is None:
        raise NotFoundError("Account", str(account_id))
    account.deactivate()
    await db.flush()
    logger.info("account_deactivated", account_id=str(account_id))
    return account


async def reactivate_account(db: AsyncSession, account_id: uuid.UUID) -> Account:
    """Reactivate a soft-deleted account.

    Raises:
        NotFoundError: If the account does not exist.
    """
    account = await AccountRepository.get_by_id(db, account_id)
    if account is None:
        raise NotFoundError("Account", str(account_id))
    account.reactivate()
    await db.flush()
    logger.info("account_reactivated", account_id=str(account_id))
    return account
