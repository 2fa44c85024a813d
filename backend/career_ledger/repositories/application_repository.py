"""Repository for Application aggregates.

Loads applications together with their full event history so derived
status is always computed from the complete log. Appends happen through
Application.add_event() on a loaded aggregate followed by a flush.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from career_ledger.models.application import Application


class ApplicationRepository:
    """Stateless repository for Application table operations.

    All methods are static — no instance state. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def create(db: AsyncSession, application: Application) -> Application:
        """Persist a new application and its initial events.

        Args:
            db: Async database session.
            application: Aggregate built by Application.create().

        Returns:
            The same Application, flushed. Events cascade with it.
        """
        db.add(application)
        await db.flush()
        return application

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        application_id: uuid.UUID,
        *,
        account_id: uuid.UUID,
        for_update: bool = False,
    ) -> Application | None:
        """Fetch an application with its events, scoped to an account.

        Args:
            db: Async database session.
            application_id: UUID primary key.
            account_id: Owning account's UUID (ownership check).
            for_update: Lock the application row until the transaction
                ends. Serializes concurrent appenders so a transition is
                validated against the latest committed history.

        Returns:
            Application with events loaded if found and owned, None otherwise.
        """
        stmt = (
            select(Application)
            .where(
                Application.id == application_id,
                Application.account_id == account_id,
            )
            .options(selectinload(Application.events))
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_by_account(
        db: AsyncSession,
        account_id: uuid.UUID,
    ) -> list[Application]:
        """Fetch every application owned by an account, with events.

        Args:
            db: Async database session.
            account_id: Owning account's UUID.

        Returns:
            List of applications ordered by created_at descending.
        """
        stmt = (
            select(Application)
            .where(Application.account_id == account_id)
            .options(selectinload(Application.events))
            .order_by(Application.created_at.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
