"""Application service — create applications and record status changes.

This is the caller the transition policy expects: it loads the aggregate
under a row lock, validates the proposed move against the derived
status, then builds the event and appends it. The aggregate itself never
validates transitions.

Public functions:

1. create_application — Builds the aggregate with its Submitted event
2. record_status_change — Validates and appends a lifecycle event
3. update_application_info — Edits company, title, URL
4. get_application / list_applications — Ownership-scoped reads
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from career_ledger.core.clock import Clock, utc_now
from career_ledger.core.errors import NotFoundError
from career_ledger.models.application import Application, ApplicationEvent
from career_ledger.models.event_type import EventType
from career_ledger.repositories.account_repository import AccountRepository
from career_ledger.repositories.application_repository import ApplicationRepository
from career_ledger.services.application_lifecycle import (
    InvalidTransitionError,
    validate_transition,
)

logger = structlog.get_logger()


# =============================================================================
# Result Dataclasses
# =============================================================================


@dataclass
class StatusChangeResult:
    """Result of record_status_change.

    Attributes:
        application: The aggregate after the append.
        event: The newly appended event.
        previous_status: Derived status before the append.
    """

    application: Application
    event: ApplicationEvent
    previous_status: EventType

    @property
    def current_status(self) -> EventType:
        """Derived status after the append."""
        return self.application.current_status


# =============================================================================
# Public Functions
# =============================================================================


async def create_application(
    db: AsyncSession,
    *,
    account_id: uuid.UUID,
    company_name: str,
    job_title: str,
    job_url: str | None = None,
    submitted_at: datetime | None = None,
    notes: str | None = None,
    clock: Clock = utc_now,
) -> Application:
    """Create and persist an application with its initial Submitted event.

    Args:
        db: Async database session.
        account_id: Owning account.
        company_name: Company name (1-255 characters).
        job_title: Job title (1-255 characters).
        job_url: Optional job posting URL.
        submitted_at: Backfilled submission time (defaults to now).
        notes: Optional notes for the Submitted event.
        clock: Source of "now".

    Returns:
        The persisted Application.

    Raises:
        NotFoundError: If the account does not exist.
        InvalidArgumentError: If any field is invalid.
    """
    account = await AccountRepository.get_by_id(db, account_id)
    if account is None:
        raise NotFoundError("Account", str(account_id))

    application = Application.create(
        account_id,
        company_name,
        job_title,
        job_url=job_url,
        submitted_at=submitted_at,
        notes=notes,
        clock=clock,
    )
    await ApplicationRepository.create(db, application)

    logger.info(
        "application_created",
        application_id=str(application.id),
        account_id=str(account_id),
        status=application.current_status.value,
    )
    return application


async def get_application(
    db: AsyncSession,
    *,
    account_id: uuid.UUID,
    application_id: uuid.UUID,
) -> Application:
    """Fetch one application owned by the account.

    Raises:
        NotFoundError: If missing or owned by another account.
    """
    application = await ApplicationRepository.get_by_id(
        db, application_id, account_id=account_id
    )
    if application is None:
        raise NotFoundError("Application", str(application_id))
    return application


async def list_applications(
    db: AsyncSession,
    *,
    account_id: uuid.UUID,
) -> list[Application]:
    """List an account's applications, most recent activity first.

    Sorted by last_updated descending; applications without events
    (never produced by create_application) sort last.
    """
    applications = await ApplicationRepository.list_by_account(db, account_id)
    with_activity = [a for a in applications if a.last_updated is not None]
    without_activity = [a for a in applications if a.last_updated is None]
    with_activity.sort(key=lambda a: a.last_updated, reverse=True)
    return with_activity + without_activity


async def update_application_info(
    db: AsyncSession,
    *,
    account_id: uuid.UUID,
    application_id: uuid.UUID,
    company_name: str,
    job_title: str,
    job_url: str | None = None,
) -> Application:
    """Update company, title and URL of an application.

    Raises:
        NotFoundError: If missing or owned by another account.
        InvalidArgumentError: If any field is invalid.
    """
    application = await get_application(
        db, account_id=account_id, application_id=application_id
    )
    application.update_basic_info(company_name, job_title, job_url)
    await db.flush()
    return application


async def record_status_change(
    db: AsyncSession,
    *,
    account_id: uuid.UUID,
    application_id: uuid.UUID,
    event_type: EventType,
    occurred_at: datetime | None = None,
    notes: str | None = None,
    clock: Clock = utc_now,
) -> StatusChangeResult:
    """Validate a status change and append it as a new event.

    The application row is locked for the rest of the caller's
    transaction, so concurrent changes to the same application are
    validated one after another against the latest history.

    Args:
        db: Async database session.
        account_id: Owning account (ownership check).
        application_id: Application to change.
        event_type: Proposed next status.
        occurred_at: When the change happened (defaults to now).
        notes: Optional notes for the event.
        clock: Source of "now".

    Returns:
        StatusChangeResult with the appended event.

    Raises:
        NotFoundError: If missing or owned by another account.
        InvalidTransitionError: If event_type cannot follow the current status.
        InvalidArgumentError: If the event fields are invalid.
    """
    application = await ApplicationRepository.get_by_id(
        db, application_id, account_id=account_id, for_update=True
    )
    if application is None:
        raise NotFoundError("Application", str(application_id))

    previous_status = application.current_status
    try:
        validate_transition(previous_status, event_type)
    except InvalidTransitionError as e:
        logger.warning(
            "application_transition_rejected",
            application_id=str(application_id),
            account_id=str(account_id),
            from_status=previous_status.value,
            to_status=event_type.value,
            reason=e.reason.value,
        )
        raise

    evt = ApplicationEvent.create(
        application.id,
        application.account_id,
        event_type,
        occurred_at if occurred_at is not None else clock(),
        notes,
        clock=clock,
    )
    application.add_event(evt)
    await db.flush()

    logger.info(
        "application_event_recorded",
        application_id=str(application_id),
        account_id=str(account_id),
        event_id=str(evt.id),
        from_status=previous_status.value,
        to_status=event_type.value,
        current_status=application.current_status.value,
    )
    return StatusChangeResult(
        application=application,
        event=evt,
        previous_status=previous_status,
    )
