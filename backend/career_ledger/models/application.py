"""Application models - job applications and their lifecycle events.

Application is the aggregate root. Its status is never stored: it is
derived on every read from the append-only collection of
ApplicationEvents, so the audit trail and the status cannot drift apart.

Transition validation is NOT done here. Callers check the proposed
event type with career_ledger.services.application_lifecycle before
calling Application.add_event().
"""

import uuid
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from sqlalchemy import Enum, ForeignKey, String, Text, event, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship

from career_ledger.core.clock import Clock, utc_now
from career_ledger.core.errors import (
    ImmutableEventError,
    InvalidArgumentError,
    OwnershipMismatchError,
)
from career_ledger.core.validation import (
    optional_text,
    require_id,
    require_text,
    require_utc,
)
from career_ledger.models.base import Base
from career_ledger.models.event_type import EventType

if TYPE_CHECKING:
    from career_ledger.models.account import Account

_NAME_MAX_LENGTH = 255
_URL_MAX_LENGTH = 2048
_NOTES_MAX_LENGTH = 5000

# Allowed clock skew between the caller and this process when validating
# occurred_at. Anything later is treated as a future date.
FUTURE_TOLERANCE = timedelta(hours=1)

# Columns that never change once an event is constructed or loaded.
_IMMUTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "application_id",
        "account_id",
        "event_type",
        "occurred_at",
        "notes",
        "created_at",
    }
)

# Attribute names a sealed event refuses to assign. The parent
# relationship is included so an event cannot be moved to another
# aggregate; collection appends and backrefs bypass __setattr__.
_SEALED_ATTRIBUTES: frozenset[str] = _IMMUTABLE_FIELDS | {"application"}


def _validate_basic_info(
    company_name: str, job_title: str, job_url: str | None
) -> tuple[str, str, str | None]:
    """Validate and trim the descriptive fields shared by create and update."""
    return (
        require_text("company_name", "Company name", company_name, _NAME_MAX_LENGTH),
        require_text("job_title", "Job title", job_title, _NAME_MAX_LENGTH),
        optional_text("job_url", "Job URL", job_url, _URL_MAX_LENGTH),
    )


def _recency_key(evt: "ApplicationEvent") -> tuple[datetime, datetime]:
    # Occurrence time first; the record logged last wins a tie.
    return (evt.occurred_at, evt.created_at)


class Application(Base):
    """Job application aggregate owning its lifecycle events.

    Attributes:
        id: UUID primary key.
        account_id: FK to the owning account.
        company_name: Company name (e.g., "TechCorp").
        job_title: Job title (e.g., "Senior Software Engineer").
        job_url: Optional URL to the job posting.
        created_at: When this application record was created (UTC).
        events: Append-only lifecycle events (audit trail).
    """

    __tablename__ = "applications"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    company_name: Mapped[str] = mapped_column(String(_NAME_MAX_LENGTH), nullable=False)
    job_title: Mapped[str] = mapped_column(String(_NAME_MAX_LENGTH), nullable=False)
    job_url: Mapped[str | None] = mapped_column(String(_URL_MAX_LENGTH), nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)

    # Relationships
    account: Mapped["Account"] = relationship(
        "Account",
        back_populates="applications",
    )
    events: Mapped[list["ApplicationEvent"]] = relationship(
        "ApplicationEvent",
        back_populates="application",
    )

    @classmethod
    def create(
        cls,
        account_id: uuid.UUID,
        company_name: str,
        job_title: str,
        job_url: str | None = None,
        submitted_at: datetime | None = None,
        notes: str | None = None,
        *,
        clock: Clock = utc_now,
    ) -> "Application":
        """Create a new application with its initial Submitted event.

        The Submitted event is appended inside this call, so no observable
        Application ever has an empty event history.

        Args:
            account_id: ID of the account creating this application.
            company_name: Company name (1-255 characters).
            job_title: Job title (1-255 characters).
            job_url: Optional URL to job posting (max 2048 characters).
            submitted_at: When the application was submitted (defaults to now).
            notes: Optional notes stored on the Submitted event.
            clock: Source of "now" for timestamps and validation.

        Returns:
            New Application holding exactly one Submitted event.

        Raises:
            InvalidArgumentError: If any field, or the initial event, is invalid.
        """
        require_id("account_id", "Account ID", account_id)
        company_name, job_title, job_url = _validate_basic_info(
            company_name, job_title, job_url
        )

        now = clock()
        application = cls(
            id=uuid.uuid4(),
            account_id=account_id,
            company_name=company_name,
            job_title=job_title,
            job_url=job_url,
            created_at=now,
        )

        submitted_event = ApplicationEvent.create(
            application.id,
            account_id,
            EventType.SUBMITTED,
            submitted_at if submitted_at is not None else now,
            notes,
            clock=clock,
        )
        application.add_event(submitted_event)

        return application

    def update_basic_info(
        self, company_name: str, job_title: str, job_url: str | None = None
    ) -> None:
        """Update descriptive fields. Never touches events or status.

        To change lifecycle state, append a new event via add_event().

        Raises:
            InvalidArgumentError: If any field is invalid. Nothing is
                modified in that case.
        """
        company_name, job_title, job_url = _validate_basic_info(
            company_name, job_title, job_url
        )
        self.company_name = company_name
        self.job_title = job_title
        self.job_url = job_url

    def add_event(self, evt: "ApplicationEvent | None") -> None:
        """Append a lifecycle event to this application.

        No transition or ordering check happens here; a backfilled event
        older than existing ones is accepted and current_status stays
        well-defined because it is derived by occurrence time.

        Raises:
            InvalidArgumentError: If evt is None.
            OwnershipMismatchError: If evt belongs to another application
                or another account.
        """
        if evt is None:
            raise InvalidArgumentError("event", "Event is required")

        if evt.application_id != self.id:
            raise OwnershipMismatchError("application_id", self.id, evt.application_id)

        if evt.account_id != self.account_id:
            raise OwnershipMismatchError("account_id", self.account_id, evt.account_id)

        self.events.append(evt)

    @property
    def current_status(self) -> EventType:
        """Status derived from the most recent event.

        Ordered by occurred_at, then created_at. Returns Submitted if no
        events exist (never the case for aggregates built by create()).
        """
        latest = max(self.events, key=_recency_key, default=None)
        return latest.event_type if latest is not None else EventType.SUBMITTED

    @property
    def event_count(self) -> int:
        """Number of lifecycle events."""
        return len(self.events)

    @property
    def last_updated(self) -> datetime | None:
        """When the most recent event was logged, or None without events."""
        return max((evt.created_at for evt in self.events), default=None)

    @property
    def timeline(self) -> list["ApplicationEvent"]:
        """Events in chronological order, oldest first."""
        return sorted(self.events, key=_recency_key)

    @property
    def is_closed(self) -> bool:
        """True once the derived status is terminal."""
        return self.current_status.is_terminal


class ApplicationEvent(Base):
    """Immutable lifecycle event in an application's history.

    Carries both application_id and account_id so ownership can be
    checked when the event is appended to an aggregate.

    Attributes:
        id: UUID primary key.
        application_id: FK to the parent application.
        account_id: FK to the account owning the parent application.
        event_type: Lifecycle state entered.
        occurred_at: When the event actually happened (may be backfilled).
        notes: Optional notes (e.g., interview feedback, rejection reason).
        created_at: When this event was logged in the system (UTC).
    """

    __tablename__ = "application_events"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    application_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("applications.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    account_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    event_type: Mapped[EventType] = mapped_column(
        Enum(
            EventType,
            native_enum=False,
            length=30,
            values_callable=lambda members: [m.value for m in members],
            create_constraint=True,
            name="ck_applicationevent_event_type",
        ),
        nullable=False,
    )
    occurred_at: Mapped[datetime] = mapped_column(nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)

    # Relationships
    application: Mapped["Application"] = relationship(
        "Application",
        back_populates="events",
    )

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _SEALED_ATTRIBUTES and self.__dict__.get("_sealed", False):
            raise ImmutableEventError(name)
        super().__setattr__(name, value)

    @classmethod
    def create(
        cls,
        application_id: uuid.UUID,
        account_id: uuid.UUID,
        event_type: EventType,
        occurred_at: datetime,
        notes: str | None = None,
        *,
        clock: Clock = utc_now,
    ) -> "ApplicationEvent":
        """Create a new application event with validation.

        Events are IMMUTABLE after creation: assigning to any column
        attribute raises ImmutableEventError.

        Args:
            application_id: ID of the application this event belongs to.
            account_id: ID of the account that owns this application.
            event_type: Type of lifecycle event.
            occurred_at: When the event happened (tz-aware).
            notes: Optional notes (max 5000 characters).
            clock: Source of "now" for created_at and the future check.

        Returns:
            New sealed ApplicationEvent.

        Raises:
            InvalidArgumentError: If any field is invalid.
        """
        require_id("application_id", "Application ID", application_id)
        require_id("account_id", "Account ID", account_id)

        if not isinstance(event_type, EventType):
            raise InvalidArgumentError(
                "event_type", "Event type must be an EventType", event_type
            )

        occurred_at = require_utc("occurred_at", occurred_at)
        now = clock()
        if occurred_at > now + FUTURE_TOLERANCE:
            raise InvalidArgumentError(
                "occurred_at", "Occurred date cannot be in the future", occurred_at
            )

        notes = optional_text("notes", "Notes", notes, _NOTES_MAX_LENGTH)

        evt = cls(
            id=uuid.uuid4(),
            application_id=application_id,
            account_id=account_id,
            event_type=event_type,
            occurred_at=occurred_at,
            notes=notes,
            created_at=now,
        )
        evt._sealed = True
        return evt


@event.listens_for(ApplicationEvent, "load")
def _seal_loaded_event(target: ApplicationEvent, context: Any) -> None:
    """Seal events loaded from the database like freshly created ones."""
    target._sealed = True


@event.listens_for(ApplicationEvent, "before_update")
def _reject_event_update(mapper: Any, connection: Any, target: ApplicationEvent) -> None:
    """Refuse to emit an UPDATE that changes an event column."""
    state = inspect(target)
    for name in sorted(_IMMUTABLE_FIELDS):
        if state.attrs[name].history.has_changes():
            raise ImmutableEventError(name)
