"""Tests for ApplicationRepository.

Tests verify:
- Aggregates persist with their initial Submitted event
- Reads are scoped to the owning account
- Loaded events are sealed and cannot be updated
- Appended events survive a reload and drive the derived status
"""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from career_ledger.core.clock import fixed_clock
from career_ledger.core.errors import ImmutableEventError
from career_ledger.models import Application, ApplicationEvent, EventType
from career_ledger.repositories.application_repository import ApplicationRepository

_MISSING_UUID = uuid.UUID("99999999-9999-9999-9999-999999999999")


async def _reload(db: AsyncSession, application: Application, **kwargs) -> Application:
    db.expunge_all()
    loaded = await ApplicationRepository.get_by_id(
        db, application.id, account_id=application.account_id, **kwargs
    )
    assert loaded is not None
    return loaded


class TestCreate:
    """Test ApplicationRepository.create()."""

    @pytest.mark.asyncio
    async def test_persists_initial_event(
        self, db_session: AsyncSession, application_a: Application
    ):
        """The Submitted event is stored with the application."""
        loaded = await _reload(db_session, application_a)

        assert loaded.company_name == "TechCorp"
        assert loaded.event_count == 1
        assert loaded.current_status is EventType.SUBMITTED
        assert loaded.events[0].occurred_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_stores_event_type_as_state_name(
        self, db_session: AsyncSession, application_a: Application
    ):
        """event_type column holds the PascalCase state name."""
        result = await db_session.execute(
            text("SELECT event_type FROM application_events WHERE application_id = :id"),
            {"id": application_a.id},
        )
        assert result.scalar_one() == "Submitted"


class TestGetById:
    """Test ApplicationRepository.get_by_id()."""

    @pytest.mark.asyncio
    async def test_returns_none_for_other_account(
        self, db_session: AsyncSession, application_a: Application, other_account
    ):
        """Another account cannot see the application."""
        found = await ApplicationRepository.get_by_id(
            db_session, application_a.id, account_id=other_account.id
        )
        assert found is None

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(
        self, db_session: AsyncSession, account_a
    ):
        """Unknown ids return None."""
        found = await ApplicationRepository.get_by_id(
            db_session, _MISSING_UUID, account_id=account_a.id
        )
        assert found is None

    @pytest.mark.asyncio
    async def test_for_update_loads_events(
        self, db_session: AsyncSession, application_a: Application
    ):
        """Locked reads still carry the full history."""
        loaded = await _reload(db_session, application_a, for_update=True)
        assert loaded.event_count == 1


class TestEventImmutability:
    """Loaded events cannot be changed."""

    @pytest.mark.asyncio
    async def test_loaded_event_rejects_assignment(
        self, db_session: AsyncSession, application_a: Application
    ):
        """Events are sealed when loaded from the database."""
        loaded = await _reload(db_session, application_a)

        with pytest.raises(ImmutableEventError):
            loaded.events[0].notes = "rewritten"

    @pytest.mark.asyncio
    async def test_flush_rejects_changed_event(
        self, db_session: AsyncSession, application_a: Application
    ):
        """An UPDATE that slips past the attribute guard is refused at flush."""
        loaded = await _reload(db_session, application_a)
        object.__setattr__(loaded.events[0], "notes", "rewritten")

        with pytest.raises(ImmutableEventError) as exc_info:
            await db_session.flush()
        assert exc_info.value.field == "notes"


class TestAppend:
    """Appending events to a loaded aggregate."""

    @pytest.mark.asyncio
    async def test_appended_events_drive_status_after_reload(
        self, db_session: AsyncSession, application_a: Application
    ):
        """History persists and the status is derived from it."""
        loaded = await _reload(db_session, application_a, for_update=True)
        now = datetime.now(UTC)
        for offset, event_type in (
            (2, EventType.IN_REVIEW),
            (1, EventType.REJECTED),
        ):
            loaded.add_event(
                ApplicationEvent.create(
                    loaded.id,
                    loaded.account_id,
                    event_type,
                    now - timedelta(minutes=offset),
                    clock=fixed_clock(now),
                )
            )
        await db_session.flush()

        reloaded = await _reload(db_session, application_a)
        assert reloaded.event_count == 3
        assert reloaded.current_status is EventType.REJECTED
        assert reloaded.is_closed is True
        assert [e.event_type for e in reloaded.timeline] == [
            EventType.SUBMITTED,
            EventType.IN_REVIEW,
            EventType.REJECTED,
        ]


class TestListByAccount:
    """Test ApplicationRepository.list_by_account()."""

    @pytest.mark.asyncio
    async def test_lists_only_owned_newest_first(
        self, db_session: AsyncSession, account_a, other_account
    ):
        """Results are scoped to the account and ordered by created_at."""
        base = datetime.now(UTC) - timedelta(days=3)
        older = Application.create(
            account_a.id, "OldCorp", "Engineer", clock=fixed_clock(base)
        )
        newer = Application.create(
            account_a.id,
            "NewCorp",
            "Engineer",
            clock=fixed_clock(base + timedelta(days=1)),
        )
        foreign = Application.create(other_account.id, "Elsewhere", "Engineer")
        for application in (older, newer, foreign):
            await ApplicationRepository.create(db_session, application)
        db_session.expunge_all()

        result = await ApplicationRepository.list_by_account(db_session, account_a.id)

        assert [a.company_name for a in result] == ["NewCorp", "OldCorp"]
        assert all(a.event_count == 1 for a in result)
