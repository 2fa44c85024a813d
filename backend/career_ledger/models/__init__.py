"""SQLAlchemy ORM models for Career Ledger.

All models are exported from this module for convenient imports:
    from career_ledger.models import Account, Application, ...

Models are organized by domain:
- account.py: Account
- application.py: Application (aggregate root), ApplicationEvent
- event_type.py: EventType (closed enumeration of lifecycle states)
"""

from career_ledger.models.account import Account
from career_ledger.models.application import Application, ApplicationEvent
from career_ledger.models.base import Base
from career_ledger.models.event_type import TERMINAL_EVENT_TYPES, EventType

__all__ = [
    "Account",
    "Application",
    "ApplicationEvent",
    "Base",
    "EventType",
    "TERMINAL_EVENT_TYPES",
]
