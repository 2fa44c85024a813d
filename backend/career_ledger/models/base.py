"""SQLAlchemy declarative base.

Maps ``datetime`` annotations to tz-aware timestamp columns so every
stored instant round-trips as UTC.
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }
