"""Field validation helpers shared by the entity factories.

Each helper either returns the normalized value or raises
InvalidArgumentError naming the offending field. Length limits apply to
the raw input; returned strings are trimmed.
"""

import uuid
from datetime import UTC, datetime

from career_ledger.core.errors import InvalidArgumentError

NIL_UUID = uuid.UUID(int=0)


def require_id(field: str, label: str, value: uuid.UUID | None) -> uuid.UUID:
    """Reject a missing or nil identifier.

    Args:
        field: Argument name reported in the error.
        label: Human-readable name used in the message (e.g., "Account ID").
        value: Identifier to check.

    Returns:
        The identifier unchanged.

    Raises:
        InvalidArgumentError: If value is None, not a UUID, or the nil UUID.
    """
    if not isinstance(value, uuid.UUID) or value == NIL_UUID:
        raise InvalidArgumentError(field, f"{label} is required", value)
    return value


def require_text(field: str, label: str, value: str | None, max_length: int) -> str:
    """Validate a required, length-bounded string and return it trimmed.

    Raises:
        InvalidArgumentError: If blank or longer than max_length.
    """
    if value is None or not value.strip():
        raise InvalidArgumentError(field, f"{label} is required", value)
    if len(value) > max_length:
        raise InvalidArgumentError(
            field, f"{label} cannot exceed {max_length} characters", value
        )
    return value.strip()


def optional_text(
    field: str, label: str, value: str | None, max_length: int
) -> str | None:
    """Validate an optional string; blank input normalizes to None.

    Raises:
        InvalidArgumentError: If non-blank and longer than max_length.
    """
    if value is None or not value.strip():
        return None
    if len(value) > max_length:
        raise InvalidArgumentError(
            field, f"{label} cannot exceed {max_length} characters", value
        )
    return value.strip()


def require_utc(field: str, value: datetime | None) -> datetime:
    """Require a tz-aware datetime and convert it to UTC.

    Raises:
        InvalidArgumentError: If value is missing or naive.
    """
    if not isinstance(value, datetime):
        raise InvalidArgumentError(field, f"{field} is required", value)
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidArgumentError(field, f"{field} must be timezone-aware", value)
    return value.astimezone(UTC)
