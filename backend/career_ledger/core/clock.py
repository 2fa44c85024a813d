"""Wall clock used by every "current time" read.

Factories and services accept a ``clock`` argument so tests can pin time
instead of racing the real clock. All values are tz-aware UTC.
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as a tz-aware UTC datetime."""
    return datetime.now(UTC)


def fixed_clock(moment: datetime) -> Clock:
    """Build a clock that always returns ``moment``.

    Args:
        moment: Tz-aware datetime to return on every call.

    Returns:
        Zero-argument callable returning ``moment``.
    """

    def _now() -> datetime:
        return moment

    return _now
