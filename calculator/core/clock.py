"""
Time sources for the withdrawal calculator.

Eligibility depends on "now"; the calculator never reads the wall clock
directly, it asks the Clock it was built with.
"""

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Anything that can tell the current UTC time."""

    def now(self) -> datetime:
        """Return current time (timezone-aware, UTC)."""
        ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """
    Clock frozen at a given instant.

    Used by tests and by previews computed "as of" a chosen moment.

    Example:
        >>> clock = FixedClock(datetime(2024, 4, 15, tzinfo=UTC))
        >>> clock.now().year
        2024
    """

    def __init__(self, instant: datetime) -> None:
        self._instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def advance(self, **delta: float) -> None:
        """Move the clock forward, e.g. ``clock.advance(days=1)``."""
        self._instant = self._instant + timedelta(**delta)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC.

    Naive datetimes are treated as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
