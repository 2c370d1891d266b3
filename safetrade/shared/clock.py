"""Injectable time source.

Everything that needs "now" (catalog cache expiry, the "today" boundary of
the analytics overview, report windows, alert timestamps) takes a Clock so
tests can pin time.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


class SystemClock:
    """Wall clock in the server's local timezone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """Clock frozen at a given instant; ``advance()`` moves it forward."""

    def __init__(self, at: datetime) -> None:
        if at.tzinfo is None:
            raise ValueError("FixedClock needs a timezone-aware datetime")
        self._at = at

    def now(self) -> datetime:
        return self._at

    def advance(self, seconds: float = 0.0, **kwargs: float) -> datetime:
        self._at = self._at + timedelta(seconds=seconds, **kwargs)
        return self._at


def isoformat_z(dt: datetime) -> str:
    """ISO-8601 string, with ``Z`` for UTC offsets."""
    text = dt.isoformat(timespec="seconds")
    return text.replace("+00:00", "Z")
