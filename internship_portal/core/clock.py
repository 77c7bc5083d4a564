"""
Clock - source of "today" and "now" for the placement engine.

Services never read the system date directly; a clock is injected so
date-window rules stay deterministic in tests.
"""

from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class SystemClock:
    """Wall clock."""

    def today(self) -> date:
        return date.today()

    def now(self) -> datetime:
        return utc_now()


class FixedClock:
    """Clock pinned to a given day. `set()` moves it."""

    def __init__(self, today: date, now: Optional[datetime] = None):
        self._today = today
        self._now = now or datetime(today.year, today.month, today.day, 9, 0, 0, tzinfo=timezone.utc)

    def today(self) -> date:
        return self._today

    def now(self) -> datetime:
        return self._now

    def set(self, today: date):
        self._today = today
        self._now = datetime(today.year, today.month, today.day, 9, 0, 0, tzinfo=timezone.utc)
