"""Simple per-day call quota for the directions API."""

import asyncio
from datetime import date


class DailyQuota:
    """Counts calls per calendar day and refuses them past a limit.

    Uses an async lock so concurrent planners cannot overshoot the limit.
    """

    def __init__(self, limit: int = 100):
        """Initialize the quota.

        Args:
            limit: Maximum calls allowed per day.
        """
        self._limit = limit
        self._day: date | None = None
        self._count = 0
        self._lock = asyncio.Lock()

    def _roll(self, today: date) -> None:
        if self._day != today:
            self._day = today
            self._count = 0

    async def try_acquire(self, today: date | None = None) -> bool:
        """Record one call if the limit allows it.

        Args:
            today: Day to count against (default: today's date).

        Returns:
            True if the call may proceed, False if the day's limit is reached.
        """
        async with self._lock:
            self._roll(today or date.today())
            if self._count >= self._limit:
                return False
            self._count += 1
            return True

    def remaining(self, today: date | None = None) -> int:
        """Calls left for the given day."""
        day = today or date.today()
        used = self._count if self._day == day else 0
        return max(self._limit - used, 0)

    def reset(self) -> None:
        """Forget all recorded calls."""
        self._day = None
        self._count = 0
