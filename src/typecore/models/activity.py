"""
Test Activity Calendar

Per-day counts of completed tests, used for the activity heatmap. Days are
stored as ISO dates (``YYYY-MM-DD``) in the device's local timezone.
"""

from datetime import date, timedelta
from typing import Dict, Optional

from pydantic import Field

from typecore.models.base import CamelModel


class TestActivity(CamelModel):
    """Calendar of completed-test counts."""

    __test__ = False  # keep pytest from collecting the model

    counts: Dict[str, int] = Field(default_factory=dict)

    def increment(self, day: date, amount: int = 1) -> int:
        """
        Add ``amount`` tests to ``day``.

        Returns:
            The new count for that day.
        """
        key = day.isoformat()
        self.counts[key] = self.counts.get(key, 0) + amount
        return self.counts[key]

    def count_for(self, day: date) -> int:
        return self.counts.get(day.isoformat(), 0)

    def year_calendar(self, year: int) -> "TestActivity":
        """Return a calendar limited to one calendar year."""
        prefix = f"{year:04d}-"
        return TestActivity(counts={
            day: count for day, count in self.counts.items() if day.startswith(prefix)
        })

    def last_year(self, today: Optional[date] = None) -> "TestActivity":
        """Return the rolling 365-day window ending on ``today``."""
        today = today or date.today()
        start = today - timedelta(days=364)
        return TestActivity(counts={
            day: count
            for day, count in self.counts.items()
            if start.isoformat() <= day <= today.isoformat()
        })

    def years(self) -> list[int]:
        return sorted({int(day[:4]) for day in self.counts})

    def total(self) -> int:
        return sum(self.counts.values())


__all__ = ["TestActivity"]
