"""Time and rounding helpers shared by the engines.

Timestamps in snapshots are epoch milliseconds. Calendar-day comparisons use
the local timezone, matching what the user sees on their device.
"""

from __future__ import annotations

import math
import time
from datetime import date, datetime

DAY_MS = 86_400_000


def now_ms() -> int:
    """Return the current time as epoch milliseconds."""
    return int(time.time() * 1000)


def to_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def local_date(timestamp_ms: float) -> date:
    """Return the local calendar date of an epoch-millis timestamp."""
    return datetime.fromtimestamp(timestamp_ms / 1000).date()


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +infinity.

    ``round()`` uses banker's rounding, which would make XP values differ from
    the ones recorded by other clients for the same result.
    """
    return int(math.floor(value + 0.5))


def is_safe_number(value: object) -> bool:
    """Return True for finite ints/floats (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


__all__ = ["DAY_MS", "is_safe_number", "local_date", "now_ms", "round_half_up", "to_ms"]
