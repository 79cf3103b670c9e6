"""
XP Engine

Computes the experience awarded for one completed test together with a
breakdown of what contributed to it. The calculation is pure: it reads the
result and the caller-supplied XP total and last-result timestamp, and never
touches the snapshot.

Rounding follows half-up semantics (``floor(x + 0.5)``) so the numbers agree
with those computed by other clients for the same result.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Optional

from typecore.integration.funbox import FunboxMetadata, get_funbox
from typecore.models.enums import Mode
from typecore.models.result import Result
from typecore.utils.time import is_safe_number, local_date, round_half_up

MIN_DAILY_BONUS = 10
MAX_DAILY_BONUS = 1000
DAILY_BONUS_RATE = 0.05

BASE_XP_PER_SECOND = 2
FULL_ACCURACY_BONUS = 0.5
CORRECTED_BONUS = 0.25
QUOTE_BONUS = 0.5
PUNCTUATION_BONUS = 0.4
NUMBERS_BONUS = 0.1

FunboxLookup = Callable[[str], Optional[FunboxMetadata]]


@dataclass
class XpCalculation:
    """XP awarded for a test and the named contributions behind it."""

    xp: int
    breakdown: Dict[str, int] = field(default_factory=dict)


def _accuracy_modifier(acc: float) -> float:
    return (acc - 50) / 50


def daily_bonus(current_total_xp: float) -> int:
    """Return the first-test-of-the-day bonus for a user with ``current_total_xp``."""
    proportional = round_half_up(current_total_xp * DAILY_BONUS_RATE)
    return max(min(MAX_DAILY_BONUS, proportional), MIN_DAILY_BONUS)


def _incomplete_xp(result: Result) -> Optional[int]:
    if result.incomplete_tests:
        total = 0
        for attempt in result.incomplete_tests:
            total += round_half_up(attempt.seconds * max(0.0, _accuracy_modifier(attempt.acc)))
        return total
    if result.incomplete_test_seconds and result.incomplete_test_seconds > 0:
        return round_half_up(result.incomplete_test_seconds)
    return None


def calculate_xp(
    result: Result,
    current_total_xp: float,
    last_result_timestamp: Optional[float],
    *,
    now: Optional[date] = None,
    funbox_lookup: FunboxLookup = get_funbox,
) -> XpCalculation:
    """
    Compute the XP earned by ``result``.

    Args:
        result: The completed test
        current_total_xp: XP total before this test, drives the daily bonus
        last_result_timestamp: Epoch millis of the previous result, if any
        now: Today's local date (defaults to today)
        funbox_lookup: Metadata lookup used for funbox difficulty weights

    Returns:
        The total XP and its breakdown. Zen tests earn nothing and carry an
        empty breakdown. Totals are not clamped at zero.
    """
    if result.mode == Mode.ZEN:
        return XpCalculation(0, {})

    breakdown: Dict[str, int] = {}

    base_xp = round_half_up((result.test_duration - result.afk_duration) * BASE_XP_PER_SECOND)
    breakdown["base"] = base_xp

    modifier = 1.0

    corrected_everything = all(stat == 0 for stat in result.char_stats[1:])
    if result.acc == 100:
        modifier += FULL_ACCURACY_BONUS
        breakdown["fullAccuracy"] = round_half_up(base_xp * FULL_ACCURACY_BONUS)
    elif corrected_everything:
        modifier += CORRECTED_BONUS
        breakdown["corrected"] = round_half_up(base_xp * CORRECTED_BONUS)

    if result.mode == Mode.QUOTE:
        modifier += QUOTE_BONUS
        breakdown["quote"] = round_half_up(base_xp * QUOTE_BONUS)
    else:
        if result.punctuation:
            modifier += PUNCTUATION_BONUS
            breakdown["punctuation"] = round_half_up(base_xp * PUNCTUATION_BONUS)
        if result.numbers:
            modifier += NUMBERS_BONUS
            breakdown["numbers"] = round_half_up(base_xp * NUMBERS_BONUS)

    if result.funbox:
        funbox_modifier = 0.0
        for name in result.funbox:
            metadata = funbox_lookup(name)
            funbox_modifier += metadata.difficulty_level if metadata is not None else 0
        if funbox_modifier > 0:
            modifier += funbox_modifier
            breakdown["funbox"] = round_half_up(base_xp * funbox_modifier)

    incomplete_xp = _incomplete_xp(result)
    if incomplete_xp is not None:
        breakdown["incomplete"] = incomplete_xp
    else:
        incomplete_xp = 0

    bonus = 0
    if is_safe_number(last_result_timestamp):
        today = now or date.today()
        if local_date(last_result_timestamp) != today:
            bonus = daily_bonus(current_total_xp)
            breakdown["daily"] = bonus

    xp_with_modifiers = round_half_up(base_xp * modifier)
    xp_after_accuracy = round_half_up(xp_with_modifiers * _accuracy_modifier(result.acc))
    breakdown["accPenalty"] = xp_with_modifiers - xp_after_accuracy

    total = round_half_up(xp_after_accuracy + incomplete_xp) + bonus
    return XpCalculation(total, breakdown)


__all__ = ["MAX_DAILY_BONUS", "MIN_DAILY_BONUS", "XpCalculation", "calculate_xp", "daily_bonus"]
