"""Tests for the XP engine."""

from datetime import date, datetime, timedelta

import pytest

from typecore.core.xp import MAX_DAILY_BONUS, MIN_DAILY_BONUS, calculate_xp, daily_bonus
from typecore.integration.funbox import FunboxMetadata

TODAY = date(2024, 5, 20)


def _ms(day: date, hour: int = 12) -> int:
    return int(datetime(day.year, day.month, day.day, hour).timestamp() * 1000)


@pytest.fixture
def perfect_result(make_result):
    return make_result(acc=100, testDuration=30, afkDuration=0, charStats=[100, 0, 0, 0])


def test_zen_earns_nothing(make_result):
    result = make_result(mode="zen", mode2="zen", acc=100, testDuration=120, punctuation=True)

    calc = calculate_xp(result, 5000, _ms(TODAY - timedelta(days=3)), now=TODAY)

    assert calc.xp == 0
    assert calc.breakdown == {}


def test_representative_breakdown(perfect_result):
    calc = calculate_xp(perfect_result, 0, None, now=TODAY)

    assert calc.breakdown == {"base": 60, "fullAccuracy": 30, "accPenalty": 0}
    assert calc.xp == 90
    assert calc.breakdown["base"] + calc.breakdown["fullAccuracy"] - calc.breakdown["accPenalty"] == calc.xp


def test_daily_bonus_after_two_days(perfect_result):
    calc = calculate_xp(perfect_result, 1000, _ms(TODAY - timedelta(days=2)), now=TODAY)

    assert calc.breakdown["daily"] == 50
    assert calc.xp == 140


def test_no_daily_bonus_same_day(perfect_result):
    calc = calculate_xp(perfect_result, 1000, _ms(TODAY, hour=8), now=TODAY)

    assert "daily" not in calc.breakdown
    assert calc.xp == 90


@pytest.mark.parametrize("total, expected", [(0, 10), (100, 10), (1000, 50), (19_999, 1000), (10**9, 1000)])
def test_daily_bonus_bounds(total, expected):
    bonus = daily_bonus(total)

    assert bonus == expected
    assert MIN_DAILY_BONUS <= bonus <= MAX_DAILY_BONUS


def test_invalid_last_timestamp_gives_no_bonus(perfect_result):
    calc = calculate_xp(perfect_result, 1000, float("nan"), now=TODAY)

    assert "daily" not in calc.breakdown


def test_corrected_and_accuracy_penalty(make_result):
    result = make_result(acc=90, testDuration=30, charStats=[200, 0, 0, 0])

    calc = calculate_xp(result, 0, None, now=TODAY)

    # modifier 1.25 -> 75, accuracy modifier 0.8 -> 60
    assert calc.breakdown["corrected"] == 15
    assert calc.breakdown["accPenalty"] == 15
    assert calc.xp == 60


def test_punctuation_numbers_and_quote(make_result):
    words = make_result(acc=75, testDuration=50, punctuation=True, numbers=True, charStats=[1, 1, 0, 0])
    quote = make_result(mode="quote", mode2="12", acc=75, testDuration=50, punctuation=True, charStats=[1, 1, 0, 0])

    words_calc = calculate_xp(words, 0, None, now=TODAY)
    quote_calc = calculate_xp(quote, 0, None, now=TODAY)

    assert words_calc.breakdown["punctuation"] == 40
    assert words_calc.breakdown["numbers"] == 10
    assert "quote" not in words_calc.breakdown
    assert quote_calc.breakdown["quote"] == 50
    assert "punctuation" not in quote_calc.breakdown
    # 100 * 1.5 = 150, * 0.5 = 75
    assert words_calc.xp == 75
    assert quote_calc.xp == 75


def test_funbox_difficulty(make_result):
    lookup = {
        "hard": FunboxMetadata("hard", 2),
        "easy": FunboxMetadata("easy", 0),
    }.get
    result = make_result(acc=100, testDuration=10, funbox=["hard", "easy", "unknown"], charStats=[5, 0, 0, 0])

    calc = calculate_xp(result, 0, None, now=TODAY, funbox_lookup=lookup)

    assert calc.breakdown["funbox"] == 40
    # 20 * (1 + 0.5 + 2)
    assert calc.xp == 70


def test_funbox_without_weight_not_recorded(make_result):
    result = make_result(acc=100, testDuration=10, funbox="none", charStats=[5, 0, 0, 0])

    calc = calculate_xp(result, 0, None, now=TODAY)

    assert "funbox" not in calc.breakdown


def test_incomplete_attempts(make_result):
    result = make_result(
        acc=100,
        testDuration=10,
        incompleteTests=[{"acc": 100, "seconds": 10}, {"acc": 75, "seconds": 9}, {"acc": 20, "seconds": 30}],
        incompleteTestSeconds=49,
    )

    calc = calculate_xp(result, 0, None, now=TODAY)

    # 10 * 1 + round(9 * 0.5) + 0
    assert calc.breakdown["incomplete"] == 15
    assert calc.xp == 30 + 15


def test_incomplete_seconds_fallback(make_result):
    result = make_result(acc=100, testDuration=10, incompleteTestSeconds=12.5)

    calc = calculate_xp(result, 0, None, now=TODAY)

    assert calc.breakdown["incomplete"] == 13
    assert calc.xp == 43


def test_low_accuracy_is_not_clamped(make_result):
    result = make_result(acc=25, testDuration=60, charStats=[10, 30, 5, 1])

    calc = calculate_xp(result, 0, None, now=TODAY)

    # 120 * -0.5
    assert calc.xp == -60
    assert calc.breakdown["accPenalty"] == 180


def test_afk_time_reduces_base(make_result):
    result = make_result(acc=100, testDuration=30, afkDuration=5.25)

    calc = calculate_xp(result, 0, None, now=TODAY)

    assert calc.breakdown["base"] == 50
