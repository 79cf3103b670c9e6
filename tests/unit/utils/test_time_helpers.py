"""Tests for the rounding and time helpers."""

from datetime import datetime

import pytest

from typecore.utils.time import DAY_MS, is_safe_number, local_date, round_half_up, to_ms


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-0.5, 0), (-1.5, -1), (-2.6, -3)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(1, True), (1.5, True), (float("inf"), False), (float("nan"), False), (None, False), (True, False), ("3", False)],
)
def test_is_safe_number(value, expected):
    assert is_safe_number(value) is expected


def test_local_date_round_trip():
    moment = datetime(2024, 7, 4, 23, 30)

    assert local_date(to_ms(moment)) == moment.date()
    assert (local_date(to_ms(moment) + DAY_MS) - moment.date()).days == 1
