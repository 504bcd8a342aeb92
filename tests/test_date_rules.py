"""
Unit tests for the rules comparing dates with now.
"""

from datetime import date, datetime, timedelta

import pytest

from fieldrules.validation.rules import Future, Past, TodayOrFuture, TodayOrPast
from tests.conftest import FIXED_NOW


SAMPLES = [
    "2024-06-16",
    "2024-06-15 12:00:01",
    "2024-06-15 12:00:00",
    "2024-06-15",
    "2023-01-01",
    "now",
    "today",
    "tomorrow",
    "yesterday",
    "June 20, 2024",
    "not a date",
    "",
]


class TestFuture:

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["2024-06-16", "2024-06-15 12:00:01", "tomorrow", "June 20, 2024"])
    def test_later_dates_pass(self, clock, value):
        assert Future(clock=clock).validate(value, "starts_at", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["2024-06-15", "2023-01-01", "now", "today", "yesterday"])
    def test_earlier_or_equal_dates_fail(self, clock, value):
        assert not Future(clock=clock).validate(value, "starts_at", {})

    @pytest.mark.unit
    def test_unparsable_fails(self, clock):
        assert not Future(clock=clock).validate("not a date", "starts_at", {})

    @pytest.mark.unit
    def test_datetime_objects(self, clock):
        assert Future(clock=clock).validate(FIXED_NOW + timedelta(minutes=1), "starts_at", {})
        assert not Future(clock=clock).validate(date(2024, 6, 15), "starts_at", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [date(1, 1, 1), datetime(1, 1, 1)])
    def test_out_of_range_dates_fail(self, clock, value):
        assert not Future(clock=clock).validate(value, "starts_at", {})
        assert not TodayOrPast(clock=clock).validate(value, "starts_at", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["30", "7", "2024", "-15"])
    def test_bare_numbers_are_not_dates(self, clock, value):
        assert not Future(clock=clock).validate(value, "starts_at", {})
        assert not TodayOrFuture(clock=clock).validate(value, "starts_at", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        ("13:00", True),
        ("11:59", False),
        ("June 20", True),
        ("June 10", False),
    ])
    def test_partial_dates_use_clock(self, clock, value, expected):
        assert Future(clock=clock).validate(value, "starts_at", {}) is expected


class TestPast:

    @pytest.mark.unit
    @pytest.mark.parametrize("value", SAMPLES)
    def test_past_is_negation_of_future(self, clock, value):
        future = Future(clock=clock).validate(value, "d", {})
        assert Past(clock=clock).validate(value, "d", {}) is (not future)

    @pytest.mark.unit
    def test_now_counts_as_past(self, clock):
        assert Past(clock=clock).validate("now", "born_at", {})

    @pytest.mark.unit
    def test_unparsable_passes(self, clock):
        assert Past(clock=clock).validate("not a date", "born_at", {})


class TestTodayOrFuture:

    @pytest.mark.unit
    def test_now_passes(self, clock):
        assert TodayOrFuture(clock=clock).validate("now", "due", {})
        assert TodayOrFuture(clock=clock).validate("2024-06-15 12:00:00", "due", {})

    @pytest.mark.unit
    def test_midnight_today_is_before_now(self, clock):
        assert not TodayOrFuture(clock=clock).validate("2024-06-15", "due", {})

    @pytest.mark.unit
    def test_future_passes(self, clock):
        assert TodayOrFuture(clock=clock).validate("2025-01-01", "due", {})

    @pytest.mark.unit
    def test_unparsable_fails(self, clock):
        assert not TodayOrFuture(clock=clock).validate("soon", "due", {})


class TestTodayOrPast:

    @pytest.mark.unit
    def test_now_and_earlier_pass(self, clock):
        rule = TodayOrPast(clock=clock)
        assert rule.validate("now", "paid_at", {})
        assert rule.validate("2024-06-15", "paid_at", {})
        assert rule.validate("yesterday", "paid_at", {})

    @pytest.mark.unit
    def test_later_fails(self, clock):
        assert not TodayOrPast(clock=clock).validate("2024-06-15 12:00:01", "paid_at", {})

    @pytest.mark.unit
    def test_real_clock(self):
        assert TodayOrPast().validate(datetime.now() - timedelta(days=1), "paid_at", {})
