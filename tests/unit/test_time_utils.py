"""Unit tests for set-time parsing and day-label helpers."""

from __future__ import annotations

import datetime

import pytest

from stageside.utils.time_utils import (
    MINUTES_PER_DAY,
    format_minutes,
    order_day_labels,
    parse_time_to_minutes,
    resolve_day_date,
    weekday_labels,
)

# 2026-07-24 is a Friday.
FESTIVAL_START = datetime.date(2026, 7, 24)


class TestParseTimeToMinutes:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("20:00", 1200),
            ("9:05", 545),
            (" 07:30 ", 450),
            ("00:00", 0),
            ("24:00", MINUTES_PER_DAY),
        ],
    )
    def test_valid(self, value: str, expected: int) -> None:
        assert parse_time_to_minutes(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "12:60", "24:30", "25:00", "2000", "8pm"])
    def test_invalid_returns_none(self, value: str | None) -> None:
        assert parse_time_to_minutes(value) is None


class TestFormatMinutes:
    def test_pads(self) -> None:
        assert format_minutes(570) == "09:30"

    def test_inverse_of_parse(self) -> None:
        assert parse_time_to_minutes(format_minutes(1335)) == 1335


class TestResolveDayDate:
    def test_iso_date_without_festival_start(self) -> None:
        assert resolve_day_date("2026-07-25", None) == datetime.date(2026, 7, 25)

    def test_weekday_name_on_or_after_start(self) -> None:
        assert resolve_day_date("Saturday", FESTIVAL_START) == datetime.date(2026, 7, 25)
        assert resolve_day_date("Friday", FESTIVAL_START) == FESTIVAL_START
        assert resolve_day_date("Thursday", FESTIVAL_START) == datetime.date(2026, 7, 30)

    def test_weekday_abbreviation(self) -> None:
        assert resolve_day_date("Sun", FESTIVAL_START) == datetime.date(2026, 7, 26)

    def test_day_n(self) -> None:
        assert resolve_day_date("Day 1", FESTIVAL_START) == FESTIVAL_START
        assert resolve_day_date("day 3", FESTIVAL_START) == datetime.date(2026, 7, 26)

    def test_day_zero_unresolvable(self) -> None:
        assert resolve_day_date("Day 0", FESTIVAL_START) is None

    def test_relative_labels_need_a_start(self) -> None:
        assert resolve_day_date("Saturday", None) is None

    def test_unknown_label(self) -> None:
        assert resolve_day_date("Main weekend", FESTIVAL_START) is None
        assert resolve_day_date(None, FESTIVAL_START) is None


class TestOrderDayLabels:
    def test_sorted_by_date(self) -> None:
        assert order_day_labels(["Sunday", "Friday", "Saturday"], FESTIVAL_START) == [
            "Friday",
            "Saturday",
            "Sunday",
        ]

    def test_explicit_order_first(self) -> None:
        assert order_day_labels(["Saturday", "Friday"], None, ["Friday"]) == ["Friday", "Saturday"]

    def test_unresolvable_keep_first_appearance(self) -> None:
        assert order_day_labels(["Late", "Early", "Late"]) == ["Late", "Early"]

    def test_dated_before_undated(self) -> None:
        assert order_day_labels(["Afterparty", "Saturday"], FESTIVAL_START) == ["Saturday", "Afterparty"]

    def test_explicit_labels_absent_from_input_ignored(self) -> None:
        assert order_day_labels(["Saturday"], None, ["Friday"]) == ["Saturday"]


class TestWeekdayLabels:
    def test_inclusive_range(self) -> None:
        assert weekday_labels(FESTIVAL_START, datetime.date(2026, 7, 26)) == [
            "Friday",
            "Saturday",
            "Sunday",
        ]

    def test_end_before_start(self) -> None:
        assert weekday_labels(FESTIVAL_START, datetime.date(2026, 7, 23)) == []
