"""Tests for calendar arithmetic."""

from datetime import date

import pytest

from datebook.core.dates import (
    Week,
    Weekday,
    add_days,
    add_interval,
    add_months,
    add_weeks,
    add_years,
    adjust_by_buffer_days,
    first_sunday_after_12_months,
    first_sunday_on_or_after,
    is_day_in_first_week_of_year,
    month_abbrev,
    next_monday,
    parse_iso_date,
    week_of_day,
    weekday_abbrev,
)
from datebook.core.errors import CalendarOverflowError, InvalidDateError, InvalidWeekdayError


class TestParseIsoDate:
    def test_parses_valid_date(self):
        assert parse_iso_date("2024-06-10") == date(2024, 6, 10)

    @pytest.mark.parametrize(
        "text",
        ["2024-6-10", "24-06-10", "2024/06/10", "2024-06-10T00:00", " 2024-06-10", "", "2024-02-30", "2023-13-01"],
    )
    def test_rejects_other_formats_and_impossible_dates(self, text):
        with pytest.raises(InvalidDateError):
            parse_iso_date(text)

    def test_rejects_non_string(self):
        with pytest.raises(InvalidDateError):
            parse_iso_date(20240610)


class TestAddInterval:
    def test_days(self):
        assert add_interval(date(2024, 6, 28), "day", 3) == date(2024, 7, 1)

    def test_weeks(self):
        assert add_interval(date(2024, 6, 3), "week", 1) == date(2024, 6, 10)

    def test_months_clamp_to_month_end(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_months_cross_year(self):
        assert add_interval(date(2024, 11, 15), "month", 3) == date(2025, 2, 15)

    def test_years_from_leap_day(self):
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)

    def test_inverse_offset_returns_original(self):
        start = date(2024, 6, 10)
        assert add_days(add_days(start, 40), -40) == start
        assert add_weeks(add_weeks(start, 5), -5) == start
        assert add_months(add_months(start, 7), -7) == start
        assert add_years(add_years(start, 2), -2) == start

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            add_interval(date(2024, 6, 10), "fortnight", 1)

    def test_overflow_is_reported(self):
        with pytest.raises(CalendarOverflowError):
            add_days(date.max, 1)
        with pytest.raises(CalendarOverflowError):
            add_months(date(9999, 12, 1), 1)
        with pytest.raises(CalendarOverflowError):
            add_months(date(2024, 1, 1), 10**10)


class TestBufferDays:
    def test_positive_moves_earlier(self):
        assert adjust_by_buffer_days(date(2024, 6, 10), 2) == date(2024, 6, 8)

    def test_negative_moves_later(self):
        assert adjust_by_buffer_days(date(2024, 6, 10), -3) == date(2024, 6, 13)

    def test_zero_is_identity(self):
        assert adjust_by_buffer_days(date(2024, 6, 10), 0) == date(2024, 6, 10)


class TestWeekBoundaries:
    def test_next_monday_from_midweek(self):
        assert next_monday(date(2024, 6, 12)) == date(2024, 6, 17)

    def test_next_monday_from_sunday(self):
        assert next_monday(date(2024, 6, 16)) == date(2024, 6, 17)

    def test_next_monday_on_monday_is_same_day(self):
        assert next_monday(date(2024, 6, 10)) == date(2024, 6, 10)

    def test_first_sunday_on_or_after(self):
        assert first_sunday_on_or_after(date(2024, 6, 16)) == date(2024, 6, 16)
        assert first_sunday_on_or_after(date(2024, 6, 17)) == date(2024, 6, 23)

    def test_first_sunday_after_12_months(self):
        # 2025-06-12 is a Thursday
        assert first_sunday_after_12_months(date(2024, 6, 12)) == date(2025, 6, 15)

    def test_week_of_day_starts_monday(self):
        week = week_of_day(date(2024, 6, 13))
        assert week.start == date(2024, 6, 10)
        assert week.end == date(2024, 6, 16)
        assert list(week.days())[-1] == date(2024, 6, 16)
        assert date(2024, 6, 16) in week
        assert date(2024, 6, 17) not in week

    def test_iso_label(self):
        assert Week(date(2024, 6, 17)).iso_label() == "2024-W25"
        assert Week(date(2024, 12, 30)).iso_label() == "2025-W01"

    def test_first_week_of_year(self):
        assert is_day_in_first_week_of_year(date(2024, 12, 30)) is True
        assert is_day_in_first_week_of_year(date(2025, 1, 6)) is False
        # 2021-01-03 belongs to 2020-W53
        assert is_day_in_first_week_of_year(date(2021, 1, 3)) is False
        assert is_day_in_first_week_of_year(date(2021, 1, 4)) is True


class TestNames:
    def test_weekday_abbrev(self):
        assert weekday_abbrev(date(2024, 6, 10)) == "Mon"
        assert weekday_abbrev(date(2024, 6, 16)) == "Sun"

    def test_month_abbrev(self):
        assert month_abbrev(6) == "Jun."
        assert month_abbrev(5) == "May"
        assert month_abbrev(12) == "Dec."

    @pytest.mark.parametrize("value", ["Fri", "fri", "FRIDAY", " Friday "])
    def test_weekday_parse(self, value):
        assert Weekday.parse(value) is Weekday.FRI

    @pytest.mark.parametrize("value", ["Fr", "Funday", "", 4])
    def test_weekday_parse_rejects(self, value):
        with pytest.raises(InvalidWeekdayError):
            Weekday.parse(value)
