"""Tests for recurrence resolution."""

from datetime import date, timedelta

import pytest

from datebook.core.dates import Weekday
from datebook.core.errors import (
    InvalidDateError,
    InvalidFrequencyError,
    InvalidWeekdayError,
    ProgressComplete,
)
from datebook.core.recurrence import (
    MarkedDayRule,
    ProgressiveRule,
    ProgressStep,
    RecurringRule,
    SimpleRule,
    SnapKind,
    SnapTo,
    advance_to_weekday,
    resolve,
)
from datebook.core.tasks import Frequency, Interval


def weekly(number=1):
    return Frequency(interval=Interval.WEEK, number=number)


@pytest.fixture
def today():
    return date(2024, 6, 12)  # Wednesday


class TestSnapToParse:
    @pytest.mark.parametrize("value", [None, "", "none", "TBD", "ToBeDetermined"])
    def test_no_snap(self, value):
        assert SnapTo.parse(value).kind is SnapKind.NONE

    def test_today(self):
        assert SnapTo.parse("Today").kind is SnapKind.TODAY

    def test_weekday(self):
        snap = SnapTo.parse("Sat")
        assert snap.kind is SnapKind.WEEKDAY
        assert snap.weekday is Weekday.SAT

    def test_invalid_weekday(self):
        with pytest.raises(InvalidWeekdayError):
            SnapTo.parse("Someday")


class TestResolveRecurring:
    def test_weekly_due_today_on_monday(self):
        rule = RecurringRule(last=date(2024, 6, 3), frequency=weekly())
        assert resolve(rule, date(2024, 6, 10)) == date(2024, 6, 10)

    def test_monthly_clamps_to_month_end(self, today):
        rule = RecurringRule(last=date(2024, 1, 31), frequency=Frequency(Interval.MONTH, 1))
        assert resolve(rule, today) == date(2024, 2, 29)

    def test_yearly(self, today):
        rule = RecurringRule(last=date(2024, 3, 1), frequency=Frequency(Interval.YEAR, 2))
        assert resolve(rule, today) == date(2026, 3, 1)

    def test_past_date_without_snap_stays_past(self, today):
        rule = RecurringRule(last=date(2024, 5, 1), frequency=weekly())
        assert resolve(rule, today) == date(2024, 5, 8)

    def test_snap_today_raises_past_date(self, today):
        rule = RecurringRule(last=date(2024, 5, 1), frequency=weekly(), snap_to=SnapTo(SnapKind.TODAY))
        assert resolve(rule, today) == today

    def test_snap_today_keeps_future_date(self, today):
        rule = RecurringRule(last=date(2024, 6, 10), frequency=weekly(), snap_to=SnapTo(SnapKind.TODAY))
        assert resolve(rule, today) == date(2024, 6, 17)

    def test_snap_weekday_from_past(self, today):
        rule = RecurringRule(
            last=date(2024, 5, 1), frequency=weekly(), snap_to=SnapTo(SnapKind.WEEKDAY, Weekday.FRI)
        )
        assert resolve(rule, today) == date(2024, 6, 14)

    def test_snap_weekday_from_future(self, today):
        rule = RecurringRule(
            last=date(2024, 6, 10), frequency=weekly(), snap_to=SnapTo(SnapKind.WEEKDAY, Weekday.FRI)
        )
        assert resolve(rule, today) == date(2024, 6, 21)

    def test_snap_weekday_already_matching(self, today):
        rule = RecurringRule(
            last=date(2024, 6, 14), frequency=weekly(), snap_to=SnapTo(SnapKind.WEEKDAY, Weekday.FRI)
        )
        assert resolve(rule, today) == date(2024, 6, 21)

    @pytest.mark.parametrize("weekday", list(Weekday))
    def test_snap_weekday_lands_on_weekday_not_before_today(self, today, weekday):
        for offset in range(-20, 20, 3):
            rule = RecurringRule(
                last=today + timedelta(days=offset),
                frequency=Frequency(Interval.DAY, 1),
                snap_to=SnapTo(SnapKind.WEEKDAY, weekday),
            )
            result = resolve(rule, today)
            assert result.weekday() == weekday
            assert result >= today

    def test_pivot_moves_to_next_matching_weekday(self, today):
        # 2024-06-13 is a Thursday
        rule = RecurringRule(last=date(2024, 6, 12), frequency=Frequency(Interval.DAY, 1), pivot=Weekday.SAT)
        assert resolve(rule, today) == date(2024, 6, 15)

    def test_buffer_days_lead_time(self, today):
        rule = RecurringRule(last=date(2024, 6, 10), frequency=weekly(), buffer_days=2)
        assert resolve(rule, today) == date(2024, 6, 15)

    def test_buffer_days_lag_time(self, today):
        rule = RecurringRule(last=date(2024, 6, 10), frequency=weekly(), buffer_days=-2)
        assert resolve(rule, today) == date(2024, 6, 19)

    def test_modifiers_apply_pivot_then_buffer_then_snap(self):
        # week after 2024-06-03 -> Mon 06-10; pivot Wed -> 06-12;
        # buffer 2 -> 06-10; snap Today (today 06-11) -> 06-11
        rule = RecurringRule(
            last=date(2024, 6, 3),
            frequency=weekly(),
            snap_to=SnapTo(SnapKind.TODAY),
            pivot=Weekday.WED,
            buffer_days=2,
        )
        assert resolve(rule, date(2024, 6, 11)) == date(2024, 6, 11)

    def test_buffer_applied_before_weekday_snap(self):
        # 06-10 minus 3 days -> Fri 06-07; snap Mon from today 06-05 -> 06-10
        rule = RecurringRule(
            last=date(2024, 6, 3),
            frequency=weekly(),
            snap_to=SnapTo(SnapKind.WEEKDAY, Weekday.MON),
            buffer_days=3,
        )
        assert resolve(rule, date(2024, 6, 5)) == date(2024, 6, 10)

    def test_zero_count_is_invalid(self, today):
        rule = RecurringRule(last=date(2024, 6, 3), frequency=weekly(0))
        with pytest.raises(InvalidFrequencyError):
            resolve(rule, today)

    @pytest.mark.parametrize("number", [256, 100000, 10**10])
    def test_count_above_byte_range_is_invalid(self, today, number):
        rule = RecurringRule(last=date(2024, 6, 1), frequency=Frequency(Interval.YEAR, number))
        with pytest.raises(InvalidFrequencyError):
            resolve(rule, today)

    def test_largest_count_resolves(self, today):
        rule = RecurringRule(last=date(2024, 6, 1), frequency=Frequency(Interval.YEAR, 255))
        assert resolve(rule, today) == date(2279, 6, 1)

    def test_missing_count_is_invalid(self, today):
        rule = RecurringRule(last=date(2024, 6, 3), frequency=Frequency(Interval.WEEK, None))
        with pytest.raises(InvalidFrequencyError):
            resolve(rule, today)

    def test_unknown_interval_is_invalid(self, today):
        rule = RecurringRule(last=date(2024, 6, 3), frequency=Frequency(Interval.OTHER, 1, "fortnight"))
        with pytest.raises(InvalidFrequencyError):
            resolve(rule, today)


class TestResolveProgressive:
    def test_due_today_when_last_step_done_earlier(self, today):
        rule = ProgressiveRule(
            (ProgressStep("one", date(2024, 6, 1)), ProgressStep("two", date(2024, 6, 11)), ProgressStep("three"))
        )
        assert resolve(rule, today) == today
        assert rule.current_step().title == "three"

    def test_due_tomorrow_when_last_step_done_today(self, today):
        rule = ProgressiveRule((ProgressStep("one", date(2024, 6, 1)), ProgressStep("two", today), ProgressStep("three")))
        assert resolve(rule, today) == today + timedelta(days=1)

    def test_only_step_before_current_counts(self, today):
        rule = ProgressiveRule((ProgressStep("one", today), ProgressStep("two", date(2024, 6, 1)), ProgressStep("three")))
        assert resolve(rule, today) == today

    def test_nothing_done_yet_is_due_today(self, today):
        rule = ProgressiveRule((ProgressStep("one"), ProgressStep("two")))
        assert resolve(rule, today) == today

    def test_all_done(self, today):
        rule = ProgressiveRule((ProgressStep("one", today),))
        with pytest.raises(ProgressComplete):
            resolve(rule, today)


class TestResolveOther:
    def test_simple_rule_is_already_resolved(self, today):
        assert resolve(SimpleRule(date(2020, 1, 1)), today) == date(2020, 1, 1)

    def test_marked_day_in_current_year(self, today):
        assert resolve(MarkedDayRule(12, 25), today) == date(2024, 12, 25)

    def test_marked_day_rejects_impossible_date(self, today):
        with pytest.raises(InvalidDateError):
            resolve(MarkedDayRule(2, 30), today)

    def test_unsupported_rule(self, today):
        with pytest.raises(TypeError):
            resolve("weekly", today)


class TestAdvanceToWeekday:
    def test_same_day(self):
        assert advance_to_weekday(date(2024, 6, 10), Weekday.MON) == date(2024, 6, 10)

    def test_wraps_past_sunday(self):
        assert advance_to_weekday(date(2024, 6, 15), Weekday.TUE) == date(2024, 6, 18)
