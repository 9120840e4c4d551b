"""Pure calendar arithmetic - no I/O dependencies.

All functions work on naive civil dates (``datetime.date``); there is no
time zone and no time of day anywhere in the core.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from enum import IntEnum
from typing import Iterator

from dateutil.relativedelta import relativedelta

from .errors import CalendarOverflowError, InvalidDateError, InvalidWeekdayError

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_MONTHS_12 = 12

_DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class Weekday(IntEnum):
    """Day of the week, numbered like ``date.weekday()``."""

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @property
    def abbrev(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Parse ``Mon``..``Sun`` or a full weekday name, case-insensitive."""
        if not isinstance(value, str):
            raise InvalidWeekdayError(f"Weekday must be a string, got {value!r}")
        key = value.strip().lower()
        for weekday in cls:
            if key in (weekday.name.lower(), _DAY_NAMES[weekday]):
                return weekday
        raise InvalidWeekdayError(f"Unknown weekday: {value!r}")


@dataclass(frozen=True)
class Week:
    """A Monday-started calendar week."""

    start: date

    @property
    def end(self) -> date:
        return self.start + timedelta(days=6)

    def days(self) -> Iterator[date]:
        for offset in range(7):
            yield self.start + timedelta(days=offset)

    def iso_label(self) -> str:
        """ISO week label such as ``2024-W25``."""
        iso = self.start.isocalendar()
        return f"{iso[0]}-W{iso[1]:02d}"

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


def parse_iso_date(text: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` date string.

    Only the exact four-two-two digit form is accepted; anything else,
    including an impossible date such as ``2024-02-30``, raises
    InvalidDateError.
    """
    if not isinstance(text, str):
        raise InvalidDateError(f"Date must be a string, got {text!r}")
    parts = _ISO_DATE.match(text)
    if not parts:
        raise InvalidDateError(f"Date is not in YYYY-MM-DD format: {text!r}")
    year, month, day = (int(part) for part in parts.groups())
    return date_from_ymd(year, month, day)


def date_from_ymd(year: int, month: int, day: int) -> date:
    """Build a date, raising InvalidDateError for impossible combinations."""
    try:
        return date(year, month, day)
    except (TypeError, ValueError) as e:
        raise InvalidDateError(f"Invalid date {year!r}-{month!r}-{day!r}: {e}") from e


def add_days(day: date, count: int) -> date:
    try:
        return day + timedelta(days=count)
    except OverflowError as e:
        raise CalendarOverflowError(f"{day.isoformat()} + {count} days is out of range") from e


def add_weeks(day: date, count: int) -> date:
    return add_days(day, count * 7)


def add_months(day: date, count: int) -> date:
    """Add calendar months, clamping to the last day of the target month."""
    try:
        return day + relativedelta(months=count)
    except (ValueError, OverflowError) as e:
        raise CalendarOverflowError(f"{day.isoformat()} + {count} months is out of range") from e


def add_years(day: date, count: int) -> date:
    return add_months(day, count * _MONTHS_12)


def add_interval(day: date, unit: str, count: int) -> date:
    """
    Add ``count`` units of ``unit`` (day, week, month or year) to a date.

    Raises ValueError for an unknown unit and CalendarOverflowError when the
    result does not fit in the supported date range.
    """
    match unit:
        case "day":
            return add_days(day, count)
        case "week":
            return add_weeks(day, count)
        case "month":
            return add_months(day, count)
        case "year":
            return add_years(day, count)
    raise ValueError(f"Unknown interval unit: {unit!r}")


def adjust_by_buffer_days(day: date, count: int) -> date:
    """Move a date ``count`` days earlier; a negative count moves it later."""
    if count == 0:
        return day
    return add_days(day, -count)


def next_monday(day: date) -> date:
    """The date itself when it is a Monday, otherwise the following Monday."""
    return add_days(day, (7 - day.weekday()) % 7)


def first_sunday_on_or_after(day: date) -> date:
    return add_days(day, (Weekday.SUN - day.weekday()) % 7)


def first_sunday_after_12_months(day: date) -> date:
    return first_sunday_on_or_after(add_months(day, _MONTHS_12))


def week_of_day(day: date) -> Week:
    return Week(add_days(day, -day.weekday()))


def is_day_in_first_week_of_year(day: date) -> bool:
    return day.isocalendar()[1] == 1


def weekday_of(day: date) -> Weekday:
    return Weekday(day.weekday())


def weekday_abbrev(day: date) -> str:
    return weekday_of(day).abbrev


def month_abbrev(month: int) -> str:
    """Three-letter month name with a trailing dot, except for May."""
    name = _MONTH_NAMES[month - 1]
    if len(name) <= 3:
        return name
    return f"{name[:3]}."
