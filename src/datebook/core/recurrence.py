"""Recurrence resolution - turns a rule into one concrete due date.

Pure functions - no I/O. Resolution errors are RecurrenceError subclasses
and are meant to be reported by the caller, never to abort a run.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from . import dates
from .dates import Weekday
from .errors import (
    InvalidFrequencyError,
    InvalidWeekdayError,
    ProgressComplete,
    RecurrenceContractError,
)
from .tasks import Frequency

_WEEKDAY_SEARCH_LIMIT = 7

# Frequency counts are stored as a single byte in task files.
MAX_FREQUENCY_NUMBER = 255


class SnapKind(Enum):
    NONE = "none"
    TODAY = "today"
    WEEKDAY = "weekday"


@dataclass(frozen=True)
class SnapTo:
    """Post-processing that pulls a past date forward."""

    kind: SnapKind = SnapKind.NONE
    weekday: Weekday | None = None

    @classmethod
    def parse(cls, value: str | None) -> "SnapTo":
        """
        Parse a ``snap_to`` value.

        Accepts ``ToBeDetermined``/``TBD``/``none``/empty (no snapping),
        ``Today`` and weekday names.
        """
        if value is None:
            return cls()
        if not isinstance(value, str):
            raise InvalidWeekdayError(f"snap_to must be a string, got {value!r}")
        key = value.strip().lower()
        if key in ("", "none", "tbd", "tobedetermined"):
            return cls()
        if key == "today":
            return cls(SnapKind.TODAY)
        return cls(SnapKind.WEEKDAY, Weekday.parse(value))


@dataclass(frozen=True)
class SimpleRule:
    """An explicit, already resolved due date."""

    due: date


@dataclass(frozen=True)
class ProgressStep:
    title: str
    done: date | None = None


@dataclass(frozen=True)
class ProgressiveRule:
    """A checklist worked through one step at a time."""

    steps: tuple[ProgressStep, ...] = ()

    def current_step(self) -> ProgressStep | None:
        """First step without a completion date, or None when all are done."""
        for step in self.steps:
            if step.done is None:
                return step
        return None


@dataclass(frozen=True)
class RecurringRule:
    """Repeat ``frequency`` after ``last``, with optional modifiers."""

    last: date
    frequency: Frequency
    snap_to: SnapTo = field(default_factory=SnapTo)
    pivot: Weekday | None = None
    buffer_days: int = 0


@dataclass(frozen=True)
class MarkedDayRule:
    """A fixed month and day, observed every calendar year."""

    month: int
    day: int

    def in_year(self, year: int) -> date:
        return dates.date_from_ymd(year, self.month, self.day)


Rule = SimpleRule | ProgressiveRule | RecurringRule | MarkedDayRule


def resolve(rule: Rule, today: date) -> date:
    """
    Compute the due date of the next instance of ``rule``.

    Marked-day rules resolve to this year's occurrence; callers that need
    the next year's occurrence use ``MarkedDayRule.in_year`` directly.
    """
    match rule:
        case SimpleRule(due=due):
            return due
        case ProgressiveRule():
            return resolve_progressive(rule, today)
        case RecurringRule():
            return resolve_recurring(rule, today)
        case MarkedDayRule():
            return rule.in_year(today.year)
    raise TypeError(f"Unsupported recurrence rule: {rule!r}")


def resolve_progressive(rule: ProgressiveRule, today: date) -> date:
    """
    Due today, or tomorrow when the step before the current one was
    completed today.
    """
    last_done: date | None = None
    for step in rule.steps:
        if step.done is None:
            break
        last_done = step.done
    else:
        raise ProgressComplete("All progressive steps are done")

    if last_done == today:
        return dates.add_days(today, 1)
    return today


def resolve_recurring(rule: RecurringRule, today: date) -> date:
    """Apply interval, then pivot, buffer days and snap-to, in that order."""
    frequency = rule.frequency
    if frequency.number is None:
        raise InvalidFrequencyError("Missing frequency number")
    if not 1 <= frequency.number <= MAX_FREQUENCY_NUMBER:
        raise InvalidFrequencyError(
            f"Frequency number must be between 1 and {MAX_FREQUENCY_NUMBER}, got {frequency.number}"
        )
    if not frequency.interval.is_calendar_unit:
        raise InvalidFrequencyError(f"Unable to parse task frequency: {frequency.text or frequency.interval.value!r}")

    task_date = dates.add_interval(rule.last, frequency.interval.value, frequency.number)

    if rule.pivot is not None:
        task_date = advance_to_weekday(task_date, rule.pivot)

    if rule.buffer_days:
        task_date = dates.adjust_by_buffer_days(task_date, rule.buffer_days)

    return apply_snap(task_date, rule.snap_to, today)


def apply_snap(task_date: date, snap_to: SnapTo, today: date) -> date:
    match snap_to.kind:
        case SnapKind.NONE:
            return task_date
        case SnapKind.TODAY:
            return max(task_date, today)
        case SnapKind.WEEKDAY:
            return advance_to_weekday(max(task_date, today), snap_to.weekday)
    raise TypeError(f"Unsupported snap kind: {snap_to.kind!r}")


def advance_to_weekday(start: date, weekday: Weekday) -> date:
    """Smallest date on or after ``start`` that falls on ``weekday``."""
    task_date = start
    for _ in range(_WEEKDAY_SEARCH_LIMIT):
        if task_date.weekday() == weekday:
            return task_date
        task_date = dates.add_days(task_date, 1)
    raise RecurrenceContractError(f"No {weekday.abbrev} within a week of {start.isoformat()}")
