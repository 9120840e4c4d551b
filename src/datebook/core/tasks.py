"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from enum import Enum

from .errors import RecordError


class Visibility(Enum):
    """Whether a task is listed, parked in the inactive list, or dropped."""

    VISIBLE = "visible"
    INACTIVE = "inactive"
    HIDDEN = "hidden"


class TimeOfDay(Enum):
    """Time-of-day slot, declared in sort order."""

    MORNING = "Morning"
    MIDDAY = "Midday"
    ANY = "Any"
    EVENING = "Evening"

    @property
    def rank(self) -> int:
        return _TIME_OF_DAY_ORDER.index(self)

    @property
    def mark(self) -> str:
        """Single-letter marker shown before the title (empty for Any)."""
        return {
            TimeOfDay.MORNING: "M",
            TimeOfDay.MIDDAY: "D",
            TimeOfDay.ANY: "",
            TimeOfDay.EVENING: "E",
        }[self]

    @classmethod
    def parse(cls, value: str | None) -> "TimeOfDay":
        if value is None:
            return cls.ANY
        if not isinstance(value, str):
            raise RecordError(f"time_of_day must be a string, got {value!r}")
        for slot in cls:
            if slot.value.lower() == value.strip().lower():
                return slot
        raise RecordError(f"Unknown time_of_day: {value!r}")


_TIME_OF_DAY_ORDER = list(TimeOfDay)


class Interval(str, Enum):
    """Frequency interval kind, declared in sort order."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    OTHER = "other"
    NONE = "none"

    @property
    def rank(self) -> int:
        return _INTERVAL_ORDER.index(self)

    @property
    def is_calendar_unit(self) -> bool:
        return self in (Interval.DAY, Interval.WEEK, Interval.MONTH, Interval.YEAR)


_INTERVAL_ORDER = list(Interval)

_ADVERBS = {
    Interval.DAY: "daily",
    Interval.WEEK: "weekly",
    Interval.MONTH: "monthly",
    Interval.YEAR: "yearly",
}


@dataclass(frozen=True)
class Frequency:
    """How often a task repeats; used for display and as a sort tiebreaker."""

    interval: Interval = Interval.NONE
    number: int | None = None
    text: str = ""

    @classmethod
    def labelled(cls, text: str) -> "Frequency":
        """A free-form frequency such as a simple list's prefix."""
        if not text:
            return cls()
        return cls(interval=Interval.OTHER, text=text)

    @classmethod
    def from_dict(cls, data: dict) -> "Frequency":
        """
        Create Frequency from a recurring task's ``frequency`` object.

        Unknown interval names are kept as OTHER so that resolution, not
        parsing, reports them.
        """
        if not isinstance(data, dict):
            raise RecordError(f"frequency must be an object, got {data!r}")
        name = data.get("interval", data.get("name"))
        if not isinstance(name, str):
            raise RecordError(f"frequency interval must be a string, got {name!r}")
        number = data.get("number")
        if number is not None and (isinstance(number, bool) or not isinstance(number, int)):
            raise RecordError(f"frequency number must be an integer, got {number!r}")
        try:
            interval = Interval(name.strip().lower())
        except ValueError:
            return cls(interval=Interval.OTHER, number=number, text=name)
        return cls(interval=interval, number=number)

    def label(self) -> str:
        """Human-readable frequency, e.g. ``weekly`` or ``3-month``."""
        if self.interval.is_calendar_unit and self.number is not None:
            if self.number == 1:
                return _ADVERBS[self.interval]
            return f"{self.number}-{self.interval.value}"
        return self.text


@dataclass
class Subtask:
    """A checklist entry rendered nested under its parent task."""

    title: str
    note: str = ""
    is_done: bool = False
    visibility: Visibility = Visibility.VISIBLE


@dataclass
class Task:
    """A single classified task instance."""

    title: str
    note: str = ""
    is_done: bool = False
    visibility: Visibility = Visibility.VISIBLE
    time_of_day: TimeOfDay = TimeOfDay.ANY
    frequency: Frequency = field(default_factory=Frequency)
    subtasks: list[Subtask] = field(default_factory=list)
    overdue_mark: bool = False

    def display_text(self) -> str:
        """Title with the note in parentheses when present."""
        if not self.note:
            return self.title
        return f"{self.title} ({self.note})"

    def meta_text(self) -> str:
        """Frequency and time-of-day prefix, e.g. ``weekly - (M) ``."""
        parts = ""
        label = self.frequency.label()
        if label:
            parts = f"{label} - "
        if self.time_of_day.mark:
            parts += f"({self.time_of_day.mark}) "
        return parts


def sort_key(task: Task) -> tuple:
    """
    Ordering key inside a bucket, highest precedence first.

    Time-of-day slot, frequency interval, frequency number (missing first),
    title and note case-insensitively, and finally not-done before done.
    """
    number = task.frequency.number
    return (
        task.time_of_day.rank,
        task.frequency.interval.rank,
        (number is not None, number or 0),
        task.title.lower(),
        task.note.lower(),
        task.is_done,
    )


def sort_tasks(tasks: list[Task]) -> list[Task]:
    """
    Stable sort by sort_key.

    Pure function - no I/O.
    """
    return sorted(tasks, key=sort_key)
