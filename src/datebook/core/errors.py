"""Error types shared by the core and its collaborators."""


class DatebookError(Exception):
    """Base class for all datebook errors."""


class RecordError(DatebookError, ValueError):
    """A task record is missing a field or has a field of the wrong type."""


class InvalidDateError(RecordError):
    """A date string or a year/month/day triple is not a valid calendar date."""


class RecurrenceError(DatebookError, ValueError):
    """A recurrence rule cannot be resolved to a due date."""


class InvalidFrequencyError(RecurrenceError):
    """Frequency count is missing or below one, or the interval is unknown."""


class InvalidWeekdayError(RecurrenceError):
    """A snap-to or pivot value is not a recognised weekday name."""


class ProgressComplete(RecurrenceError):
    """Every step of a progressive checklist is done; nothing is due."""


class RecurrenceContractError(DatebookError, RuntimeError):
    """A weekday search did not terminate within one week."""


class CalendarOverflowError(DatebookError, OverflowError):
    """Date arithmetic left the representable date range."""


class TaskSourceError(DatebookError):
    """The todo directory itself cannot be read."""


class ConfigError(DatebookError):
    """Configuration is missing or points at an unusable location."""
