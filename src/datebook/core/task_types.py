"""Task type schemas - turn a parsed JSON record into dated tasks.

Pure functions - no I/O. Every builder takes the decoded record and the
horizon and returns ``(due_date, Task)`` pairs, raising RecordError or
RecurrenceError when the record cannot produce a task.
"""

import logging
from datetime import date
from enum import Enum

from . import dates
from .dates import Weekday
from .errors import InvalidDateError, RecordError
from .horizon import Horizon
from .recurrence import (
    MarkedDayRule,
    ProgressiveRule,
    ProgressStep,
    RecurringRule,
    SimpleRule,
    SnapTo,
    resolve,
)
from .tasks import Frequency, Subtask, Task, TimeOfDay, Visibility

logger = logging.getLogger(__name__)

PROGRESSIVE_LABEL = "(PR)"


class TaskType(Enum):
    """Recurrence type; the value is the source subdirectory name."""

    MARKED_DAY = "marked-day"
    PROGRESSIVE = "progressive"
    RECURRING = "recurring"
    SIMPLE = "simple"

    @property
    def dir_name(self) -> str:
        return self.value


# Load order of the source subdirectories.
LOAD_ORDER = (TaskType.MARKED_DAY, TaskType.PROGRESSIVE, TaskType.RECURRING, TaskType.SIMPLE)

DatedTasks = list[tuple[date, Task]]


def build_tasks(task_type: TaskType, record: dict, horizon: Horizon) -> DatedTasks:
    """Dispatch a decoded record to its type's builder."""
    if not isinstance(record, dict):
        raise RecordError(f"Top-level JSON value must be an object, got {type(record).__name__}")
    match task_type:
        case TaskType.MARKED_DAY:
            return build_marked_day(record, horizon)
        case TaskType.PROGRESSIVE:
            return build_progressive(record, horizon)
        case TaskType.RECURRING:
            return build_recurring(record, horizon)
        case TaskType.SIMPLE:
            return build_simple(record, horizon)
    raise ValueError(f"Unsupported task type: {task_type!r}")


# ============== Field helpers ==============


def _require(data: dict, key: str, kind: type | tuple[type, ...], where: str):
    if key not in data:
        raise RecordError(f"Missing field '{key}' in {where}")
    value = data[key]
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is int):
        raise RecordError(f"Field '{key}' in {where} has the wrong type: {value!r}")
    return value


def _optional(data: dict, key: str, kind: type | tuple[type, ...], default, where: str):
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is int):
        raise RecordError(f"Field '{key}' in {where} has the wrong type: {value!r}")
    return value


def _list_of_objects(data: dict, key: str, where: str, required: bool = True) -> list[dict]:
    items = _require(data, key, list, where) if required else _optional(data, key, list, [], where)
    for item in items:
        if not isinstance(item, dict):
            raise RecordError(f"Entries of '{key}' in {where} must be objects, got {item!r}")
    return items


# ============== Simple ==============


def build_simple(record: dict, horizon: Horizon) -> DatedTasks:
    """
    A list of one-off items with explicit due dates.

    Done items are skipped. An item with a malformed due date is reported
    and skipped without affecting the other items.
    """
    where = "simple task"
    prefix = _optional(record, "prefix", str, "", where)
    items = _list_of_objects(record, "items", where)

    tasks: DatedTasks = []
    for item in items:
        title = _require(item, "title", str, where)
        if _optional(item, "done", str, "", where):
            continue
        try:
            due = resolve(SimpleRule(dates.parse_iso_date(_require(item, "due", str, where))), horizon.today)
        except InvalidDateError as e:
            logger.error("Failed to convert due date in simple task '%s': %s", title, e)
            continue
        tasks.append(
            (
                due,
                Task(
                    title=title,
                    note=_optional(item, "note", str, "", where),
                    frequency=Frequency.labelled(prefix),
                ),
            )
        )
    return tasks


# ============== Progressive ==============


def build_progressive(record: dict, horizon: Horizon) -> DatedTasks:
    """A checklist whose first open step is always due now."""
    where = "progressive task"
    title = _require(record, "title", str, where)
    steps = []
    for item in _list_of_objects(record, "items", where):
        done = _optional(item, "done", str, "", where)
        steps.append(
            ProgressStep(
                title=_require(item, "title", str, where),
                done=dates.parse_iso_date(done) if done else None,
            )
        )
    rule = ProgressiveRule(tuple(steps))

    due = resolve(rule, horizon.today)
    return [
        (
            due,
            Task(
                title=title,
                note=rule.current_step().title,
                frequency=Frequency.labelled(PROGRESSIVE_LABEL),
            ),
        )
    ]


# ============== Recurring ==============


def build_recurring(record: dict, horizon: Horizon) -> DatedTasks:
    """A task repeating at a fixed interval after its last occurrence."""
    where = "recurring task"
    title = _require(record, "title", str, where)
    frequency = Frequency.from_dict(_require(record, "frequency", dict, where))
    pivot = _optional(record, "pivot", str, None, where)
    rule = RecurringRule(
        last=dates.parse_iso_date(_require(record, "last", str, where)),
        frequency=frequency,
        snap_to=SnapTo.parse(_optional(record, "snap_to", str, None, where)),
        pivot=Weekday.parse(pivot) if pivot else None,
        buffer_days=_optional(record, "buffer_days", int, 0, where),
    )
    due = resolve(rule, horizon.today)

    subtasks = [
        Subtask(
            title=_require(item, "title", str, where),
            is_done=bool(_optional(item, "done", str, "", where)),
            visibility=Visibility.HIDDEN if _optional(item, "hidden", bool, False, where) else Visibility.VISIBLE,
        )
        for item in _list_of_objects(record, "subtasks", where, required=False)
    ]

    visibility = Visibility.VISIBLE
    if not _optional(record, "active", bool, True, where):
        visibility = Visibility.INACTIVE
    if _optional(record, "hidden", bool, False, where):
        visibility = Visibility.HIDDEN

    task = Task(
        title=title,
        note=_optional(record, "note", str, "", where),
        visibility=visibility,
        time_of_day=TimeOfDay.parse(_optional(record, "time_of_day", str, None, where)),
        frequency=frequency,
        subtasks=subtasks,
    )
    return [(due, task)]


# ============== Marked day ==============


def build_marked_day(record: dict, horizon: Horizon) -> DatedTasks:
    """
    Yearly marked days, each with items observed once per year.

    A day yields a current-year task while any item is still unobserved
    this year, and a next-year task for the items already observed.
    """
    where = "marked day task"
    mark_title = _require(record, "mark_title", str, where)

    tasks: DatedTasks = []
    for day in _list_of_objects(record, "days", where):
        rule = MarkedDayRule(_require(day, "month", int, where), _require(day, "day", int, where))
        try:
            date_current_year = resolve(rule, horizon.today)
            date_next_year = rule.in_year(horizon.next_year)
        except InvalidDateError as e:
            logger.error("Skipping marked day in '%s': %s", mark_title, e)
            continue

        subtasks_current_year: list[Subtask] = []
        subtasks_next_year: list[Subtask] = []
        for item in _list_of_objects(day, "items", where):
            if _optional(item, "hidden", bool, False, where):
                continue
            item_title = _require(item, "title", str, where)
            origin_year = _optional(item, "year", int, None, where)
            note = _optional(item, "note", str, "", where)
            try:
                last_observed = rule.in_year(_require(item, "year_last_observed", int, where))
            except InvalidDateError as e:
                logger.error("Skipping item '%s' of '%s': %s", item_title, mark_title, e)
                continue

            is_done_for_current_year = last_observed >= date_current_year
            subtasks_current_year.append(
                Subtask(
                    title=_subtask_title(item_title, origin_year, horizon.current_year),
                    note=note,
                    is_done=is_done_for_current_year,
                )
            )
            if is_done_for_current_year:
                subtasks_next_year.append(
                    Subtask(title=_subtask_title(item_title, origin_year, horizon.next_year), note=note)
                )

        if subtasks_current_year and not all(s.is_done for s in subtasks_current_year):
            tasks.append((date_current_year, _marked_day_task(mark_title, subtasks_current_year, date_current_year, horizon)))
        if subtasks_next_year:
            tasks.append((date_next_year, _marked_day_task(mark_title, subtasks_next_year, date_next_year, horizon)))
    return tasks


def _marked_day_task(mark_title: str, subtasks: list[Subtask], due: date, horizon: Horizon) -> Task:
    return Task(title=mark_title, subtasks=subtasks, overdue_mark=due == horizon.today)


def _subtask_title(title: str, origin_year: int | None, task_year: int) -> str:
    """Append the anniversary count, e.g. ``Alice (3 years since 2021)``."""
    if origin_year is None:
        return title
    years = task_year - origin_year
    plural = "s" if years > 1 else ""
    return f"{title} ({years} year{plural} since {origin_year})"
