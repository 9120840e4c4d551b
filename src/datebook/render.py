"""Markdown rendering of a loaded task aggregate.

Pure functions - no I/O. Every function returns a list of lines so the same
output can go to a file, the console or the terminal view.
"""

from datetime import date

from .core.aggregate import TaskAggregate
from .core.classifier import dated_year
from .core.dates import Week, month_abbrev, weekday_abbrev
from .core.tasks import Subtask, Task, Visibility

TITLE = "datebook"
TODAY = "today"
OVERDUE = "overdue"
REST_OF_THE_WEEK = "rest of the week"
LATER = "later"
INACTIVE = "inactive"
EMPTY_TODAY = "All done for today :)"

SUBTASK_INDENT = "    "


def format_day(day: date) -> str:
    """``2024-06-18 (Tue)``"""
    return f"{day.isoformat()} ({weekday_abbrev(day)})"


def format_day_short(day: date) -> str:
    """``Jun. 18. (Tue)``"""
    return f"{month_abbrev(day.month)} {day.day}. ({weekday_abbrev(day)})"


def format_week(week: Week) -> str:
    """``2024-W25 (Jun. 17-23.)`` or ``2024-W31 (Jul. 29. - Aug. 4.)`` across months."""
    start, end = week.start, week.end
    if start.month == end.month:
        span = f"{month_abbrev(start.month)} {start.day}-{end.day}."
    else:
        span = f"{month_abbrev(start.month)} {start.day}. - {month_abbrev(end.month)} {end.day}."
    return f"{week.iso_label()} ({span})"


def format_subtask(subtask: Subtask) -> str | None:
    marker = "x" if subtask.is_done else " "
    note = f" ({subtask.note})" if subtask.note else ""
    match subtask.visibility:
        case Visibility.VISIBLE:
            return f"{SUBTASK_INDENT}- [{marker}] {subtask.title}{note}"
        case Visibility.INACTIVE:
            return f"{SUBTASK_INDENT}- ~~[{marker}] {subtask.title}{note}~~"
    return None


def format_task(task: Task) -> list[str]:
    """A task line followed by its visible subtasks."""
    mark = "(!) " if task.overdue_mark else ""
    match task.visibility:
        case Visibility.VISIBLE:
            marker = "x" if task.is_done else " "
            lines = [f"- [{marker}] {task.meta_text()}{mark}{task.display_text()}"]
        case Visibility.INACTIVE:
            lines = [f"- {task.meta_text()}{task.display_text()}"]
        case _:
            return []

    for subtask in task.subtasks:
        line = format_subtask(subtask)
        if line is not None:
            lines.append(line)
    return lines


def _task_list(tasks: list[Task]) -> list[str]:
    lines: list[str] = []
    for task in tasks:
        lines.extend(format_task(task))
    return lines


def _by_day(by_date: dict[date, list[Task]], level: str = "###") -> list[str]:
    lines: list[str] = []
    for day, tasks in by_date.items():
        lines.extend(["", f"{level} {format_day(day)}", ""])
        lines.extend(_task_list(tasks))
    return lines


def _heading(text: str) -> list[str]:
    return ["", f"## {text}"]


def render_overdue(aggregate: TaskAggregate) -> list[str]:
    return _heading(OVERDUE.capitalize()) + _by_day(aggregate.sections.overdue)


def render_today(aggregate: TaskAggregate) -> list[str]:
    lines = _heading(f"{TODAY.capitalize()} - {format_day_short(aggregate.horizon.today)}")
    lines.append("")
    if not aggregate.sections.today:
        lines.append(EMPTY_TODAY)
    else:
        lines.extend(_task_list(aggregate.sections.today))
    return lines


def render_rest_of_week(aggregate: TaskAggregate) -> list[str]:
    return _heading(REST_OF_THE_WEEK.capitalize()) + _by_day(aggregate.sections.rest_of_week)


def _year_section(year: int, weeks: tuple[Week, ...], dated: dict[date, list[Task]]) -> list[str]:
    lines = ["", "---", "", f"## {year}"]
    for week in weeks:
        lines.extend(["", f"#### {format_week(week)}"])
        for day in week.days():
            if day in dated:
                lines.extend(["", f"##### {format_day(day)}", ""])
                lines.extend(_task_list(dated[day]))
    return lines


def render_later_and_other(aggregate: TaskAggregate) -> list[str]:
    """Dated weeks of the current and next year, then later and inactive tasks."""
    horizon = aggregate.horizon
    sections = aggregate.sections
    by_year: dict[int, dict[date, list[Task]]] = {horizon.current_year: {}, horizon.next_year: {}}
    for day, tasks in sections.dated.items():
        by_year[dated_year(day, horizon)][day] = tasks
    lines = _year_section(horizon.current_year, horizon.weeks_current_year, by_year[horizon.current_year])
    lines += _year_section(horizon.next_year, horizon.weeks_next_year, by_year[horizon.next_year])
    lines += ["", "---"]
    lines += _heading(LATER.capitalize()) + _by_day(sections.later)
    lines += _heading(INACTIVE.capitalize())
    if sections.inactive:
        lines.append("")
        lines.extend(_task_list(sections.inactive))
    return lines


def render_dated(aggregate: TaskAggregate) -> list[str]:
    """The complete document, as written to ``dated.md``."""
    lines = [f"# {TITLE} - {format_day(aggregate.horizon.today)}"]
    lines += render_overdue(aggregate)
    lines += render_today(aggregate)
    lines += render_rest_of_week(aggregate)
    lines += render_later_and_other(aggregate)
    return lines
