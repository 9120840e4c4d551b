"""Temporal bucketing - pure, total, no I/O."""

from datetime import date
from enum import Enum

from .horizon import Horizon
from .tasks import Visibility


class Bucket(Enum):
    """Mutually exclusive destination of a task."""

    OVERDUE = "overdue"
    TODAY = "today"
    REST_OF_WEEK = "rest_of_week"
    DATED = "dated"
    LATER = "later"
    INACTIVE = "inactive"
    DROPPED = "dropped"


def classify(due: date, visibility: Visibility, horizon: Horizon) -> Bucket:
    """
    Assign a due date to exactly one bucket.

    Hidden tasks are dropped and inactive tasks bypass date bucketing.
    """
    match visibility:
        case Visibility.HIDDEN:
            return Bucket.DROPPED
        case Visibility.INACTIVE:
            return Bucket.INACTIVE

    if due < horizon.today:
        return Bucket.OVERDUE
    if due == horizon.today:
        return Bucket.TODAY
    if due < horizon.first_full_week_start:
        return Bucket.REST_OF_WEEK
    if due > horizon.horizon_end:
        return Bucket.LATER
    return Bucket.DATED


def dated_year(due: date, horizon: Horizon) -> int:
    """Display year of a DATED date: the week partition it falls into."""
    if any(due in week for week in horizon.weeks_next_year):
        return horizon.next_year
    return horizon.current_year
