"""Functional core - pure business logic with no I/O."""

from .aggregate import TaskAggregate, TaskBatch, TaskSections
from .classifier import Bucket, classify
from .horizon import Horizon
from .recurrence import resolve
from .task_types import LOAD_ORDER, TaskType, build_tasks
from .tasks import Frequency, Interval, Subtask, Task, TimeOfDay, Visibility, sort_tasks

__all__ = [
    # Tasks
    "Task",
    "Subtask",
    "Frequency",
    "Interval",
    "TimeOfDay",
    "Visibility",
    "sort_tasks",
    # Dates and recurrence
    "Horizon",
    "resolve",
    # Classification
    "Bucket",
    "classify",
    "TaskAggregate",
    "TaskBatch",
    "TaskSections",
    # Task types
    "TaskType",
    "LOAD_ORDER",
    "build_tasks",
]
