"""Task source interface."""

from typing import Protocol

from datebook.core.aggregate import TaskBatch
from datebook.core.horizon import Horizon
from datebook.core.task_types import TaskType


class TaskSource(Protocol):
    """Interface for reading task definitions of one recurrence type."""

    def load_type(self, task_type: TaskType, horizon: Horizon) -> TaskBatch:
        """Resolve every task of ``task_type``. Bad records are skipped, not raised."""
        ...
