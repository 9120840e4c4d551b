"""Task aggregate - the horizon plus every bucket's task collection."""

import logging
from dataclasses import dataclass, field
from datetime import date

from .classifier import Bucket, classify
from .horizon import Horizon
from .tasks import Task, sort_tasks

logger = logging.getLogger(__name__)


@dataclass
class TaskSections:
    """Bucket collections; date-keyed maps iterate in date order once sorted."""

    overdue: dict[date, list[Task]] = field(default_factory=dict)
    today: list[Task] = field(default_factory=list)
    rest_of_week: dict[date, list[Task]] = field(default_factory=dict)
    dated: dict[date, list[Task]] = field(default_factory=dict)
    later: dict[date, list[Task]] = field(default_factory=dict)
    inactive: list[Task] = field(default_factory=list)

    def add(self, bucket: Bucket, due: date, task: Task) -> None:
        match bucket:
            case Bucket.OVERDUE:
                self.overdue.setdefault(due, []).append(task)
            case Bucket.TODAY:
                self.today.append(task)
            case Bucket.REST_OF_WEEK:
                self.rest_of_week.setdefault(due, []).append(task)
            case Bucket.DATED:
                self.dated.setdefault(due, []).append(task)
            case Bucket.LATER:
                self.later.setdefault(due, []).append(task)
            case Bucket.INACTIVE:
                self.inactive.append(task)
            case Bucket.DROPPED:
                pass

    def sort_task_lists(self) -> None:
        """Sort every bucket's tasks and put date-keyed maps in date order."""
        for name in ("overdue", "rest_of_week", "dated", "later"):
            by_date: dict[date, list[Task]] = getattr(self, name)
            setattr(self, name, {day: sort_tasks(by_date[day]) for day in sorted(by_date)})
        self.today = sort_tasks(self.today)
        self.inactive = sort_tasks(self.inactive)

    def count(self) -> int:
        dated_maps = (self.overdue, self.rest_of_week, self.dated, self.later)
        return len(self.today) + len(self.inactive) + sum(len(t) for m in dated_maps for t in m.values())


@dataclass
class TaskBatch:
    """
    Tasks resolved from one source subdirectory, not yet classified.

    Loaders fill a batch locally; the aggregate merges it as a whole.
    """

    source: str = ""
    entries: list[tuple[date, Task]] = field(default_factory=list)

    def add(self, due: date, task: Task) -> None:
        self.entries.append((due, task))

    def extend(self, entries: list[tuple[date, Task]]) -> None:
        self.entries.extend(entries)

    def __len__(self) -> int:
        return len(self.entries)


class TaskAggregate:
    """
    Owns the horizon and the bucket collections for one run.

    Build with ``new``, feed batches through ``merge`` (or single tasks
    through ``add_task``), then ``seal`` before handing it to a renderer.
    """

    def __init__(self, horizon: Horizon):
        self.horizon = horizon
        self.sections = TaskSections()
        self._sealed = False

    @classmethod
    def new(cls, today: date) -> "TaskAggregate":
        return cls(Horizon.compute(today))

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def add_task(self, due: date, task: Task) -> Bucket:
        """Classify a task and store it in its bucket. Returns the bucket."""
        if self._sealed:
            raise RuntimeError("Cannot add tasks to a sealed aggregate")
        bucket = classify(due, task.visibility, self.horizon)
        self.sections.add(bucket, due, task)
        logger.debug("Task '%s' due %s -> %s", task.title, due.isoformat(), bucket.value)
        return bucket

    def merge(self, batch: TaskBatch) -> None:
        """Classify a finished batch, then re-sort every bucket."""
        for due, task in batch.entries:
            self.add_task(due, task)
        self.sections.sort_task_lists()
        logger.info("Merged %d task(s) from '%s'", len(batch), batch.source)

    def seal(self) -> "TaskAggregate":
        self.sections.sort_task_lists()
        self._sealed = True
        return self
