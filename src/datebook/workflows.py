"""Shared workflow layer between the CLI and the terminal view.

Each function wires the file adapters to the functional core and returns
plain data; presentation is left to the caller.
"""

import logging
from datetime import date
from pathlib import Path

from .adapters.file_output import DATED_FILE_NAME, FileOutputStore
from .adapters.file_tasks import FileTaskSource
from .config import Config
from .core.aggregate import TaskAggregate
from .core.errors import ConfigError
from .core.task_types import LOAD_ORDER
from .ports.output_store import OutputStore
from .ports.task_source import TaskSource
from .render import render_dated

logger = logging.getLogger(__name__)


def get_task_source(config: Config) -> FileTaskSource:
    """Resolve the todo directory from config."""
    if config.todo_path is None:
        raise ConfigError("No todo directory configured")
    source = FileTaskSource(config.todo_path)
    source.check()
    return source


def get_output_store(config: Config) -> FileOutputStore:
    return FileOutputStore(config.output_path)


def load_aggregate(source: TaskSource, today: date | None = None) -> TaskAggregate:
    """
    Build the aggregate for one run.

    Each type's subdirectory is resolved into its own batch and merged (and
    sorted) before the next type is read. The returned aggregate is sealed.
    """
    today = today or date.today()
    aggregate = TaskAggregate.new(today)
    logger.debug(
        "Horizon for %s: full weeks from %s, dated until %s",
        today,
        aggregate.horizon.first_full_week_start,
        aggregate.horizon.horizon_end,
    )
    for task_type in LOAD_ORDER:
        batch = source.load_type(task_type, aggregate.horizon)
        aggregate.merge(batch)
    aggregate.seal()
    logger.info("Loaded %d task(s)", aggregate.sections.count())
    return aggregate


def write_dated(aggregate: TaskAggregate, store: OutputStore) -> Path:
    """Render the full dated list and save it as ``dated.md``."""
    if not aggregate.is_sealed:
        raise RuntimeError("Only a sealed aggregate can be written")
    return store.write(DATED_FILE_NAME, render_dated(aggregate))
