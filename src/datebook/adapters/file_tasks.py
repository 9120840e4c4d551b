"""File-based task source adapter."""

import json
import logging
from pathlib import Path

from datebook.core.aggregate import TaskBatch
from datebook.core.errors import ProgressComplete, RecordError, RecurrenceError, TaskSourceError
from datebook.core.horizon import Horizon
from datebook.core.task_types import TaskType, build_tasks

logger = logging.getLogger(__name__)


class FileTaskSource:
    """
    Reads JSON task definitions from a todo directory.

    Implements TaskSource protocol. Each recurrence type lives in its own
    subdirectory (``recurring/``, ``simple/`` ...), one JSON file per record.
    """

    def __init__(self, todo_dir: Path | str):
        self.todo_dir = Path(todo_dir).expanduser()

    def check(self) -> None:
        """Raise TaskSourceError if the todo directory cannot be listed."""
        if not self.todo_dir.is_dir():
            raise TaskSourceError(f"Todo directory '{self.todo_dir}' does not exist or is not a directory")
        try:
            next(self.todo_dir.iterdir(), None)
        except OSError as e:
            raise TaskSourceError(f"Cannot list todo directory '{self.todo_dir}': {e}") from e

    def _subdir(self, task_type: TaskType) -> Path:
        return self.todo_dir / task_type.dir_name

    def list_files(self, task_type: TaskType) -> list[Path]:
        """Files of one type in name order; missing subdirectories yield nothing."""
        subdir = self._subdir(task_type)
        if not subdir.exists():
            logger.warning("Todo subdir '%s' not found, skipping.", subdir)
            return []
        if not subdir.is_dir():
            logger.warning("Todo subdir '%s' is not a directory, skipping.", subdir)
            return []
        logger.info("Found todo subdir '%s'", subdir)

        try:
            entries = sorted(subdir.iterdir())
        except OSError as e:
            raise TaskSourceError(f"Cannot list todo subdir '{subdir}': {e}") from e

        files = []
        for entry in entries:
            if entry.is_dir():
                logger.warning("Dir inside todo subdir: '%s'", entry)
                continue
            files.append(entry)
        return files

    def load_type(self, task_type: TaskType, horizon: Horizon) -> TaskBatch:
        """Resolve every file of one type into a batch."""
        batch = TaskBatch(source=task_type.dir_name)
        for path in self.list_files(task_type):
            batch.extend(self.load_file(task_type, path, horizon))
        return batch

    def load_file(self, task_type: TaskType, path: Path, horizon: Horizon) -> list:
        """Parse and resolve a single file. Returns [] when the record is skipped."""
        try:
            record = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            logger.error("Couldn't open todo file '%s': %s", path, e)
            return []
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Couldn't parse todo file '%s': %s", path, e)
            return []

        try:
            return build_tasks(task_type, record, horizon)
        except ProgressComplete:
            logger.debug("All steps done in '%s', nothing due", path)
        except RecurrenceError as e:
            logger.error("Invalid recurrence in '%s': %s", path, e)
        except RecordError as e:
            logger.error("Invalid %s record in '%s': %s", task_type.dir_name, path, e)
        return []
