"""File-based output adapter for rendered task lists."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DATED_FILE_NAME = "dated.md"


class FileOutputStore:
    """
    Writes rendered documents into an output directory.

    Implements OutputStore protocol.
    """

    def __init__(self, output_dir: Path | str):
        self.output_dir = Path(output_dir).expanduser()

    def _path_for(self, name: str) -> Path:
        return self.output_dir / name

    def write(self, name: str, lines: list[str]) -> Path:
        """Write/overwrite a document, one line per entry."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self._path_for(name)
        logger.info("Writing to output file '%s'", path)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path
