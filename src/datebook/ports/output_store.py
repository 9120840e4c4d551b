"""Rendered output storage interface."""

from pathlib import Path
from typing import Protocol


class OutputStore(Protocol):
    """Interface for persisting rendered task lists."""

    def write(self, name: str, lines: list[str]) -> Path:
        """Write/overwrite a named document. Returns where it was written."""
        ...
