"""Adapters - I/O implementations of ports."""

from .file_tasks import FileTaskSource
from .file_output import DATED_FILE_NAME, FileOutputStore

__all__ = [
    "FileTaskSource",
    "FileOutputStore",
    "DATED_FILE_NAME",
]
