"""Ports - interfaces/protocols for external dependencies."""

from .task_source import TaskSource
from .output_store import OutputStore

__all__ = [
    "TaskSource",
    "OutputStore",
]
