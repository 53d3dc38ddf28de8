# src/taskpad/errors.py

"""Exception hierarchy shared by the core, the stores and the front-end."""

from __future__ import annotations


class TaskpadError(Exception):
    """Base class for all taskpad errors."""


class TaskListNotLoadedError(TaskpadError):
    """A mutation was attempted before the initial load finished."""


class TaskIndexError(TaskpadError, IndexError):
    """Index does not address an existing task."""

    def __init__(self, index: int, size: int) -> None:
        bounds = f"0..{size - 1}" if size else "list is empty"
        super().__init__(f"task index {index} out of range ({bounds})")
        self.index = index
        self.size = size


class PreferenceStoreError(TaskpadError):
    """Backend failed to read or write a preference."""
