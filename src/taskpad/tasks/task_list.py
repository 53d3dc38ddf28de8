# src/taskpad/tasks/task_list.py

from __future__ import annotations

import logging
from typing import Any

from ..core.ports import PreferenceStore
from ..errors import TaskIndexError, TaskListNotLoadedError
from ..prefs.persisted import PersistedValue
from .task_codec import decode_tasks, encode_tasks
from .task_models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "task_list_v1"


class TaskListManager(PersistedValue):
    """
    Owns the ordered task list (newest first) and keeps the store in sync with it.

    Mutations are synchronous and immediately visible; each one schedules a
    fire-and-forget save of the full list. Mutations are rejected until load()
    has finished.
    """

    key = TASKS_KEY

    def __init__(self, store: PreferenceStore) -> None:
        super().__init__(store)
        self._tasks: list[Task] = []

    def _apply_loaded(self, raw: Any | None) -> None:
        if raw is not None and not isinstance(raw, str):
            logger.warning("Stored task list has type %s; starting empty.", type(raw).__name__)
            raw = None
        self._tasks = decode_tasks(raw)
        logger.info("Task list loaded: %d tasks", len(self._tasks))

    def _reset(self) -> None:
        self._tasks = []

    def _snapshot(self) -> str:
        return encode_tasks(self._tasks)

    # ---- queries ----

    @property
    def tasks(self) -> list[Task]:
        """Copy of the current list; edit through the mutation methods."""
        return [Task(t.title, t.completed) for t in self._tasks]

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, index: int) -> Task:
        self._check_index(index)
        t = self._tasks[index]
        return Task(t.title, t.completed)

    @property
    def total_count(self) -> int:
        return len(self._tasks)

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self._tasks if t.completed)

    @property
    def any_completed(self) -> bool:
        return any(t.completed for t in self._tasks)

    # ---- mutations ----

    def add(self, text: str) -> bool:
        """Insert a new open task at the front. Returns False (and saves nothing) for blank text."""
        self._require_loaded()
        task = Task.create(text)
        if task is None:
            return False
        self._tasks.insert(0, task)
        logger.debug("Task added title=%r total=%d", task.title, len(self._tasks))
        self._changed()
        return True

    def toggle_completed(self, index: int, value: bool | None) -> None:
        self._require_loaded()
        self._check_index(index)
        if value is None:
            return
        self._tasks[index].completed = bool(value)
        logger.debug("Task %d completed=%s", index, value)
        self._changed()

    def delete(self, index: int) -> Task:
        self._require_loaded()
        self._check_index(index)
        removed = self._tasks.pop(index)
        logger.debug("Task deleted index=%d title=%r", index, removed.title)
        self._changed()
        return removed

    def clear_completed(self) -> int:
        """Drop every completed task, keeping the order of the rest. Always saves."""
        self._require_loaded()
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.completed]
        removed = before - len(self._tasks)
        logger.debug("Cleared %d completed tasks", removed)
        self._changed()
        return removed

    # ---- helpers ----

    def _require_loaded(self) -> None:
        if self.loading:
            raise TaskListNotLoadedError("task list is still loading")
        self._require_loop()

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"task index must be int, got {type(index).__name__}")
        if not 0 <= index < len(self._tasks):
            raise TaskIndexError(index, len(self._tasks))

    def _changed(self) -> None:
        self._schedule_save()
        self._notify()
