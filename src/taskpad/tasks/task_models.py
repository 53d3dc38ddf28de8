# src/taskpad/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Task:
    """
    One to-do item.

    Identity is positional: tasks live in an ordered list and are addressed by index,
    so two tasks with the same title are still distinct entries.
    """

    title: str
    completed: bool = False

    @classmethod
    def create(cls, text: str) -> Task | None:
        """
        Build a new open task from raw user input; blank input yields None.

        Characters that cannot be stored as UTF-8 (lone surrogates from undecodable
        terminal bytes) are replaced with "?".
        """
        title = (text or "").encode("utf-8", "replace").decode("utf-8").strip()
        if not title:
            return None
        return cls(title=title, completed=False)
