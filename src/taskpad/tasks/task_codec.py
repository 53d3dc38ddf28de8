# src/taskpad/tasks/task_codec.py

"""
JSON codec for the persisted task list.

Wire shape (value of the ``task_list_v1`` key):

    [{"title": "<string>", "completed": <bool>}, ...]

Decoding is lenient per record (missing fields get defaults) but strict at the top
level: anything that is not a JSON array of objects decodes to an empty list.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)


def task_to_dict(task: Task) -> dict[str, Any]:
    return {"title": task.title, "completed": task.completed}


def task_from_dict(raw: dict[str, Any]) -> Task:
    title = raw.get("title")
    completed = raw.get("completed")
    return Task(
        title=title if isinstance(title, str) else "",
        completed=completed if isinstance(completed, bool) else False,
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks in list order. Equal inputs always give identical strings."""
    return json.dumps(
        [task_to_dict(t) for t in tasks],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def decode_tasks(raw: str | None) -> list[Task]:
    """
    Parse a stored task list.

    Never raises: None, invalid JSON, a non-array, or an array holding anything other
    than objects all yield [].
    """
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Stored task list is not valid JSON; starting empty.")
        return []

    if not isinstance(data, list):
        logger.warning("Stored task list is %s, not an array; starting empty.", type(data).__name__)
        return []

    if not all(isinstance(item, dict) for item in data):
        logger.warning("Stored task list contains non-object entries; starting empty.")
        return []

    return [task_from_dict(item) for item in data]
