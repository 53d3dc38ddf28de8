# src/taskpad/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the preference store backend,
- wires the theme preference and the task list manager into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import PreferenceStore
from ..core.state import AppState
from ..prefs.json_store import JsonFilePreferenceStore
from ..prefs.sqlite_store import SqlitePreferenceStore
from ..prefs.theme import ThemePreference
from ..tasks.task_list import TaskListManager

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.prefs_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.prefs_json_path.parent.mkdir(parents=True, exist_ok=True)


def create_store(settings) -> PreferenceStore:
    backend = str(getattr(settings, "store_backend", "sqlite")).lower()
    if backend == "json":
        return JsonFilePreferenceStore(settings.prefs_json_path)
    if backend != "sqlite":
        logger.warning("Unknown store backend %r; using sqlite.", backend)
    return SqlitePreferenceStore(settings.prefs_db_path)


def create_initial_state(*, settings=None, store: PreferenceStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the store) injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    Nothing is loaded yet: call `await state.load()` before accepting input.
    """
    if settings is None:
        settings = get_settings()

    if store is None:
        _ensure_local_dirs(settings)
        store = create_store(settings)

    return AppState(
        settings=settings,
        store=store,
        theme=ThemePreference(store),
        tasks=TaskListManager(store),
    )
