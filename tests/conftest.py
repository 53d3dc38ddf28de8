# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.cli.bootstrap import create_initial_state
from taskpad.core.state import AppState

from .fakes import InMemoryPreferenceStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Task Manager",
        log_level="DEBUG",
        data_dir=tmp_path,
        store_backend="sqlite",
        prefs_db_path=tmp_path / "prefs.sqlite3",
        prefs_json_path=tmp_path / "prefs.json",
        confirm_delete=True,
        color_enabled=False,
    )


@pytest.fixture()
def store() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest.fixture()
def state(settings: SimpleNamespace, store: InMemoryPreferenceStore) -> AppState:
    """AppState wired with the in-memory store; not loaded yet."""
    return create_initial_state(settings=settings, store=store)
