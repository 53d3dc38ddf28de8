# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..prefs.theme import ThemePreference
from ..tasks.task_list import TaskListManager
from .ports import PreferenceStore


@dataclass
class AppState:
    # Settings object (taskpad.config.Settings or a test stand-in).
    settings: Any

    store: PreferenceStore
    theme: ThemePreference
    tasks: TaskListManager

    @property
    def loaded(self) -> bool:
        return not (self.theme.loading or self.tasks.loading)

    async def load(self) -> None:
        """Initial load. Theme first, so the first frame is drawn in the right palette."""
        await self.theme.load()
        await self.tasks.load()

    async def flush(self) -> None:
        await self.theme.flush()
        await self.tasks.flush()
