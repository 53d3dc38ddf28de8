# src/taskpad/prefs/theme.py

from __future__ import annotations

import logging
from typing import Any

from ..core.ports import PreferenceStore
from .persisted import PersistedValue

logger = logging.getLogger(__name__)

THEME_KEY = "is_dark_theme_v1"


class ThemePreference(PersistedValue):
    """Dark/light flag. Absent or non-bool stored values mean light."""

    key = THEME_KEY

    def __init__(self, store: PreferenceStore) -> None:
        super().__init__(store)
        self.is_dark = False

    def _apply_loaded(self, raw: Any | None) -> None:
        self.is_dark = raw if isinstance(raw, bool) else False

    def _reset(self) -> None:
        self.is_dark = False

    def _snapshot(self) -> bool:
        return self.is_dark

    @property
    def name(self) -> str:
        return "dark" if self.is_dark else "light"

    def set_dark(self, is_dark: bool) -> None:
        self._require_loop()
        self.is_dark = bool(is_dark)
        logger.debug("Theme set to %s", self.name)
        self._schedule_save()
        self._notify()

    def toggle(self) -> bool:
        self.set_dark(not self.is_dark)
        return self.is_dark
