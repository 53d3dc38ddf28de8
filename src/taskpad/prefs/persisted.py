# src/taskpad/prefs/persisted.py

"""
Shared "load before render, save on mutate" discipline.

A PersistedValue owns one key in the preference store:
- load() reads it once at startup and flips `loading` off (even on failure),
- every mutation calls _schedule_save(), which snapshots the value right away and
  writes it from a background asyncio task,
- writes go through a FIFO lock so the store always ends up with the newest snapshot,
- flush() awaits everything still in flight (shutdown, tests).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

from ..core.ports import ChangeListener, PreferenceStore, PreferenceValue

logger = logging.getLogger(__name__)


class PersistedValue:
    key: str = ""

    def __init__(self, store: PreferenceStore) -> None:
        self._store = store
        self._listeners: list[ChangeListener] = []
        self._pending: set[asyncio.Task[None]] = set()
        self._write_lock = asyncio.Lock()
        self.loading = True

    # ---- subclass hooks ----

    def _apply_loaded(self, raw: Any | None) -> None:
        raise NotImplementedError

    def _reset(self) -> None:
        raise NotImplementedError

    def _snapshot(self) -> PreferenceValue:
        raise NotImplementedError

    # ---- observers ----

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        with contextlib.suppress(ValueError):
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Change listener failed key=%s", self.key)

    # ---- load / save ----

    async def load(self) -> None:
        try:
            raw = await self._store.get(self.key)
        except Exception:
            logger.exception("Failed to read key=%s; using defaults.", self.key)
            raw = None

        try:
            self._apply_loaded(raw)
        except Exception:
            logger.exception("Failed to apply stored value key=%s; using defaults.", self.key)
            self._reset()

        self.loading = False
        logger.debug("Loaded key=%s", self.key)
        self._notify()

    @staticmethod
    def _require_loop() -> asyncio.AbstractEventLoop:
        """Mutators call this before touching state: saves need a running loop."""
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            raise RuntimeError("mutations must run inside the asyncio event loop") from None

    def _schedule_save(self) -> None:
        loop = self._require_loop()
        payload = self._snapshot()
        task = loop.create_task(self._write(payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, payload: PreferenceValue) -> None:
        async with self._write_lock:
            try:
                await self._store.set(self.key, payload)
            except Exception:
                logger.exception("Failed to save key=%s", self.key)
                return
        logger.debug("Saved key=%s", self.key)

    async def save(self) -> None:
        """Persist the current value and wait for it (and anything queued before it)."""
        self._schedule_save()
        await self.flush()

    async def flush(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending))

    @property
    def pending_saves(self) -> int:
        return len(self._pending)
