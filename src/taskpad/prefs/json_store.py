# src/taskpad/prefs/json_store.py

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

from ..core.ports import PreferenceValue
from ..errors import PreferenceStoreError

logger = logging.getLogger(__name__)


class JsonFilePreferenceStore:
    """
    Preferences kept in a single JSON object file.

    Writes replace the whole file atomically (tmp + os.replace). A missing or corrupt
    file reads as an empty store.
    """

    def __init__(self, path: str | Path = "prefs.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        logger.info("JsonFilePreferenceStore ready path=%s", self._path)

    def close(self) -> None:
        return

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except ValueError:
            logger.warning("Preference file %s is corrupt; treating as empty.", self._path)
            return {}
        except OSError as e:
            raise PreferenceStoreError(f"read failed path={self._path}: {e}") from e
        if not isinstance(data, dict):
            logger.warning("Preference file %s is not an object; treating as empty.", self._path)
            return {}
        return data

    def get_sync(self, key: str) -> Any | None:
        with self._lock:
            return self._read_all().get(key)

    def set_sync(self, key: str, value: PreferenceValue) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            try:
                payload = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True).encode("utf-8")
            except ValueError as e:
                raise PreferenceStoreError(f"cannot encode key={key}: {e}") from e

            tmp = self._path.with_suffix(".tmp")
            try:
                tmp.write_bytes(payload)
                os.replace(tmp, self._path)
            except OSError as e:
                raise PreferenceStoreError(f"write failed path={self._path}: {e}") from e
            finally:
                with contextlib.suppress(OSError):
                    tmp.unlink(missing_ok=True)
            with contextlib.suppress(Exception):
                # Task titles are user content; keep the file private.
                os.chmod(self._path, 0o600)

    async def get(self, key: str) -> Any | None:
        return await asyncio.to_thread(self.get_sync, key)

    async def set(self, key: str, value: PreferenceValue) -> None:
        await asyncio.to_thread(self.set_sync, key, value)
