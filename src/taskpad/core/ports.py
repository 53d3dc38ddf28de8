# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends and front-ends swappable and makes testing easier.
"""

from typing import Any, Awaitable, Callable, Protocol

PreferenceValue = bool | str
# Values the store must round-trip with their type intact.

ChangeListener = Callable[[], None]
# Called with no arguments after state changed (load finished, mutation applied).


class PreferenceStore(Protocol):
    """
    Durable string-keyed key-value store.

    get() returns None when the key is absent. Both calls are safe to repeat;
    set() overwrites.
    """

    def get(self, key: str) -> Awaitable[Any | None]: ...

    def set(self, key: str, value: PreferenceValue) -> Awaitable[None]: ...

    def close(self) -> None: ...
