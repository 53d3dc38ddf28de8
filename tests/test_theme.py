# tests/test_theme.py

from __future__ import annotations

import pytest

from taskpad.prefs.theme import THEME_KEY, ThemePreference

from .fakes import FailingPreferenceStore, InMemoryPreferenceStore


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("stored", "expected"),
    [({}, False), ({THEME_KEY: True}, True), ({THEME_KEY: False}, False), ({THEME_KEY: "true"}, False)],
)
async def test_load_defaults_to_light(stored, expected) -> None:
    theme = ThemePreference(InMemoryPreferenceStore(stored))
    assert theme.loading is True
    await theme.load()
    assert theme.loading is False
    assert theme.is_dark is expected


@pytest.mark.asyncio
async def test_toggle_persists_bool() -> None:
    store = InMemoryPreferenceStore()
    theme = ThemePreference(store)
    await theme.load()

    assert theme.toggle() is True
    await theme.flush()
    assert store.data[THEME_KEY] is True

    theme.set_dark(False)
    await theme.flush()
    assert store.data[THEME_KEY] is False
    assert theme.name == "light"


@pytest.mark.asyncio
async def test_theme_and_tasks_use_independent_keys() -> None:
    from taskpad.tasks.task_list import TASKS_KEY, TaskListManager

    store = InMemoryPreferenceStore()
    theme = ThemePreference(store)
    tasks = TaskListManager(store)
    await theme.load()
    await tasks.load()

    theme.set_dark(True)
    await theme.flush()
    assert TASKS_KEY not in store.data

    tasks.add("x")
    await tasks.flush()
    assert store.data[THEME_KEY] is True


@pytest.mark.asyncio
async def test_read_failure_falls_back_to_light() -> None:
    theme = ThemePreference(FailingPreferenceStore({THEME_KEY: True}, fail_get=True))
    await theme.load()
    assert theme.is_dark is False
    assert theme.loading is False


@pytest.mark.asyncio
async def test_listener_errors_do_not_break_mutation() -> None:
    store = InMemoryPreferenceStore()
    theme = ThemePreference(store)
    await theme.load()

    def boom() -> None:
        raise RuntimeError("listener bug")

    seen: list[str] = []
    theme.subscribe(boom)
    theme.subscribe(lambda: seen.append(theme.name))
    theme.set_dark(True)
    await theme.flush()

    assert seen == ["dark"]
    assert store.data[THEME_KEY] is True

    theme.unsubscribe(boom)
    theme.unsubscribe(boom)


def test_set_dark_outside_event_loop_leaves_flag_untouched() -> None:
    import asyncio

    theme = ThemePreference(InMemoryPreferenceStore())
    asyncio.run(theme.load())
    with pytest.raises(RuntimeError):
        theme.set_dark(True)
    assert theme.is_dark is False
