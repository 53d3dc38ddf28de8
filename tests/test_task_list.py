# tests/test_task_list.py

from __future__ import annotations

import asyncio
import json

import pytest

from taskpad.errors import TaskIndexError, TaskListNotLoadedError
from taskpad.tasks.task_codec import encode_tasks
from taskpad.tasks.task_list import TASKS_KEY, TaskListManager
from taskpad.tasks.task_models import Task

from .fakes import FailingPreferenceStore, InMemoryPreferenceStore


async def _loaded(tasks: list[Task] | None = None, **kw) -> tuple[TaskListManager, InMemoryPreferenceStore]:
    initial = {TASKS_KEY: encode_tasks(tasks)} if tasks is not None else {}
    store = InMemoryPreferenceStore(initial, **kw)
    manager = TaskListManager(store)
    await manager.load()
    return manager, store


def _stored(store: InMemoryPreferenceStore) -> list[dict]:
    return json.loads(store.data[TASKS_KEY])


@pytest.mark.asyncio
async def test_load_absent_key_gives_empty_list() -> None:
    manager, store = await _loaded()
    assert manager.loading is False
    assert manager.tasks == []
    assert store.writes == []


@pytest.mark.asyncio
async def test_load_restores_persisted_order() -> None:
    manager, _ = await _loaded([Task("b", True), Task("a", False)])
    assert manager.tasks == [Task("b", True), Task("a", False)]


@pytest.mark.asyncio
async def test_load_recovers_from_corrupt_data() -> None:
    store = InMemoryPreferenceStore({TASKS_KEY: "{definitely not a list"})
    manager = TaskListManager(store)
    await manager.load()
    assert manager.loading is False
    assert manager.tasks == []


@pytest.mark.asyncio
async def test_load_recovers_from_non_string_value() -> None:
    store = InMemoryPreferenceStore({TASKS_KEY: True})
    manager = TaskListManager(store)
    await manager.load()
    assert manager.tasks == []


@pytest.mark.asyncio
async def test_load_recovers_from_store_read_failure() -> None:
    store = FailingPreferenceStore({TASKS_KEY: encode_tasks([Task("x")])}, fail_get=True)
    manager = TaskListManager(store)
    await manager.load()
    assert manager.loading is False
    assert manager.tasks == []


@pytest.mark.asyncio
async def test_load_notifies_listeners() -> None:
    store = InMemoryPreferenceStore()
    manager = TaskListManager(store)
    calls: list[bool] = []
    manager.subscribe(lambda: calls.append(manager.loading))
    await manager.load()
    assert calls == [False]


@pytest.mark.asyncio
async def test_mutations_rejected_before_load() -> None:
    manager = TaskListManager(InMemoryPreferenceStore())
    with pytest.raises(TaskListNotLoadedError):
        manager.add("early")
    with pytest.raises(TaskListNotLoadedError):
        manager.clear_completed()


@pytest.mark.asyncio
async def test_add_trims_inserts_front_and_saves() -> None:
    manager, store = await _loaded()
    assert manager.add("  buy milk  ") is True
    await manager.flush()
    assert manager.tasks == [Task("buy milk", False)]
    assert _stored(store) == [{"title": "buy milk", "completed": False}]


@pytest.mark.asyncio
async def test_add_blank_is_noop_without_save() -> None:
    manager, store = await _loaded()
    assert manager.add("   ") is False
    await manager.flush()
    assert manager.tasks == []
    assert store.writes == []


@pytest.mark.asyncio
async def test_add_orders_newest_first() -> None:
    manager, store = await _loaded()
    manager.add("a")
    manager.add("b")
    await manager.flush()
    assert [t.title for t in manager.tasks] == ["b", "a"]
    assert [r["title"] for r in _stored(store)] == ["b", "a"]


@pytest.mark.asyncio
async def test_toggle_sets_value_and_none_is_noop() -> None:
    manager, store = await _loaded([Task("t1", False)])
    manager.toggle_completed(0, True)
    await manager.flush()
    assert manager.tasks == [Task("t1", True)]
    assert _stored(store) == [{"title": "t1", "completed": True}]

    writes = len(store.writes)
    manager.toggle_completed(0, None)
    await manager.flush()
    assert manager.tasks == [Task("t1", True)]
    assert len(store.writes) == writes


@pytest.mark.asyncio
async def test_delete_removes_and_shifts() -> None:
    manager, store = await _loaded([Task("a"), Task("b"), Task("c")])
    removed = manager.delete(1)
    await manager.flush()
    assert removed == Task("b")
    assert [t.title for t in manager.tasks] == ["a", "c"]
    assert [r["title"] for r in _stored(store)] == ["a", "c"]


@pytest.mark.asyncio
@pytest.mark.parametrize("index", [-1, 3, 100])
async def test_invalid_index_fails_fast(index: int) -> None:
    manager, store = await _loaded([Task("a"), Task("b"), Task("c")])
    with pytest.raises(TaskIndexError):
        manager.delete(index)
    with pytest.raises(IndexError):
        manager.toggle_completed(index, True)
    await manager.flush()
    assert [t.title for t in manager.tasks] == ["a", "b", "c"]
    assert store.writes == []


@pytest.mark.asyncio
async def test_clear_completed_keeps_open_tasks_in_order() -> None:
    manager, store = await _loaded([Task("a", True), Task("b", False), Task("c", True), Task("d", False)])
    assert manager.clear_completed() == 2
    await manager.flush()
    assert manager.tasks == [Task("b", False), Task("d", False)]
    assert [r["title"] for r in _stored(store)] == ["b", "d"]


@pytest.mark.asyncio
async def test_clear_completed_without_completed_still_saves() -> None:
    manager, store = await _loaded([Task("b", False)])
    assert manager.clear_completed() == 0
    await manager.flush()
    assert manager.tasks == [Task("b", False)]
    assert len(store.writes) == 1


@pytest.mark.asyncio
async def test_derived_counts() -> None:
    manager, _ = await _loaded([Task("a", True), Task("b", False), Task("c", True)])
    assert manager.total_count == 3
    assert manager.completed_count == 2
    assert manager.any_completed is True
    manager.clear_completed()
    assert manager.any_completed is False
    await manager.flush()


@pytest.mark.asyncio
async def test_tasks_property_returns_copies() -> None:
    manager, store = await _loaded([Task("a", False)])
    snapshot = manager.tasks
    snapshot[0].completed = True
    snapshot.append(Task("z"))
    assert manager.tasks == [Task("a", False)]


@pytest.mark.asyncio
async def test_overlapping_saves_end_with_latest_state() -> None:
    manager, store = await _loaded(write_delay=0.01)
    manager.add("a")
    manager.add("b")
    manager.toggle_completed(0, True)
    assert manager.pending_saves == 3
    await manager.flush()
    assert manager.pending_saves == 0
    assert _stored(store) == [{"title": "b", "completed": True}, {"title": "a", "completed": False}]
    assert len(store.writes) == 3


@pytest.mark.asyncio
async def test_save_failure_is_absorbed() -> None:
    store = FailingPreferenceStore(fail_set=True)
    manager = TaskListManager(store)
    await manager.load()
    manager.add("kept in memory")
    await manager.flush()
    assert store.failed_writes == 1
    assert manager.tasks == [Task("kept in memory")]


@pytest.mark.asyncio
async def test_saving_same_state_twice_is_byte_identical() -> None:
    manager, store = await _loaded([Task("x", True), Task("y")])
    await manager.save()
    await manager.save()
    (_, first), (_, second) = store.writes
    assert first == second


@pytest.mark.asyncio
async def test_reload_sees_what_was_saved() -> None:
    manager, store = await _loaded()
    manager.add("one")
    manager.add("two")
    manager.toggle_completed(1, True)
    await manager.flush()

    fresh = TaskListManager(store)
    await fresh.load()
    assert fresh.tasks == [Task("two", False), Task("one", True)]


def test_mutation_outside_event_loop_leaves_state_untouched() -> None:
    manager = TaskListManager(InMemoryPreferenceStore())
    asyncio.run(manager.load())
    seen: list[int] = []
    manager.subscribe(lambda: seen.append(manager.total_count))

    with pytest.raises(RuntimeError):
        manager.add("x")
    with pytest.raises(RuntimeError):
        manager.clear_completed()

    assert manager.tasks == []
    assert seen == []
