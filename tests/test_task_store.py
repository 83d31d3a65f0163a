"""
Unit tests for the in-memory task list
"""

import threading

from pidesk.apps.todo.store import TaskRecord, TaskStore


def _store_with(*titles):
    store = TaskStore()
    for title in titles:
        store.add(title)
    return store


def _titles(store):
    return [task.title for task in store.snapshot()]


def test_add_appends_incomplete_task():
    store = TaskStore()
    task = store.add("Buy milk")

    assert isinstance(task, TaskRecord)
    assert len(store) == 1
    assert task.title == "Buy milk"
    assert task.is_completed is False
    assert store.snapshot()[0].id == task.id


def test_add_rejects_blank_titles():
    store = _store_with("A")

    assert store.add("") is None
    assert store.add("   ") is None
    assert _titles(store) == ["A"], "Blank titles must not change the list"


def test_add_keeps_insertion_order_and_unique_ids():
    store = _store_with("A", "B", "C")

    assert _titles(store) == ["A", "B", "C"]
    ids = [task.id for task in store.snapshot()]
    assert len(set(ids)) == 3


def test_toggle_flips_only_target():
    store = _store_with("A", "B", "C")
    target = store.snapshot()[1]

    updated = store.toggle_completion(target.id)
    assert updated.is_completed is True
    assert [t.is_completed for t in store.snapshot()] == [False, True, False]
    assert _titles(store) == ["A", "B", "C"]

    store.toggle_completion(target.id)
    assert store.get(target.id).is_completed is False


def test_toggle_unknown_id_is_noop():
    store = _store_with("A", "B")
    before = store.snapshot()

    assert store.toggle_completion("missing") is None
    assert store.snapshot() == before


def test_remove_single_position():
    store = _store_with("A", "B", "C")
    removed = store.remove_at({1})

    assert [t.title for t in removed] == ["B"]
    assert _titles(store) == ["A", "C"]


def test_remove_multiple_positions_uses_pre_removal_indexes():
    store = _store_with("A", "B", "C")
    store.remove_at({0, 2})

    assert _titles(store) == ["B"]


def test_remove_ignores_out_of_range_positions():
    store = _store_with("A", "B", "C")

    assert store.remove_at({5, -1}) == []
    assert _titles(store) == ["A", "B", "C"]

    store.remove_at([2, 7])
    assert _titles(store) == ["A", "B"]


def test_remove_from_empty_store():
    store = TaskStore()
    assert store.remove_at({0}) == []
    assert len(store) == 0


def test_ids_not_reused_after_removal():
    store = _store_with("A")
    old_id = store.snapshot()[0].id
    store.remove_at({0})
    new = store.add("A")

    assert new.id != old_id


def test_snapshot_is_a_copy():
    store = _store_with("A")
    snapshot = store.snapshot()
    snapshot[0].is_completed = True
    snapshot.append(TaskRecord(title="X"))

    assert len(store) == 1
    assert store.snapshot()[0].is_completed is False


def test_index_of():
    store = _store_with("A", "B")
    second = store.snapshot()[1]

    assert store.index_of(second.id) == 1
    assert store.index_of("missing") is None


def test_listeners_run_only_on_changes():
    store = TaskStore()
    changes = []
    store.add_listener(lambda s: changes.append(len(s)))

    task = store.add("A")
    store.add("")
    store.toggle_completion(task.id)
    store.toggle_completion("missing")
    store.remove_at({3})
    store.remove_at({0})

    assert changes == [1, 1, 0]


def test_to_dict():
    task = TaskRecord(title="Write report")
    data = task.to_dict()

    assert data['title'] == "Write report"
    assert data['is_completed'] is False
    assert set(data) == {'id', 'title', 'is_completed', 'created_at'}


def test_remove_by_id():
    store = _store_with("A", "B", "C")
    target = store.snapshot()[1]

    removed = store.remove(target.id)
    assert removed.id == target.id
    assert _titles(store) == ["A", "C"]
    assert store.remove(target.id) is None


def test_concurrent_removals_by_id_hit_their_own_task():
    store = _store_with(*[f"task {n}" for n in range(200)])
    ids = [task.id for task in store.snapshot()]
    results = {}

    def worker(chunk):
        for task_id in chunk:
            results[task_id] = store.remove(task_id)

    threads = [threading.Thread(target=worker, args=(ids[n::4],)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 0
    assert all(results[task_id].id == task_id for task_id in ids)
