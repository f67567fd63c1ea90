from __future__ import annotations

import json
from pathlib import Path

from super7.core.storage import KeyValueStore
from super7.workout.history import MAX_HISTORY, WorkoutHistory, WorkoutRecord


def _record(index: int, completed: bool = True) -> WorkoutRecord:
    return WorkoutRecord(
        timestamp=f"2026-02-{index + 1:02d}T10:00:00+00:00",
        duration_minutes=7,
        planned_duration_sec=440,
        elapsed_duration_sec=440 if completed else 120,
        steps_completed=22 if completed else 5,
        total_steps=22,
        completed=completed,
    )


def test_append_and_load_recent(store: KeyValueStore) -> None:
    history = WorkoutHistory(store)
    history.append(_record(0))
    history.append(_record(1, completed=False))

    loaded = history.load_recent(limit=5)

    assert len(loaded) == 2
    assert loaded[0].timestamp.startswith("2026-02-02")
    assert not loaded[0].completed
    assert loaded[1].completed


def test_history_is_capped(store: KeyValueStore) -> None:
    history = WorkoutHistory(store)
    for index in range(MAX_HISTORY + 3):
        history.append(_record(index))

    loaded = history.load_recent(limit=50)

    assert len(loaded) == MAX_HISTORY
    assert loaded[0].timestamp.startswith("2026-02-13")
    assert history.load_recent(limit=3)[-1].timestamp.startswith("2026-02-11")


def test_malformed_entries_are_skipped(store: KeyValueStore) -> None:
    store.store_data("workoutHistory", [{"timestamp": "x"}, "junk", {**_record(0).__dict__}])

    loaded = WorkoutHistory(store).load_recent()

    assert loaded == [_record(0)]


def test_last_workout_duration(store: KeyValueStore) -> None:
    history = WorkoutHistory(store)
    assert history.get_last_workout_duration() is None

    history.save_last_workout_duration(12)
    assert history.get_last_workout_duration() == 12

    store.store_data("lastWorkoutDuration", "twelve")
    assert history.get_last_workout_duration() is None


def test_store_keeps_foreign_keys_on_clear(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"other:key": 1}), encoding="utf-8")
    store = KeyValueStore(path)
    store.store_data("a", 1)
    store.store_data("b", [1, 2])

    store.remove_data("a")
    assert store.get_data("a") is None
    assert store.get_data("b") == [1, 2]

    store.clear_all_data()
    assert json.loads(path.read_text(encoding="utf-8")) == {"other:key": 1}


def test_clear_history(store: KeyValueStore) -> None:
    history = WorkoutHistory(store)
    history.append(_record(0))
    history.clear()
    assert history.load_recent() == []
