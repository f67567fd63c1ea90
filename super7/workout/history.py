"""Local persistence for finished workouts and the last requested duration."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from super7.core.storage import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "workoutHistory"
LAST_DURATION_KEY = "lastWorkoutDuration"
MAX_HISTORY = 10


@dataclass(frozen=True)
class WorkoutRecord:
    timestamp: str
    duration_minutes: float
    planned_duration_sec: int
    elapsed_duration_sec: int
    steps_completed: int
    total_steps: int
    completed: bool


def now_utc_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


class WorkoutHistory:
    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store or KeyValueStore()

    def save_last_workout_duration(self, duration_minutes: float) -> None:
        self._store.store_data(LAST_DURATION_KEY, duration_minutes)

    def get_last_workout_duration(self) -> float | None:
        value = self._store.get_data(LAST_DURATION_KEY)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    def append(self, record: WorkoutRecord) -> None:
        history = [asdict(record), *self._raw_history()]
        self._store.store_data(HISTORY_KEY, history[:MAX_HISTORY])

    def load_recent(self, limit: int = MAX_HISTORY) -> list[WorkoutRecord]:
        out: list[WorkoutRecord] = []
        for item in self._raw_history():
            try:
                out.append(WorkoutRecord(**item))
            except TypeError:
                logger.warning("Skipping malformed history entry: %r", item)
                continue
            if len(out) >= limit:
                break
        return out

    def clear(self) -> None:
        self._store.remove_data(HISTORY_KEY)

    def _raw_history(self) -> list[dict]:
        raw = self._store.get_data(HISTORY_KEY)
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, dict)]
