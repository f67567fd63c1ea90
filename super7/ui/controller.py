"""Command surface shared by the web UI and the terminal runner."""

from __future__ import annotations

from typing import Callable

from super7.core import config
from super7.core.settings import Settings, SettingsProvider
from super7.core.storage import KeyValueStore
from super7.feedback.cues import AudioCues, Feedback, HapticCues
from super7.workout.history import WorkoutHistory, WorkoutRecord
from super7.workout.model import WorkoutPlan
from super7.workout.runner import WorkoutProgress, WorkoutRunner
from super7.workout.timer import Ticker


def clamp_minutes(value: object) -> int:
    """Parse a minutes entry the way the duration picker does (1..60)."""
    try:
        minutes = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return config.MIN_DURATION_MINUTES
    return max(config.MIN_DURATION_MINUTES, min(config.MAX_DURATION_MINUTES, minutes))


class UIController:
    def __init__(
        self,
        audio: AudioCues | None = None,
        haptics: HapticCues | None = None,
        *,
        store: KeyValueStore | None = None,
        ticker: Ticker | None = None,
    ) -> None:
        self._store = store or KeyValueStore()
        self._settings = SettingsProvider(self._store)
        self._history = WorkoutHistory(self._store)
        self._feedback = Feedback(audio, haptics, self._settings)
        self._runner = WorkoutRunner(self._feedback, ticker=ticker, history=self._history)

    @property
    def settings(self) -> Settings:
        return self._settings.settings

    @property
    def settings_loading(self) -> bool:
        return self._settings.loading

    @property
    def feedback(self) -> Feedback:
        return self._feedback

    @property
    def runner(self) -> WorkoutRunner:
        return self._runner

    async def load_settings(self) -> Settings:
        return await self._settings.load()

    def update_settings(self, **changes: bool) -> Settings:
        return self._settings.update(**changes)

    def default_minutes(self) -> int:
        try:
            last = self._history.get_last_workout_duration()
        except Exception:
            last = None
        if last is None:
            return config.DEFAULT_DURATION_MINUTES
        return clamp_minutes(last)

    def recent_workouts(self, limit: int = 10) -> list[WorkoutRecord]:
        return self._history.load_recent(limit=limit)

    def set_callbacks(
        self,
        on_progress: Callable[[WorkoutProgress], None] | None = None,
        on_finish: Callable[[bool], None] | None = None,
    ) -> None:
        self._runner.on_progress = on_progress
        self._runner.on_finish = on_finish

    def create_workout(self, duration_minutes: float) -> WorkoutPlan:
        return self._runner.create_workout(duration_minutes)

    def start_workout(self) -> None:
        self._runner.start_workout()

    def pause_workout(self) -> None:
        self._runner.pause_workout()

    def resume_workout(self) -> None:
        self._runner.resume_workout()

    def skip_step(self) -> None:
        self._runner.skip_step()

    def restart_workout(self) -> None:
        self._runner.restart_workout()

    def end_workout(self) -> None:
        self._runner.end_workout()

    def progress(self) -> WorkoutProgress:
        return self._runner.progress()

    def close(self) -> None:
        self._runner.close()
