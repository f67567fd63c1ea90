"""Async terminal runner: plays a generated workout to completion."""

from __future__ import annotations

import asyncio
import sys
from typing import TextIO

from super7.feedback.cues import NullAudio, TerminalAudio
from super7.ui.controller import UIController
from super7.workout.progress import format_time
from super7.workout.runner import WorkoutProgress
from super7.workout.timer import AsyncioTicker


class TerminalWorkout:
    def __init__(
        self,
        controller: UIController | None = None,
        *,
        tick_interval_sec: float | None = None,
        mute: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self._stream = stream or sys.stdout
        audio = NullAudio() if mute else TerminalAudio(self._stream)
        self._controller = controller or UIController(
            audio, ticker=AsyncioTicker(tick_interval_sec)
        )
        self._done = asyncio.Event()
        self._completed = False
        self._last_step_index = 0

    @property
    def controller(self) -> UIController:
        return self._controller

    async def run(self, duration_minutes: float) -> bool:
        """Run a full workout; returns True when it finished naturally."""
        await self._controller.load_settings()
        plan = self._controller.create_workout(duration_minutes)
        if plan.is_empty:
            self._print("Nothing to do: requested duration is empty")
            return False
        self._print(
            f"Workout: {len(plan.steps)} steps, {format_time(plan.total_duration_sec)} total"
        )
        self._done = asyncio.Event()
        self._last_step_index = 0
        self._controller.set_callbacks(on_progress=self._on_progress, on_finish=self._on_finish)
        try:
            self._controller.start_workout()
            await self._done.wait()
        finally:
            self._controller.close()
        return self._completed

    def stop(self) -> None:
        self._controller.end_workout()

    def _on_progress(self, progress: WorkoutProgress) -> None:
        if progress.is_complete:
            return
        if progress.step_index != self._last_step_index:
            self._last_step_index = progress.step_index
            heading = f"[{progress.step_index}/{progress.step_total}] {progress.step_name}"
            if progress.step_description:
                heading += f" - {progress.step_description}"
            self._print(heading)
        self._print(
            f"  {format_time(progress.remaining_sec)} left"
            f" | elapsed {format_time(progress.elapsed_total_sec)}"
            f" | {progress.overall_pct:5.1f}%"
        )

    def _on_finish(self, completed: bool) -> None:
        self._completed = completed
        self._print("Workout complete" if completed else "Workout ended")
        self._done.set()

    def _print(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()
