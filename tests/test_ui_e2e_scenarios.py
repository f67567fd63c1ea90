from __future__ import annotations

import asyncio
import io
from pathlib import Path

from conftest import RecordingAudio
from super7.core.engine import TerminalWorkout
from super7.core.storage import KeyValueStore
from super7.ui.controller import UIController, clamp_minutes
from super7.workout.runner import WorkoutProgress
from super7.workout.timer import AsyncioTicker


def test_ui_like_start_pause_skip_and_finish(tmp_path: Path) -> None:
    async def _run() -> None:
        audio = RecordingAudio()
        controller = UIController(
            audio,
            store=KeyValueStore(tmp_path / "storage.json"),
            ticker=AsyncioTicker(0.002),
        )
        assert controller.settings_loading
        await controller.load_settings()
        assert not controller.settings_loading

        finished = asyncio.Event()
        outcomes: list[bool] = []
        seen: list[WorkoutProgress] = []

        def on_finish(completed: bool) -> None:
            outcomes.append(completed)
            finished.set()

        controller.set_callbacks(on_progress=seen.append, on_finish=on_finish)
        plan = controller.create_workout(0.5)
        assert len(plan.steps) == 2

        controller.start_workout()
        await asyncio.sleep(0.02)
        controller.pause_workout()
        paused = controller.progress()
        assert paused.is_paused
        await asyncio.sleep(0.02)
        assert controller.progress().remaining_sec == paused.remaining_sec

        controller.resume_workout()
        controller.skip_step()
        assert controller.progress().step_name == "Rest"

        await asyncio.wait_for(finished.wait(), timeout=5.0)
        assert outcomes == [True]
        assert controller.progress().is_complete
        assert "finish" in audio.calls
        assert seen
        assert controller.recent_workouts()[0].completed
        controller.close()

    asyncio.run(_run())


def test_default_minutes_uses_last_workout(tmp_path: Path) -> None:
    controller = UIController(store=KeyValueStore(tmp_path / "storage.json"))
    assert controller.default_minutes() == 7

    controller.create_workout(12)
    assert controller.default_minutes() == 12

    controller.create_workout(0)
    assert controller.default_minutes() == 12


def test_clamp_minutes() -> None:
    assert clamp_minutes("5") == 5
    assert clamp_minutes(0) == 1
    assert clamp_minutes(99) == 60
    assert clamp_minutes(None) == 1
    assert clamp_minutes("abc") == 1


def test_settings_update_through_controller(tmp_path: Path) -> None:
    store = KeyValueStore(tmp_path / "storage.json")
    controller = UIController(store=store)
    controller.update_settings(countdown_beeps=False)

    assert not controller.settings.countdown_beeps
    reloaded = UIController(store=store)
    assert asyncio.run(reloaded.load_settings()).countdown_beeps is False


def test_terminal_workout_runs_to_completion(tmp_path: Path) -> None:
    async def _run() -> bool:
        stream = io.StringIO()
        controller = UIController(
            store=KeyValueStore(tmp_path / "storage.json"),
            ticker=AsyncioTicker(0.001),
        )
        workout = TerminalWorkout(controller, stream=stream)
        completed = await asyncio.wait_for(workout.run(0.5), timeout=5.0)
        output = stream.getvalue()
        assert "[1/2] Jumping Jacks" in output
        assert "[2/2] Rest" in output
        assert "Workout complete" in output
        return completed

    assert asyncio.run(_run()) is True


def test_terminal_workout_with_empty_plan(tmp_path: Path) -> None:
    async def _run() -> bool:
        stream = io.StringIO()
        controller = UIController(store=KeyValueStore(tmp_path / "storage.json"))
        workout = TerminalWorkout(controller, stream=stream)
        completed = await workout.run(0)
        assert "Nothing to do" in stream.getvalue()
        return completed

    assert asyncio.run(_run()) is False
