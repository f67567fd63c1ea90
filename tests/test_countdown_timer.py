from __future__ import annotations

import asyncio

import pytest

from conftest import BrokenAudio, ManualTicker, RecordingAudio, RecordingHaptics
from super7.core.settings import SettingsProvider
from super7.feedback.cues import Feedback
from super7.workout.timer import AsyncioTicker, CountdownTimer, TimerState


def _timer(
    duration: int,
    ticker: ManualTicker,
    feedback: Feedback | None = None,
    completions: list[int] | None = None,
) -> CountdownTimer:
    done = completions if completions is not None else []
    return CountdownTimer(
        duration,
        ticker=ticker,
        feedback=feedback,
        on_complete=lambda: done.append(1),
    )


def test_start_runs_from_initial_duration(
    ticker: ManualTicker, feedback: Feedback, audio: RecordingAudio, haptics: RecordingHaptics
) -> None:
    timer = _timer(10, ticker, feedback)

    assert timer.state is TimerState.IDLE
    timer.start()

    assert timer.is_running
    assert timer.time == 10
    assert ticker.is_scheduled
    assert audio.calls == ["start"]
    assert haptics.calls == ["light"]


def test_full_countdown_completes_once(ticker: ManualTicker) -> None:
    completions: list[int] = []
    timer = _timer(5, ticker, completions=completions)
    timer.start()

    assert ticker.fire(10) == 5
    assert timer.is_complete
    assert not timer.is_running
    assert timer.time == 0
    assert completions == [1]
    assert not ticker.is_scheduled

    timer.tick()
    assert completions == [1]


def test_pause_and_resume_interleaved_complete_once(ticker: ManualTicker) -> None:
    completions: list[int] = []
    timer = _timer(6, ticker, completions=completions)
    timer.start()

    ticker.fire(2)
    timer.pause()
    assert timer.is_paused
    assert not ticker.is_scheduled
    assert ticker.fire(3) == 0
    assert timer.time == 4

    timer.resume()
    timer.resume()
    ticker.fire(1)
    timer.pause()
    timer.pause()
    timer.resume()
    ticker.fire(10)

    assert timer.is_complete
    assert completions == [1]


def test_start_cancels_in_flight_ticking(ticker: ManualTicker) -> None:
    timer = _timer(5, ticker)
    timer.start()
    ticker.fire(2)
    timer.start()

    assert timer.time == 5
    assert ticker.cancel_count >= 1
    assert ticker.schedule_count == 2


def test_countdown_cues_on_last_three_seconds(
    ticker: ManualTicker, feedback: Feedback, audio: RecordingAudio, haptics: RecordingHaptics
) -> None:
    timer = _timer(5, ticker, feedback)
    timer.start()
    ticker.fire(5)

    assert audio.calls == ["start", "countdown", "countdown", "countdown", "end"]
    assert haptics.calls == ["light", "warning", "warning", "warning", "medium"]


def test_countdown_cues_respect_settings(
    ticker: ManualTicker,
    feedback: Feedback,
    settings: SettingsProvider,
    audio: RecordingAudio,
    haptics: RecordingHaptics,
) -> None:
    settings.update(countdown_beeps=False, haptics_enabled=False)
    timer = _timer(5, ticker, feedback)
    timer.start()
    ticker.fire(5)

    assert audio.calls == ["start", "end"]
    assert haptics.calls == []


def test_reset_goes_idle_with_new_duration(ticker: ManualTicker) -> None:
    timer = _timer(5, ticker)
    timer.start()
    ticker.fire(2)

    timer.reset(12)
    assert timer.state is TimerState.IDLE
    assert timer.time == 12
    assert timer.initial_duration == 12
    assert not ticker.is_scheduled

    timer.reset()
    assert timer.time == 12


def test_stop_forces_complete_without_callback(ticker: ManualTicker) -> None:
    completions: list[int] = []
    timer = _timer(5, ticker, completions=completions)
    timer.start()
    timer.stop()

    assert timer.is_complete
    assert timer.time == 0
    assert completions == []
    assert not ticker.is_scheduled


def test_progress_fraction(ticker: ManualTicker) -> None:
    timer = _timer(4, ticker)
    assert timer.progress == 0.0
    timer.start()
    ticker.fire(1)
    assert timer.progress == pytest.approx(0.25)
    ticker.fire(3)
    assert timer.progress == pytest.approx(1.0)

    assert CountdownTimer(0, ticker=ManualTicker()).progress == 0.0


def test_tick_before_start_is_contract_error(ticker: ManualTicker) -> None:
    timer = _timer(5, ticker)
    with pytest.raises(AssertionError):
        timer.tick()


def test_broken_audio_never_interrupts_countdown(
    ticker: ManualTicker, settings: SettingsProvider
) -> None:
    completions: list[int] = []
    haptics = RecordingHaptics()
    timer = _timer(4, ticker, Feedback(BrokenAudio(), haptics, settings), completions)
    timer.start()
    ticker.fire(4)

    assert completions == [1]
    assert haptics.calls == ["light", "warning", "warning", "warning", "medium"]


def test_asyncio_ticker_drives_real_countdown() -> None:
    async def _run() -> None:
        finished = asyncio.Event()
        ticks: list[int] = []
        timer = CountdownTimer(
            3,
            ticker=AsyncioTicker(0.01),
            on_tick=ticks.append,
            on_complete=finished.set,
        )
        timer.start()
        await asyncio.wait_for(finished.wait(), timeout=2.0)

        assert ticks == [2, 1, 0]
        assert timer.is_complete
        timer.close()

    asyncio.run(_run())


def test_asyncio_ticker_pause_stops_decrements() -> None:
    async def _run() -> None:
        timer = CountdownTimer(50, ticker=AsyncioTicker(0.01))
        timer.start()
        await asyncio.sleep(0.05)
        timer.pause()
        paused_at = timer.time
        await asyncio.sleep(0.05)

        assert timer.time == paused_at
        assert paused_at < 50
        timer.close()

    asyncio.run(_run())


def test_asyncio_ticker_requires_running_loop() -> None:
    with pytest.raises(RuntimeError):
        AsyncioTicker(0.01).schedule(lambda: None)


def test_asyncio_ticker_survives_failing_callback() -> None:
    async def _run() -> None:
        calls: list[int] = []

        def callback() -> None:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("display glitch")

        ticker = AsyncioTicker(0.005)
        ticker.schedule(callback)
        await asyncio.sleep(0.1)

        assert len(calls) > 1
        assert ticker.is_scheduled
        ticker.cancel()

    asyncio.run(_run())
