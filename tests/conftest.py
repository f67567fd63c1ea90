from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from super7.core.settings import SettingsProvider
from super7.core.storage import KeyValueStore
from super7.feedback.cues import Feedback


class ManualTicker:
    """Ticker driven explicitly by the test instead of wall-clock time."""

    def __init__(self) -> None:
        self.callback: Callable[[], None] | None = None
        self.schedule_count = 0
        self.cancel_count = 0

    @property
    def is_scheduled(self) -> bool:
        return self.callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self.cancel()
        self.callback = callback
        self.schedule_count += 1

    def cancel(self) -> None:
        if self.callback is not None:
            self.cancel_count += 1
            self.callback = None

    def fire(self, seconds: int = 1) -> int:
        fired = 0
        for _ in range(seconds):
            if self.callback is None:
                break
            self.callback()
            fired += 1
        return fired


class RecordingAudio:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def play_start(self) -> None:
        self.calls.append("start")

    def play_end(self) -> None:
        self.calls.append("end")

    def play_countdown(self) -> None:
        self.calls.append("countdown")

    def play_beep(self) -> None:
        self.calls.append("beep")

    def play_finish(self) -> None:
        self.calls.append("finish")


class RecordingHaptics:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def light(self) -> None:
        self.calls.append("light")

    def medium(self) -> None:
        self.calls.append("medium")

    def warning(self) -> None:
        self.calls.append("warning")

    def success(self) -> None:
        self.calls.append("success")

    def selection(self) -> None:
        self.calls.append("selection")


class BrokenAudio(RecordingAudio):
    def play_start(self) -> None:
        raise RuntimeError("audio device lost")

    def play_end(self) -> None:
        raise RuntimeError("audio device lost")

    def play_countdown(self) -> None:
        raise RuntimeError("audio device lost")

    def play_finish(self) -> None:
        raise RuntimeError("audio device lost")


@pytest.fixture
def store(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "storage.json")


@pytest.fixture
def settings(store: KeyValueStore) -> SettingsProvider:
    provider = SettingsProvider(store)
    provider.load_now()
    return provider


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def audio() -> RecordingAudio:
    return RecordingAudio()


@pytest.fixture
def haptics() -> RecordingHaptics:
    return RecordingHaptics()


@pytest.fixture
def feedback(
    audio: RecordingAudio, haptics: RecordingHaptics, settings: SettingsProvider
) -> Feedback:
    return Feedback(audio, haptics, settings)
