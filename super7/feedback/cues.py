"""Audio and haptic cue sinks, gated by user settings."""

from __future__ import annotations

import logging
import sys
from typing import Callable, Protocol, TextIO

from super7.core.settings import DEFAULT_SETTINGS, Settings, SettingsProvider

logger = logging.getLogger(__name__)


class AudioCues(Protocol):
    def play_start(self) -> None: ...

    def play_end(self) -> None: ...

    def play_countdown(self) -> None: ...

    def play_beep(self) -> None: ...

    def play_finish(self) -> None: ...


class HapticCues(Protocol):
    def light(self) -> None: ...

    def medium(self) -> None: ...

    def warning(self) -> None: ...

    def success(self) -> None: ...

    def selection(self) -> None: ...


class NullAudio:
    def play_start(self) -> None:
        pass

    def play_end(self) -> None:
        pass

    def play_countdown(self) -> None:
        pass

    def play_beep(self) -> None:
        pass

    def play_finish(self) -> None:
        pass


class NullHaptics:
    def light(self) -> None:
        pass

    def medium(self) -> None:
        pass

    def warning(self) -> None:
        pass

    def success(self) -> None:
        pass

    def selection(self) -> None:
        pass


class TerminalAudio:
    """Rings the terminal bell and prints a short marker for each cue."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout

    def _emit(self, text: str, bell: bool = True) -> None:
        self._stream.write(("\a" if bell else "") + text + "\n")
        self._stream.flush()

    def play_start(self) -> None:
        self._emit(">> GO")

    def play_end(self) -> None:
        self._emit(">> TIME")

    def play_countdown(self) -> None:
        self._emit(">> beep", bell=False)

    def play_beep(self) -> None:
        self._emit(">> beep", bell=False)

    def play_finish(self) -> None:
        self._emit(">> WORKOUT COMPLETE")


class Feedback:
    """Dispatches cues to the sinks the current settings allow.

    Sink failures are logged and never propagate to the caller, so a broken
    audio device cannot interrupt a countdown.
    """

    def __init__(
        self,
        audio: AudioCues | None = None,
        haptics: HapticCues | None = None,
        settings: SettingsProvider | None = None,
    ) -> None:
        self._audio: AudioCues = audio or NullAudio()
        self._haptics: HapticCues = haptics or NullHaptics()
        self._settings = settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            return DEFAULT_SETTINGS
        return self._settings.settings

    def _call(self, label: str, action: Callable[[], None]) -> None:
        try:
            action()
        except Exception:
            logger.exception("Cue %s failed", label)

    def _sound(self, label: str, action: Callable[[], None]) -> None:
        if self.settings.sound_enabled:
            self._call(label, action)

    def _haptic(self, label: str, action: Callable[[], None]) -> None:
        if self.settings.haptics_enabled:
            self._call(label, action)

    def step_started(self) -> None:
        self._sound("start", self._audio.play_start)
        self._haptic("light", self._haptics.light)

    def step_ended(self) -> None:
        self._sound("end", self._audio.play_end)
        self._haptic("medium", self._haptics.medium)

    def countdown(self) -> None:
        if not self.settings.countdown_beeps:
            return
        self._sound("countdown", self._audio.play_countdown)
        self._haptic("warning", self._haptics.warning)

    def workout_finished(self) -> None:
        self._sound("finish", self._audio.play_finish)
        self._haptic("success", self._haptics.success)

    def beep(self) -> None:
        self._sound("beep", self._audio.play_beep)

    def selection(self) -> None:
        self._haptic("selection", self._haptics.selection)
