"""Browser-side audio and vibration cues for the NiceGUI UI.

Cues raised during a countdown tick are queued and played by the page's
refresh timer, which runs inside the client context ``ui.run_javascript``
needs.
"""

from __future__ import annotations

from nicegui import ui

# (frequency Hz, duration ms) per cue
TONES: dict[str, tuple[int, int]] = {
    "start": (880, 180),
    "end": (520, 260),
    "countdown": (740, 120),
    "beep": (660, 100),
    "finish": (1046, 600),
}

# navigator.vibrate patterns (ms)
VIBRATIONS: dict[str, list[int]] = {
    "light": [20],
    "medium": [45],
    "warning": [30, 60, 30],
    "success": [40, 80, 120],
    "selection": [10],
}


def _tone_js(frequency: int, duration_ms: int) -> str:
    return (
        "(() => {"
        " const ctx = new (window.AudioContext || window.webkitAudioContext)();"
        " const osc = ctx.createOscillator();"
        " const gain = ctx.createGain();"
        " osc.type = 'sine';"
        f" osc.frequency.value = {frequency};"
        " gain.gain.value = 0.03;"
        " osc.connect(gain);"
        " gain.connect(ctx.destination);"
        " osc.start();"
        f" setTimeout(() => {{ osc.stop(); ctx.close(); }}, {duration_ms});"
        "})();"
    )


def _vibrate_js(pattern: list[int]) -> str:
    return f"if (navigator.vibrate) {{ navigator.vibrate({pattern}); }}"


class BrowserCueQueue:
    def __init__(self) -> None:
        self._pending: list[str] = []

    def push(self, script: str) -> None:
        self._pending.append(script)

    def drain(self) -> list[str]:
        scripts, self._pending = self._pending, []
        return scripts

    def flush(self) -> None:
        for script in self.drain():
            ui.run_javascript(script)


class BrowserAudio:
    def __init__(self, queue: BrowserCueQueue) -> None:
        self._queue = queue

    def _tone(self, name: str) -> None:
        frequency, duration_ms = TONES[name]
        self._queue.push(_tone_js(frequency, duration_ms))

    def play_start(self) -> None:
        self._tone("start")

    def play_end(self) -> None:
        self._tone("end")

    def play_countdown(self) -> None:
        self._tone("countdown")

    def play_beep(self) -> None:
        self._tone("beep")

    def play_finish(self) -> None:
        self._tone("finish")


class BrowserHaptics:
    def __init__(self, queue: BrowserCueQueue) -> None:
        self._queue = queue

    def _vibrate(self, name: str) -> None:
        self._queue.push(_vibrate_js(VIBRATIONS[name]))

    def light(self) -> None:
        self._vibrate("light")

    def medium(self) -> None:
        self._vibrate("medium")

    def warning(self) -> None:
        self._vibrate("warning")

    def success(self) -> None:
        self._vibrate("success")

    def selection(self) -> None:
        self._vibrate("selection")


WAKE_LOCK_ON_JS = (
    "(async () => {"
    " try { if ('wakeLock' in navigator && !window.__s7WakeLock) {"
    " window.__s7WakeLock = await navigator.wakeLock.request('screen'); } }"
    " catch (e) { console.warn('wake lock refused', e); }"
    "})();"
)

WAKE_LOCK_OFF_JS = (
    "if (window.__s7WakeLock) { window.__s7WakeLock.release(); window.__s7WakeLock = null; }"
)
