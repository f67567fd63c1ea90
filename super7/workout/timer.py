"""Pausable one-second countdown used for each workout step."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from super7.core import config
from super7.feedback.cues import Feedback

logger = logging.getLogger(__name__)

COUNTDOWN_CUE_SECONDS = 3

TickCallback = Callable[[int], None]
CompleteCallback = Callable[[], None]


class Ticker(Protocol):
    """Calls a callback once per interval until cancelled."""

    @property
    def is_scheduled(self) -> bool: ...

    def schedule(self, callback: Callable[[], None]) -> None: ...

    def cancel(self) -> None: ...


class AsyncioTicker:
    """Ticker backed by a single asyncio task on the running loop.

    ``schedule`` always cancels the previous task first so two tick loops can
    never decrement the same countdown.
    """

    def __init__(self, interval_sec: float | None = None) -> None:
        self._interval_sec = config.TICK_INTERVAL_SEC if interval_sec is None else interval_sec
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def interval_sec(self) -> float:
        return self._interval_sec

    @property
    def is_scheduled(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, callback: Callable[[], None]) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise RuntimeError("AsyncioTicker needs a running event loop") from exc
        self._task = loop.create_task(self._run(callback))

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self, callback: Callable[[], None]) -> None:
        while True:
            await asyncio.sleep(self._interval_sec)
            try:
                callback()
            except Exception:
                logger.exception("Tick callback failed")


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


class CountdownTimer:
    def __init__(
        self,
        initial_duration: int = 0,
        *,
        ticker: Ticker | None = None,
        feedback: Feedback | None = None,
        on_tick: TickCallback | None = None,
        on_complete: CompleteCallback | None = None,
    ) -> None:
        self._initial_duration = max(0, int(initial_duration))
        self._time = self._initial_duration
        self._state = TimerState.IDLE
        self._started = False
        self._ticker: Ticker = ticker or AsyncioTicker()
        self._feedback = feedback or Feedback()
        self.on_tick = on_tick
        self.on_complete = on_complete

    @property
    def time(self) -> int:
        return self._time

    @property
    def initial_duration(self) -> int:
        return self._initial_duration

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is TimerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state is TimerState.PAUSED

    @property
    def is_complete(self) -> bool:
        return self._state is TimerState.COMPLETE

    @property
    def progress(self) -> float:
        if self._initial_duration <= 0:
            return 0.0
        return max(0.0, min(1.0, 1.0 - self._time / self._initial_duration))

    def start(self) -> None:
        self._ticker.cancel()
        self._time = self._initial_duration
        self._state = TimerState.RUNNING
        self._started = True
        self._ticker.schedule(self.tick)
        logger.debug("Timer started at %ss", self._time)
        self._feedback.step_started()

    def pause(self) -> None:
        if self._state is not TimerState.RUNNING:
            return
        self._ticker.cancel()
        self._state = TimerState.PAUSED

    def resume(self) -> None:
        if self._state is not TimerState.PAUSED:
            return
        self._state = TimerState.RUNNING
        self._ticker.schedule(self.tick)

    def reset(self, new_duration: int | None = None) -> None:
        self._ticker.cancel()
        if new_duration is not None:
            self._initial_duration = max(0, int(new_duration))
        self._time = self._initial_duration
        self._state = TimerState.IDLE

    def stop(self) -> None:
        self._ticker.cancel()
        self._time = 0
        self._state = TimerState.COMPLETE

    def close(self) -> None:
        """Cancel ticking on teardown without touching the countdown state."""
        self._ticker.cancel()

    def tick(self) -> None:
        assert self._started, "CountdownTimer.tick() called before start()"
        if self._state is not TimerState.RUNNING:
            return

        self._time = max(0, self._time - 1)
        if self.on_tick is not None:
            self.on_tick(self._time)

        if self._time == 0:
            self._ticker.cancel()
            self._state = TimerState.COMPLETE
            logger.debug("Timer complete")
            self._feedback.step_ended()
            if self.on_complete is not None:
                self.on_complete()
            return

        if self._time <= COUNTDOWN_CUE_SECONDS:
            self._feedback.countdown()
