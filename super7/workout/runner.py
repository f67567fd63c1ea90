"""Drives a workout session with a per-step countdown timer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from super7.feedback.cues import Feedback
from super7.workout.history import WorkoutHistory, WorkoutRecord, now_utc_iso
from super7.workout.model import StepKind, WorkoutPlan
from super7.workout.session import WorkoutSession
from super7.workout.timer import CountdownTimer, Ticker, TimerState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkoutProgress:
    step_index: int
    step_total: int
    step_name: str
    step_description: str | None
    step_kind: StepKind | None
    step_duration_sec: int
    remaining_sec: int
    elapsed_total_sec: int
    total_duration_sec: int
    overall_pct: float
    next_step_name: str | None
    is_active: bool
    is_paused: bool
    is_complete: bool
    ended_early: bool


ProgressCallback = Callable[[WorkoutProgress], None]
FinishCallback = Callable[[bool], None]


class WorkoutRunner:
    """Owns one session and one countdown timer and keeps them in lockstep.

    Timer ticks update the session's remaining/elapsed time, timer completion
    advances the session, and every step change resets the timer to the new
    step's duration (restarting it unless the session is paused).
    """

    def __init__(
        self,
        feedback: Feedback | None = None,
        *,
        ticker: Ticker | None = None,
        history: WorkoutHistory | None = None,
        on_progress: ProgressCallback | None = None,
        on_finish: FinishCallback | None = None,
    ) -> None:
        self._feedback = feedback or Feedback()
        self._session = WorkoutSession()
        self._timer = CountdownTimer(
            0,
            ticker=ticker,
            feedback=self._feedback,
            on_tick=self._on_tick,
            on_complete=self._on_step_complete,
        )
        self._history = history
        self._duration_minutes: float = 0.0
        self._finished = False
        self.on_progress = on_progress
        self.on_finish = on_finish

    @property
    def session(self) -> WorkoutSession:
        return self._session

    @property
    def timer(self) -> CountdownTimer:
        return self._timer

    @property
    def plan(self) -> WorkoutPlan | None:
        return self._session.plan

    def create_workout(self, duration_minutes: float) -> WorkoutPlan:
        plan = self._session.create_workout(duration_minutes)
        self._duration_minutes = float(duration_minutes) if not plan.is_empty else 0.0
        self._finished = False
        first = self._session.get_current_step()
        self._timer.reset(first.duration_sec if first is not None else 0)
        if self._history is not None and not plan.is_empty:
            try:
                self._history.save_last_workout_duration(duration_minutes)
            except Exception:
                logger.exception("Failed to save last workout duration")
        self._emit()
        return plan

    def start_workout(self) -> None:
        step = self._session.get_current_step()
        if step is None or self._session.state.is_complete:
            return
        self._session.start_workout()
        self._timer.reset(step.duration_sec)
        self._timer.start()
        self._emit()

    def pause_workout(self) -> None:
        if not self._session.state.is_active:
            return
        self._session.pause_workout()
        self._timer.pause()
        self._emit()

    def resume_workout(self) -> None:
        if not self._session.state.is_active:
            return
        self._session.resume_workout()
        if self._timer.state is TimerState.PAUSED:
            self._timer.resume()
        elif self._timer.state is TimerState.IDLE:
            # step changed while paused; the timer was reset but never started
            self._timer.start()
        self._emit()

    def skip_step(self) -> None:
        if self._session.state.is_complete:
            return
        self._session.skip_step()
        self._sync_step()

    def restart_workout(self) -> None:
        if self._session.plan is None or self._session.plan.is_empty:
            return
        self._finished = False
        self._session.restart_workout()
        self._sync_step()

    def end_workout(self) -> None:
        already_complete = self._session.state.is_complete
        self._session.end_workout()
        self._timer.stop()
        if not already_complete:
            self._finish(completed=False)
        self._emit()

    def close(self) -> None:
        self._timer.close()

    def progress(self) -> WorkoutProgress:
        session = self._session
        state = session.state
        step = session.get_current_step()
        next_step = session.get_next_step()
        plan = session.plan
        return WorkoutProgress(
            step_index=min(state.current_step_index + 1, session.total_steps),
            step_total=session.total_steps,
            step_name=step.name if step is not None else "",
            step_description=step.description if step is not None else None,
            step_kind=step.kind if step is not None else None,
            step_duration_sec=step.duration_sec if step is not None else 0,
            remaining_sec=state.remaining_time,
            elapsed_total_sec=state.elapsed_time,
            total_duration_sec=plan.total_duration_sec if plan is not None else 0,
            overall_pct=session.progress(),
            next_step_name=next_step.name if next_step is not None else None,
            is_active=state.is_active,
            is_paused=state.is_paused,
            is_complete=state.is_complete,
            ended_early=state.ended_early,
        )

    def _on_tick(self, remaining: int) -> None:
        self._session.update_remaining_time(remaining)
        self._emit()

    def _on_step_complete(self) -> None:
        self._session.complete_step()
        self._sync_step()

    def _sync_step(self) -> None:
        state = self._session.state
        step = self._session.get_current_step()
        if step is not None:
            self._timer.reset(step.duration_sec)
            if state.is_active and not state.is_paused:
                self._timer.start()
        elif state.is_complete:
            self._timer.stop()
            self._feedback.workout_finished()
            self._finish(completed=True)
        self._emit()

    def _finish(self, completed: bool) -> None:
        if self._finished:
            return
        self._finished = True
        if self._history is not None and self._session.plan is not None:
            state = self._session.state
            record = WorkoutRecord(
                timestamp=now_utc_iso(),
                duration_minutes=self._duration_minutes,
                planned_duration_sec=self._session.plan.total_duration_sec,
                elapsed_duration_sec=state.elapsed_time,
                steps_completed=min(state.current_step_index, self._session.total_steps),
                total_steps=self._session.total_steps,
                completed=completed,
            )
            try:
                self._history.append(record)
            except Exception:
                logger.exception("Failed to save workout history")
        if self.on_finish is not None:
            try:
                self.on_finish(completed)
            except Exception:
                logger.exception("on_finish callback failed")

    def _emit(self) -> None:
        if self.on_progress is not None:
            try:
                self.on_progress(self.progress())
            except Exception:
                logger.exception("on_progress callback failed")
