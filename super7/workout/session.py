"""Step sequencing state for one workout session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from super7.workout.generator import generate_workout_plan
from super7.workout.model import WorkoutPlan, WorkoutStep
from super7.workout.progress import calculate_progress

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    plan: WorkoutPlan | None = None
    current_step_index: int = 0
    is_active: bool = False
    is_paused: bool = False
    is_complete: bool = False
    ended_early: bool = False
    remaining_time: int = 0
    elapsed_time: int = 0


class WorkoutSession:
    """Mutable session over an immutable plan.

    Commands never raise: without a plan they are no-ops and step queries
    return ``None``. The caller drives ``update_remaining_time`` once per
    countdown tick and ``complete_step`` when a step's countdown ends.
    """

    def __init__(self) -> None:
        self.state = SessionState()

    @property
    def plan(self) -> WorkoutPlan | None:
        return self.state.plan

    @property
    def total_steps(self) -> int:
        return len(self.state.plan.steps) if self.state.plan is not None else 0

    def snapshot(self) -> SessionState:
        return replace(self.state)

    def _first_step_duration(self) -> int:
        plan = self.state.plan
        if plan is None or not plan.steps:
            return 0
        return plan.steps[0].duration_sec

    def create_workout(self, duration_minutes: float) -> WorkoutPlan:
        plan = generate_workout_plan(duration_minutes)
        self.state = SessionState(plan=plan)
        self.state.remaining_time = self._first_step_duration()
        logger.info(
            "Created workout: %s min -> %d steps, %ss",
            duration_minutes,
            len(plan.steps),
            plan.total_duration_sec,
        )
        return plan

    def start_workout(self) -> None:
        if self.state.is_complete:
            return
        self.state.is_active = True
        self.state.is_paused = False

    def pause_workout(self) -> None:
        self.state.is_paused = True

    def resume_workout(self) -> None:
        self.state.is_paused = False

    def skip_step(self) -> None:
        state = self.state
        if state.plan is None or state.is_complete:
            return
        next_index = state.current_step_index + 1
        if next_index >= len(state.plan.steps):
            state.current_step_index = len(state.plan.steps)
            state.remaining_time = 0
            state.is_complete = True
            state.is_active = False
            state.is_paused = False
            logger.info("Workout complete after %ss", state.elapsed_time)
            return
        state.current_step_index = next_index
        state.remaining_time = state.plan.steps[next_index].duration_sec

    def complete_step(self) -> None:
        self.skip_step()

    def restart_workout(self) -> None:
        if self.state.plan is None:
            return
        self.state = SessionState(
            plan=self.state.plan,
            is_active=True,
            remaining_time=self._first_step_duration(),
        )

    def end_workout(self) -> None:
        state = self.state
        if not state.is_complete:
            state.ended_early = True
            logger.info("Workout ended early at step %d", state.current_step_index)
        state.is_active = False
        state.is_paused = False
        state.is_complete = True

    def update_remaining_time(self, seconds: int) -> None:
        self.state.remaining_time = max(0, int(seconds))
        self.state.elapsed_time += 1

    def get_current_step(self) -> WorkoutStep | None:
        plan = self.state.plan
        index = self.state.current_step_index
        if plan is None or not 0 <= index < len(plan.steps):
            return None
        return plan.steps[index]

    def get_next_step(self) -> WorkoutStep | None:
        plan = self.state.plan
        index = self.state.current_step_index + 1
        if plan is None or not 0 <= index < len(plan.steps):
            return None
        return plan.steps[index]

    def progress(self) -> float:
        total = self.total_steps
        if total == 0:
            return 0.0
        step = self.get_current_step()
        return calculate_progress(
            self.state.current_step_index,
            total,
            step.duration_sec if step is not None else 0,
            self.state.remaining_time,
        )
