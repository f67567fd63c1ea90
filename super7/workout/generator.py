"""Duration-fitted circuit plan generation."""

from __future__ import annotations

import logging
import math

from super7.workout.catalog import (
    CIRCUIT_REST_DURATION_SEC,
    DEFAULT_EXERCISE_DURATION_SEC,
    DEFAULT_REST_DURATION_SEC,
    EXERCISES,
    MIN_COOLDOWN_SEC,
    STANDARD_CIRCUIT_DURATION_SEC,
)
from super7.workout.model import EMPTY_PLAN, WorkoutPlan, WorkoutStep

logger = logging.getLogger(__name__)


def requested_seconds(duration_minutes: object) -> int:
    """Convert a requested duration to whole seconds, 0 when unusable."""
    try:
        minutes = float(duration_minutes)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(minutes):
        return 0
    # half-up rounding, not banker's rounding
    return max(0, math.floor(minutes * 60 + 0.5))


def _exercise_duration(total_seconds: int, circuit_count: int) -> int:
    duration = DEFAULT_EXERCISE_DURATION_SEC
    if circuit_count == 1 and total_seconds > STANDARD_CIRCUIT_DURATION_SEC:
        extra_time = total_seconds - STANDARD_CIRCUIT_DURATION_SEC
        duration += extra_time // len(EXERCISES)
    return duration


def generate_workout_plan(duration_minutes: float) -> WorkoutPlan:
    """Build the circuit plan whose total duration best fits ``duration_minutes``.

    Circuits repeat the catalog in fixed order with a rest between exercises
    and a longer rest between circuits. The running total is checked after
    each exercise/rest pair and generation stops as soon as it reaches the
    request. A plan that runs out of circuits at least ``MIN_COOLDOWN_SEC``
    short of the request is closed with a cooldown step.
    """
    total_seconds = requested_seconds(duration_minutes)
    if total_seconds <= 0:
        return EMPTY_PLAN

    circuit_count = max(1, total_seconds // STANDARD_CIRCUIT_DURATION_SEC)
    exercise_duration = _exercise_duration(total_seconds, circuit_count)

    steps: list[WorkoutStep] = []
    current_duration = 0
    last_index = len(EXERCISES) - 1

    for circuit in range(circuit_count):
        if circuit > 0:
            steps.append(
                WorkoutStep(
                    id=f"rest-between-circuit-{circuit}",
                    kind="rest",
                    name="Circuit Rest",
                    duration_sec=CIRCUIT_REST_DURATION_SEC,
                )
            )
            current_duration += CIRCUIT_REST_DURATION_SEC

        for index, exercise in enumerate(EXERCISES):
            steps.append(
                WorkoutStep(
                    id=f"{exercise.id}-{circuit}",
                    kind="exercise",
                    name=exercise.name,
                    description=exercise.description,
                    duration_sec=exercise_duration,
                )
            )
            current_duration += exercise_duration

            if index < last_index:
                steps.append(
                    WorkoutStep(
                        id=f"rest-{exercise.id}-{circuit}",
                        kind="rest",
                        name="Rest",
                        duration_sec=DEFAULT_REST_DURATION_SEC,
                    )
                )
                current_duration += DEFAULT_REST_DURATION_SEC

            if current_duration >= total_seconds:
                logger.debug(
                    "Plan truncated at %s (%ss of %ss)",
                    steps[-1].id,
                    current_duration,
                    total_seconds,
                )
                return WorkoutPlan(steps=tuple(steps))

    shortfall = total_seconds - current_duration
    if shortfall >= MIN_COOLDOWN_SEC:
        steps.append(
            WorkoutStep(
                id="cooldown",
                kind="rest",
                name="Cooldown",
                duration_sec=shortfall,
            )
        )

    return WorkoutPlan(steps=tuple(steps))
