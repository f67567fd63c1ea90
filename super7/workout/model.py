"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


StepKind = Literal["exercise", "rest"]


@dataclass(frozen=True)
class Exercise:
    id: str
    name: str
    duration_sec: int
    description: str | None = None


@dataclass(frozen=True)
class WorkoutStep:
    id: str
    kind: StepKind
    name: str
    duration_sec: int
    description: str | None = None

    @property
    def is_rest(self) -> bool:
        return self.kind == "rest"


@dataclass(frozen=True)
class WorkoutPlan:
    steps: tuple[WorkoutStep, ...] = ()

    @property
    def total_duration_sec(self) -> int:
        return sum(step.duration_sec for step in self.steps)

    @property
    def is_empty(self) -> bool:
        return not self.steps


EMPTY_PLAN = WorkoutPlan()
