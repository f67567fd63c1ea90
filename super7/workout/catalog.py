"""Built-in exercise catalog for the standard 7-minute circuit."""

from __future__ import annotations

from super7.workout.model import Exercise

DEFAULT_EXERCISE_DURATION_SEC = 30
DEFAULT_REST_DURATION_SEC = 10
CIRCUIT_REST_DURATION_SEC = 30
MIN_COOLDOWN_SEC = 30


EXERCISES: tuple[Exercise, ...] = (
    Exercise(
        "jumpingjacks",
        "Jumping Jacks",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Jump while raising your arms and separating your legs",
    ),
    Exercise(
        "wallsit",
        "Wall Sit",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Hold a sitting position with your back against a wall",
    ),
    Exercise(
        "pushups",
        "Push-ups",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Lower and raise your body using your arms",
    ),
    Exercise(
        "crunches",
        "Abdominal Crunches",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Curl your upper body towards your knees",
    ),
    Exercise(
        "stepups",
        "Step-ups",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Step up and down from a chair",
    ),
    Exercise(
        "squats",
        "Squats",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Lower your body by bending your knees",
    ),
    Exercise(
        "triceps",
        "Tricep Dips",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Lower and raise your body using a chair",
    ),
    Exercise(
        "plank",
        "Plank",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Hold a push-up position with your body straight",
    ),
    Exercise(
        "highknees",
        "High Knees",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Run in place raising your knees high",
    ),
    Exercise(
        "lunges",
        "Lunges",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Step forward and lower your body",
    ),
    Exercise(
        "pushuprotation",
        "Push-up with Rotation",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Do a push-up, then rotate and extend one arm upward",
    ),
    Exercise(
        "sideplank",
        "Side Plank",
        DEFAULT_EXERCISE_DURATION_SEC,
        "Hold your body sideways off the ground",
    ),
)


def list_exercises() -> tuple[Exercise, ...]:
    return EXERCISES


def standard_circuit_duration(exercises: tuple[Exercise, ...] = EXERCISES) -> int:
    """One pass through ``exercises`` at default durations, no trailing rest."""
    if not exercises:
        return 0
    work = sum(exercise.duration_sec for exercise in exercises)
    return work + DEFAULT_REST_DURATION_SEC * (len(exercises) - 1)


# 12 x 30s + 11 x 10s
STANDARD_CIRCUIT_DURATION_SEC = standard_circuit_duration()
