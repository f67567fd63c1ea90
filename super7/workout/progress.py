"""Workout progress and time formatting helpers."""

from __future__ import annotations


def calculate_progress(
    current_step_index: int,
    total_steps: int,
    step_duration: int,
    remaining_time: int,
) -> float:
    """Overall completion percentage (0-100) through a plan."""
    if total_steps <= 0:
        return 0.0
    step_progress = 0.0
    if step_duration > 0:
        step_progress = (step_duration - remaining_time) / step_duration
    overall = (current_step_index + step_progress) / total_steps * 100.0
    return max(0.0, min(100.0, overall))


def format_time(seconds: int) -> str:
    safe = max(0, int(seconds))
    minutes, secs = divmod(safe, 60)
    return f"{minutes:02d}:{secs:02d}"
