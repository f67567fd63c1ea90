"""Terminal CLI entrypoint for Super7."""

from __future__ import annotations

import argparse
import asyncio
import logging

from super7.core import config
from super7.core.engine import TerminalWorkout
from super7.ui.controller import UIController
from super7.workout.generator import generate_workout_plan
from super7.workout.progress import format_time


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Super7 circuit workout timer")
    parser.add_argument(
        "--minutes",
        type=float,
        default=None,
        help="Requested workout duration in minutes (default: last used, else 7)",
    )
    parser.add_argument("--plan", action="store_true", help="Print the generated plan")
    parser.add_argument("--run", action="store_true", help="Run the workout in the terminal")
    parser.add_argument("--history", action="store_true", help="Show recent workouts")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI)",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8080,
        help="Port for --ui-web",
    )
    parser.add_argument(
        "--tick-interval",
        type=float,
        default=config.TICK_INTERVAL_SEC,
        help="Seconds per countdown tick (lower it to fast-forward for debugging)",
    )
    parser.add_argument("--mute", action="store_true", help="Disable terminal sound cues")
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def print_plan(duration_minutes: float) -> int:
    plan = generate_workout_plan(duration_minutes)
    if plan.is_empty:
        print("Empty plan: duration must be greater than zero")
        return 1

    print(f"{len(plan.steps)} steps, total {format_time(plan.total_duration_sec)}")
    for index, step in enumerate(plan.steps, start=1):
        kind = "REST" if step.is_rest else "WORK"
        print(f"{index:>3}. {kind:<4} {format_time(step.duration_sec)}  {step.name}")
    return 0


def print_history(controller: UIController) -> int:
    records = controller.recent_workouts()
    if not records:
        print("No workouts recorded yet")
        return 0
    for record in records:
        status = "done" if record.completed else "ended"
        print(
            f"{record.timestamp[:19]}  {record.duration_minutes:>5g} min"
            f"  {record.steps_completed:>3}/{record.total_steps:<3}"
            f"  {format_time(record.elapsed_duration_sec)}  {status}"
        )
    return 0


async def run_terminal(duration_minutes: float, tick_interval: float, mute: bool) -> int:
    workout = TerminalWorkout(tick_interval_sec=tick_interval, mute=mute)
    try:
        completed = await workout.run(duration_minutes)
    except asyncio.CancelledError:
        workout.stop()
        raise
    return 0 if completed else 1


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.ui_web:
        from super7.ui.web_app import run_web_ui

        return run_web_ui(
            host=args.web_host,
            port=args.web_port,
            tick_interval_sec=args.tick_interval,
        )

    controller = UIController()
    if args.history:
        return print_history(controller)

    minutes = args.minutes if args.minutes is not None else controller.default_minutes()

    if args.plan:
        return print_plan(minutes)

    if args.run:
        try:
            return asyncio.run(run_terminal(minutes, args.tick_interval, args.mute))
        except KeyboardInterrupt:
            print("Workout interrupted")
            return 130

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
