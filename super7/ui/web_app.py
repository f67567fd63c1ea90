"""NiceGUI web UI for Super7."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nicegui import app, ui

from super7.core import config
from super7.ui.browser_cues import (
    WAKE_LOCK_OFF_JS,
    WAKE_LOCK_ON_JS,
    BrowserAudio,
    BrowserCueQueue,
    BrowserHaptics,
)
from super7.ui.controller import UIController, clamp_minutes
from super7.workout.progress import format_time
from super7.workout.runner import WorkoutProgress
from super7.workout.timer import AsyncioTicker

logger = logging.getLogger(__name__)

REFRESH_INTERVAL_SEC = 0.25


@dataclass
class WebState:
    status: str = "Ready"
    duration_minutes: int = config.DEFAULT_DURATION_MINUTES
    finished_message: str = ""
    wake_lock_held: bool = False


def run_web_ui(
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    tick_interval_sec: float | None = None,
) -> int:
    cues = BrowserCueQueue()
    controller = UIController(
        BrowserAudio(cues),
        BrowserHaptics(cues),
        ticker=AsyncioTicker(tick_interval_sec),
    )
    state = WebState(duration_minutes=controller.default_minutes())

    ui.add_head_html(
        """
        <style>
          :root {
            --s7-bg: #f6f7fb;
            --s7-primary: #ff5a36;
            --s7-rest: #2b9bf4;
            --s7-text: #1f2937;
            --s7-muted: #6b7280;
          }
          body { background: var(--s7-bg); color: var(--s7-text); font-family: Arial, sans-serif; }
          .s7-card { border-radius: 16px; box-shadow: 0 8px 20px rgba(15, 23, 42, 0.08); }
          .s7-title { color: var(--s7-primary); font-weight: 800; }
          .s7-muted { color: var(--s7-muted); }
          .s7-timer { font-size: 4.5rem; font-weight: 800; letter-spacing: 0.04em; }
          .s7-exercise { color: var(--s7-primary); }
          .s7-rest { color: var(--s7-rest); }
        </style>
        """
    )

    with ui.column().classes("w-full max-w-xl mx-auto gap-4 p-4") as home_view:
        ui.label("Super7").classes("text-4xl s7-title")
        ui.label("Workouts that fit your schedule").classes("s7-muted")
        with ui.card().classes("w-full s7-card"):
            ui.label("I have").classes("text-lg")
            with ui.row().classes("w-full items-center justify-center gap-4"):
                minus_btn = ui.button("-").props("round")
                minutes_input = ui.number(
                    "minutes",
                    value=state.duration_minutes,
                    min=config.MIN_DURATION_MINUTES,
                    max=config.MAX_DURATION_MINUTES,
                    step=1,
                    format="%d",
                ).classes("w-32")
                plus_btn = ui.button("+").props("round")
            plan_info = ui.label("").classes("text-sm s7-muted")
            start_btn = ui.button("Start Workout").classes("w-full").props("size=lg")
        settings_btn = ui.button("Settings").props("flat")
        ui.label("Recent workouts").classes("text-base font-medium")
        history = ui.table(
            columns=[
                {"name": "when", "label": "When", "field": "when"},
                {"name": "mins", "label": "Mins", "field": "mins"},
                {"name": "steps", "label": "Steps", "field": "steps"},
                {"name": "status", "label": "Status", "field": "status"},
            ],
            rows=[],
        ).classes("w-full")

    with ui.column().classes("w-full max-w-xl mx-auto gap-3 p-4") as workout_view:
        with ui.row().classes("w-full items-center justify-between"):
            step_counter = ui.label("Step 0/0").classes("text-sm s7-muted")
            status_label = ui.label("").classes("text-sm s7-muted")
        overall_bar = ui.linear_progress(value=0.0, show_value=False).classes("w-full")
        with ui.card().classes("w-full s7-card items-center"):
            kind_label = ui.label("").classes("text-xs uppercase s7-muted")
            step_name = ui.label("").classes("text-2xl font-bold")
            step_desc = ui.label("").classes("text-sm s7-muted")
            timer_label = ui.label("00:00").classes("s7-timer")
            step_bar = ui.linear_progress(value=0.0, show_value=False).classes("w-full")
            next_label = ui.label("").classes("text-sm s7-muted")
        with ui.row().classes("w-full justify-center gap-2"):
            begin_btn = ui.button("Start")
            pause_btn = ui.button("Pause")
            resume_btn = ui.button("Resume")
            skip_btn = ui.button("Skip").props("outline")
            end_btn = ui.button("End").props("color=negative")
        with ui.column().classes("w-full items-center gap-2") as done_view:
            ui.label("Workout Complete!").classes("text-3xl s7-title")
            done_message = ui.label("").classes("s7-muted")
            with ui.row().classes("gap-2"):
                restart_btn = ui.button("Restart")
                home_btn = ui.button("Back to Home")

    workout_view.set_visibility(False)
    done_view.set_visibility(False)

    with ui.dialog() as settings_dialog, ui.card().classes("w-[420px] max-w-[96vw] s7-card"):
        ui.label("Settings").classes("text-lg font-semibold")
        sound_switch = ui.switch("Sound effects")
        haptics_switch = ui.switch("Vibration")
        beeps_switch = ui.switch("Countdown beeps (3-2-1)")
        awake_switch = ui.switch("Keep screen awake during workouts")
        ui.button("Close", on_click=settings_dialog.close).props("outline")

    def sync_settings_switches() -> None:
        current = controller.settings
        sound_switch.value = current.sound_enabled
        haptics_switch.value = current.haptics_enabled
        beeps_switch.value = current.countdown_beeps
        awake_switch.value = current.keep_screen_awake

    def set_wake_lock(held: bool) -> None:
        if held == state.wake_lock_held:
            return
        state.wake_lock_held = held
        ui.run_javascript(WAKE_LOCK_ON_JS if held else WAKE_LOCK_OFF_JS)

    def show_home() -> None:
        home_view.set_visibility(True)
        workout_view.set_visibility(False)
        set_wake_lock(False)
        refresh_history()

    def show_workout() -> None:
        home_view.set_visibility(False)
        workout_view.set_visibility(True)

    def refresh_history() -> None:
        rows: list[dict[str, str | int]] = []
        for record in controller.recent_workouts():
            rows.append(
                {
                    "when": record.timestamp[:16].replace("T", " "),
                    "mins": f"{record.duration_minutes:g}",
                    "steps": f"{record.steps_completed}/{record.total_steps}",
                    "status": "Completed" if record.completed else "Ended early",
                }
            )
        history.rows = rows
        history.update()

    def refresh_plan_info() -> None:
        minutes = clamp_minutes(minutes_input.value)
        plan_info.text = f"{minutes} minute{'s' if minutes != 1 else ''} circuit"

    def render_progress(progress: WorkoutProgress) -> None:
        step_counter.text = f"Step {progress.step_index}/{progress.step_total}"
        overall_bar.value = progress.overall_pct / 100.0
        status_label.text = state.status
        if progress.is_complete:
            done_view.set_visibility(True)
            step_name.text = ""
            step_desc.text = ""
            kind_label.text = ""
            timer_label.text = "00:00"
            step_bar.value = 1.0
            next_label.text = ""
            done_message.text = state.finished_message
        else:
            done_view.set_visibility(False)
            kind_label.text = progress.step_kind or ""
            step_name.text = progress.step_name
            step_name.classes(
                replace="text-2xl font-bold "
                + ("s7-rest" if progress.step_kind == "rest" else "s7-exercise")
            )
            step_desc.text = progress.step_description or ""
            timer_label.text = format_time(progress.remaining_sec)
            step_bar.value = controller.runner.timer.progress
            next_label.text = (
                f"Next: {progress.next_step_name}" if progress.next_step_name else "Last step"
            )
        begin_btn.set_visibility(not progress.is_active and not progress.is_complete)
        pause_btn.set_visibility(progress.is_active and not progress.is_paused)
        resume_btn.set_visibility(progress.is_active and progress.is_paused)
        skip_btn.set_enabled(progress.is_active)
        end_btn.set_enabled(not progress.is_complete)
        set_wake_lock(
            controller.settings.keep_screen_awake
            and progress.is_active
            and not progress.is_complete
        )

    def refresh_ui() -> None:
        cues.flush()
        if workout_view.visible:
            render_progress(controller.progress())

    def on_finish(completed: bool) -> None:
        state.status = "Workout completed" if completed else "Workout ended"
        state.finished_message = (
            f"Great job! You completed a {state.duration_minutes}-minute workout."
            if completed
            else "Workout ended early."
        )

    def on_minus() -> None:
        minutes_input.value = clamp_minutes((minutes_input.value or 0) - 1)
        refresh_plan_info()

    def on_plus() -> None:
        minutes_input.value = clamp_minutes((minutes_input.value or 0) + 1)
        refresh_plan_info()

    def on_start_workout() -> None:
        state.duration_minutes = clamp_minutes(minutes_input.value)
        minutes_input.value = state.duration_minutes
        plan = controller.create_workout(state.duration_minutes)
        state.status = f"{len(plan.steps)} steps | {format_time(plan.total_duration_sec)}"
        state.finished_message = ""
        show_workout()
        refresh_ui()

    def on_begin() -> None:
        controller.start_workout()
        refresh_ui()

    def on_pause() -> None:
        controller.pause_workout()
        refresh_ui()

    def on_resume() -> None:
        controller.resume_workout()
        refresh_ui()

    def on_skip() -> None:
        controller.feedback.selection()
        controller.skip_step()
        refresh_ui()

    def on_end() -> None:
        controller.end_workout()
        show_home()

    def on_restart() -> None:
        controller.restart_workout()
        state.status = "Restarted"
        refresh_ui()

    def on_open_settings() -> None:
        controller.feedback.selection()
        sync_settings_switches()
        settings_dialog.open()

    async def on_startup() -> None:
        loaded = await controller.load_settings()
        logger.info("Settings loaded: %s", loaded)
        sync_settings_switches()

    controller.set_callbacks(on_finish=on_finish)
    minus_btn.on_click(on_minus)
    plus_btn.on_click(on_plus)
    minutes_input.on_value_change(lambda _: refresh_plan_info())
    start_btn.on_click(on_start_workout)
    settings_btn.on_click(on_open_settings)
    begin_btn.on_click(on_begin)
    pause_btn.on_click(on_pause)
    resume_btn.on_click(on_resume)
    skip_btn.on_click(on_skip)
    end_btn.on_click(on_end)
    restart_btn.on_click(on_restart)
    home_btn.on_click(show_home)
    sound_switch.on_value_change(
        lambda e: controller.update_settings(sound_enabled=bool(e.value))
    )
    haptics_switch.on_value_change(
        lambda e: controller.update_settings(haptics_enabled=bool(e.value))
    )
    beeps_switch.on_value_change(
        lambda e: controller.update_settings(countdown_beeps=bool(e.value))
    )
    awake_switch.on_value_change(
        lambda e: controller.update_settings(keep_screen_awake=bool(e.value))
    )

    app.on_startup(on_startup)
    app.on_shutdown(controller.close)
    refresh_plan_info()
    refresh_history()
    ui.timer(REFRESH_INTERVAL_SEC, refresh_ui)
    ui.run(host=host, port=port, reload=False, title="Super7")
    return 0
