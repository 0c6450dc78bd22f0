# fabtrack/tasks/scheduler.py
from __future__ import annotations

import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from fabtrack.tasks.reminder_job import run_reminder_job


def start_scheduler(app):
    """
    Starts the daily reminder sweep when SCHEDULER_ENABLED is set.
    - Debug reloader runs two processes; only the real one schedules.
    - The job gets its own app context.
    """
    if not app.config.get("SCHEDULER_ENABLED"):
        app.logger.info("[scheduler] disabled (SCHEDULER_ENABLED=0)")
        return None

    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    hour = int(app.config.get("REMINDER_HOUR_UTC", 8))
    scheduler = BackgroundScheduler(timezone="UTC")

    def _job_wrapper():
        try:
            run_reminder_job(app)
        except Exception as ex:
            app.logger.exception(f"[scheduler] reminder job error: {ex}")

    scheduler.add_job(
        func=_job_wrapper,
        trigger=CronTrigger(hour=hour, minute=0, timezone="UTC"),
        id="due_reminder_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=3600,
    )
    scheduler.start()
    app.logger.info(f"[scheduler] Due reminder job started (daily at {hour:02d}:00 UTC).")

    app.extensions["apscheduler"] = scheduler
    return scheduler
