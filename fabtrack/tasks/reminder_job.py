# fabtrack/tasks/reminder_job.py
from fabtrack.services.borrow_service import BorrowService


def run_reminder_job(app):
    """Daily due-date sweep; runs outside any request so it opens its own app context."""
    with app.app_context():
        result = BorrowService.send_due_reminders()
        app.logger.info(f"[scheduler] reminder job done: sent={result['count']}")
        return result
