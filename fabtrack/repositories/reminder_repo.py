from datetime import datetime

from fabtrack.extensions import db
from fabtrack.models.reminder import Reminder


class ReminderRepo:
    @staticmethod
    def sent_since(request_id: int, since: datetime) -> bool:
        return Reminder.query.filter(
            Reminder.request_id == request_id,
            Reminder.sent.is_(True),
            Reminder.reminder_date >= since,
        ).first() is not None

    @staticmethod
    def add(reminder: Reminder):
        db.session.add(reminder)
        return reminder
