from fabtrack.extensions import db
from fabtrack.utils.dates import utcnow


class Reminder(db.Model):
    __tablename__ = "reminders"

    id = db.Column(db.Integer, primary_key=True)
    request_id = db.Column(db.Integer, db.ForeignKey("borrow_requests.id"), nullable=False, index=True)
    reminder_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    sent = db.Column(db.Boolean, nullable=False, default=False)

    request = db.relationship("BorrowRequest", back_populates="reminders")
