from fabtrack.extensions import db
from fabtrack.utils.dates import utcnow


class RequestStatus:
    PENDING = "Pending"
    APPROVED = "Approved"
    RETURNED = "Returned"
    OVERDUE = "Overdue"  # derived at read time, never stored by the workflow

    ALL = (PENDING, APPROVED, RETURNED, OVERDUE)


class BorrowRequest(db.Model):
    __tablename__ = "borrow_requests"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    borrow_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    status = db.Column(db.String(20), nullable=False, default=RequestStatus.PENDING, index=True)
    return_date = db.Column(db.DateTime, nullable=True)  # set once, at approval
    collection_datetime = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    # optimistic lock: concurrent approve/return on the same row loses at commit
    version = db.Column(db.Integer, nullable=False, default=1)

    user = db.relationship("User", back_populates="borrow_requests")
    items = db.relationship(
        "BorrowedItem",
        back_populates="request",
        cascade="all, delete-orphan",
        order_by="BorrowedItem.id",
    )
    reminders = db.relationship("Reminder", back_populates="request", order_by="Reminder.id")

    __mapper_args__ = {"version_id_col": version}

    def is_overdue(self, now=None) -> bool:
        if self.status != RequestStatus.APPROVED or self.return_date is None:
            return False
        return self.return_date < (now or utcnow())

    def effective_status(self, now=None) -> str:
        return RequestStatus.OVERDUE if self.is_overdue(now) else self.status
