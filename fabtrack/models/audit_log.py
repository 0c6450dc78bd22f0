from fabtrack.extensions import db
from fabtrack.utils.dates import utcnow


class AuditAction:
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"
    BORROW = "Borrow"
    RETURN = "Return"
    NOTIFY = "Notify"
    APPROVE = "Approve"

    ALL = (CREATE, UPDATE, DELETE, BORROW, RETURN, NOTIFY, APPROVE)


class AuditLog(db.Model):
    """Append-only. Nothing in the application updates or deletes these rows."""

    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    # no FK: the entry must outlive the request it mentions
    request_id = db.Column(db.Integer, nullable=True, index=True)

    action = db.Column(db.Enum(*AuditAction.ALL, name="audit_action"), nullable=False)
    details = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime, nullable=False, default=utcnow)

    user = db.relationship("User")
