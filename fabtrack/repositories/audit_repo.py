from sqlalchemy.orm import joinedload

from fabtrack.extensions import db
from fabtrack.models.audit_log import AuditLog


class AuditRepo:
    @staticmethod
    def list_all():
        return (
            AuditLog.query
            .options(joinedload(AuditLog.user))
            .order_by(AuditLog.id.desc())
            .all()
        )

    @staticmethod
    def add(entry: AuditLog):
        db.session.add(entry)
        return entry
