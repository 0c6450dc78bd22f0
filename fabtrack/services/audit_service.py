from fabtrack.models.audit_log import AuditLog, AuditAction
from fabtrack.repositories.audit_repo import AuditRepo
from fabtrack.utils.dates import utcnow


class AuditService:
    @staticmethod
    def record(actor_id: int, action: str, details: str, request_id: int | None = None) -> AuditLog:
        """
        Stage one audit row in the caller's transaction. No commit here: the
        entry lands together with the mutation it describes, or not at all.
        """
        if action not in AuditAction.ALL:
            raise ValueError(f"Unknown audit action: {action}")

        entry = AuditLog(
            user_id=actor_id,
            request_id=request_id,
            action=action,
            details=details,
            timestamp=utcnow(),
        )
        return AuditRepo.add(entry)

    @staticmethod
    def list_logs():
        return AuditRepo.list_all()
