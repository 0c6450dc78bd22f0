from datetime import datetime, timedelta

from flask import current_app

from fabtrack.errors import InvalidStateError, NotFoundError, ValidationError
from fabtrack.models.audit_log import AuditAction
from fabtrack.models.borrow_request import BorrowRequest, RequestStatus
from fabtrack.models.borrowed_item import BorrowedItem
from fabtrack.models.reminder import Reminder
from fabtrack.models.user import Role
from fabtrack.repositories.borrow_repo import BorrowRepo
from fabtrack.repositories.equipment_repo import EquipmentRepo
from fabtrack.repositories.reminder_repo import ReminderRepo
from fabtrack.repositories.user_repo import UserRepo
from fabtrack.services.audit_service import AuditService
from fabtrack.services.mail_service import MailService
from fabtrack.utils.dates import isoformat, utcnow
from fabtrack.utils.policy import Caller, ensure_can_view_request, scope_for
from fabtrack.utils.transaction import atomic

REMINDER_LOOKAHEAD_DAYS = 2


def reminder_cutoff(now: datetime) -> datetime:
    """End of the UTC day two calendar days after `now`."""
    day_start = datetime(now.year, now.month, now.day)
    return day_start + timedelta(days=REMINDER_LOOKAHEAD_DAYS + 1) - timedelta(milliseconds=1)


class BorrowService:
    """
    Borrow request lifecycle: Pending -> Approved -> Returned, or straight
    Pending -> Returned when approval leaves nothing to collect.

    Every mutation runs inside one atomic() block together with its audit
    entry. Mails go out after the commit and cannot undo it.
    """

    @staticmethod
    def _normalise_items(items):
        if not items:
            raise ValidationError("At least one item is required")

        normalised = []
        for item in items:
            try:
                equipment_id = int(item["equipment_id"])
                quantity = int(item.get("quantity", 1))
            except (KeyError, TypeError, ValueError):
                raise ValidationError("Each item needs an integer equipment_id and quantity")
            if quantity < 1:
                raise ValidationError(f"Quantity must be at least 1 (equipment ID={equipment_id})")
            normalised.append({
                "equipment_id": equipment_id,
                "quantity": quantity,
                "description": item.get("description") or None,
            })
        return normalised

    @staticmethod
    def submit_request(student_id: int, items, collection_datetime: datetime) -> BorrowRequest:
        student = UserRepo.get_by_id(student_id)
        if not student or student.role != Role.STUDENT:
            raise ValidationError("Invalid student or role")

        if not UserRepo.list_admins():
            raise ValidationError("No admin found")

        normalised = BorrowService._normalise_items(items)

        # resolve every reference before the first write
        equipment = EquipmentRepo.get_many(i["equipment_id"] for i in normalised)
        for item in normalised:
            if item["equipment_id"] not in equipment:
                raise ValidationError(f"Equipment not found: ID={item['equipment_id']}")

        with atomic():
            now = utcnow()
            borrow_request = BorrowRepo.add(BorrowRequest(
                user_id=student.id,
                borrow_date=now,
                created_at=now,
                status=RequestStatus.PENDING,
                return_date=None,
                collection_datetime=collection_datetime,
            ))
            for item in normalised:
                BorrowRepo.add_item(BorrowedItem(
                    request_id=borrow_request.id,
                    equipment_id=item["equipment_id"],
                    description=item["description"],
                    serial_number=None,
                    quantity=item["quantity"],
                ))
            AuditService.record(
                student.id,
                AuditAction.BORROW,
                f"{student.label} requested some item(s)",
                request_id=borrow_request.id,
            )

        current_app.logger.info(
            f"[borrow] request #{borrow_request.id} submitted by user #{student.id} "
            f"({len(normalised)} item(s))"
        )

        MailService.send_borrow_request_notification(
            student,
            MailService.admin_recipients(),
            borrow_request,
            BorrowRepo.items_for(borrow_request.id),
        )
        return borrow_request

    @staticmethod
    def approve_request(request_id: int, return_date: datetime, decisions, actor_id: int | None = None) -> BorrowRequest:
        """
        decisions: [{"borrowed_item_id", "allow", "description"?, "serial_number"?}]
        Disallowed items are deleted, allowed ones get their description and
        serial number updated in place. Items not mentioned are left as they are.
        """
        if return_date is None:
            raise ValidationError("returnDate is required")

        removed = []
        with atomic():
            borrow_request = BorrowRepo.get_for_update(request_id)
            if not borrow_request or borrow_request.status != RequestStatus.PENDING:
                raise NotFoundError("Request not found or already processed")

            resolved = []
            for decision in decisions or []:
                item_id = decision.get("borrowed_item_id")
                item = BorrowRepo.get_item(item_id) if item_id is not None else None
                if not item or item.request_id != borrow_request.id:
                    raise NotFoundError(f"BorrowedItem not found: ID={item_id}")
                resolved.append((item, decision))

            for item, decision in resolved:
                if decision.get("allow") is False:
                    removed.append(item.id)
                    BorrowRepo.delete_item(item)
                    continue
                if decision.get("description"):
                    item.description = decision["description"]
                if decision.get("serial_number"):
                    item.serial_number = decision["serial_number"]

            remaining = BorrowRepo.count_items(borrow_request.id)
            if remaining == 0:
                # nothing left to collect
                borrow_request.status = RequestStatus.RETURNED
            else:
                borrow_request.status = RequestStatus.APPROVED
                borrow_request.return_date = return_date

            details = f"Admin approved request #{borrow_request.id}, ReturnDate: {isoformat(return_date)}"
            if removed:
                details += ", removed item(s): " + ", ".join(f"#{i}" for i in removed)
            AuditService.record(
                actor_id or borrow_request.user_id,
                AuditAction.APPROVE,
                details,
                request_id=borrow_request.id,
            )

        current_app.logger.info(
            f"[borrow] request #{borrow_request.id} -> {borrow_request.status} "
            f"(kept={remaining}, removed={len(removed)})"
        )

        student = UserRepo.get_by_id(borrow_request.user_id)
        if student:
            if remaining:
                MailService.send_approval_notification(
                    student, borrow_request, BorrowRepo.items_for(borrow_request.id)
                )
            else:
                MailService.send_declined_notification(student, borrow_request)
        return borrow_request

    @staticmethod
    def return_equipment(request_id: int, actor_id: int | None = None) -> BorrowRequest:
        with atomic():
            borrow_request = BorrowRepo.get_for_update(request_id)
            if not borrow_request or borrow_request.status != RequestStatus.APPROVED:
                raise InvalidStateError("Invalid return request")

            borrow_request.status = RequestStatus.RETURNED

            actor = UserRepo.get_by_id(actor_id or borrow_request.user_id)
            label = actor.label if actor else "Unknown user"
            AuditService.record(
                actor.id if actor else borrow_request.user_id,
                AuditAction.RETURN,
                f"{label} returned borrow request #{borrow_request.id}",
                request_id=borrow_request.id,
            )

        current_app.logger.info(f"[borrow] request #{borrow_request.id} returned")

        student = UserRepo.get_by_id(borrow_request.user_id)
        if student:
            MailService.send_return_confirmation(student, borrow_request)
        return borrow_request

    @staticmethod
    def send_due_reminders(now: datetime | None = None) -> dict:
        """
        Remind owners of approved requests due by the end of the day after
        tomorrow (UTC). Without REMINDER_DEDUPE_HOURS every call re-sends.
        """
        now = now or utcnow()
        cutoff = reminder_cutoff(now)
        dedupe_hours = int(current_app.config.get("REMINDER_DEDUPE_HOURS") or 0)

        outcomes = []
        skipped = 0
        for borrow_request in BorrowRepo.find_due(cutoff):
            student = borrow_request.user
            if not student:
                continue
            if dedupe_hours > 0 and ReminderRepo.sent_since(
                borrow_request.id, now - timedelta(hours=dedupe_hours)
            ):
                skipped += 1
                continue
            ok = MailService.send_reminder(student, borrow_request)
            outcomes.append((borrow_request, student, ok))

        count = 0
        with atomic():
            for borrow_request, student, ok in outcomes:
                ReminderRepo.add(Reminder(request_id=borrow_request.id, reminder_date=now, sent=ok))
                if not ok:
                    continue
                AuditService.record(
                    borrow_request.user_id,
                    AuditAction.NOTIFY,
                    f"Reminder sent to {student.name} for request #{borrow_request.id}",
                    request_id=borrow_request.id,
                )
                count += 1

        current_app.logger.info(
            f"[reminders] cutoff={isoformat(cutoff)} sent={count} "
            f"failed={len(outcomes) - count} skipped={skipped}"
        )
        return {"count": count, "cutoff": cutoff}

    @staticmethod
    def get_all_requests(caller: Caller):
        return BorrowRepo.list_requests(user_id=scope_for(caller))

    @staticmethod
    def get_pending_requests(caller: Caller):
        return BorrowRepo.list_requests(user_id=scope_for(caller), status=RequestStatus.PENDING)

    @staticmethod
    def get_items_for_request(caller: Caller, request_id: int):
        borrow_request = BorrowRepo.get(request_id)
        if not borrow_request:
            raise NotFoundError("Request not found")
        ensure_can_view_request(caller, borrow_request)
        return BorrowRepo.items_for(request_id)

    @staticmethod
    def get_audit_log():
        return AuditService.list_logs()
