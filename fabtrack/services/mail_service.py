# fabtrack/services/mail_service.py
from __future__ import annotations

from flask import current_app
from flask_mail import Message

from fabtrack.extensions import mail
from fabtrack.repositories.user_repo import UserRepo
from fabtrack.utils.dates import isoformat

SIGNATURE = ["Regards,", "FabTrack"]


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        Never raises; a failed mail must not undo a committed transition.
        """
        if not to_email:
            current_app.logger.warning(f"[mail] No recipient for '{subject}'")
            return False, "missing_email"
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[mail] Could not send '{subject}' to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def admin_recipients() -> list[str]:
        configured = current_app.config.get("ADMIN_NOTIFY_EMAILS") or ""
        emails = [e.strip() for e in configured.split(",") if e.strip()]
        if emails:
            return emails
        return [a.email for a in UserRepo.list_admins() if a.email]

    @staticmethod
    def _request_lines(items) -> str:
        lines = []
        for item in items:
            name = item.equipment.name if item.equipment else "Unknown Equipment"
            qty = item.quantity or 1
            desc = f' | Description: "{item.description}"' if item.description else ""
            lines.append(f" - {name} (Qty: {qty}{desc})")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _approved_lines(items) -> str:
        lines = []
        for item in items:
            name = item.equipment.name if item.equipment else "Unknown Equipment"
            qty = item.quantity or 1
            sn = f" (SN: {item.serial_number})" if item.serial_number else ""
            desc = f' | Description: "{item.description}"' if item.description else ""
            lines.append(f" - {name} x{qty}{sn}{desc}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def send_borrow_request_notification(student, admin_emails, borrow_request, items) -> int:
        """Confirmation to the student plus an alert to each admin recipient. Returns mails sent."""
        item_details = MailService._request_lines(items)
        pickup = isoformat(borrow_request.collection_datetime)

        student_body = "\n".join([
            f"Dear {student.name},",
            "",
            f"Your borrow request #{borrow_request.id} has been submitted with the following items:",
            "",
            item_details,
            f"You will need to collect the items at the Fab Lab on: {pickup}",
            "",
            *SIGNATURE,
        ])
        sent = 0
        ok, _err = MailService.send_email(
            student.email, f"Borrow Request #{borrow_request.id} Submitted", student_body
        )
        sent += int(ok)

        admin_body = "\n".join([
            f"A new borrow request #{borrow_request.id} has been submitted by {student.name} "
            f"with the following items:",
            "",
            item_details,
        ])
        if pickup:
            admin_body += f"Requested pick-up date/time: {pickup}\n\n"
        admin_body += "\n".join([
            "Please prepare the component(s) for pickup and verify issuance.",
            "",
            *SIGNATURE,
        ])
        for admin_email in admin_emails:
            ok, _err = MailService.send_email(
                admin_email, f"New Borrow Request #{borrow_request.id}", admin_body
            )
            sent += int(ok)
        return sent

    @staticmethod
    def send_approval_notification(student, borrow_request, items) -> bool:
        body = "\n".join([
            f"Dear {student.name},",
            "",
            f"Your borrow request #{borrow_request.id} has been approved.",
            f"Return deadline: {isoformat(borrow_request.return_date)}",
            "",
            "Approved items:",
            MailService._approved_lines(items),
            "",
            "Please return items by the deadline.",
            "",
            *SIGNATURE,
        ])
        ok, _err = MailService.send_email(
            student.email, f"Borrow Request #{borrow_request.id} Approved", body
        )
        return ok

    @staticmethod
    def send_declined_notification(student, borrow_request) -> bool:
        body = "\n".join([
            f"Dear {student.name},",
            "",
            f"None of the items in your borrow request #{borrow_request.id} could be approved,",
            "so the request has been closed.",
            "If you have any questions, please contact the lab staff.",
            "",
            *SIGNATURE,
        ])
        ok, _err = MailService.send_email(
            student.email, f"Borrow Request #{borrow_request.id} Declined", body
        )
        return ok

    @staticmethod
    def send_return_confirmation(student, borrow_request) -> bool:
        body = "\n".join([
            f"Dear {student.name},",
            "",
            f"Your borrow request #{borrow_request.id} has been marked as returned by the admin.",
            "If you have any questions, please contact the lab staff.",
            "",
            *SIGNATURE,
        ])
        ok, _err = MailService.send_email(
            student.email, f"Borrow Request #{borrow_request.id} Returned", body
        )
        return ok

    @staticmethod
    def send_reminder(student, borrow_request) -> bool:
        body = "\n".join([
            f"Dear {student.name},",
            "",
            f"This is a reminder that your borrow request #{borrow_request.id} "
            f"is due on {isoformat(borrow_request.return_date)}.",
            "",
            *SIGNATURE,
        ])
        ok, _err = MailService.send_email(student.email, "Equipment Return Reminder", body)
        return ok
