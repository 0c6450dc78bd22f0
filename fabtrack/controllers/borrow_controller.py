from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from fabtrack.models.user import Role
from fabtrack.serializers import serialize_item, serialize_log, serialize_request
from fabtrack.services.borrow_service import BorrowService
from fabtrack.utils.dates import isoformat
from fabtrack.utils.decorators import current_caller, role_required
from fabtrack.utils.validation import (
    optional_str,
    require_bool,
    require_datetime,
    require_int,
    require_list,
    require_object,
)

borrow_bp = Blueprint("borrow", __name__)


@borrow_bp.post("/request")
@jwt_required()
@role_required(Role.STUDENT)
def request_equipment():
    data = require_object(request)
    collection_datetime = require_datetime(data, "collectionDateTime")
    items = [
        {
            "equipment_id": require_int(i, "equipmentID"),
            "quantity": require_int(i, "quantity", minimum=1),
            "description": optional_str(i, "description"),
        }
        for i in require_list(data, "items")
    ]

    borrow_request = BorrowService.submit_request(current_caller().id, items, collection_datetime)
    return jsonify({
        "success": True,
        "message": "Request submitted",
        "borrowRequest": serialize_request(borrow_request, include_items=True),
    }), 201


@borrow_bp.put("/approve/<int:request_id>")
@jwt_required()
@role_required(Role.ADMIN)
def approve_request(request_id: int):
    data = require_object(request)
    return_date = require_datetime(data, "returnDate")
    decisions = [
        {
            "borrowed_item_id": require_int(i, "borrowedItemID"),
            "allow": require_bool(i, "allow"),
            "description": optional_str(i, "description"),
            "serial_number": optional_str(i, "serialNumber"),
        }
        for i in require_list(data, "items")
    ]

    approved = BorrowService.approve_request(request_id, return_date, decisions, actor_id=current_caller().id)
    return jsonify({
        "success": True,
        "message": "Request approved",
        "approvedRequest": serialize_request(approved, include_items=True),
    })


@borrow_bp.put("/return/<int:request_id>")
@jwt_required()
@role_required(Role.ADMIN)
def return_equipment(request_id: int):
    returned = BorrowService.return_equipment(request_id, actor_id=current_caller().id)
    return jsonify({
        "success": True,
        "message": "Equipment returned",
        "returnedRequest": serialize_request(returned),
    })


@borrow_bp.post("/send-reminder")
@jwt_required()
@role_required(Role.ADMIN)
def send_reminder():
    result = BorrowService.send_due_reminders()
    msg = "Reminders sent successfully" if result["count"] > 0 else "No due requests found to remind"
    return jsonify({
        "success": True,
        "message": msg,
        "remindersSent": result["count"],
        "cutoffDate": isoformat(result["cutoff"]),
    })


@borrow_bp.get("/all-requests")
@jwt_required()
def all_requests():
    rows = BorrowService.get_all_requests(current_caller())
    return jsonify({"success": True, "requests": [serialize_request(r) for r in rows]})


@borrow_bp.get("/pending-requests")
@jwt_required()
def pending_requests():
    rows = BorrowService.get_pending_requests(current_caller())
    return jsonify({"success": True, "requests": [serialize_request(r) for r in rows]})


@borrow_bp.get("/<int:request_id>/items")
@jwt_required()
def request_items(request_id: int):
    items = BorrowService.get_items_for_request(current_caller(), request_id)
    return jsonify({"success": True, "items": [serialize_item(i) for i in items]})


@borrow_bp.get("/logs")
@jwt_required()
@role_required(Role.ADMIN)
def audit_logs():
    logs = BorrowService.get_audit_log()
    return jsonify({"success": True, "logs": [serialize_log(x) for x in logs]})
