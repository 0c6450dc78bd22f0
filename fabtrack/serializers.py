"""JSON projections. Field names follow the FabTrack frontend's PascalCase contract."""
from fabtrack.utils.dates import isoformat, utcnow


def serialize_user(u) -> dict | None:
    if u is None:
        return None
    # password_hash never leaves the server
    return {
        "UserID": u.id,
        "Name": u.name,
        "Email": u.email,
        "Role": u.role,
        "major": u.major,
        "yearGroup": u.year_group,
    }


def serialize_equipment(e) -> dict | None:
    if e is None:
        return None
    return {"EquipmentID": e.id, "Name": e.name}


def serialize_item(item) -> dict:
    return {
        "BorrowedItemID": item.id,
        "RequestID": item.request_id,
        "EquipmentID": item.equipment_id,
        "Description": item.description,
        "SerialNumber": item.serial_number,
        "Quantity": item.quantity,
        "Equipment": serialize_equipment(item.equipment),
    }


def serialize_request(r, include_user: bool = True, include_items: bool = False) -> dict:
    now = utcnow()
    data = {
        "RequestID": r.id,
        "UserID": r.user_id,
        "BorrowDate": isoformat(r.borrow_date),
        "Status": r.status,
        "EffectiveStatus": r.effective_status(now),
        "IsOverdue": r.is_overdue(now),
        "ReturnDate": isoformat(r.return_date),
        "CollectionDateTime": isoformat(r.collection_datetime),
        "CreatedAt": isoformat(r.created_at),
    }
    if include_user:
        data["User"] = serialize_user(r.user)
    if include_items:
        data["items"] = [serialize_item(i) for i in r.items]
    return data


def serialize_log(log) -> dict:
    return {
        "LogID": log.id,
        "UserID": log.user_id,
        "RequestID": log.request_id,
        "Action": log.action,
        "Details": log.details,
        "Timestamp": isoformat(log.timestamp),
        "User": serialize_user(log.user),
    }
