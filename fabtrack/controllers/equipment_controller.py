# fabtrack/controllers/equipment_controller.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from fabtrack.models.user import Role
from fabtrack.serializers import serialize_equipment
from fabtrack.services.equipment_service import EquipmentService
from fabtrack.utils.decorators import current_caller, role_required
from fabtrack.utils.validation import require_object, require_str

equipment_bp = Blueprint("equipment", __name__)


@equipment_bp.get("/")
@jwt_required()
def list_equipment():
    rows = EquipmentService.list_equipment()
    return jsonify({"success": True, "equipmentList": [serialize_equipment(e) for e in rows]})


@equipment_bp.get("/<int:equipment_id>")
@jwt_required()
def get_equipment(equipment_id: int):
    e = EquipmentService.get_equipment(equipment_id)
    return jsonify({"success": True, "equipment": serialize_equipment(e)})


@equipment_bp.post("/")
@jwt_required()
@role_required(Role.ADMIN)
def create_equipment():
    data = require_object(request)
    e = EquipmentService.add_equipment(require_str(data, "name"), current_caller().id)
    return jsonify({
        "success": True,
        "message": "Equipment added successfully",
        "equipment": serialize_equipment(e),
    }), 201


@equipment_bp.put("/<int:equipment_id>")
@jwt_required()
@role_required(Role.ADMIN)
def update_equipment(equipment_id: int):
    data = require_object(request)
    e = EquipmentService.update_equipment(equipment_id, require_str(data, "name"), current_caller().id)
    return jsonify({
        "success": True,
        "message": "Equipment updated successfully",
        "updatedEquipment": serialize_equipment(e),
    })


@equipment_bp.delete("/<int:equipment_id>")
@jwt_required()
@role_required(Role.ADMIN)
def delete_equipment(equipment_id: int):
    EquipmentService.delete_equipment(equipment_id, current_caller().id)
    return jsonify({"success": True, "message": "Equipment deleted successfully"})
