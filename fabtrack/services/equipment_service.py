from flask import current_app

from fabtrack.errors import NotFoundError, ValidationError
from fabtrack.models.audit_log import AuditAction
from fabtrack.models.equipment import Equipment
from fabtrack.repositories.equipment_repo import EquipmentRepo
from fabtrack.services.audit_service import AuditService
from fabtrack.utils.transaction import atomic


class EquipmentService:
    @staticmethod
    def list_equipment():
        return EquipmentRepo.list_all()

    @staticmethod
    def get_equipment(equipment_id: int):
        equipment = EquipmentRepo.get(equipment_id)
        if not equipment:
            raise NotFoundError("Equipment not found")
        return equipment

    @staticmethod
    def add_equipment(name: str, actor_id: int):
        with atomic():
            equipment = EquipmentRepo.add(Equipment(name=name))
            AuditService.record(actor_id, AuditAction.CREATE, f"Equipment added by Admin: {name}")
        current_app.logger.info(f"[equipment] #{equipment.id} '{name}' added by user #{actor_id}")
        return equipment

    @staticmethod
    def update_equipment(equipment_id: int, name: str, actor_id: int):
        with atomic():
            equipment = EquipmentService.get_equipment(equipment_id)
            equipment.name = name or equipment.name
            AuditService.record(actor_id, AuditAction.UPDATE, f"Equipment {equipment_id} updated by Admin")
        return equipment

    @staticmethod
    def delete_equipment(equipment_id: int, actor_id: int):
        with atomic():
            equipment = EquipmentService.get_equipment(equipment_id)
            # borrowed items keep a hard reference to the catalogue row
            if EquipmentRepo.is_referenced(equipment_id):
                raise ValidationError("Equipment is referenced by borrow requests and cannot be deleted")
            EquipmentRepo.delete(equipment)
            AuditService.record(actor_id, AuditAction.DELETE, f"Equipment {equipment_id} deleted by Admin")
        current_app.logger.info(f"[equipment] #{equipment_id} deleted by user #{actor_id}")
