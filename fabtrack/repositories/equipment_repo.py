from fabtrack.extensions import db
from fabtrack.models.equipment import Equipment
from fabtrack.models.borrowed_item import BorrowedItem


class EquipmentRepo:
    @staticmethod
    def list_all():
        return Equipment.query.order_by(Equipment.id).all()

    @staticmethod
    def get(equipment_id: int):
        return db.session.get(Equipment, equipment_id)

    @staticmethod
    def get_many(equipment_ids):
        ids = set(equipment_ids)
        if not ids:
            return {}
        rows = Equipment.query.filter(Equipment.id.in_(ids)).all()
        return {e.id: e for e in rows}

    @staticmethod
    def is_referenced(equipment_id: int) -> bool:
        return BorrowedItem.query.filter_by(equipment_id=equipment_id).first() is not None

    @staticmethod
    def add(equipment: Equipment):
        db.session.add(equipment)
        db.session.flush()
        return equipment

    @staticmethod
    def delete(equipment: Equipment):
        db.session.delete(equipment)
        db.session.flush()
