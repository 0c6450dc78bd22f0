from fabtrack.extensions import db


class BorrowedItem(db.Model):
    __tablename__ = "borrowed_items"

    id = db.Column(db.Integer, primary_key=True)
    request_id = db.Column(db.Integer, db.ForeignKey("borrow_requests.id"), nullable=False, index=True)
    equipment_id = db.Column(db.Integer, db.ForeignKey("equipment.id"), nullable=False, index=True)

    description = db.Column(db.String(500), nullable=True)
    serial_number = db.Column(db.String(120), nullable=True)  # assigned at approval
    quantity = db.Column(db.Integer, nullable=False, default=1)

    __table_args__ = (db.CheckConstraint("quantity >= 1", name="ck_borrowed_items_quantity"),)

    request = db.relationship("BorrowRequest", back_populates="items")
    equipment = db.relationship("Equipment")
