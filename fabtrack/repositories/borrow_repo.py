from datetime import datetime

from sqlalchemy.orm import joinedload, selectinload

from fabtrack.extensions import db
from fabtrack.models.borrow_request import BorrowRequest, RequestStatus
from fabtrack.models.borrowed_item import BorrowedItem


class BorrowRepo:
    @staticmethod
    def get(request_id: int):
        return db.session.get(BorrowRequest, request_id)

    @staticmethod
    def get_for_update(request_id: int):
        # row lock where the backend supports it; the version column covers the rest
        return (
            BorrowRequest.query
            .filter_by(id=request_id)
            .with_for_update()
            .first()
        )

    @staticmethod
    def list_requests(user_id: int | None = None, status: str | None = None):
        q = BorrowRequest.query.options(joinedload(BorrowRequest.user))
        if user_id is not None:
            q = q.filter(BorrowRequest.user_id == user_id)
        if status is not None:
            q = q.filter(BorrowRequest.status == status)
        return q.order_by(BorrowRequest.id.desc()).all()

    @staticmethod
    def find_due(cutoff: datetime):
        return (
            BorrowRequest.query
            .options(joinedload(BorrowRequest.user))
            .filter(
                BorrowRequest.status == RequestStatus.APPROVED,
                BorrowRequest.return_date <= cutoff,
            )
            .order_by(BorrowRequest.id)
            .all()
        )

    @staticmethod
    def add(borrow_request: BorrowRequest):
        db.session.add(borrow_request)
        db.session.flush()
        return borrow_request

    @staticmethod
    def add_item(item: BorrowedItem):
        db.session.add(item)
        return item

    @staticmethod
    def get_item(item_id: int):
        return db.session.get(BorrowedItem, item_id)

    @staticmethod
    def delete_item(item: BorrowedItem):
        db.session.delete(item)

    @staticmethod
    def items_for(request_id: int):
        return (
            BorrowedItem.query
            .options(selectinload(BorrowedItem.equipment))
            .filter_by(request_id=request_id)
            .order_by(BorrowedItem.id)
            .all()
        )

    @staticmethod
    def count_items(request_id: int) -> int:
        return BorrowedItem.query.filter_by(request_id=request_id).count()
