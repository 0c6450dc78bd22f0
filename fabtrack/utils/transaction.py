from contextlib import contextmanager

from flask import current_app
from sqlalchemy.orm.exc import StaleDataError

from fabtrack.errors import ConflictError
from fabtrack.extensions import db


@contextmanager
def atomic(conflict_message: str = "Request was modified concurrently, please retry"):
    """
    Single commit point for a unit of work. Anything raised inside rolls the
    session back; a lost optimistic-lock race surfaces as ConflictError.
    """
    try:
        yield db.session
        db.session.commit()
    except StaleDataError as e:
        db.session.rollback()
        current_app.logger.warning(f"[db] Concurrent update rejected: {e}")
        raise ConflictError(conflict_message) from e
    except Exception:
        db.session.rollback()
        raise
