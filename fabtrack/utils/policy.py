"""
Who may see or touch what. Pure functions over the caller and the resource,
so the rules can be checked without a request context.
"""
from dataclasses import dataclass

from fabtrack.errors import ForbiddenError
from fabtrack.models.user import Role


@dataclass(frozen=True)
class Caller:
    id: int
    role: str
    email: str | None = None


def is_admin(caller: Caller) -> bool:
    return caller.role == Role.ADMIN


def is_student(caller: Caller) -> bool:
    return caller.role == Role.STUDENT


def can_view_request(caller: Caller, borrow_request) -> bool:
    if is_admin(caller):
        return True
    return borrow_request.user_id == caller.id


def ensure_can_view_request(caller: Caller, borrow_request) -> None:
    if not can_view_request(caller, borrow_request):
        raise ForbiddenError("You do not have permission to view items for this request")


def scope_for(caller: Caller):
    """Owner filter for list queries: None means unrestricted."""
    return None if is_admin(caller) else caller.id
