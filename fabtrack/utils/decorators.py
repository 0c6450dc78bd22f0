from functools import wraps

from flask_jwt_extended import verify_jwt_in_request, get_jwt, get_jwt_identity

from fabtrack.errors import ForbiddenError
from fabtrack.utils.policy import Caller


def current_caller() -> Caller:
    claims = get_jwt() or {}
    return Caller(
        id=int(get_jwt_identity()),
        role=claims.get("role"),
        email=claims.get("email"),
    )


def role_required(*roles):
    """Token must be valid and its role claim one of `roles`; otherwise 401/403."""
    allowed = frozenset(roles)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            caller = current_caller()
            if caller.role not in allowed:
                raise ForbiddenError(f"Requires role: {', '.join(sorted(allowed))}")
            return fn(*args, **kwargs)
        return wrapper
    return decorator
