"""Small body parsers for the JSON endpoints; every failure is a ValidationError."""
from fabtrack.errors import ValidationError
from fabtrack.utils.dates import parse_datetime


def require_str(data: dict, key: str, min_len: int = 1) -> str:
    value = data.get(key)
    if not isinstance(value, str) or len(value.strip()) < min_len:
        if min_len > 1:
            raise ValidationError(f'"{key}" must be a string of at least {min_len} characters')
        raise ValidationError(f'"{key}" is required')
    return value.strip()


def optional_str(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'"{key}" must be a string')
    return value.strip() or None


def require_int(data: dict, key: str, minimum: int | None = None) -> int:
    value = data.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValidationError(f'"{key}" must be an integer')
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'"{key}" must be an integer')
    if isinstance(value, float) and value != number:
        raise ValidationError(f'"{key}" must be an integer')
    if minimum is not None and number < minimum:
        raise ValidationError(f'"{key}" must be greater than or equal to {minimum}')
    return number


def optional_int(data: dict, key: str):
    if data.get(key) is None:
        return None
    return require_int(data, key)


def require_bool(data: dict, key: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise ValidationError(f'"{key}" must be a boolean')
    return value


def require_datetime(data: dict, key: str):
    if data.get(key) in (None, ""):
        raise ValidationError(f'"{key}" is required')
    try:
        return parse_datetime(data[key])
    except ValueError:
        raise ValidationError(f'"{key}" must be a valid date')


def require_list(data: dict, key: str) -> list:
    value = data.get(key)
    if not isinstance(value, list):
        raise ValidationError(f'"{key}" is required')
    if not value:
        raise ValidationError(f'"{key}" must contain at least 1 items')
    for entry in value:
        if not isinstance(entry, dict):
            raise ValidationError(f'"{key}" must contain objects')
    return value


def require_object(req) -> dict:
    """JSON body as a dict; a missing or unparsable body reads as empty."""
    data = req.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
