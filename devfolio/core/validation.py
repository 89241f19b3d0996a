"""
Request body validation helpers shared by the admin modules.

Each helper takes the decoded JSON body and either returns the cleaned
value or raises ValidationError with a "<field>: <message>" string.
"""

from .errors import ValidationError


def require_json_object(data):
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def string_field(data, key, required=True, allow_empty=False, nullable=False):
    value = data.get(key)
    if value is None:
        if required and not nullable:
            raise ValidationError(f"{key}: Required")
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key}: Expected string")
    if not allow_empty and not value.strip():
        raise ValidationError(f"{key}: Must not be empty")
    return value


def int_field(data, key, required=True, minimum=None, maximum=None):
    value = data.get(key)
    if value is None:
        if required:
            raise ValidationError(f"{key}: Required")
        return None
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{key}: Expected integer")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{key}: Must be at least {minimum}")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{key}: Must be at most {maximum}")
    return value


def string_list_field(data, key, required=True):
    value = data.get(key)
    if value is None:
        if required:
            raise ValidationError(f"{key}: Required")
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{key}: Expected array of strings")
    return value


def clean_payload(data, fields, partial=False):
    """
    Validate ``data`` against ``fields``, a mapping of
    key -> callable(data, key) returning the cleaned value.

    With ``partial`` only keys present in the body are validated and returned.
    Unknown keys are dropped.
    """
    require_json_object(data)
    cleaned = {}
    for key, check in fields.items():
        if partial and key not in data:
            continue
        cleaned[key] = check(data, key)
    return cleaned
