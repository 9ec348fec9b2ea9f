"""Typed readers for fields of JSON/YAML payloads.

Every reader raises ValueError for missing or wrongly typed values, so callers
can report bad input without tracking which builtin would have failed.
"""

from datetime import date
from typing import Optional

from careerflow.utils.dates import parse_date

_MISSING = object()


def require_mapping(data, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _type_error(key: str, expected: str, value) -> ValueError:
    return ValueError(f"Field '{key}' must be {expected}, got {type(value).__name__}")


def text_field(data: dict, key: str, default=_MISSING) -> Optional[str]:
    """A string field. Null or absent falls back to ``default``, or is an error without one."""
    value = data.get(key)
    if value is None:
        if default is _MISSING:
            raise ValueError(f"Missing required field '{key}'")
        return default
    if not isinstance(value, str):
        raise _type_error(key, "a string", value)
    return value


def text_list_field(data: dict, key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _type_error(key, "a list of strings", value)
    return list(value)


def number_field(data: dict, key: str, default=_MISSING) -> Optional[float]:
    """A numeric field; numeric strings are accepted, booleans are not."""
    value = data.get(key)
    if value is None:
        if default is _MISSING:
            raise ValueError(f"Missing required field '{key}'")
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise _type_error(key, "a number", value)
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"Field '{key}' must be a number, got {value!r}") from e


def int_field(data: dict, key: str, default=_MISSING) -> Optional[int]:
    value = data.get(key)
    if value is None:
        if default is _MISSING:
            raise ValueError(f"Missing required field '{key}'")
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_error(key, "an integer", value)
    return value


def date_field(data: dict, key: str, required: bool = True) -> Optional[date]:
    value = data.get(key)
    if value is not None and not isinstance(value, (str, date)):
        raise _type_error(key, "an ISO date", value)
    parsed = parse_date(value)
    if parsed is None and required:
        raise ValueError(f"Missing required field '{key}'")
    return parsed


def list_field(data: dict, key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _type_error(key, "a list", value)
    return value
