"""Helpers for inspecting and coercing preference values.

Preference values are plain JSON-shaped Python objects. These helpers are the
single place where the union is matched by ``isinstance`` at the boundaries
that care about its shape (merging, encryption, string coercion).
"""

import json
import math
import re
from typing import Any, Optional

from ..core.entities import PreferenceValue

_NUMBER_PATTERN = re.compile(r"^-?\d+\.?\d*$")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_SNAKE_SEGMENT = re.compile(r"_([a-z])")


def is_mapping(value: Any) -> bool:
    """True for object-shaped preference values."""
    return isinstance(value, dict)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_number(value: Any) -> bool:
    # bool is an int subclass but is its own variant
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def value_type_name(value: Any) -> str:
    """Name of the JSON-style variant a value belongs to."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_sequence(value):
        return "array"
    if is_mapping(value):
        return "object"
    return type(value).__name__


def _parse_json_container(value: str) -> Optional[PreferenceValue]:
    if value.startswith("{") or value.startswith("["):
        try:
            return json.loads(value)
        except ValueError:
            return None
    return None


def parse_env_value(value: str) -> PreferenceValue:
    """Coerce an environment variable string into a preference value."""
    if value in ("null", "undefined"):
        return None
    if value == "true":
        return True
    if value == "false":
        return False

    if value.strip() and _NUMBER_PATTERN.match(value):
        if "." in value:
            return float(value)
        return int(value)

    parsed = _parse_json_container(value)
    if parsed is not None:
        return parsed

    return value


def parse_file_value(value: str) -> PreferenceValue:
    """Coerce a ``.env`` file value; numbers must round-trip exactly."""
    if value == "null":
        return None
    if value == "true":
        return True
    if value == "false":
        return False

    try:
        number = int(value)
        if str(number) == value:
            return number
    except ValueError:
        pass

    try:
        number = float(value)
        if math.isfinite(number) and repr(number) == value:
            return number
    except ValueError:
        pass

    parsed = _parse_json_container(value)
    if parsed is not None:
        return parsed

    return value


def stringify_value(value: PreferenceValue) -> str:
    """Render a preference value as an environment string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return str(value)
    return json.dumps(value)


def to_env_key(key: str, prefix: str = "") -> str:
    """Map ``camelCase`` or ``kebab-case`` keys to ``PREFIX_UPPER_SNAKE``."""
    snake = _CAMEL_BOUNDARY.sub(r"\1_\2", key).replace("-", "_").upper()
    return f"{prefix}{snake}" if prefix else snake


def from_env_key(env_key: str, prefix: str = "") -> str:
    """Map an environment variable name back to a ``camelCase`` key."""
    key = env_key
    if prefix and key.startswith(prefix):
        key = key[len(prefix):]
    return _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), key.lower())
