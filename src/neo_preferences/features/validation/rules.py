"""Factories for commonly used validation rules."""

import re
from typing import Any, Optional, Pattern, Sequence, Union
from urllib.parse import urlparse

from ...core.entities import PreferenceValue, RuleCheck, ValidationRule
from ...core.exceptions import ConfigurationError
from ...utils.values import is_number, is_sequence, value_type_name

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

VALUE_TYPES = ("string", "number", "boolean", "object", "array")


def _bound(value: Optional[Any], fallback: str) -> str:
    return fallback if value is None else str(value)


def required(message: Optional[str] = None) -> ValidationRule:
    """Reject ``None`` and blank strings."""

    def check(value: PreferenceValue) -> bool:
        if value is None:
            return False
        if isinstance(value, str) and not value.strip():
            return False
        return True

    return ValidationRule("required", check, message or "Value is required")


def string_length(
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    message: Optional[str] = None,
) -> ValidationRule:
    def check(value: PreferenceValue) -> bool:
        if not isinstance(value, str):
            return False
        if min_length is not None and len(value) < min_length:
            return False
        if max_length is not None and len(value) > max_length:
            return False
        return True

    default = (
        f"String length must be between {_bound(min_length, '0')} "
        f"and {_bound(max_length, 'unlimited')}"
    )
    return ValidationRule("stringLength", check, message or default)


def number_range(
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    message: Optional[str] = None,
) -> ValidationRule:
    def check(value: PreferenceValue) -> bool:
        if not is_number(value):
            return False
        if minimum is not None and value < minimum:
            return False
        if maximum is not None and value > maximum:
            return False
        return True

    default = f"Number must be between {_bound(minimum, '-inf')} and {_bound(maximum, 'inf')}"
    return ValidationRule("numberRange", check, message or default)


def pattern(regex: Union[str, Pattern[str]], message: Optional[str] = None) -> ValidationRule:
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def check(value: PreferenceValue) -> bool:
        return isinstance(value, str) and compiled.search(value) is not None

    return ValidationRule("pattern", check, message or f"Value must match pattern: {compiled.pattern}")


def email(message: Optional[str] = None) -> ValidationRule:
    def check(value: PreferenceValue) -> bool:
        return isinstance(value, str) and _EMAIL_PATTERN.match(value) is not None

    return ValidationRule("email", check, message or "Invalid email address")


def url(message: Optional[str] = None) -> ValidationRule:
    """Accept absolute URLs: a scheme plus a network location or path."""

    def check(value: PreferenceValue) -> bool:
        if not isinstance(value, str):
            return False
        try:
            parsed = urlparse(value)
        except ValueError:
            return False
        return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)

    return ValidationRule("url", check, message or "Invalid URL")


def one_of(allowed: Sequence[PreferenceValue], message: Optional[str] = None) -> ValidationRule:
    allowed_values = list(allowed)

    def check(value: PreferenceValue) -> bool:
        return value in allowed_values

    default = f"Value must be one of: {', '.join(str(item) for item in allowed_values)}"
    return ValidationRule("enum", check, message or default)


def type_of(expected: str, message: Optional[str] = None) -> ValidationRule:
    """Require one of ``string``, ``number``, ``boolean``, ``object``, ``array``."""
    if expected not in VALUE_TYPES:
        raise ConfigurationError(f"Unsupported value type: {expected}")

    def check(value: PreferenceValue) -> bool:
        return value_type_name(value) == expected

    return ValidationRule("type", check, message or f"Value must be of type: {expected}")


def array_length(
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    message: Optional[str] = None,
) -> ValidationRule:
    def check(value: PreferenceValue) -> bool:
        if not is_sequence(value):
            return False
        if min_length is not None and len(value) < min_length:
            return False
        if max_length is not None and len(value) > max_length:
            return False
        return True

    default = (
        f"Array length must be between {_bound(min_length, '0')} "
        f"and {_bound(max_length, 'unlimited')}"
    )
    return ValidationRule("arrayLength", check, message or default)


def custom(check: RuleCheck, name: str = "custom", message: Optional[str] = None) -> ValidationRule:
    """Wrap an arbitrary sync or async predicate."""
    return ValidationRule(name, check, message or "Custom validation failed")
