"""Utility functions for neo-preferences."""

from .values import (
    is_mapping,
    is_sequence,
    is_number,
    value_type_name,
    parse_env_value,
    parse_file_value,
    stringify_value,
    to_env_key,
    from_env_key,
)

__all__ = [
    "is_mapping",
    "is_sequence",
    "is_number",
    "value_type_name",
    "parse_env_value",
    "parse_file_value",
    "stringify_value",
    "to_env_key",
    "from_env_key",
]
