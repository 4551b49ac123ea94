"""Preference validation: per-key rules and schemas."""

from . import rules
from .preference_validator import PreferenceValidator
from .schema import PreferenceSchema, SchemaBuilder, SchemaField, SchemaValidator

__all__ = [
    "rules",
    "PreferenceValidator",
    "PreferenceSchema",
    "SchemaBuilder",
    "SchemaField",
    "SchemaValidator",
]
