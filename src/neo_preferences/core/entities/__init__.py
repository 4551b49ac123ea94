"""Core entities for neo-preferences."""

from .preference import (
    PreferenceValue,
    PreferenceObject,
    PreferenceArray,
    PreferenceMetadata,
    SetOptions,
    MISSING,
    build_metadata,
    utc_now,
)
from .events import PreferenceChangeEvent, PreferenceEventListener
from .audit import AuditLogEntry, AuditFilter
from .validation import ValidationRule, ValidationIssue, ValidationResult, RuleCheck

__all__ = [
    "PreferenceValue",
    "PreferenceObject",
    "PreferenceArray",
    "PreferenceMetadata",
    "SetOptions",
    "MISSING",
    "build_metadata",
    "utc_now",
    "PreferenceChangeEvent",
    "PreferenceEventListener",
    "AuditLogEntry",
    "AuditFilter",
    "ValidationRule",
    "ValidationIssue",
    "ValidationResult",
    "RuleCheck",
]
