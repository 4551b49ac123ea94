"""Protocol contracts for dependency injection."""

from .contracts import (
    PreferenceProvider,
    PreferenceCache,
    Validator,
    EncryptionService,
    AuditLogger,
)

__all__ = [
    "PreferenceProvider",
    "PreferenceCache",
    "Validator",
    "EncryptionService",
    "AuditLogger",
]
