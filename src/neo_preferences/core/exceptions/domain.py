"""Domain-specific exceptions for neo-preferences.

Errors raised while resolving, validating and migrating preference values.
"""

from typing import Any, Dict, List, Optional, Sequence

from .base import PreferenceError


class PreferenceNotFoundError(PreferenceError):
    """Raised when a key is absent from every provider and no default was given."""

    default_code = "PREFERENCE_NOT_FOUND"

    def __init__(self, key: str, provider: Optional[str] = None):
        suffix = f" in provider {provider}" if provider else ""
        super().__init__(
            f"Preference not found: {key}{suffix}",
            details={"key": key, "provider": provider},
        )
        self.key = key
        self.provider = provider


class ValidationError(PreferenceError):
    """Raised when one or more validation rules reject a value."""

    default_code = "VALIDATION_ERROR"

    def __init__(self, key: str, errors: Sequence[Dict[str, Any]]):
        self.key = key
        self.errors: List[Dict[str, Any]] = [dict(error) for error in errors]
        summary = ", ".join(f"{e.get('rule')}: {e.get('message')}" for e in self.errors)
        super().__init__(
            f"Validation failed for {key}: {summary}",
            details={"key": key, "errors": self.errors},
        )


class ConflictError(PreferenceError):
    """Raised when conflicting provider values must not be silently resolved."""

    default_code = "CONFLICT_ERROR"

    def __init__(self, key: str, providers: Sequence[str]):
        self.key = key
        self.providers = list(providers)
        super().__init__(
            f"Conflict detected for preference {key} from providers: {', '.join(self.providers)}",
            details={"key": key, "providers": self.providers},
        )


class ConfigurationError(PreferenceError):
    """Raised when there's a configuration issue."""

    default_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Configuration error: {message}", details=details)


class SchemaValidationError(PreferenceError):
    """Raised when a value does not match its schema field."""

    default_code = "SCHEMA_VALIDATION_ERROR"

    def __init__(self, key: str, expected: str, received: str):
        self.key = key
        self.expected = expected
        self.received = received
        super().__init__(
            f"Schema validation failed for {key}: expected {expected}, received {received}",
            details={"key": key, "expected": expected, "received": received},
        )


class TypeMismatchError(PreferenceError):
    """Raised when a value has an unexpected type."""

    default_code = "TYPE_MISMATCH_ERROR"

    def __init__(self, key: str, expected: str, received: str):
        self.key = key
        self.expected = expected
        self.received = received
        super().__init__(
            f"Type mismatch for {key}: expected {expected}, received {received}",
            details={"key": key, "expected": expected, "received": received},
        )


class MigrationError(PreferenceError):
    """Raised when a migration step is missing or fails."""

    default_code = "MIGRATION_ERROR"

    def __init__(
        self,
        version: int,
        direction: str,
        original_error: Optional[BaseException] = None,
    ):
        self.version = version
        self.direction = direction
        self.original_error = original_error
        reason = str(original_error) if original_error else "Unknown error"
        super().__init__(
            f"Migration {direction} to version {version} failed: {reason}",
            details={"version": version, "direction": direction},
        )
