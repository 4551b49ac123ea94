"""Exceptions module for neo-preferences.

This module provides the complete exception hierarchy for neo-preferences,
organized by domain concerns and infrastructure concerns.
"""

from .base import (
    PreferenceError,
    create_error_response,
)

from .domain import (
    PreferenceNotFoundError,
    ValidationError,
    ConflictError,
    ConfigurationError,
    SchemaValidationError,
    TypeMismatchError,
    MigrationError,
)

from .infrastructure import (
    EncryptionError,
    ProviderInitializationError,
    ProviderError,
)

__all__ = [
    # Base
    "PreferenceError",
    "create_error_response",

    # Domain
    "PreferenceNotFoundError",
    "ValidationError",
    "ConflictError",
    "ConfigurationError",
    "SchemaValidationError",
    "TypeMismatchError",
    "MigrationError",

    # Infrastructure
    "EncryptionError",
    "ProviderInitializationError",
    "ProviderError",
]
