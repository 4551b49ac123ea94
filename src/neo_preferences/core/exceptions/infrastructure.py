"""Infrastructure-specific exceptions for neo-preferences.

This module defines exceptions related to providers and external systems
such as files, remote APIs and cryptography.
"""

from typing import Optional

from .base import PreferenceError


def _reason(error: Optional[BaseException]) -> str:
    return str(error) if error else "Unknown error"


# Encryption Errors
class EncryptionError(PreferenceError):
    """Raised when encrypting or decrypting a value fails."""

    default_code = "ENCRYPTION_ERROR"

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(f"Encryption error: {message}")
        self.original_error = original_error


# Provider Errors
class ProviderInitializationError(PreferenceError):
    """Raised when a provider fails to come up."""

    default_code = "PROVIDER_INIT_ERROR"

    def __init__(self, provider: str, original_error: Optional[BaseException] = None):
        super().__init__(
            f"Failed to initialize provider {provider}: {_reason(original_error)}",
            details={"provider": provider},
        )
        self.provider = provider
        self.original_error = original_error


class ProviderError(PreferenceError):
    """Raised when a provider operation fails."""

    default_code = "PROVIDER_ERROR"

    def __init__(
        self,
        provider: str,
        operation: str,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(
            f"Provider {provider} failed during {operation}: {_reason(original_error)}",
            details={"provider": provider, "operation": operation},
        )
        self.provider = provider
        self.operation = operation
        self.original_error = original_error
