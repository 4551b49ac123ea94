"""Base exceptions for neo-preferences.

This module defines the root of the exception hierarchy. Every error raised by
the library carries a stable error code and a structured details dict so that
callers can report failures without parsing messages.
"""

from typing import Any, Dict, Optional


class PreferenceError(Exception):
    """Base exception for all neo-preferences errors."""

    default_code: str = "PREFERENCE_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}


def create_error_response(exception: PreferenceError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-preferences exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
