"""Configuration module for neo-preferences.

Constants and enums, environment-driven settings and logging setup.
"""

from .constants import (
    PreferencePriority,
    ConflictResolution,
    AuditAction,
    PreferenceEvent,
    CacheDefaults,
    AuditDefaults,
    SourceLabels,
)

from .settings import (
    PreferenceSettings,
    get_settings,
)

from .logging_config import (
    setup_logging,
    get_logger,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Constants
    "PreferencePriority",
    "ConflictResolution",
    "AuditAction",
    "PreferenceEvent",
    "CacheDefaults",
    "AuditDefaults",
    "SourceLabels",

    # Settings
    "PreferenceSettings",
    "get_settings",

    # Logging configuration
    "setup_logging",
    "get_logger",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
