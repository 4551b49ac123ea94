"""Constants and enums for neo-preferences.

This module defines the priority bands, resolution strategies, audit actions
and event kinds shared by every component of the library.
"""

from enum import Enum, IntEnum
from typing import Final


class PreferencePriority(IntEnum):
    """Priority bands used to rank provider values (lowest to highest)."""

    LOWEST = 0
    LOW = 25
    NORMAL = 50
    HIGH = 75
    HIGHEST = 100


class ConflictResolution(str, Enum):
    """Strategies for picking one value among several providers."""

    HIGHEST_PRIORITY = "highest_priority"
    LOWEST_PRIORITY = "lowest_priority"
    MERGE = "merge"
    OVERRIDE = "override"
    ERROR = "error"


class AuditAction(str, Enum):
    """Actions recorded by audit loggers."""

    GET = "get"
    SET = "set"
    DELETE = "delete"
    CLEAR = "clear"
    VALIDATE = "validate"
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class PreferenceEvent(str, Enum):
    """Change event kinds emitted by the injector."""

    CHANGED = "changed"
    ADDED = "added"
    REMOVED = "removed"
    CLEARED = "cleared"


class CacheDefaults:
    """Cache sizing and lifetime defaults (milliseconds)."""

    MAX_SIZE: Final[int] = 1000
    TTL_MS: Final[int] = 3_600_000            # 1 hour
    CLEANUP_INTERVAL_MS: Final[int] = 300_000  # 5 minutes


class AuditDefaults:
    """Audit logger defaults."""

    MAX_ENTRIES: Final[int] = 10_000
    FLUSH_INTERVAL_SECONDS: Final[float] = 5.0


class SourceLabels:
    """Fixed source labels used in audit entries and events."""

    CACHE: Final[str] = "cache"
    INJECTOR: Final[str] = "injector"
    VALIDATOR: Final[str] = "validator"
    ENCRYPTION: Final[str] = "encryption"
    WILDCARD_KEY: Final[str] = "*"
