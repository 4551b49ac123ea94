"""Neo-Preferences - Multi-provider preference resolution for Python services.

This library reads preference values from several sources (memory, files,
environment, remote APIs), resolves conflicts between them under a declared
policy, and layers caching, validation, encryption and auditing on top.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    PreferencePriority,
    ConflictResolution,
    AuditAction,
    PreferenceEvent,
    PreferenceSettings,
    get_settings,
    get_logger,
)

from .core.exceptions import (
    # Base Exception
    PreferenceError,

    # Domain Exceptions
    PreferenceNotFoundError,
    ValidationError,
    ConflictError,
    ConfigurationError,
    SchemaValidationError,
    TypeMismatchError,
    MigrationError,

    # Infrastructure Exceptions
    EncryptionError,
    ProviderInitializationError,
    ProviderError,

    # Utility Functions
    create_error_response,
)

from .core.entities import (
    PreferenceValue,
    PreferenceMetadata,
    SetOptions,
    MISSING,
    PreferenceChangeEvent,
    AuditLogEntry,
    AuditFilter,
    ValidationRule,
    ValidationResult,
)

from .core.protocols import (
    PreferenceProvider,
    PreferenceCache,
    Validator,
    EncryptionService,
    AuditLogger,
)

from .features.injector import PreferenceInjector, InjectorConfig
from .features.resolution import ConflictResolver
from .features.cache import LRUCache, TTLCache, NoOpCache
from .features.providers import (
    MemoryProvider,
    EnvProvider,
    FileProvider,
    FileProviderConfig,
    ApiProvider,
    ApiProviderConfig,
)
from .features.validation import (
    rules,
    PreferenceValidator,
    SchemaValidator,
    SchemaBuilder,
    SchemaField,
)
from .features.encryption import AESEncryptionService, NoOpEncryptionService
from .features.audit import (
    InMemoryAuditLogger,
    FileAuditLogger,
    LoggingAuditLogger,
    NoOpAuditLogger,
)
from .features.migration import Migration, MigrationManager, create_migration

__all__ = [
    "__version__",

    # Configuration
    "PreferencePriority",
    "ConflictResolution",
    "AuditAction",
    "PreferenceEvent",
    "PreferenceSettings",
    "get_settings",
    "get_logger",

    # Exceptions
    "PreferenceError",
    "PreferenceNotFoundError",
    "ValidationError",
    "ConflictError",
    "ConfigurationError",
    "SchemaValidationError",
    "TypeMismatchError",
    "MigrationError",
    "EncryptionError",
    "ProviderInitializationError",
    "ProviderError",
    "create_error_response",

    # Entities
    "PreferenceValue",
    "PreferenceMetadata",
    "SetOptions",
    "MISSING",
    "PreferenceChangeEvent",
    "AuditLogEntry",
    "AuditFilter",
    "ValidationRule",
    "ValidationResult",

    # Protocols
    "PreferenceProvider",
    "PreferenceCache",
    "Validator",
    "EncryptionService",
    "AuditLogger",

    # Core
    "PreferenceInjector",
    "InjectorConfig",
    "ConflictResolver",
    "LRUCache",
    "TTLCache",
    "NoOpCache",

    # Providers
    "MemoryProvider",
    "EnvProvider",
    "FileProvider",
    "FileProviderConfig",
    "ApiProvider",
    "ApiProviderConfig",

    # Validation
    "rules",
    "PreferenceValidator",
    "SchemaValidator",
    "SchemaBuilder",
    "SchemaField",

    # Encryption
    "AESEncryptionService",
    "NoOpEncryptionService",

    # Audit
    "InMemoryAuditLogger",
    "FileAuditLogger",
    "LoggingAuditLogger",
    "NoOpAuditLogger",

    # Migrations
    "Migration",
    "MigrationManager",
    "create_migration",
]
