"""Construction surface for ``PreferenceInjector``."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ...config.constants import AuditDefaults, CacheDefaults, ConflictResolution
from ...config.settings import PreferenceSettings, get_settings
from ...core.exceptions import ConfigurationError
from ...core.protocols import (
    AuditLogger,
    EncryptionService,
    PreferenceCache,
    PreferenceProvider,
    Validator,
)
from ..encryption import AESEncryptionService


@dataclass
class InjectorConfig:
    """Injector options.

    Explicit ``cache``, ``validator``, ``audit_logger`` and
    ``encryption_service`` instances take precedence over the flags that
    would otherwise select a default implementation.
    """

    providers: List[PreferenceProvider] = field(default_factory=list)
    conflict_resolution: Union[ConflictResolution, str] = ConflictResolution.HIGHEST_PRIORITY
    enable_cache: bool = False
    cache_ttl: int = CacheDefaults.TTL_MS
    cache_max_size: int = CacheDefaults.MAX_SIZE
    enable_validation: bool = True
    enable_audit: bool = False
    audit_max_entries: int = AuditDefaults.MAX_ENTRIES

    cache: Optional[PreferenceCache] = None
    validator: Optional[Validator] = None
    audit_logger: Optional[AuditLogger] = None
    encryption_service: Optional[EncryptionService] = None

    def __post_init__(self):
        if not isinstance(self.conflict_resolution, ConflictResolution):
            try:
                self.conflict_resolution = ConflictResolution(str(self.conflict_resolution).lower())
            except ValueError:
                raise ConfigurationError(
                    f"Unknown conflict resolution strategy: {self.conflict_resolution}",
                    details={"strategy": str(self.conflict_resolution)},
                )

        if self.cache_ttl <= 0:
            raise ConfigurationError("cache_ttl must be positive", details={"cache_ttl": self.cache_ttl})
        if self.cache_max_size <= 0:
            raise ConfigurationError(
                "cache_max_size must be positive",
                details={"cache_max_size": self.cache_max_size},
            )

        self.providers = list(self.providers)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[PreferenceSettings] = None,
        providers: Optional[List[PreferenceProvider]] = None,
        **overrides,
    ) -> "InjectorConfig":
        """Build a config from ``PREFERENCES_*`` settings.

        An AES encryption service is created when an encryption key is
        configured and no service was passed in ``overrides``.
        """
        settings = settings or get_settings()

        values = {
            "providers": providers or [],
            "conflict_resolution": settings.conflict_resolution,
            "enable_cache": settings.enable_cache,
            "cache_ttl": settings.cache_ttl_ms,
            "cache_max_size": settings.cache_max_size,
            "enable_validation": settings.enable_validation,
            "enable_audit": settings.enable_audit,
            "audit_max_entries": settings.audit_max_entries,
        }

        encryption_key = settings.get_encryption_key()
        if encryption_key and "encryption_service" not in overrides:
            values["encryption_service"] = AESEncryptionService(encryption_key)

        values.update(overrides)
        return cls(**values)
