"""
Environment-driven settings for neo-preferences.

Defaults for the injector (resolution strategy, cache sizing, validation,
auditing and encryption) loaded through pydantic-settings.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AuditDefaults, CacheDefaults, ConflictResolution


class PreferenceSettings(BaseSettings):
    """Injector defaults read from ``PREFERENCES_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PREFERENCES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True
    )

    # Resolution
    conflict_resolution: ConflictResolution = Field(default=ConflictResolution.HIGHEST_PRIORITY)

    # Cache configuration (milliseconds)
    enable_cache: bool = Field(default=False)
    cache_ttl_ms: int = Field(default=CacheDefaults.TTL_MS, gt=0)
    cache_max_size: int = Field(default=CacheDefaults.MAX_SIZE, gt=0)

    # Validation / audit
    enable_validation: bool = Field(default=True)
    enable_audit: bool = Field(default=False)
    audit_max_entries: int = Field(default=AuditDefaults.MAX_ENTRIES, gt=0)

    # Encryption
    encryption_key: Optional[SecretStr] = Field(default=None)

    @field_validator("conflict_resolution", mode="before")
    @classmethod
    def _normalize_strategy(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def get_encryption_key(self) -> Optional[str]:
        """Return the plain encryption key, if one is configured."""
        if self.encryption_key is None:
            return None
        return self.encryption_key.get_secret_value()


@lru_cache()
def get_settings() -> PreferenceSettings:
    """Get cached settings instance."""
    return PreferenceSettings()
