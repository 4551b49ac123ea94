"""Protocol interfaces consumed by the preference injector.

Defines the narrow contracts for providers, caches, validators, encryption
services and audit loggers. The injector depends only on these shapes, never
on concrete implementations.
"""

from abc import abstractmethod
from typing import Dict, List, Optional, Protocol, runtime_checkable

from ..entities import (
    AuditFilter,
    AuditLogEntry,
    PreferenceMetadata,
    PreferenceValue,
    SetOptions,
    ValidationResult,
    ValidationRule,
)


@runtime_checkable
class PreferenceProvider(Protocol):
    """Protocol for a single source of preference values."""

    name: str
    priority: int

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the provider for use."""
        ...

    @abstractmethod
    async def get(self, key: str) -> Optional[PreferenceMetadata]:
        """Get the metadata for a key, or None when absent."""
        ...

    @abstractmethod
    async def get_all(self) -> Dict[str, PreferenceMetadata]:
        """Get every key held by this provider."""
        ...

    @abstractmethod
    async def set(self, key: str, value: PreferenceValue, options: Optional[SetOptions] = None) -> None:
        """Store a value."""
        ...

    @abstractmethod
    async def has(self, key: str) -> bool:
        """Check whether the key is present."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key; True if something was removed."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove every key this provider owns."""
        ...


@runtime_checkable
class PreferenceCache(Protocol):
    """Protocol for the injector's read cache."""

    @abstractmethod
    def get(self, key: str) -> Optional[PreferenceMetadata]:
        ...

    @abstractmethod
    def set(self, key: str, metadata: PreferenceMetadata, ttl: Optional[int] = None) -> None:
        ...

    @abstractmethod
    def has(self, key: str) -> bool:
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def size(self) -> int:
        ...


@runtime_checkable
class Validator(Protocol):
    """Protocol for per-key value validation."""

    @abstractmethod
    def add_rule(self, key: str, rule: ValidationRule) -> None:
        ...

    @abstractmethod
    async def validate(self, key: str, value: PreferenceValue) -> ValidationResult:
        """Run every rule registered for the key."""
        ...

    @abstractmethod
    def remove_rule(self, key: str, rule_name: str) -> None:
        ...


@runtime_checkable
class EncryptionService(Protocol):
    """Protocol for wrapping and unwrapping string values."""

    @abstractmethod
    async def encrypt(self, value: str) -> str:
        ...

    @abstractmethod
    async def decrypt(self, encrypted: str) -> str:
        ...

    @abstractmethod
    def is_encrypted(self, value: str) -> bool:
        """Pure recognition predicate, e.g. a fixed prefix marker."""
        ...


@runtime_checkable
class AuditLogger(Protocol):
    """Protocol for recording preference operations."""

    @abstractmethod
    def log(self, entry: AuditLogEntry) -> None:
        """Record an entry; must not block on I/O."""
        ...

    @abstractmethod
    def get_entries(self, filter: Optional[AuditFilter] = None) -> List[AuditLogEntry]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
