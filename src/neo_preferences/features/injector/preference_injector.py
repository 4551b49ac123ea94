"""Preference injector orchestrating providers, caching and side effects.

Reads fan out to every registered provider and fan back in through the
``ConflictResolver``. Writes fan out to every provider. Cache, validation,
encryption and auditing are consumed through their protocol contracts.

Concurrent ``set`` calls on the same key are not serialized: their provider
writes may interleave, and the last write to land on each provider wins for
that provider. Writing to every provider also means a lower-priority
provider can hold a value that ``get`` never returns.
"""

import asyncio
import logging
import threading
from typing import Any, Dict, List, Optional, Type, TypeVar, cast

from ...config.constants import AuditAction, ConflictResolution, PreferenceEvent, SourceLabels
from ...core.entities import (
    MISSING,
    AuditLogEntry,
    PreferenceChangeEvent,
    PreferenceEventListener,
    PreferenceMetadata,
    PreferenceValue,
    SetOptions,
)
from ...core.exceptions import ConflictError, PreferenceNotFoundError, ValidationError
from ...core.protocols import (
    AuditLogger,
    EncryptionService,
    PreferenceCache,
    PreferenceProvider,
    Validator,
)
from ..audit import InMemoryAuditLogger, NoOpAuditLogger
from ..cache import LRUCache, NoOpCache
from ..encryption import NoOpEncryptionService
from ..resolution import ConflictResolver
from ..validation import PreferenceValidator
from .injector_config import InjectorConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PreferenceInjector:
    """Multi-provider preference store with conflict resolution."""

    def __init__(self, config: Optional[InjectorConfig] = None):
        config = config or InjectorConfig()

        self._providers: List[PreferenceProvider] = list(config.providers)
        self._providers_lock = threading.Lock()
        self._conflict_resolution: ConflictResolution = config.conflict_resolution
        self._enable_validation = config.enable_validation

        if config.cache is not None:
            self._cache: PreferenceCache = config.cache
        elif config.enable_cache:
            self._cache = LRUCache(max_size=config.cache_max_size, default_ttl=config.cache_ttl)
        else:
            self._cache = NoOpCache()

        self._validator: Validator = config.validator or PreferenceValidator()

        if config.audit_logger is not None:
            self._audit_logger: AuditLogger = config.audit_logger
        elif config.enable_audit:
            self._audit_logger = InMemoryAuditLogger(max_entries=config.audit_max_entries)
        else:
            self._audit_logger = NoOpAuditLogger()

        self._encryption_service: EncryptionService = (
            config.encryption_service or NoOpEncryptionService()
        )

        self._initialized = False
        self._listeners: Dict[PreferenceEvent, Dict[PreferenceEventListener, None]] = {}

    # Lifecycle

    async def initialize(self) -> None:
        """Initialize every provider concurrently; a no-op once initialized."""
        if self._initialized:
            return

        providers = self.providers
        await asyncio.gather(*(provider.initialize() for provider in providers))

        self._initialized = True
        logger.info(f"Preference injector initialized with {len(providers)} providers")

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # Provider management

    @property
    def providers(self) -> List[PreferenceProvider]:
        """Snapshot of the registered providers in fan-out order."""
        with self._providers_lock:
            return list(self._providers)

    def add_provider(self, provider: PreferenceProvider) -> None:
        with self._providers_lock:
            self._providers.append(provider)
        logger.info(f"Added preference provider: {provider.name} (priority {int(provider.priority)})")

    def remove_provider(self, name: str) -> bool:
        """Remove the first provider with this exact name."""
        with self._providers_lock:
            for index, provider in enumerate(self._providers):
                if provider.name == name:
                    del self._providers[index]
                    break
            else:
                return False

        logger.info(f"Removed preference provider: {name}")
        return True

    # Reads

    async def get(
        self,
        key: str,
        *,
        default: Any = MISSING,
        decrypt: bool = False,
        use_cache: bool = True,
    ) -> PreferenceValue:
        """Resolve the value for ``key`` across all providers.

        Args:
            key: Preference key
            default: Returned when no provider has the key
            decrypt: Decrypt the resolved value if it is an encrypted string
            use_cache: Consult and populate the cache

        Raises:
            PreferenceNotFoundError: No provider has the key and no default given
            ConflictError: The ERROR strategy saw more than one value
        """
        if use_cache:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug(f"Cache hit for preference: {key}")
                self._audit(AuditAction.GET, key, SourceLabels.CACHE, value=cached.value)
                return cached.value

        results = await self._collect(key)

        if not results:
            if default is not MISSING:
                return default
            raise PreferenceNotFoundError(key)

        resolved = ConflictResolver.resolve(results, self._conflict_resolution)

        value = resolved.value
        if decrypt and isinstance(value, str) and self._encryption_service.is_encrypted(value):
            value = await self._encryption_service.decrypt(value)
            self._audit(AuditAction.DECRYPT, key, resolved.source)

        if use_cache:
            self._cache.set(key, resolved.with_changes(value=value), resolved.ttl)

        self._audit(AuditAction.GET, key, resolved.source, value=value)
        return value

    async def get_typed(self, key: str, value_type: Type[T] = object, **options: Any) -> T:
        """Same as ``get``; ``value_type`` only narrows the static return type."""
        return cast(T, await self.get(key, **options))

    async def get_all(self) -> Dict[str, PreferenceValue]:
        """Resolve every key from every provider; the cache is not involved."""
        resolved: Dict[str, PreferenceMetadata] = {}

        for provider in self.providers:
            entries = await provider.get_all()
            for key, metadata in entries.items():
                existing = resolved.get(key)
                if existing is None:
                    resolved[key] = metadata
                else:
                    resolved[key] = ConflictResolver.resolve(
                        [existing, metadata], self._conflict_resolution
                    )

        return {key: metadata.value for key, metadata in resolved.items()}

    async def has(self, key: str) -> bool:
        """True as soon as any provider reports the key."""
        for provider in self.providers:
            if await provider.has(key):
                return True
        return False

    # Writes

    async def set(
        self,
        key: str,
        value: PreferenceValue,
        *,
        priority: Optional[int] = None,
        ttl: Optional[int] = None,
        encrypt: bool = False,
        validate: Optional[bool] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Validate, optionally encrypt, and write ``value`` to every provider.

        ``validate`` defaults to the injector's ``enable_validation`` flag.
        Provider failures propagate; providers written before the failure
        keep the new value.

        Raises:
            ValidationError: A validation rule rejected the value
        """
        old_value = await self._current_value(key)

        should_validate = self._enable_validation if validate is None else validate
        if should_validate:
            result = await self._validator.validate(key, value)
            self._audit(
                AuditAction.VALIDATE,
                key,
                SourceLabels.VALIDATOR,
                value=value,
                metadata={"valid": result.valid},
            )
            if not result.valid:
                raise ValidationError(key, [issue.to_dict() for issue in result.errors])

        final_value = value
        if encrypt and isinstance(value, str):
            final_value = await self._encryption_service.encrypt(value)
            self._audit(AuditAction.ENCRYPT, key, SourceLabels.ENCRYPTION)

        options = SetOptions(
            priority=priority,
            ttl=ttl,
            encrypt=encrypt,
            validate=validate,
            metadata=metadata or {},
        )
        for provider in self.providers:
            await provider.set(key, final_value, options)

        self._cache.delete(key)

        self._audit(
            AuditAction.SET,
            key,
            SourceLabels.INJECTOR,
            value=final_value,
            old_value=None if old_value is MISSING else old_value,
        )

        event_type = PreferenceEvent.ADDED if old_value is MISSING else PreferenceEvent.CHANGED
        self._emit(
            PreferenceChangeEvent(
                type=event_type,
                key=key,
                provider=SourceLabels.INJECTOR,
                new_value=value,
                old_value=old_value,
            )
        )

    async def delete(self, key: str) -> bool:
        """Delete ``key`` from every provider; True if any removed it."""
        old_value = await self._current_value(key)

        deleted = False
        for provider in self.providers:
            if await provider.delete(key):
                deleted = True

        if deleted:
            self._cache.delete(key)
            self._audit(
                AuditAction.DELETE,
                key,
                SourceLabels.INJECTOR,
                old_value=None if old_value is MISSING else old_value,
            )
            self._emit(
                PreferenceChangeEvent(
                    type=PreferenceEvent.REMOVED,
                    key=key,
                    provider=SourceLabels.INJECTOR,
                    old_value=old_value,
                )
            )

        return deleted

    async def clear(self) -> None:
        """Clear every provider and the cache."""
        for provider in self.providers:
            await provider.clear()

        self._cache.clear()
        logger.info("Cleared all preferences")

        self._audit(AuditAction.CLEAR, SourceLabels.WILDCARD_KEY, SourceLabels.INJECTOR)
        self._emit(
            PreferenceChangeEvent(
                type=PreferenceEvent.CLEARED,
                key=SourceLabels.WILDCARD_KEY,
                provider=SourceLabels.INJECTOR,
            )
        )

    # Collaborators

    @property
    def validator(self) -> Validator:
        return self._validator

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def cache(self) -> PreferenceCache:
        return self._cache

    @property
    def conflict_resolution(self) -> ConflictResolution:
        return self._conflict_resolution

    def set_encryption_service(self, service: EncryptionService) -> None:
        self._encryption_service = service

    # Events

    def on(self, event: PreferenceEvent, listener: PreferenceEventListener) -> None:
        """Subscribe ``listener`` to ``event``; listeners run in registration order."""
        self._listeners.setdefault(event, {})[listener] = None

    def off(self, event: PreferenceEvent, listener: PreferenceEventListener) -> None:
        listeners = self._listeners.get(event)
        if listeners is not None:
            listeners.pop(listener, None)

    def _emit(self, event: PreferenceChangeEvent) -> None:
        for listener in list(self._listeners.get(event.type, {})):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Error in preference event listener for {event.type.value} {event.key}: {e}")

    # Helpers

    async def _collect(self, key: str) -> List[PreferenceMetadata]:
        providers = self.providers
        logger.debug(f"Querying {len(providers)} providers for preference: {key}")

        results = await asyncio.gather(*(provider.get(key) for provider in providers))
        return [metadata for metadata in results if metadata is not None]

    async def _current_value(self, key: str) -> Any:
        """Value before a write, or MISSING when there is none."""
        try:
            return await self.get(key, use_cache=False)
        except (PreferenceNotFoundError, ConflictError):
            return MISSING

    def _audit(self, action: AuditAction, key: str, provider: str, **fields: Any) -> None:
        self._audit_logger.log(AuditLogEntry(action=action, key=key, provider=provider, **fields))
