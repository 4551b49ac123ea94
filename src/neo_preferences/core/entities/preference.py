"""Preference domain entities.

Immutable per-(key, provider) observations and the options that travel with
writes. Metadata is never mutated in place; every transformation derives a
new record through ``with_changes``.
"""

from dataclasses import dataclass, field, replace, asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from ..exceptions import ConfigurationError

PreferenceValue = Union[
    str,
    int,
    float,
    bool,
    None,
    Dict[str, "PreferenceValue"],
    List["PreferenceValue"],
]
PreferenceObject = Dict[str, PreferenceValue]
PreferenceArray = List[PreferenceValue]


class _Missing:
    """Sentinel type distinguishing "no value" from an explicit ``None``."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PreferenceMetadata:
    """One provider's observation of a preference key."""

    key: str
    value: PreferenceValue
    priority: int
    source: str
    timestamp: datetime = field(default_factory=utc_now)
    encrypted: Optional[bool] = None
    validated: Optional[bool] = None
    ttl: Optional[int] = None

    def __post_init__(self):
        if not self.key:
            raise ConfigurationError("Preference key cannot be empty")

    def with_changes(self, **changes: Any) -> "PreferenceMetadata":
        """Return a shallow copy with the given fields overridden."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["priority"] = int(self.priority)
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass(frozen=True)
class SetOptions:
    """Per-write options forwarded to every provider."""

    priority: Optional[int] = None
    ttl: Optional[int] = None
    encrypt: bool = False
    validate: Optional[bool] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priority": int(self.priority) if self.priority is not None else None,
            "ttl": self.ttl,
            "encrypt": self.encrypt,
            "validate": self.validate,
            "metadata": dict(self.metadata),
        }


def build_metadata(
    key: str,
    value: PreferenceValue,
    priority: int,
    source: str,
    options: Optional[SetOptions] = None,
) -> PreferenceMetadata:
    """Create the metadata record a provider stores for a write."""
    if options is None:
        return PreferenceMetadata(key=key, value=value, priority=priority, source=source)

    return PreferenceMetadata(
        key=key,
        value=value,
        priority=options.priority if options.priority is not None else priority,
        source=source,
        encrypted=options.encrypt,
        validated=options.validate,
        ttl=options.ttl,
    )
