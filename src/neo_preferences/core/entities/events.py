"""Change event emitted by the injector after mutating operations."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from ...config.constants import PreferenceEvent
from .preference import MISSING, utc_now


@dataclass(frozen=True)
class PreferenceChangeEvent:
    """A single add/change/remove/clear notification."""

    type: PreferenceEvent
    key: str
    provider: str
    new_value: Any = MISSING
    old_value: Any = MISSING
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def has_old_value(self) -> bool:
        return self.old_value is not MISSING

    @property
    def has_new_value(self) -> bool:
        return self.new_value is not MISSING


PreferenceEventListener = Callable[[PreferenceChangeEvent], None]
