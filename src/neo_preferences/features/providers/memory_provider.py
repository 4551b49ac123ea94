"""In-memory preference provider for runtime values."""

from typing import Dict, List, Mapping, Optional

from ...config.constants import PreferencePriority
from ...core.entities import PreferenceMetadata, PreferenceValue, SetOptions, build_metadata


class MemoryProvider:
    """Process-local key/value store."""

    def __init__(
        self,
        priority: int = PreferencePriority.NORMAL,
        initial_values: Optional[Mapping[str, PreferenceValue]] = None,
        name: str = "memory",
    ):
        self.name = name
        self.priority = priority
        self._preferences: Dict[str, PreferenceMetadata] = {}

        for key, value in (initial_values or {}).items():
            self._preferences[key] = build_metadata(key, value, self.priority, self.name)

    async def initialize(self) -> None:
        pass

    async def get(self, key: str) -> Optional[PreferenceMetadata]:
        return self._preferences.get(key)

    async def get_all(self) -> Dict[str, PreferenceMetadata]:
        return dict(self._preferences)

    async def set(self, key: str, value: PreferenceValue, options: Optional[SetOptions] = None) -> None:
        self._preferences[key] = build_metadata(key, value, self.priority, self.name, options)

    async def has(self, key: str) -> bool:
        return key in self._preferences

    async def delete(self, key: str) -> bool:
        return self._preferences.pop(key, None) is not None

    async def clear(self) -> None:
        self._preferences.clear()

    def size(self) -> int:
        return len(self._preferences)

    def keys(self) -> List[str]:
        return list(self._preferences)

    def values(self) -> List[PreferenceValue]:
        return [metadata.value for metadata in self._preferences.values()]

    async def import_values(self, data: Mapping[str, PreferenceValue]) -> None:
        for key, value in data.items():
            await self.set(key, value)

    def export(self) -> Dict[str, PreferenceValue]:
        return {key: metadata.value for key, metadata in self._preferences.items()}
