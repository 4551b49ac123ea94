"""Cache stand-in used when caching is disabled."""

from typing import Optional

from ...core.entities import PreferenceMetadata


class NoOpCache:
    """Always misses and ignores writes."""

    def get(self, key: str) -> Optional[PreferenceMetadata]:
        return None

    def set(self, key: str, metadata: PreferenceMetadata, ttl: Optional[int] = None) -> None:
        pass

    def has(self, key: str) -> bool:
        return False

    def delete(self, key: str) -> bool:
        return False

    def clear(self) -> None:
        pass

    def size(self) -> int:
        return 0
