"""Environment variable preference provider.

The provider reads and writes an injected mapping rather than the live
process environment. By default that mapping is a snapshot of
``os.environ`` taken at construction, so writes never leak into the process.
"""

import logging
import os
from pathlib import Path
from typing import Dict, MutableMapping, Optional, Union

from dotenv import dotenv_values

from ...config.constants import PreferencePriority
from ...core.entities import PreferenceMetadata, PreferenceValue, SetOptions, build_metadata
from ...utils.values import from_env_key, parse_env_value, stringify_value, to_env_key

logger = logging.getLogger(__name__)


class EnvProvider:
    """Maps ``camelCase`` keys onto ``PREFIX_UPPER_SNAKE`` variables."""

    def __init__(
        self,
        prefix: str = "",
        priority: int = PreferencePriority.HIGH,
        parse_values: bool = True,
        environ: Optional[MutableMapping[str, str]] = None,
        name: str = "env",
    ):
        self.name = name
        self.priority = priority
        self.prefix = prefix
        self.parse_values = parse_values
        self._environ: MutableMapping[str, str] = dict(os.environ) if environ is None else environ

    @property
    def environ(self) -> MutableMapping[str, str]:
        return self._environ

    async def initialize(self) -> None:
        pass

    def _metadata(self, key: str, raw: str) -> PreferenceMetadata:
        value = parse_env_value(raw) if self.parse_values else raw
        return build_metadata(key, value, self.priority, self.name)

    async def get(self, key: str) -> Optional[PreferenceMetadata]:
        raw = self._environ.get(to_env_key(key, self.prefix))
        if raw is None:
            return None
        return self._metadata(key, raw)

    async def get_all(self) -> Dict[str, PreferenceMetadata]:
        preferences: Dict[str, PreferenceMetadata] = {}
        for env_key, raw in list(self._environ.items()):
            if self.prefix and not env_key.startswith(self.prefix):
                continue
            key = from_env_key(env_key, self.prefix)
            if key:
                preferences[key] = self._metadata(key, raw or "")
        return preferences

    async def set(self, key: str, value: PreferenceValue, options: Optional[SetOptions] = None) -> None:
        self._environ[to_env_key(key, self.prefix)] = stringify_value(value)

    async def has(self, key: str) -> bool:
        return to_env_key(key, self.prefix) in self._environ

    async def delete(self, key: str) -> bool:
        return self._environ.pop(to_env_key(key, self.prefix), None) is not None

    async def clear(self) -> None:
        """Remove prefixed variables; without a prefix nothing is removed."""
        if not self.prefix:
            return
        for env_key in [k for k in self._environ if k.startswith(self.prefix)]:
            del self._environ[env_key]

    def load_dotenv(self, path: Union[str, Path], override: bool = False) -> int:
        """Merge variables from a ``.env`` file into the environment mapping.

        Returns:
            Number of variables written
        """
        loaded = 0
        for env_key, raw in dotenv_values(path).items():
            if raw is None:
                continue
            if not override and env_key in self._environ:
                continue
            self._environ[env_key] = raw
            loaded += 1

        logger.debug(f"Loaded {loaded} variables from {path}")
        return loaded
