"""File-backed preference provider (JSON or ``.env`` format).

The whole file is loaded into memory on ``initialize``/``reload`` and is
rewritten on every mutation. A missing file loads as empty.
"""

import asyncio
import io
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values

from ...config.constants import PreferencePriority
from ...core.entities import PreferenceMetadata, PreferenceValue, SetOptions, build_metadata
from ...core.exceptions import ConfigurationError, ProviderError, ProviderInitializationError
from ...utils.values import parse_file_value

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "env")

# Values python-dotenv would truncate or strip unless quoted
_NEEDS_QUOTES = re.compile(r"\s#|[\r\n]|^\s|\s$|^['\"]")


def _env_value(raw: str) -> str:
    """Render ``raw`` so that ``dotenv_values`` reads it back unchanged."""
    if not _NEEDS_QUOTES.search(raw):
        return raw
    if raw.endswith("\\"):
        raise ValueError("A quoted .env value cannot end with a backslash")
    escaped = raw.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


@dataclass
class FileProviderConfig:
    file_path: Union[str, Path]
    priority: int = PreferencePriority.NORMAL
    watch_for_changes: bool = False
    format: Optional[str] = None
    poll_interval: float = 1.0

    def __post_init__(self):
        self.file_path = Path(self.file_path)
        if self.format is not None and self.format not in SUPPORTED_FORMATS:
            raise ConfigurationError(f"Unsupported file format: {self.format}")


class FileProvider:
    """Preferences persisted in a single local file."""

    def __init__(self, config: FileProviderConfig, name: str = "file"):
        self.name = name
        self.priority = config.priority
        self.config = config
        self._preferences: Dict[str, PreferenceMetadata] = {}
        self._watch_task: Optional[asyncio.Task] = None
        self._last_mtime: Optional[float] = None
        self._write_lock = asyncio.Lock()

    @property
    def file_path(self) -> Path:
        return self.config.file_path

    @property
    def format(self) -> str:
        if self.config.format:
            return self.config.format
        if self.file_path.suffix.lower() == ".json":
            return "json"
        if self.file_path.name.lower().endswith(".env"):
            return "env"
        return "json"

    async def initialize(self) -> None:
        try:
            await self._load()
        except Exception as e:
            raise ProviderInitializationError(self.name, e) from e

        if self.config.watch_for_changes:
            self.start_watching()

    async def get(self, key: str) -> Optional[PreferenceMetadata]:
        return self._preferences.get(key)

    async def get_all(self) -> Dict[str, PreferenceMetadata]:
        return dict(self._preferences)

    async def set(self, key: str, value: PreferenceValue, options: Optional[SetOptions] = None) -> None:
        async with self._write_lock:
            preferences = dict(self._preferences)
            preferences[key] = build_metadata(key, value, self.priority, self.name, options)
            await self._write(preferences)
            self._preferences = preferences

    async def has(self, key: str) -> bool:
        return key in self._preferences

    async def delete(self, key: str) -> bool:
        async with self._write_lock:
            if key not in self._preferences:
                return False
            preferences = dict(self._preferences)
            del preferences[key]
            await self._write(preferences)
            self._preferences = preferences
        return True

    async def clear(self) -> None:
        async with self._write_lock:
            await self._write({})
            self._preferences = {}

    async def reload(self) -> None:
        await self._load()

    # File I/O

    def _mtime(self) -> Optional[float]:
        try:
            return self.file_path.stat().st_mtime
        except FileNotFoundError:
            return None

    def _parse(self, content: str) -> Dict[str, PreferenceValue]:
        if self.format == "json":
            data = json.loads(content) if content.strip() else {}
            if not isinstance(data, dict):
                raise ValueError("Preference file must contain a JSON object")
            return data

        return {
            key: parse_file_value(raw)
            for key, raw in dotenv_values(stream=io.StringIO(content), interpolate=False).items()
            if raw is not None
        }

    def _render(self, data: Dict[str, PreferenceValue]) -> str:
        if self.format == "json":
            return json.dumps(data, indent=2)

        lines = [
            f"{key}={_env_value(value if isinstance(value, str) else json.dumps(value))}"
            for key, value in data.items()
        ]
        return "\n".join(lines) + "\n"

    async def _load(self) -> None:
        if not self.file_path.exists():
            self._preferences.clear()
            self._last_mtime = None
            return

        try:
            content = await asyncio.to_thread(self.file_path.read_text, encoding="utf-8")
            data = self._parse(content)
        except (OSError, ValueError) as e:
            raise ProviderError(self.name, "load", e) from e

        self._preferences = {
            key: build_metadata(key, value, self.priority, self.name)
            for key, value in data.items()
        }
        self._last_mtime = self._mtime()
        logger.debug(f"Loaded {len(self._preferences)} preferences from {self.file_path}")

    async def _write(self, preferences: Dict[str, PreferenceMetadata]) -> None:
        data = {key: metadata.value for key, metadata in preferences.items()}
        try:
            content = self._render(data)
            await asyncio.to_thread(self.file_path.write_text, content, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise ProviderError(self.name, "write", e) from e

        self._last_mtime = self._mtime()

    # Watching

    @property
    def is_watching(self) -> bool:
        return self._watch_task is not None and not self._watch_task.done()

    def start_watching(self) -> None:
        """Poll the file's mtime and reload when it changes."""
        if self.is_watching:
            return
        self._watch_task = asyncio.get_running_loop().create_task(self._watch_loop())

    async def stop_watching(self) -> None:
        task, self._watch_task = self._watch_task, None
        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _watch_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.poll_interval)
            mtime = self._mtime()
            if mtime == self._last_mtime:
                continue

            try:
                await self._load()
                logger.info(f"Reloaded preferences from {self.file_path}")
            except ProviderError as e:
                logger.error(f"File watch reload failed for {self.file_path}: {e}")
                self._last_mtime = mtime
