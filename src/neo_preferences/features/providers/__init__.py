"""Preference providers: memory, environment, file and remote API."""

from .memory_provider import MemoryProvider
from .env_provider import EnvProvider
from .file_provider import FileProvider, FileProviderConfig
from .api_provider import ApiProvider, ApiProviderConfig

__all__ = [
    "MemoryProvider",
    "EnvProvider",
    "FileProvider",
    "FileProviderConfig",
    "ApiProvider",
    "ApiProviderConfig",
]
