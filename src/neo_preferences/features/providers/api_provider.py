"""Remote REST API preference provider.

Endpoints, relative to ``base_url``:

    GET    /preferences          all values as a JSON object
    DELETE /preferences          remove everything
    GET    /preferences/{key}    {"value": ...}; 404 when absent
    PUT    /preferences/{key}    body {"value": ..., "options": {...}}
    HEAD   /preferences/{key}    2xx when present
    DELETE /preferences/{key}    404 when absent

Transport failures are retried with exponential backoff. HTTP error
statuses are not retried.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ...config.constants import PreferencePriority
from ...core.entities import PreferenceMetadata, PreferenceValue, SetOptions, build_metadata
from ...core.exceptions import ProviderError, ProviderInitializationError

logger = logging.getLogger(__name__)


@dataclass
class ApiProviderConfig:
    base_url: str
    api_key: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    priority: int = PreferencePriority.NORMAL
    timeout: int = 5000  # milliseconds
    retries: int = 3
    retry_backoff_ms: int = 1000
    max_retry_backoff_ms: int = 10000

    def calculate_delay(self, attempt: int) -> float:
        """Backoff before retry ``attempt`` (0-based), in seconds."""
        delay_ms = min(self.retry_backoff_ms * (2 ** attempt), self.max_retry_backoff_ms)
        return delay_ms / 1000


class ApiProvider:
    """Preferences served by a remote HTTP API, with a local snapshot."""

    def __init__(
        self,
        config: ApiProviderConfig,
        client: Optional[httpx.AsyncClient] = None,
        name: str = "api",
    ):
        self.name = name
        self.priority = config.priority
        self.config = config
        self._client = client
        self._owns_client = client is None
        self._snapshot: Dict[str, PreferenceMetadata] = {}

    # HTTP plumbing

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout / 1000)
        return self._client

    def _url(self, key: Optional[str] = None) -> str:
        base = f"{self.config.base_url.rstrip('/')}/preferences"
        if key is None:
            return base
        return f"{base}/{quote(key, safe='')}"

    def _headers(self) -> Dict[str, str]:
        headers = dict(self.config.headers)
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = self._get_client()
        attempt = 0
        while True:
            try:
                return await client.request(method, url, headers=self._headers(), **kwargs)
            except httpx.RequestError as e:
                if attempt >= self.config.retries:
                    raise
                delay = self.config.calculate_delay(attempt)
                logger.warning(
                    f"{method} {url} failed ({type(e).__name__}), "
                    f"retrying in {delay:.2f}s (attempt {attempt + 1}/{self.config.retries})"
                )
                await asyncio.sleep(delay)
                attempt += 1

    async def _fetch_all(self) -> None:
        response = await self._request("GET", self._url())
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Expected a JSON object of preferences")

        self._snapshot = {
            key: build_metadata(key, value, self.priority, self.name)
            for key, value in data.items()
        }

    # Provider operations

    async def initialize(self) -> None:
        try:
            await self._fetch_all()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderInitializationError(self.name, e) from e

    async def get(self, key: str) -> Optional[PreferenceMetadata]:
        try:
            response = await self._request("GET", self._url(key))
            if response.status_code == 404:
                return None
            response.raise_for_status()
            value = response.json()["value"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise ProviderError(self.name, "get", e) from e

        metadata = build_metadata(key, value, self.priority, self.name)
        self._snapshot[key] = metadata
        return metadata

    async def get_all(self) -> Dict[str, PreferenceMetadata]:
        try:
            await self._fetch_all()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(self.name, "get_all", e) from e
        return dict(self._snapshot)

    async def set(self, key: str, value: PreferenceValue, options: Optional[SetOptions] = None) -> None:
        body = {"value": value, "options": options.to_dict() if options else None}
        try:
            response = await self._request("PUT", self._url(key), json=body)
            response.raise_for_status()
        except (httpx.HTTPError, TypeError, ValueError) as e:
            raise ProviderError(self.name, "set", e) from e

        self._snapshot[key] = build_metadata(key, value, self.priority, self.name, options)

    async def has(self, key: str) -> bool:
        try:
            response = await self._request("HEAD", self._url(key))
        except httpx.HTTPError as e:
            raise ProviderError(self.name, "has", e) from e
        return response.is_success

    async def delete(self, key: str) -> bool:
        try:
            response = await self._request("DELETE", self._url(key))
            if response.status_code == 404:
                return False
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderError(self.name, "delete", e) from e

        self._snapshot.pop(key, None)
        return True

    async def clear(self) -> None:
        try:
            response = await self._request("DELETE", self._url())
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderError(self.name, "clear", e) from e

        self._snapshot.clear()

    # Snapshot management

    async def refresh(self) -> None:
        """Re-fetch every preference into the local snapshot."""
        try:
            await self._fetch_all()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(self.name, "refresh", e) from e

    def clear_cache(self) -> None:
        self._snapshot.clear()

    @property
    def cached(self) -> Dict[str, PreferenceMetadata]:
        return dict(self._snapshot)

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ApiProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
