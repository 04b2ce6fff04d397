"""
creatorcal.sync.source
----------------------
Authoritative time sources. A source yields one absolute Instant per call or
raises TimeSourceError; the transport behind it is interchangeable.

The HTTP source expects a JSON body of the form {"timestamp": "<ISO-8601>"}.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from ..core.errors import ConfigError, TimeSourceError
from ..core.time import parse_iso_instant, wall_clock_ms

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class TimeSource(Protocol):
    async def fetch_instant(self) -> int: ...


def parse_time_payload(payload: Any) -> int:
    """{"timestamp": "<ISO-8601>"} -> Instant."""
    if not isinstance(payload, Mapping) or "timestamp" not in payload:
        raise TimeSourceError("time payload has no 'timestamp' field")
    stamp = payload["timestamp"]
    if not isinstance(stamp, str):
        raise TimeSourceError(f"timestamp must be a string, got {type(stamp).__name__}")
    try:
        return parse_iso_instant(stamp)
    except ConfigError as e:
        raise TimeSourceError(str(e)) from e


class HttpTimeSource:
    """
    GET a JSON timestamp endpoint.

    With an api_key, both `apikey` and `Authorization: Bearer` headers are
    sent; public endpoints that reject the bearer token with 401 are retried
    once with the `apikey` header alone.

    Without an injected client the source opens its own on first use, keeps
    it for later fetches and closes it in `aclose`. An injected client belongs
    to the caller and is never closed here.
    """

    def __init__(
        self,
        url: str,
        *,
        api_key: Optional[str] = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client = client
        self._owns_client = client is None

    def _headers(self, *, bearer: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            if bearer:
                headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        r = await client.get(self.url, headers=self._headers(bearer=True))
        if r.status_code == 401 and self.api_key:
            logger.debug("time source rejected bearer token, retrying with apikey only")
            r = await client.get(self.url, headers=self._headers(bearer=False))
        return r

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def fetch_instant(self) -> int:
        try:
            r = await self._get(self._http())
        except httpx.HTTPError as e:
            raise TimeSourceError(f"time source request failed: {e}") from e

        if r.status_code >= 400:
            raise TimeSourceError(f"time source returned HTTP {r.status_code}")
        try:
            payload = r.json()
        except ValueError as e:
            raise TimeSourceError("time source returned invalid JSON") from e
        return parse_time_payload(payload)

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


class SystemTimeSource:
    """Local wall clock as a time source (offline use and tests)."""

    async def fetch_instant(self) -> int:
        return wall_clock_ms()
