"""HTTP client wrapping httpx with bearer auth and rate-limit retry."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any
from urllib.parse import quote

import httpx

from sdn_sdk.errors import SDNHTTPError, SDNNetworkError

DEFAULT_PATH_PREFIX = "/_api/client/r0"

_MAX_RETRIES = 3
_BASE_RETRY_DELAY = 1.0


def _retry_after_header(value: str | None) -> float:
    """Seconds to wait from a ``Retry-After`` header, either delay-seconds or an HTTP date."""
    if not value:
        return _BASE_RETRY_DELAY
    try:
        return max(float(value), 0.0)
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return _BASE_RETRY_DELAY
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


class HTTPClient:
    """Async HTTP client for the SDN client-server API."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        path_prefix: str = DEFAULT_PATH_PREFIX,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.path_prefix = "/" + path_prefix.strip("/")
        self.timeout = timeout
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
        )

    @property
    def token(self) -> str | None:
        return self._token

    @token.setter
    def token(self, value: str | None) -> None:
        self._token = value

    def build_path(self, *segments: str) -> str:
        """Join URL segments under the client path prefix, escaping each one.

        Room IDs and aliases carry ``!``, ``#`` and ``:`` which must not leak
        into the path unescaped. Empty segments are dropped, so an empty state
        key addresses ``/state/{type}``.
        """
        escaped = "/".join(quote(str(s), safe="") for s in segments if s != "")
        return f"{self.path_prefix}/{escaped}"

    def _headers(self) -> dict[str, str]:
        h: dict[str, str] = {"Content-Type": "application/json"}
        if self._token:
            h["Authorization"] = f"Bearer {self._token}"
        return h

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Make an API request, retrying when the server rate-limits us."""
        merged_headers = self._headers()
        if headers:
            merged_headers.update(headers)

        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = timeout

        for attempt in range(_MAX_RETRIES):
            try:
                response = await self._client.request(
                    method,
                    path,
                    json=json,
                    params=params,
                    headers=merged_headers,
                    **extra,
                )
            except httpx.TransportError as exc:
                raise SDNNetworkError(str(exc) or exc.__class__.__name__) from exc

            if response.status_code == 429:
                retry_after = _BASE_RETRY_DELAY
                try:
                    ms = response.json().get("retry_after_ms")
                    if ms:
                        retry_after = ms / 1000.0
                except Exception:
                    retry_after = _retry_after_header(response.headers.get("retry-after"))
                if attempt < _MAX_RETRIES - 1:
                    await asyncio.sleep(retry_after)
                    continue
                raise SDNHTTPError.from_response(response)

            if not response.is_success:
                raise SDNHTTPError.from_response(response)

            return response

        raise SDNHTTPError.from_response(response)  # type: ignore[possibly-undefined]

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    async def close(self) -> None:
        await self._client.aclose()
