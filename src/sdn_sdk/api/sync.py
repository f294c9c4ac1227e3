"""Sync and filter API methods."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from sdn_sdk.errors import SDNNetworkError
from sdn_sdk.models.sync import FilterResponse, SyncResponse

if TYPE_CHECKING:
    from sdn_sdk.http import HTTPClient

# Extra client-side wait on top of the server's long-poll timeout
_TIMEOUT_MARGIN = 10.0


class SyncAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def sync(
        self,
        timeout: int = 30000,
        since: str = "",
        filter_id: str = "",
        *,
        full_state: bool = False,
        set_presence: str = "",
    ) -> SyncResponse:
        """Long-poll ``/sync``. ``timeout`` is the server-side wait in milliseconds.

        A body that is not a valid sync response is reported as a
        :class:`SDNNetworkError`, the same as a dropped connection.
        """
        params: dict[str, Any] = {"timeout": str(timeout)}
        if since:
            params["since"] = since
        if filter_id:
            params["filter"] = filter_id
        if set_presence:
            params["set_presence"] = set_presence
        if full_state:
            params["full_state"] = "true"
        r = await self._http.get(
            self._http.build_path("sync"),
            params=params,
            timeout=timeout / 1000.0 + _TIMEOUT_MARGIN,
        )
        try:
            return SyncResponse.model_validate(r.json())
        except (ValueError, ValidationError) as exc:
            raise SDNNetworkError(f"Malformed sync response: {exc}") from exc

    async def create_filter(self, user_id: str, filter: dict[str, Any]) -> FilterResponse:
        r = await self._http.post(self._http.build_path("user", user_id, "filter"), json=filter)
        return FilterResponse.model_validate(r.json())
