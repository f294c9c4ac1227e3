"""Profile API methods."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sdn_sdk.models.profile import AvatarURLResponse, DisplayNameResponse

if TYPE_CHECKING:
    from sdn_sdk.http import HTTPClient


class ProfileAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def get_display_name(self, user_id: str) -> str | None:
        r = await self._http.get(self._http.build_path("profile", user_id, "displayname"))
        return DisplayNameResponse.model_validate(r.json()).displayname

    async def set_display_name(self, user_id: str, display_name: str) -> None:
        await self._http.put(
            self._http.build_path("profile", user_id, "displayname"),
            json={"displayname": display_name},
        )

    async def get_avatar_url(self, user_id: str) -> str | None:
        r = await self._http.get(self._http.build_path("profile", user_id, "avatar_url"))
        return AvatarURLResponse.model_validate(r.json()).avatar_url

    async def set_avatar_url(self, user_id: str, url: str) -> None:
        await self._http.put(
            self._http.build_path("profile", user_id, "avatar_url"),
            json={"avatar_url": url},
        )
