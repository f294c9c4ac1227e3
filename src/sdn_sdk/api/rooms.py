"""Room API methods."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sdn_sdk.models.rooms import (
    CreateRoomResponse,
    JoinedMembersResponse,
    JoinedRoomsResponse,
    JoinRoomResponse,
    SendEventResponse,
)

if TYPE_CHECKING:
    from sdn_sdk.http import HTTPClient


class RoomsAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def joined_rooms(self) -> list[str]:
        r = await self._http.get(self._http.build_path("joined_rooms"))
        return JoinedRoomsResponse.model_validate(r.json()).joined_rooms

    async def create(
        self,
        name: str | None = None,
        *,
        topic: str | None = None,
        room_alias_name: str | None = None,
        invite: list[str] | None = None,
        preset: str | None = None,
        creation_content: dict[str, Any] | None = None,
        initial_state: list[dict[str, Any]] | None = None,
    ) -> CreateRoomResponse:
        payload: dict[str, Any] = {}
        if name is not None:
            payload["name"] = name
        if topic is not None:
            payload["topic"] = topic
        if room_alias_name is not None:
            payload["room_alias_name"] = room_alias_name
        if invite:
            payload["invite"] = invite
        if preset is not None:
            payload["preset"] = preset
        if creation_content:
            payload["creation_content"] = creation_content
        if initial_state:
            payload["initial_state"] = initial_state
        r = await self._http.post(self._http.build_path("createRoom"), json=payload)
        return CreateRoomResponse.model_validate(r.json())

    async def join(self, room_id_or_alias: str) -> JoinRoomResponse:
        r = await self._http.post(self._http.build_path("join", room_id_or_alias), json={})
        return JoinRoomResponse.model_validate(r.json())

    async def leave(self, room_id: str) -> None:
        await self._http.post(self._http.build_path("rooms", room_id, "leave"), json={})

    async def invite(self, room_id: str, user_id: str) -> None:
        await self._http.post(
            self._http.build_path("rooms", room_id, "invite"), json={"user_id": user_id}
        )

    async def kick(self, room_id: str, user_id: str, reason: str | None = None) -> None:
        payload: dict[str, Any] = {"user_id": user_id}
        if reason:
            payload["reason"] = reason
        await self._http.post(self._http.build_path("rooms", room_id, "kick"), json=payload)

    async def joined_members(self, room_id: str) -> JoinedMembersResponse:
        r = await self._http.get(self._http.build_path("rooms", room_id, "joined_members"))
        return JoinedMembersResponse.model_validate(r.json())

    # --- State ---

    async def get_state_event(
        self, room_id: str, event_type: str, state_key: str = ""
    ) -> dict[str, Any]:
        r = await self._http.get(
            self._http.build_path("rooms", room_id, "state", event_type, state_key)
        )
        return r.json()

    async def send_state_event(
        self, room_id: str, event_type: str, content: dict[str, Any], state_key: str = ""
    ) -> SendEventResponse:
        r = await self._http.put(
            self._http.build_path("rooms", room_id, "state", event_type, state_key),
            json=content,
        )
        return SendEventResponse.model_validate(r.json())

    async def set_name(self, room_id: str, name: str) -> SendEventResponse:
        return await self.send_state_event(room_id, "m.room.name", {"name": name})

    async def set_topic(self, room_id: str, topic: str) -> SendEventResponse:
        return await self.send_state_event(room_id, "m.room.topic", {"topic": topic})
