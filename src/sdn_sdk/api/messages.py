"""Message-sending API methods."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from sdn_sdk.models.rooms import SendEventResponse

if TYPE_CHECKING:
    from sdn_sdk.http import HTTPClient

HTML_FORMAT = "org.sdn.custom.html"


def txn_id() -> str:
    """A transaction id unique per client process."""
    return f"py{time.time_ns()}"


class MessagesAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def send_event(
        self, room_id: str, event_type: str, content: dict[str, Any]
    ) -> SendEventResponse:
        r = await self._http.put(
            self._http.build_path("rooms", room_id, "send", event_type, txn_id()),
            json=content,
        )
        return SendEventResponse.model_validate(r.json())

    async def send_text(self, room_id: str, text: str) -> SendEventResponse:
        return await self.send_event(
            room_id, "m.room.message", {"msgtype": "m.text", "body": text}
        )

    async def send_formatted_text(
        self, room_id: str, text: str, formatted_text: str
    ) -> SendEventResponse:
        """Send ``m.text`` with an HTML body; ``text`` is the plain-text fallback."""
        return await self.send_event(
            room_id,
            "m.room.message",
            {
                "msgtype": "m.text",
                "body": text,
                "format": HTML_FORMAT,
                "formatted_body": formatted_text,
            },
        )

    async def send_notice(self, room_id: str, text: str) -> SendEventResponse:
        return await self.send_event(
            room_id, "m.room.message", {"msgtype": "m.notice", "body": text}
        )

    async def send_image(self, room_id: str, body: str, url: str) -> SendEventResponse:
        return await self.send_event(
            room_id, "m.room.message", {"msgtype": "m.image", "body": body, "url": url}
        )

    async def send_video(self, room_id: str, body: str, url: str) -> SendEventResponse:
        return await self.send_event(
            room_id, "m.room.message", {"msgtype": "m.video", "body": body, "url": url}
        )
