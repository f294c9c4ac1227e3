"""Filter documents uploaded to ``/user/{userId}/filter``.

Every field is optional; ``None`` means "no restriction" and is dropped from
the serialized document.
"""

from typing import Any

from sdn_sdk.models.base import SDNModel


class EventFilter(SDNModel):
    limit: int | None = None
    types: list[str] | None = None
    not_types: list[str] | None = None
    senders: list[str] | None = None
    not_senders: list[str] | None = None


class RoomEventFilter(EventFilter):
    rooms: list[str] | None = None
    not_rooms: list[str] | None = None
    contains_url: bool | None = None
    lazy_load_members: bool | None = None


class RoomFilter(SDNModel):
    rooms: list[str] | None = None
    not_rooms: list[str] | None = None
    include_leave: bool | None = None
    state: RoomEventFilter | None = None
    timeline: RoomEventFilter | None = None
    ephemeral: RoomEventFilter | None = None
    account_data: RoomEventFilter | None = None


class Filter(SDNModel):
    event_fields: list[str] | None = None
    event_format: str | None = None
    presence: EventFilter | None = None
    account_data: EventFilter | None = None
    room: RoomFilter | None = None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
