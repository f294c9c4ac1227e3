from typing import Any

from sdn_sdk.models.base import SDNModel


class EventList(SDNModel):
    events: list[dict[str, Any]] = []


class Timeline(EventList):
    limited: bool = False
    prev_batch: str | None = None


class UnreadNotifications(SDNModel):
    highlight_count: int = 0
    notification_count: int = 0


class JoinedRoom(SDNModel):
    state: EventList = EventList()
    timeline: Timeline = Timeline()
    ephemeral: EventList = EventList()
    account_data: EventList = EventList()
    unread_notifications: UnreadNotifications = UnreadNotifications()


class InvitedRoom(SDNModel):
    invite_state: EventList = EventList()


class LeftRoom(SDNModel):
    state: EventList = EventList()
    timeline: Timeline = Timeline()
    account_data: EventList = EventList()


class Rooms(SDNModel):
    join: dict[str, JoinedRoom] = {}
    invite: dict[str, InvitedRoom] = {}
    leave: dict[str, LeftRoom] = {}


class SyncResponse(SDNModel):
    next_batch: str
    rooms: Rooms = Rooms()
    presence: EventList = EventList()
    account_data: EventList = EventList()
    to_device: EventList = EventList()


class FilterResponse(SDNModel):
    filter_id: str
