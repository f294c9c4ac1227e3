"""SDK response models."""

from sdn_sdk.models.base import SDNModel
from sdn_sdk.models.errors import ErrorCode, ErrorResponse

from sdn_sdk.models.auth import (
    CreateDIDResponse,
    DIDListResponse,
    LoginResponse,
    PreLoginResponse,
)
from sdn_sdk.models.events import (
    Event,
    Presence,
    Receipt,
    RoomAvatar,
    RoomCanonicalAlias,
    RoomCreate,
    RoomJoinRules,
    RoomMember,
    RoomMessage,
    RoomName,
    RoomRedaction,
    RoomTopic,
    Typing,
    parse_event,
)
from sdn_sdk.models.filter import EventFilter, Filter, RoomEventFilter, RoomFilter
from sdn_sdk.models.profile import AvatarURLResponse, DisplayNameResponse
from sdn_sdk.models.rooms import (
    CreateRoomResponse,
    JoinedMember,
    JoinedMembersResponse,
    JoinedRoomsResponse,
    JoinRoomResponse,
    SendEventResponse,
)
from sdn_sdk.models.sync import (
    EventList,
    FilterResponse,
    InvitedRoom,
    JoinedRoom,
    LeftRoom,
    Rooms,
    SyncResponse,
    Timeline,
    UnreadNotifications,
)

__all__ = [
    "SDNModel",
    "ErrorCode",
    "ErrorResponse",
    # auth
    "CreateDIDResponse",
    "DIDListResponse",
    "LoginResponse",
    "PreLoginResponse",
    # events
    "Event",
    "Presence",
    "Receipt",
    "RoomAvatar",
    "RoomCanonicalAlias",
    "RoomCreate",
    "RoomJoinRules",
    "RoomMember",
    "RoomMessage",
    "RoomName",
    "RoomRedaction",
    "RoomTopic",
    "Typing",
    "parse_event",
    # filter
    "EventFilter",
    "Filter",
    "RoomEventFilter",
    "RoomFilter",
    # profile
    "AvatarURLResponse",
    "DisplayNameResponse",
    # rooms
    "CreateRoomResponse",
    "JoinedMember",
    "JoinedMembersResponse",
    "JoinedRoomsResponse",
    "JoinRoomResponse",
    "SendEventResponse",
    # sync
    "EventList",
    "FilterResponse",
    "InvitedRoom",
    "JoinedRoom",
    "LeftRoom",
    "Rooms",
    "SyncResponse",
    "Timeline",
    "UnreadNotifications",
]
