from sdn_sdk.models.base import SDNModel


class CreateRoomResponse(SDNModel):
    room_id: str


class JoinRoomResponse(SDNModel):
    room_id: str


class JoinedRoomsResponse(SDNModel):
    joined_rooms: list[str] = []


class JoinedMember(SDNModel):
    display_name: str | None = None
    avatar_url: str | None = None


class JoinedMembersResponse(SDNModel):
    joined: dict[str, JoinedMember] = {}


class SendEventResponse(SDNModel):
    event_id: str
