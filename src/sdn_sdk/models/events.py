"""Room event dataclasses: lightweight containers for events received via /sync."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass
class Event:
    """Base for all events. Also used as-is for event types this SDK does not model.

    ``state_key`` is ``None`` for message events and a (possibly empty)
    string for state events.
    """
    type: str
    event_id: str = ""
    sender: str = ""
    room_id: str = ""
    origin_server_ts: int = 0
    state_key: str | None = None
    content: dict[str, Any] = field(default_factory=dict)
    unsigned: dict[str, Any] = field(default_factory=dict)
    prev_content: dict[str, Any] | None = None
    redacts: str = ""
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_state(self) -> bool:
        return self.state_key is not None

    def body(self) -> str | None:
        """The ``body`` key of the content, if present and a string."""
        value = self.content.get("body")
        return value if isinstance(value, str) else None

    def message_type(self) -> str | None:
        """The ``msgtype`` key of the content, if present and a string."""
        value = self.content.get("msgtype")
        return value if isinstance(value, str) else None


# --- Messages ---

@dataclass
class RoomMessage(Event):
    msgtype: str = ""
    format: str | None = None
    formatted_body: str | None = None
    url: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

@dataclass
class RoomRedaction(Event):
    reason: str | None = None


# --- Room state ---

@dataclass
class RoomCreate(Event):
    creator: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

@dataclass
class RoomMember(Event):
    membership: str = ""
    displayname: str | None = None
    avatar_url: str | None = None
    reason: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

@dataclass
class RoomName(Event):
    name: str = ""

@dataclass
class RoomTopic(Event):
    topic: str = ""

@dataclass
class RoomAvatar(Event):
    url: str = ""

@dataclass
class RoomCanonicalAlias(Event):
    alias: str | None = None
    alt_aliases: list[str] = field(default_factory=list)

@dataclass
class RoomJoinRules(Event):
    join_rule: str = ""


# --- Ephemeral / presence ---

@dataclass
class Typing(Event):
    user_ids: list[str] = field(default_factory=list)

@dataclass
class Receipt(Event):
    pass  # receipts are keyed by event id; read them from content

@dataclass
class Presence(Event):
    presence: str = ""
    last_active_ago: int | None = None
    status_msg: str | None = None
    currently_active: bool | None = None


_EVENT_MAP: dict[str, type[Event]] = {
    "m.room.message": RoomMessage,
    "m.room.redaction": RoomRedaction,
    "m.room.create": RoomCreate,
    "m.room.member": RoomMember,
    "m.room.name": RoomName,
    "m.room.topic": RoomTopic,
    "m.room.avatar": RoomAvatar,
    "m.room.canonical_alias": RoomCanonicalAlias,
    "m.room.join_rules": RoomJoinRules,
    "m.typing": Typing,
    "m.receipt": Receipt,
    "m.presence": Presence,
}

_BASE_FIELDS = {f.name for f in fields(Event)}

# Content keys each event type lifts into typed attributes
_CONTENT_FIELDS: dict[str, set[str]] = {}
_HAS_EXTRA: set[str] = set()
for _name, _cls in _EVENT_MAP.items():
    _own = {f.name for f in fields(_cls)} - _BASE_FIELDS
    _CONTENT_FIELDS[_name] = _own - {"extra"}
    if "extra" in _own:
        _HAS_EXTRA.add(_name)


def parse_event(raw: dict[str, Any], room_id: str | None = None) -> Event:
    """Parse a raw event dict into a typed event dataclass.

    ``room_id`` fills in the room for events that arrive inside a room
    partition of a sync response, where the server omits it.
    """
    event_type = raw.get("type", "")
    content = raw.get("content")
    if not isinstance(content, dict):
        content = {}
    state_key = raw.get("state_key")
    unsigned = raw.get("unsigned")
    prev_content = raw.get("prev_content")
    base: dict[str, Any] = {
        "type": event_type,
        "event_id": raw.get("event_id", ""),
        "sender": raw.get("sender", ""),
        "room_id": raw.get("room_id") or room_id or "",
        "origin_server_ts": raw.get("origin_server_ts", 0),
        "state_key": state_key if isinstance(state_key, str) else None,
        "content": content,
        "unsigned": unsigned if isinstance(unsigned, dict) else {},
        "prev_content": prev_content if isinstance(prev_content, dict) else None,
        "redacts": raw.get("redacts", ""),
        "raw": raw,
    }

    cls = _EVENT_MAP.get(event_type)
    if cls is None:
        return Event(**base)

    known = _CONTENT_FIELDS[event_type]
    kwargs: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, val in content.items():
        if key in known and val is not None:
            kwargs[key] = val
        elif key != "body":
            extra[key] = val

    if event_type in _HAS_EXTRA:
        kwargs["extra"] = extra

    return cls(**base, **kwargs)
