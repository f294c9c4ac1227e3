"""Builds the filter document that scopes the sync stream."""

from __future__ import annotations

from typing import Any

from sdn_sdk.models.filter import Filter, RoomEventFilter, RoomFilter

DEFAULT_TIMELINE_LIMIT = 50


def default_filter() -> Filter:
    """All event types from all rooms, with a bounded timeline per room."""
    return Filter(room=RoomFilter(timeline=RoomEventFilter(limit=DEFAULT_TIMELINE_LIMIT)))


class FilterRegistry:
    """Produces the filter JSON uploaded once per user before the first sync.

    Pass a :class:`Filter` to narrow the stream; the server-issued id is
    cached by the :class:`~sdn_sdk.store.SyncStore`, not here.
    """

    def __init__(self, filter: Filter | None = None) -> None:
        self._filter = filter or default_filter()

    @property
    def filter(self) -> Filter:
        return self._filter

    def build(self, user_id: str) -> dict[str, Any]:
        return self._filter.to_json()
