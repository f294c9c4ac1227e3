"""Fans out events from sync responses to handlers registered by event type."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from sdn_sdk.models.events import Event, parse_event
from sdn_sdk.models.sync import SyncResponse

log = logging.getLogger(__name__)

EventHandler = Callable[[Event], "Awaitable[None] | None"]


class EventDispatcher:
    """Maps event types to ordered lists of handlers.

    Usage::

        dispatcher = EventDispatcher()

        @dispatcher.on("m.room.message")
        async def on_message(event):
            print(event.sender, event.body())

    Handlers may be plain functions or coroutine functions. They run one at a
    time in registration order, and exceptions they raise are not caught here:
    a failing handler aborts the sync session that is dispatching.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def on(self, event_type: str) -> Callable[[EventHandler], EventHandler]:
        """Decorator to register an event handler."""
        def decorator(func: EventHandler) -> EventHandler:
            self.add_handler(event_type, func)
            return func
        return decorator

    def add_handler(self, event_type: str, handler: EventHandler) -> None:
        """Register an event handler programmatically. Duplicates are kept."""
        self._handlers.setdefault(event_type, []).append(handler)

    def handlers_for(self, event_type: str) -> list[EventHandler]:
        return list(self._handlers.get(event_type, []))

    async def dispatch(self, event: Event) -> None:
        for handler in self._handlers.get(event.type, []):
            result = handler(event)
            if inspect.isawaitable(result):
                await result

    async def process_response(self, response: SyncResponse, since: str) -> None:
        """Dispatch every event of a sync response.

        Order: presence, account data, to-device, then joined rooms (state,
        timeline, ephemeral, account data), invited rooms, left rooms.
        Override to materialize room state; ``since`` is the cursor the
        response was requested with (``""`` on the first sync).
        """
        log.debug("Processing batch %s (since=%r)", response.next_batch, since)
        await self._dispatch_all(response.presence.events)
        await self._dispatch_all(response.account_data.events)
        await self._dispatch_all(response.to_device.events)

        for room_id, joined in response.rooms.join.items():
            await self._dispatch_all(joined.state.events, room_id)
            await self._dispatch_all(joined.timeline.events, room_id)
            await self._dispatch_all(joined.ephemeral.events, room_id)
            await self._dispatch_all(joined.account_data.events, room_id)

        for room_id, invited in response.rooms.invite.items():
            await self._dispatch_all(invited.invite_state.events, room_id)

        for room_id, left in response.rooms.leave.items():
            await self._dispatch_all(left.state.events, room_id)
            await self._dispatch_all(left.timeline.events, room_id)
            await self._dispatch_all(left.account_data.events, room_id)

    async def _dispatch_all(self, raw_events: list[dict[str, Any]], room_id: str | None = None) -> None:
        for raw in raw_events:
            await self.dispatch(parse_event(raw, room_id=room_id))
