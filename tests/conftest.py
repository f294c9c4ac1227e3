"""Shared test fixtures for SDK tests."""

from __future__ import annotations

import inspect
import json
from collections import deque
from typing import Any

import httpx
import pytest

from sdn_sdk.api.sync import SyncAPI
from sdn_sdk.http import HTTPClient
from sdn_sdk.sync import DefaultFailurePolicy, SyncEngine

BASE_URL = "https://sdn.test"
USER_ID = "@alice:sdn.test"


def _record(request: httpx.Request) -> dict[str, Any]:
    body = None
    if request.content:
        try:
            body = json.loads(request.content)
        except Exception:
            body = request.content
    return {
        "method": request.method,
        "url": str(request.url),
        "path": request.url.raw_path.decode().split("?")[0],
        "params": dict(request.url.params),
        "headers": dict(request.headers),
        "body": body,
    }


def sync_reply(next_batch: str, *timeline: dict[str, Any], room_id: str = "!r1:sdn.test") -> dict[str, Any]:
    """A /sync body with ``timeline`` events in one joined room."""
    body: dict[str, Any] = {"next_batch": next_batch}
    if timeline:
        body["rooms"] = {"join": {room_id: {"timeline": {"events": list(timeline)}}}}
    return body


def message_event(event_id: str, body: str = "hi", sender: str = "@bob:sdn.test") -> dict[str, Any]:
    return {
        "type": "m.room.message",
        "event_id": event_id,
        "sender": sender,
        "origin_server_ts": 1700000000000,
        "content": {"msgtype": "m.text", "body": body},
    }


@pytest.fixture
def mock_transport():
    """Returns an httpx mock transport that records requests."""
    calls: list[dict[str, Any]] = []
    default_response = httpx.Response(200, json={})

    class RecordingTransport(httpx.AsyncBaseTransport):
        def __init__(self):
            self.response = default_response

        async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
            calls.append(_record(request))
            return self.response

    transport = RecordingTransport()
    return transport, calls


@pytest.fixture
def http_client(mock_transport):
    """HTTPClient with a mock transport."""
    transport, calls = mock_transport
    client = HTTPClient(BASE_URL, token="test-token")
    # Replace the inner httpx client with one using our mock transport
    client._client = httpx.AsyncClient(
        base_url=BASE_URL,
        transport=transport,
    )
    return client, transport, calls


class FakeNode(httpx.AsyncBaseTransport):
    """Serves /filter and a scripted sequence of /sync replies.

    Script items may be a dict (a 200 JSON body), an ``httpx.Response``, or
    a callable (sync or async) taking the request and returning either.
    Once the script runs out the node stops the attached engine and answers
    with ``next_batch="after-stop"``, which a correct engine never persists.
    """

    def __init__(self) -> None:
        self.sync_script: deque[Any] = deque()
        self.filter_reply: Any = {"filter_id": "f1"}
        self.calls: list[dict[str, Any]] = []
        self.engine: SyncEngine | None = None

    @property
    def sync_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["path"].endswith("/sync")]

    @property
    def filter_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["path"].endswith("/filter")]

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(_record(request))
        path = request.url.path
        if path.endswith("/filter"):
            return await self._serve(self.filter_reply, request)
        if path.endswith("/sync"):
            if self.sync_script:
                return await self._serve(self.sync_script.popleft(), request)
            assert self.engine is not None
            self.engine.stop()
            return httpx.Response(200, json=sync_reply("after-stop"))
        return httpx.Response(404, json={"errcode": "M_UNRECOGNIZED", "error": "Unrecognized request"})

    async def _serve(self, item: Any, request: httpx.Request) -> httpx.Response:
        result = item(request) if callable(item) else item
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, dict):
            result = httpx.Response(200, json=result)
        return result


@pytest.fixture
def node():
    return FakeNode()


@pytest.fixture
def sync_engine(node):
    """SyncEngine for USER_ID wired to the fake node, retrying failures immediately."""
    http = HTTPClient(BASE_URL, token="test-token")
    http._client = httpx.AsyncClient(base_url=BASE_URL, transport=node)
    engine = SyncEngine(
        SyncAPI(http),
        USER_ID,
        failure_policy=DefaultFailurePolicy(retry_delay=0),
    )
    node.engine = engine
    return engine
