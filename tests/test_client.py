"""Unit tests for the Client class."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import BASE_URL, message_event, sync_reply
from sdn_sdk.api.messages import MessagesAPI
from sdn_sdk.api.profile import ProfileAPI
from sdn_sdk.api.rooms import RoomsAPI
from sdn_sdk.client import Client
from sdn_sdk.config import ClientConfig
from sdn_sdk.errors import SDNHTTPError
from sdn_sdk.store import MemorySyncStore
from sdn_sdk.sync import SyncState


class LoginNode(httpx.AsyncBaseTransport):
    """Answers the DID login handshake and records each request."""

    def __init__(self, dids: list[str] | None = None, login_status: int = 200) -> None:
        self.dids = dids or []
        self.login_status = login_status
        self.calls: list[tuple[str, str, dict | None]] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path
        self.calls.append((request.method, path, body))
        if path.startswith("/_api/client/v3/address/"):
            return httpx.Response(200, json={"data": self.dids})
        if path == "/_api/client/v3/did/pre_login1":
            return httpx.Response(200, json={
                "did": self.dids[0] if self.dids else "did:sdn:fresh",
                "message": "login-challenge",
                "random_server": "rs",
                "updated": "up",
            })
        if path == "/_api/client/v3/did/login":
            if self.login_status != 200:
                return httpx.Response(self.login_status, json={
                    "errcode": "M_FORBIDDEN", "error": "Bad signature",
                })
            return httpx.Response(200, json={
                "access_token": "tok-abc", "user_id": "@alice:sdn.test", "device_id": "DEV",
            })
        return httpx.Response(200, json={})


def _client_on(transport: httpx.AsyncBaseTransport, **kwargs) -> Client:
    client = Client(BASE_URL, **kwargs)
    client.http._client = httpx.AsyncClient(base_url=BASE_URL, transport=transport)
    return client


class TestLazyAPIProperties:
    def test_lazy_api_properties(self):
        """Each API property returns the correct type and is cached."""
        client = Client(BASE_URL)

        expected = {
            "rooms": RoomsAPI,
            "messages": MessagesAPI,
            "profile": ProfileAPI,
        }

        for prop_name, expected_type in expected.items():
            first = getattr(client, prop_name)
            assert isinstance(first, expected_type), f"{prop_name} should be {expected_type.__name__}"
            second = getattr(client, prop_name)
            assert first is second, f"{prop_name} should be cached (same object)"
            assert first._http is client.http


class TestContextManager:
    @pytest.mark.asyncio
    async def test_context_manager(self):
        """async with Client(...) enters and exits cleanly."""
        async with Client(BASE_URL) as client:
            assert client.http is not None
        assert client.http._client.is_closed
        assert client.engine.state == SyncState.idle


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_with_existing_did(self):
        node = LoginNode(dids=["did:sdn:abc", "did:sdn:other"])
        client = _client_on(node)
        signed = []

        def signer(message):
            signed.append(message)
            return "0xsig"

        result = await client.login("0xabc", signer, device_id="DEV")

        assert [c[1] for c in node.calls] == [
            "/_api/client/v3/address/0xabc",
            "/_api/client/v3/did/pre_login1",
            "/_api/client/v3/did/login",
        ]
        assert node.calls[1][2] == {"did": "did:sdn:abc"}
        assert node.calls[2][2]["identifier"]["token"] == "0xsig"
        assert node.calls[2][2]["identifier"]["message"] == "login-challenge"
        assert signed == ["login-challenge"]

        assert result.access_token == "tok-abc"
        assert client.http.token == "tok-abc"
        assert client.user_id == "@alice:sdn.test"
        assert client.engine.user_id == "@alice:sdn.test"
        assert client.wallet_address == "0xabc"
        await client.close()

    @pytest.mark.asyncio
    async def test_login_without_did_uses_address_and_async_signer(self):
        node = LoginNode()
        client = _client_on(node)

        async def signer(message):
            return "0xasync"

        await client.login("0xabc", signer)

        assert node.calls[1][2] == {"address": "0xabc"}
        assert node.calls[2][2]["identifier"]["token"] == "0xasync"
        assert node.calls[2][2]["identifier"]["did"] == "did:sdn:fresh"
        await client.close()

    @pytest.mark.asyncio
    async def test_login_error_propagates(self):
        """A rejected signature raises SDNHTTPError and the token stays unset."""
        client = _client_on(LoginNode(login_status=403))

        with pytest.raises(SDNHTTPError) as exc_info:
            await client.login("0xabc", lambda message: "0xbad")
        assert exc_info.value.status == 403
        assert exc_info.value.code == "M_FORBIDDEN"
        assert client.http.token is None
        assert client.user_id == ""
        await client.close()

    @pytest.mark.asyncio
    async def test_logout_clears_token(self, mock_transport):
        transport, calls = mock_transport
        client = _client_on(transport, token="tok", user_id="@alice:sdn.test")

        await client.logout()

        assert calls[0]["method"] == "POST"
        assert calls[0]["path"] == "/_api/client/r0/logout"
        assert calls[0]["headers"]["authorization"] == "Bearer tok"
        assert client.http.token is None
        await client.close()


class TestSync:
    @pytest.mark.asyncio
    async def test_sync_requires_login(self):
        client = Client(BASE_URL)
        with pytest.raises(RuntimeError, match="logged in"):
            await client.sync()
        await client.close()

    @pytest.mark.asyncio
    async def test_sync_dispatches_to_registered_handlers(self, node):
        node.sync_script.append(sync_reply("b1", message_event("e1", body="hello")))
        store = MemorySyncStore()
        client = _client_on(node, token="tok", user_id="@alice:sdn.test", store=store)
        node.engine = client.engine
        seen = []

        @client.on("m.room.message")
        async def on_message(event):
            seen.append(event.body())

        await client.sync()

        assert seen == ["hello"]
        assert await store.load_next_batch("@alice:sdn.test") == "b1"
        assert await store.load_filter_id("@alice:sdn.test") == "f1"
        await client.close()

    def test_stop_sync_sets_idle(self):
        client = Client(BASE_URL, token="tok", user_id="@alice:sdn.test")
        client.stop_sync()
        assert client.engine.state == SyncState.idle

    def test_add_handler(self):
        client = Client(BASE_URL)
        handler = print
        client.add_handler("m.room.member", handler)
        assert client.dispatcher.handlers_for("m.room.member") == [handler]


class TestConfig:
    def test_from_config(self):
        config = ClientConfig(
            endpoint=BASE_URL,
            user_id="@alice:sdn.test",
            access_token="tok",
            wallet_address="0xabc",
            sync_timeout_ms=5000,
        )
        client = Client.from_config(config)
        assert client.http.token == "tok"
        assert client.user_id == "@alice:sdn.test"
        assert client.engine.user_id == "@alice:sdn.test"
        assert client.engine.timeout_ms == 5000
        assert client.config == config

    def test_from_config_without_token(self):
        client = Client.from_config(ClientConfig(endpoint=BASE_URL))
        assert client.http.token is None
        assert not client.config.logged_in

    def test_from_env(self):
        config = ClientConfig.from_env({
            "SDN_ENDPOINT": BASE_URL,
            "SDN_USER_ID": "@alice:sdn.test",
            "SDN_ACCESS_TOKEN": "tok",
            "SDN_PATH_PREFIX": "/_api/client/v3",
            "UNRELATED": "x",
        })
        assert config.endpoint == BASE_URL
        assert config.logged_in
        assert config.path_prefix == "/_api/client/v3"
        assert config.wallet_address == ""

    def test_from_env_requires_endpoint(self):
        with pytest.raises(ValueError):
            ClientConfig.from_env({})

    def test_load_yaml_ignores_unknown_keys(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "endpoint: https://sdn.test\n"
            "wallet_address: \"0xabc\"\n"
            "private_key: deadbeef\n"
            "user_id: \"@alice:sdn.test\"\n"
            "access_token: tok\n"
        )

        config = ClientConfig.load(path)

        assert config.endpoint == BASE_URL
        assert config.wallet_address == "0xabc"
        assert config.logged_in
        assert config.path_prefix == "/_api/client/r0"

    @pytest.mark.asyncio
    async def test_credentials_from_login_are_saved(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("endpoint: https://sdn.test\nwallet_address: \"0xabc\"\n")
        client = Client.from_config(ClientConfig.load(path))
        client.http._client = httpx.AsyncClient(base_url=BASE_URL, transport=LoginNode())

        await client.login(client.wallet_address, lambda message: "0xsig")
        client.config.save(path)
        await client.close()

        reloaded = ClientConfig.load(path)
        assert reloaded.user_id == "@alice:sdn.test"
        assert reloaded.access_token == "tok-abc"
        assert reloaded.wallet_address == "0xabc"
        assert reloaded == client.config

    def test_load_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="mapping"):
            ClientConfig.load(path)


class TestConstructorTimeout:
    def test_timeout_reaches_inner_client(self):
        """Timeout parameter is forwarded to the httpx client."""
        client = Client(BASE_URL, timeout=5.0)
        assert client.http._client.timeout.connect == 5.0
        assert client.http._client.timeout.read == 5.0
        assert client.config.timeout == 5.0
