"""High-level SDN client composing HTTP, sync engine, and API groups."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from sdn_sdk.api.auth import AuthAPI, Signer
from sdn_sdk.api.sync import SyncAPI
from sdn_sdk.config import ClientConfig
from sdn_sdk.dispatch import EventDispatcher, EventHandler
from sdn_sdk.filters import FilterRegistry
from sdn_sdk.http import DEFAULT_PATH_PREFIX, HTTPClient
from sdn_sdk.models.auth import LoginResponse
from sdn_sdk.models.filter import Filter
from sdn_sdk.store import MemorySyncStore, SyncStore
from sdn_sdk.sync import DEFAULT_POLL_TIMEOUT_MS, FailurePolicy, SyncEngine

log = logging.getLogger(__name__)


class Client:
    """Top-level SDK client.

    Usage::

        async with Client("https://node.example.com") as client:
            await client.login(wallet_address, signer)

            @client.on("m.room.message")
            async def on_message(event):
                print(event.sender, event.body())

            asyncio.create_task(client.sync())
            await client.messages.send_text(room_id, "hello")
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        user_id: str = "",
        *,
        wallet_address: str = "",
        store: SyncStore | None = None,
        dispatcher: EventDispatcher | None = None,
        filter: Filter | None = None,
        failure_policy: FailurePolicy | None = None,
        path_prefix: str = DEFAULT_PATH_PREFIX,
        timeout: float = 30.0,
        sync_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS,
    ) -> None:
        self.http = HTTPClient(base_url, token, path_prefix=path_prefix, timeout=timeout)
        self.user_id = user_id
        self.wallet_address = wallet_address
        self.auth = AuthAPI(self.http)
        self.sync_api = SyncAPI(self.http)
        self.store = store or MemorySyncStore()
        self.dispatcher = dispatcher or EventDispatcher()
        self.engine = SyncEngine(
            self.sync_api,
            user_id,
            store=self.store,
            dispatcher=self.dispatcher,
            filters=FilterRegistry(filter),
            failure_policy=failure_policy,
            timeout_ms=sync_timeout_ms,
        )

        self._rooms: Any = None
        self._messages: Any = None
        self._profile: Any = None

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> Client:
        return cls(
            config.endpoint,
            config.access_token or None,
            config.user_id,
            wallet_address=config.wallet_address,
            path_prefix=config.path_prefix,
            timeout=config.timeout,
            sync_timeout_ms=config.sync_timeout_ms,
            **kwargs,
        )

    @property
    def config(self) -> ClientConfig:
        """Current settings, including credentials obtained by :meth:`login`."""
        return ClientConfig(
            endpoint=self.http.base_url,
            wallet_address=self.wallet_address,
            user_id=self.user_id,
            access_token=self.http.token or "",
            path_prefix=self.http.path_prefix,
            timeout=self.http.timeout,
            sync_timeout_ms=self.engine.timeout_ms,
        )

    # --- Login ---

    async def login(
        self, wallet_address: str, signer: Signer, *, device_id: str = ""
    ) -> LoginResponse:
        """Log in with a wallet and store the token and user id for subsequent requests.

        ``signer`` receives the server's login message and must return the
        wallet's hex signature of it (sync or async).
        """
        dids = await self.auth.get_did_list(wallet_address)
        did = dids[0] if dids else None
        pre = await self.auth.pre_login(wallet_address, did)
        signature = signer(pre.message)
        if inspect.isawaitable(signature):
            signature = await signature
        result = await self.auth.did_login(wallet_address, pre, signature, device_id)

        self.http.token = result.access_token
        self.user_id = result.user_id
        self.wallet_address = wallet_address
        self.engine.user_id = result.user_id
        log.info("Logged in as %s", result.user_id)
        return result

    async def logout(self) -> None:
        self.engine.stop()
        await self.auth.logout()
        self.http.token = None

    # --- Sync ---

    async def sync(self) -> None:
        """Sync with the node until :meth:`stop_sync` or a fatal error. See :class:`SyncEngine`."""
        if not self.user_id or self.http.token is None:
            raise RuntimeError("Must be logged in before syncing")
        await self.engine.sync()

    def stop_sync(self) -> None:
        self.engine.stop()

    def on(self, event_type: str) -> Callable[[EventHandler], EventHandler]:
        """Decorator to register an event handler."""
        return self.dispatcher.on(event_type)

    def add_handler(self, event_type: str, handler: EventHandler) -> None:
        self.dispatcher.add_handler(event_type, handler)

    # --- API group properties ---

    @property
    def rooms(self) -> Any:
        if self._rooms is None:
            from sdn_sdk.api.rooms import RoomsAPI
            self._rooms = RoomsAPI(self.http)
        return self._rooms

    @property
    def messages(self) -> Any:
        if self._messages is None:
            from sdn_sdk.api.messages import MessagesAPI
            self._messages = MessagesAPI(self.http)
        return self._messages

    @property
    def profile(self) -> Any:
        if self._profile is None:
            from sdn_sdk.api.profile import ProfileAPI
            self._profile = ProfileAPI(self.http)
        return self._profile

    # --- Context manager ---

    async def close(self) -> None:
        self.engine.stop()
        await self.http.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
