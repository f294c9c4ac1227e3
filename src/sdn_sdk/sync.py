"""Long-poll sync engine: session epochs, cursor persistence and failure backoff."""

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

import httpx

from sdn_sdk.dispatch import EventDispatcher
from sdn_sdk.errors import SDNHTTPError, SDNNetworkError, SDNSyncError
from sdn_sdk.filters import FilterRegistry
from sdn_sdk.models.errors import ErrorCode
from sdn_sdk.store import MemorySyncStore, SyncStore

if TYPE_CHECKING:
    from sdn_sdk.api.sync import SyncAPI

log = logging.getLogger(__name__)

DEFAULT_POLL_TIMEOUT_MS = 30000
DEFAULT_RETRY_DELAY = 10.0

_FATAL_CODES = {ErrorCode.M_UNKNOWN_TOKEN.value, ErrorCode.M_MISSING_TOKEN.value}


class SyncState(str, Enum):
    idle = "idle"
    polling = "polling"
    processing = "processing"
    backoff = "backoff"
    failed = "failed"
    superseded = "superseded"


class FailurePolicy(ABC):
    """Decides what the sync loop does after a failed poll."""

    @abstractmethod
    def decide_on_failure(
        self, last_response: httpx.Response | None, error: Exception
    ) -> float:
        """Return the number of seconds to wait before polling again, or raise to stop syncing.

        ``last_response`` is the failed HTTP response when the server
        answered at all, ``None`` for connection-level failures.
        """


class DefaultFailurePolicy(FailurePolicy):
    """Retries everything except a rejected access token.

    Waits for the server-provided ``retry_after_ms`` when present, otherwise
    a fixed delay.
    """

    def __init__(self, retry_delay: float = DEFAULT_RETRY_DELAY) -> None:
        self.retry_delay = retry_delay

    def decide_on_failure(
        self, last_response: httpx.Response | None, error: Exception
    ) -> float:
        if isinstance(error, SDNHTTPError):
            if error.code in _FATAL_CODES:
                raise SDNSyncError(f"Access token rejected: {error}") from error
            if error.retry_after_ms:
                return error.retry_after_ms / 1000.0
        return self.retry_delay


class SyncEngine:
    """Runs the ``/sync`` long-poll loop for one user.

    Usage::

        engine = SyncEngine(client.sync_api, "@alice:node", dispatcher=dispatcher)
        task = asyncio.create_task(engine.sync())
        ...
        engine.stop()      # task finishes after the in-flight poll returns

    Only one session is active at a time. Each call to :meth:`sync` starts a
    new session and supersedes the previous one; a superseded session
    returns ``None`` as soon as its in-flight poll completes, without
    persisting or dispatching that poll's result.

    The new cursor is saved *before* the batch is dispatched, so a handler
    that keeps failing on a malformed event cannot wedge the client: after a
    restart that batch is skipped rather than redelivered.
    """

    def __init__(
        self,
        api: SyncAPI,
        user_id: str,
        *,
        store: SyncStore | None = None,
        dispatcher: EventDispatcher | None = None,
        filters: FilterRegistry | None = None,
        failure_policy: FailurePolicy | None = None,
        timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS,
        full_state: bool = False,
        set_presence: str = "",
    ) -> None:
        self.api = api
        self.user_id = user_id
        self.store = store or MemorySyncStore()
        self.dispatcher = dispatcher or EventDispatcher()
        self.filters = filters or FilterRegistry()
        self.failure_policy = failure_policy or DefaultFailurePolicy()
        self.timeout_ms = timeout_ms
        self.full_state = full_state
        self.set_presence = set_presence

        self._epoch_lock = threading.Lock()
        self._epoch = 0
        # Epoch of the most recently started sync() session
        self._session = 0
        self._state = SyncState.idle

    # --- Session epochs ---

    def begin_session(self) -> int:
        """Advance the epoch and return it as the identity of a new session."""
        with self._epoch_lock:
            self._epoch += 1
            self._session = self._epoch
            return self._epoch

    def is_current(self, token: int) -> bool:
        with self._epoch_lock:
            return token == self._epoch

    def stop(self) -> None:
        """Signal the running session to stop. Does not wait or cancel the in-flight poll."""
        with self._epoch_lock:
            self._epoch += 1
            self._state = SyncState.idle
        log.info("Sync stop requested for %s", self.user_id)

    @property
    def state(self) -> SyncState:
        """State of the current session.

        A stopped session reads ``idle`` until its in-flight poll returns,
        then ``superseded``. A session replaced by a newer ``sync()`` leaves
        the state to the newer one.
        """
        return self._state

    def _set_state(self, token: int, state: SyncState) -> None:
        with self._epoch_lock:
            if token == self._epoch:
                self._state = state

    def _superseded(self, token: int) -> bool:
        """True once ``token`` is stale. Marks the state unless a newer session owns it."""
        with self._epoch_lock:
            if token == self._epoch:
                return False
            if token == self._session:
                self._state = SyncState.superseded
        log.info("Sync session %d superseded for %s", token, self.user_id)
        return True

    # --- Loop ---

    async def sync(self) -> None:
        """Sync until superseded or a fatal error occurs. Blocks; run it as a task.

        Raises :class:`SDNSyncError` when the filter cannot be created,
        whatever the failure policy raises, and any exception a handler
        raises. Call again to resume after an error.
        """
        token = self.begin_session()
        self._set_state(token, SyncState.polling)
        try:
            await self._run(token)
        except Exception:
            self._set_state(token, SyncState.failed)
            raise

    async def _run(self, token: int) -> None:
        since = await self.store.load_next_batch(self.user_id)
        filter_id = await self.store.load_filter_id(self.user_id)
        if not filter_id:
            filter_id = await self._create_filter()

        log.info("Sync session %d started for %s (since=%r)", token, self.user_id, since)
        while True:
            self._set_state(token, SyncState.polling)
            log.debug("Syncing since %r", since)
            try:
                response = await self.api.sync(
                    self.timeout_ms,
                    since,
                    filter_id,
                    full_state=self.full_state,
                    set_presence=self.set_presence,
                )
            except (SDNHTTPError, SDNNetworkError) as exc:
                if self._superseded(token):
                    return
                last_response = exc.response if isinstance(exc, SDNHTTPError) else None
                delay = self.failure_policy.decide_on_failure(last_response, exc)
                log.warning("Sync failed (%s), retrying in %.1fs", exc, delay)
                self._set_state(token, SyncState.backoff)
                await asyncio.sleep(delay)
                if self._superseded(token):
                    return
                continue

            if self._superseded(token):
                return

            self._set_state(token, SyncState.processing)
            await self.store.save_next_batch(self.user_id, response.next_batch)
            await self.dispatcher.process_response(response, since)

            since = response.next_batch

    async def _create_filter(self) -> str:
        document = self.filters.build(self.user_id)
        try:
            resp = await self.api.create_filter(self.user_id, document)
        except Exception as exc:
            raise SDNSyncError(f"Failed to create sync filter: {exc}") from exc
        await self.store.save_filter_id(self.user_id, resp.filter_id)
        log.info("Created sync filter %s for %s", resp.filter_id, self.user_id)
        return resp.filter_id
