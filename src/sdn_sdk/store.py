"""Persistence for the sync cursor and filter id of each user."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod


class SyncStore(ABC):
    """Persists the information ``/sync`` needs to resume: ``next_batch`` and the filter id.

    Implementations must tolerate reads from other tasks or threads while a
    sync session is writing. Writes are last-write-wins.
    """

    @abstractmethod
    async def load_next_batch(self, user_id: str) -> str:
        """Return the stored cursor for ``user_id``, or ``""`` if none."""

    @abstractmethod
    async def save_next_batch(self, user_id: str, next_batch: str) -> None:
        pass

    @abstractmethod
    async def load_filter_id(self, user_id: str) -> str:
        """Return the stored filter id for ``user_id``, or ``""`` if none."""

    @abstractmethod
    async def save_filter_id(self, user_id: str, filter_id: str) -> None:
        pass


class MemorySyncStore(SyncStore):
    """Keeps cursors and filter ids in process memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_batch: dict[str, str] = {}
        self._filter_ids: dict[str, str] = {}

    async def load_next_batch(self, user_id: str) -> str:
        with self._lock:
            return self._next_batch.get(user_id, "")

    async def save_next_batch(self, user_id: str, next_batch: str) -> None:
        with self._lock:
            self._next_batch[user_id] = next_batch

    async def load_filter_id(self, user_id: str) -> str:
        with self._lock:
            return self._filter_ids.get(user_id, "")

    async def save_filter_id(self, user_id: str, filter_id: str) -> None:
        with self._lock:
            self._filter_ids[user_id] = filter_id
