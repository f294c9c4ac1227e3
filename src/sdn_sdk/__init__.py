"""SDN Client SDK: Python client for SDN nodes."""

from sdn_sdk.client import Client
from sdn_sdk.config import ClientConfig
from sdn_sdk.dispatch import EventDispatcher
from sdn_sdk.errors import SDNError, SDNHTTPError, SDNNetworkError, SDNSyncError
from sdn_sdk.store import MemorySyncStore, SyncStore
from sdn_sdk.sync import DefaultFailurePolicy, FailurePolicy, SyncEngine, SyncState

__all__ = [
    "Client",
    "ClientConfig",
    "DefaultFailurePolicy",
    "EventDispatcher",
    "FailurePolicy",
    "MemorySyncStore",
    "SDNError",
    "SDNHTTPError",
    "SDNNetworkError",
    "SDNSyncError",
    "SyncEngine",
    "SyncState",
    "SyncStore",
]
