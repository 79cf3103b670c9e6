"""Persistence layer: versioned snapshot storage over local key-value backends."""

from typecore.storage.backends import BackendType, BaseKeyValueBackend, InMemoryBackend
from typecore.storage.factory import StorageBackendFactory
from typecore.storage.local_store import STORAGE_KEY, STORAGE_VERSION, LocalSnapshotStorage

__all__ = [
    "BackendType",
    "BaseKeyValueBackend",
    "InMemoryBackend",
    "LocalSnapshotStorage",
    "STORAGE_KEY",
    "STORAGE_VERSION",
    "StorageBackendFactory",
]
