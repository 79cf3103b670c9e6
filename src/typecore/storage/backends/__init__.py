"""Local key-value backends."""

from typecore.storage.backends.backend_type import BackendType
from typecore.storage.backends.base import BaseKeyValueBackend
from typecore.storage.backends.in_memory import InMemoryBackend
from typecore.storage.backends.json_file import JsonFileBackend
from typecore.storage.backends.sqlite import SQLiteBackend

__all__ = [
    "BackendType",
    "BaseKeyValueBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "SQLiteBackend",
]
