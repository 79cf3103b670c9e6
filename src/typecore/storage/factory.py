"""
Storage Backend Factory

Creates the key-value backend and snapshot storage selected by the settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Type

from typecore.exceptions import ConfigurationError
from typecore.storage.backends.backend_type import BackendType
from typecore.storage.backends.base import BaseKeyValueBackend
from typecore.storage.backends.in_memory import InMemoryBackend
from typecore.storage.backends.json_file import JsonFileBackend
from typecore.storage.backends.sqlite import SQLiteBackend
from typecore.storage.local_store import LocalSnapshotStorage

if TYPE_CHECKING:
    from typecore.config.settings import TypeCoreSettings

logger = logging.getLogger(__name__)


class StorageBackendFactory:
    """Factory for local key-value backends."""

    _backend_registry: Dict[BackendType, Type[BaseKeyValueBackend]] = {
        BackendType.MEMORY: InMemoryBackend,
        BackendType.SQLITE: SQLiteBackend,
        BackendType.JSON: JsonFileBackend,
    }

    @classmethod
    def create_backend(
        cls,
        backend_type: BackendType | str,
        config: Optional[Dict[str, Any]] = None,
    ) -> BaseKeyValueBackend:
        """
        Create an (uninitialized) backend instance.

        Raises:
            ConfigurationError: If the backend type is unknown
        """
        try:
            resolved = BackendType(backend_type)
        except ValueError as e:
            raise ConfigurationError(f"Unsupported storage backend: {backend_type}") from e

        backend_cls = cls._backend_registry[resolved]
        logger.debug("Creating %s backend", resolved.value)
        return backend_cls(config or {})

    @classmethod
    def from_settings(cls, settings: "TypeCoreSettings") -> LocalSnapshotStorage:
        """Build the snapshot storage described by ``settings.storage``."""
        storage = settings.storage
        config: Dict[str, Any] = {}
        if storage.backend == BackendType.SQLITE:
            config["db_path"] = storage.sqlite_path
        elif storage.backend == BackendType.JSON:
            config["path"] = storage.json_path

        backend = cls.create_backend(storage.backend, config)
        return LocalSnapshotStorage(backend, key=storage.key, version=storage.version)


__all__ = ["StorageBackendFactory"]
