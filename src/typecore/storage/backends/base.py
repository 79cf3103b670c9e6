"""
Base Key-Value Backend

This module provides the BaseKeyValueBackend class, the contract shared by all
local key-value backends. Public methods wrap the backend-specific hooks and
turn any failure into a StorageOperationError, so callers only need to handle
one exception type.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Dict, Optional

from typecore.exceptions import StorageOperationError

logger = logging.getLogger(__name__)


class BaseKeyValueBackend(abc.ABC):
    """
    Base class for all local key-value backends.

    Values are opaque strings. Subclasses implement the ``_``-prefixed hooks for
    the storage technology they support.
    """

    backend_type: str = "base"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the backend.

        Args:
            config: Backend-specific configuration options
        """
        self.config = config or {}
        self.initialized = False

    async def initialize(self) -> None:
        """
        Prepare the backend for use. Safe to call more than once.

        Raises:
            StorageOperationError: If initialization fails
        """
        if self.initialized:
            return
        try:
            await self._initialize_backend()
            self.initialized = True
            logger.debug("%s initialized", self.__class__.__name__)
        except Exception as e:
            logger.exception("Failed to initialize %s", self.__class__.__name__)
            raise StorageOperationError(
                f"Failed to initialize backend: {e}",
                backend_type=self.backend_type,
                operation="initialize",
            ) from e

    async def shutdown(self) -> None:
        """Release backend resources."""
        if not self.initialized:
            return
        try:
            await self._shutdown_backend()
        finally:
            self.initialized = False
        logger.debug("%s shut down", self.__class__.__name__)

    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under ``key``.

        Returns:
            The stored string, or None when the key is absent

        Raises:
            StorageOperationError: If the read fails
        """
        await self.initialize()
        try:
            return await self._get_value(key)
        except Exception as e:
            raise StorageOperationError(
                f"Failed to read key {key}: {e}",
                backend_type=self.backend_type,
                operation="get",
            ) from e

    async def set(self, key: str, value: str) -> None:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageOperationError: If the write fails
        """
        await self.initialize()
        try:
            await self._set_value(key, value)
        except Exception as e:
            raise StorageOperationError(
                f"Failed to write key {key}: {e}",
                backend_type=self.backend_type,
                operation="set",
            ) from e

    async def delete(self, key: str) -> bool:
        """
        Remove ``key``.

        Returns:
            True if a value was removed, False if the key was absent

        Raises:
            StorageOperationError: If the delete fails
        """
        await self.initialize()
        try:
            return await self._delete_value(key)
        except Exception as e:
            raise StorageOperationError(
                f"Failed to delete key {key}: {e}",
                backend_type=self.backend_type,
                operation="delete",
            ) from e

    async def _initialize_backend(self) -> None:
        """Backend-specific setup; no-op by default."""

    async def _shutdown_backend(self) -> None:
        """Backend-specific teardown; no-op by default."""

    @abc.abstractmethod
    async def _get_value(self, key: str) -> Optional[str]:
        """Read a raw value."""

    @abc.abstractmethod
    async def _set_value(self, key: str, value: str) -> None:
        """Write a raw value."""

    @abc.abstractmethod
    async def _delete_value(self, key: str) -> bool:
        """Delete a raw value."""


__all__ = ["BaseKeyValueBackend"]
