"""
In-Memory Key-Value Backend

Non-persistent backend, used for tests and for sessions where nothing should
touch the disk.
"""

import logging
from typing import Any, Dict, Optional

from typecore.storage.backends.base import BaseKeyValueBackend

logger = logging.getLogger(__name__)


class InMemoryBackend(BaseKeyValueBackend):
    """Dictionary-backed implementation of the key-value contract."""

    backend_type = "memory"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self._data: Dict[str, str] = {}

    async def _shutdown_backend(self) -> None:
        self._data.clear()
        logger.debug("In-memory backend cleared")

    async def _get_value(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def _set_value(self, key: str, value: str) -> None:
        self._data[key] = value

    async def _delete_value(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._data)
