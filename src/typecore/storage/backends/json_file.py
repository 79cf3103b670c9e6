"""
JSON File Key-Value Backend

Keeps every key in one JSON document on disk, which is the simplest durable
option for a single-user device. A document that cannot be parsed is treated
as empty rather than as an error. File access runs in the default executor,
serialized by a lock, so the event loop never waits on disk I/O.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar

from typecore.storage.backends.base import BaseKeyValueBackend

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".typecore" / "local_storage.json"
T = TypeVar("T")


class JsonFileBackend(BaseKeyValueBackend):
    """File-backed implementation of the key-value contract."""

    backend_type = "json"

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(config)
        self.path = Path(self.config.get("path", DEFAULT_PATH))
        self._lock = threading.Lock()

    def _read_document(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable storage file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_document(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        tmp_path.replace(self.path)

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._run_locked, func, *args)

    def _run_locked(self, func: Callable[..., T], *args: Any) -> T:
        with self._lock:
            return func(*args)

    def _get_sync(self, key: str) -> Optional[str]:
        value = self._read_document().get(key)
        return value if isinstance(value, str) else None

    def _set_sync(self, key: str, value: str) -> None:
        data = self._read_document()
        data[key] = value
        self._write_document(data)

    def _delete_sync(self, key: str) -> bool:
        data = self._read_document()
        if key not in data:
            return False
        del data[key]
        self._write_document(data)
        return True

    async def _get_value(self, key: str) -> Optional[str]:
        return await self._run(self._get_sync, key)

    async def _set_value(self, key: str, value: str) -> None:
        await self._run(self._set_sync, key, value)

    async def _delete_value(self, key: str) -> bool:
        return await self._run(self._delete_sync, key)
