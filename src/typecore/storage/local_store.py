"""
Local Snapshot Storage

Single-slot, versioned persistence of the snapshot in a local key-value
backend. The stored value is the JSON record::

    {"version": 1, "data": <snapshot>, "lastSaved": <epoch millis>}

Nothing in this module raises to its callers. Reads that fail for any reason
(missing key, unparsable JSON, invalid snapshot, other version) return None so
that the caller falls back to a default snapshot; failed writes are logged and
leave the previous persisted copy in place. A version bump discards old data
instead of migrating it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from typecore.models.result import Result
from typecore.models.snapshot import Snapshot, default_snapshot
from typecore.storage.backends.base import BaseKeyValueBackend
from typecore.utils.time import now_ms

logger = logging.getLogger(__name__)

STORAGE_KEY = "typecore_local_snapshot"
STORAGE_VERSION = 1


class LocalSnapshotStorage:
    """Versioned read/write of one serialized snapshot."""

    def __init__(
        self,
        backend: BaseKeyValueBackend,
        key: str = STORAGE_KEY,
        version: int = STORAGE_VERSION,
    ) -> None:
        """
        Args:
            backend: Key-value backend holding the record
            key: Key the record is stored under
            version: Supported record version; other versions are ignored
        """
        self.backend = backend
        self.key = key
        self.version = version

    async def save(self, snapshot: Snapshot) -> None:
        """Persist ``snapshot``, replacing the previous record. Never raises."""
        try:
            record = {
                "version": self.version,
                "data": snapshot.to_wire(),
                "lastSaved": now_ms(),
            }
            await self.backend.set(self.key, json.dumps(record))
        except Exception:
            logger.error("Failed to save snapshot to local storage", exc_info=True)

    async def _read_record(self) -> Optional[Dict[str, Any]]:
        stored = await self.backend.get(self.key)
        if not stored:
            return None
        record = json.loads(stored)
        return record if isinstance(record, dict) else None

    async def load(self) -> Optional[Snapshot]:
        """
        Load the persisted snapshot.

        Returns:
            The snapshot, or None when nothing usable is stored
        """
        try:
            record = await self._read_record()
            if record is None:
                return None

            version = record.get("version")
            if not isinstance(version, int) or isinstance(version, bool) or version != self.version:
                logger.warning("Local storage snapshot version mismatch, ignoring")
                return None

            return Snapshot.model_validate(record.get("data"))
        except (ValidationError, ValueError) as e:
            logger.error("Failed to load snapshot from local storage: %s", e)
            return None
        except Exception:
            logger.error("Failed to load snapshot from local storage", exc_info=True)
            return None

    async def clear(self) -> None:
        """Remove the persisted record. Never raises."""
        try:
            await self.backend.delete(self.key)
        except Exception:
            logger.error("Failed to clear local storage", exc_info=True)

    async def close(self) -> None:
        """Shut the backend down. Never raises."""
        try:
            await self.backend.shutdown()
        except Exception:
            logger.error("Failed to close local storage", exc_info=True)

    async def initialize(self, name: Optional[str] = None) -> Snapshot:
        """
        Return the persisted snapshot, creating and saving a default one if needed.

        Args:
            name: Optional user name for a newly created snapshot
        """
        existing = await self.load()
        if existing is not None:
            return existing

        snapshot = default_snapshot(name or "")
        await self.save(snapshot)
        return snapshot

    async def add_result(self, result: Result) -> None:
        """
        Prepend ``result`` directly to the persisted snapshot.

        Does nothing when no snapshot is persisted. Never raises.
        """
        try:
            snapshot = await self.load()
            if snapshot is None:
                return
            if snapshot.results is not None:
                snapshot.results.insert(0, result)
            else:
                snapshot.results = [result]
            await self.save(snapshot)
        except Exception:
            logger.error("Failed to add local result", exc_info=True)

    async def last_saved(self) -> Optional[int]:
        """Return the ``lastSaved`` epoch millis of the record, if any."""
        try:
            record = await self._read_record()
        except Exception:
            return None
        if record is None:
            return None
        last_saved = record.get("lastSaved")
        return last_saved if isinstance(last_saved, int) else None


__all__ = ["LocalSnapshotStorage", "STORAGE_KEY", "STORAGE_VERSION"]
