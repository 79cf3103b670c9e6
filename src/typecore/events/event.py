"""Event payloads published by the snapshot store.

UI collaborators subscribe to these through the :class:`EventBus`; the core
only produces them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class Event:
    """Base event payload.

    Attributes:
        id: Identifier for the event instance.
        timestamp: Creation time, used for ordering in logs.
        source: Optional identifier of the producer.
        metadata: Free-form metadata propagated to handlers.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()), init=False)
    timestamp: datetime = field(default_factory=datetime.now, init=False)
    source: Optional[str] = field(default=None, kw_only=True)
    metadata: dict[str, Any] = field(default_factory=dict, kw_only=True)


@dataclass
class SnapshotUpdatedEvent(Event):
    """The held snapshot changed.

    Attributes:
        is_initial: True when the snapshot was just established by
            ``SnapshotStore.init``.
    """

    is_initial: bool = False


__all__ = ["Event", "SnapshotUpdatedEvent"]
