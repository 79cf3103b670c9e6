"""Change notifications published by the snapshot store."""

from .event import Event, SnapshotUpdatedEvent
from .event_bus import EventBus
from .event_context import EventContext

__all__ = ["Event", "EventBus", "EventContext", "SnapshotUpdatedEvent"]
