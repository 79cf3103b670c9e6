"""Tests for the event bus used for snapshot-change notifications."""

import pytest

from typecore.events import Event, EventBus, SnapshotUpdatedEvent
from typecore.exceptions import EventBusError


@pytest.mark.asyncio
async def test_sync_and_async_handlers_receive_event():
    bus = EventBus()
    received = []

    def on_sync(event):
        received.append(("sync", event.is_initial))
        return "sync-ok"

    async def on_async(event):
        received.append(("async", event.is_initial))
        return "async-ok"

    bus.subscribe(SnapshotUpdatedEvent, on_sync)
    bus.subscribe(SnapshotUpdatedEvent, on_async)

    context = await bus.publish(SnapshotUpdatedEvent(is_initial=True, source="test"))

    assert received == [("sync", True), ("async", True)]
    assert context.results == {"on_sync": "sync-ok", "on_async": "async-ok"}
    assert not context.has_errors


@pytest.mark.asyncio
async def test_base_class_subscription_matches_subclasses():
    bus = EventBus()
    seen = []
    bus.subscribe(Event, seen.append, name="all")

    await bus.publish(SnapshotUpdatedEvent())

    assert len(seen) == 1


@pytest.mark.asyncio
async def test_handler_errors_are_recorded():
    bus = EventBus()
    calls = []

    def broken(event):
        raise RuntimeError("bad listener")

    bus.subscribe(SnapshotUpdatedEvent, broken)
    bus.subscribe(SnapshotUpdatedEvent, calls.append, name="after")

    context = await bus.publish(SnapshotUpdatedEvent())

    assert context.has_errors
    assert isinstance(dict(context.errors)["broken"], RuntimeError)
    assert len(calls) == 1
    assert set(context.handled_by) == {"broken", "after"}


@pytest.mark.asyncio
async def test_unsubscribe():
    bus = EventBus()
    seen = []
    name = bus.subscribe(SnapshotUpdatedEvent, seen.append, name="listener")

    bus.unsubscribe(name)
    await bus.publish(SnapshotUpdatedEvent())

    assert seen == []


@pytest.mark.asyncio
async def test_invalid_usage():
    bus = EventBus()

    with pytest.raises(EventBusError):
        bus.subscribe(dict, print)

    with pytest.raises(EventBusError):
        await bus.publish({"not": "an event"})
