"""Tests for the SnapshotStore lifecycle, guards and counters."""

import json
from datetime import date

import pytest

from typecore.config.settings import TypeCoreSettings
from typecore.core.store import SnapshotStore
from typecore.events import SnapshotUpdatedEvent
from typecore.exceptions import SnapshotInitError
from typecore.models import Badge, CustomTheme, default_snapshot
from typecore.storage.backends.in_memory import InMemoryBackend
from typecore.storage.local_store import STORAGE_KEY, LocalSnapshotStorage


class FailingStorage(LocalSnapshotStorage):
    def __init__(self, error: Exception) -> None:
        super().__init__(InMemoryBackend())
        self.error = error

    async def load(self):
        raise self.error


class ResponseError(RuntimeError):
    response_code = 471


class RecordingGate:
    def __init__(self) -> None:
        self.calls = 0

    async def wait_ready(self) -> bool:
        self.calls += 1
        return True


class TestInit:
    @pytest.mark.asyncio
    async def test_creates_and_persists_default(self, store, memory_backend, event_bus):
        events = []
        event_bus.subscribe(SnapshotUpdatedEvent, events.append)

        snapshot = await store.init()

        assert store.get() is snapshot
        assert snapshot.results is None
        assert snapshot.test_activity is not None
        assert STORAGE_KEY in memory_backend.keys()
        assert [e.is_initial for e in events] == [True]

    @pytest.mark.asyncio
    async def test_loads_persisted_snapshot(self, storage, event_bus):
        persisted = default_snapshot("alice")
        persisted.xp = 321
        await storage.save(persisted)

        store = SnapshotStore(storage, event_bus=event_bus)
        snapshot = await store.init()

        assert snapshot.name == "alice"
        assert snapshot.xp == 321

    @pytest.mark.asyncio
    async def test_keeps_history_with_null_pb_level(self, store, memory_backend, make_result):
        persisted = default_snapshot("alice")
        persisted.results = [make_result(wpm=64)]
        data = persisted.to_wire()
        data["personalBests"]["words"] = None
        await memory_backend.set(STORAGE_KEY, json.dumps({"version": 1, "data": data, "lastSaved": 1}))

        snapshot = await store.init()

        assert snapshot.name == "alice"
        assert [r.wpm for r in snapshot.results] == [64]
        stored = json.loads(await memory_backend.get(STORAGE_KEY))
        assert len(stored["data"]["results"]) == 1

    @pytest.mark.asyncio
    async def test_close_keeps_snapshot_readable(self, store):
        await store.init()

        await store.close()

        assert store.storage.backend.initialized is False
        assert store.get() is not None

    @pytest.mark.asyncio
    async def test_waits_for_configuration(self, storage):
        gate = RecordingGate()
        store = SnapshotStore(storage, configuration=gate)

        await store.init()

        assert gate.calls == 1

    @pytest.mark.asyncio
    async def test_failure_installs_default_and_raises(self):
        store = SnapshotStore(FailingStorage(ResponseError("boom")))

        with pytest.raises(SnapshotInitError) as exc_info:
            await store.init()

        assert exc_info.value.response_code == 471
        assert store.get() is not None
        assert store.get().xp == 0

    @pytest.mark.asyncio
    async def test_failure_without_code_uses_default(self):
        store = SnapshotStore(FailingStorage(RuntimeError("disk gone")))

        with pytest.raises(SnapshotInitError) as exc_info:
            await store.init()

        assert exc_info.value.response_code == 500
        assert "disk gone" in exc_info.value.message


class TestSet:
    @pytest.mark.asyncio
    async def test_protected_fields_carry_over(self, store):
        await store.init()
        current = store.get()
        current.banned = True
        current.verified = True
        current.lb_opt_out = False

        replacement = default_snapshot("mallory")
        replacement.banned = False
        replacement.verified = None
        replacement.lb_opt_out = True
        await store.set(replacement)

        held = store.get()
        assert held.name == "mallory"
        assert held.banned is True
        assert held.verified is True
        assert held.lb_opt_out is False

    @pytest.mark.asyncio
    async def test_first_set_clears_protected_fields(self, store):
        replacement = default_snapshot()
        replacement.banned = True

        await store.set(replacement)

        assert store.get().banned is None

    @pytest.mark.asyncio
    async def test_set_persists_then_notifies(self, store, memory_backend, event_bus):
        await store.init()
        observed = []

        async def handler(event):
            record = json.loads(await memory_backend.get(STORAGE_KEY))
            observed.append((event.is_initial, record["data"]["xp"]))

        event_bus.subscribe(SnapshotUpdatedEvent, handler)
        snapshot = store.get()
        snapshot.xp = 77
        await store.set(snapshot)

        assert observed == [(False, 77)]

    @pytest.mark.asyncio
    async def test_dispatch_can_be_suppressed(self, store, event_bus):
        await store.init()
        events = []
        event_bus.subscribe(SnapshotUpdatedEvent, events.append)

        await store.set(store.get(), dispatch_event=False)

        assert events == []

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_break_set(self, store, event_bus):
        await store.init()

        def broken(event):
            raise ValueError("listener bug")

        event_bus.subscribe(SnapshotUpdatedEvent, broken)
        snapshot = store.get()
        snapshot.xp = 5
        await store.set(snapshot)

        assert store.get().xp == 5


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_keeps_name_and_clears_data(self, storage):
        persisted = default_snapshot("bob")
        persisted.xp = 900
        await storage.save(persisted)
        store = SnapshotStore(storage)
        await store.init()

        snapshot = await store.reset()

        assert snapshot.name == "bob"
        assert snapshot.xp == 0
        assert (await storage.load()).xp == 0


class TestCustomThemes:
    @pytest.mark.asyncio
    async def test_add_assigns_local_id(self, store):
        await store.init()

        assert await store.add_custom_theme(CustomTheme(name="dark", colors=["#000"])) is True

        theme = store.get().custom_themes[0]
        assert theme.id.startswith("local_")
        assert theme.name == "dark"

    @pytest.mark.asyncio
    async def test_add_respects_limit(self, storage):
        messages = []
        store = SnapshotStore(storage, notify=lambda msg, level: messages.append((msg, level)), max_custom_themes=2)
        await store.init()

        for name in ("a", "b"):
            assert await store.add_custom_theme(CustomTheme(name=name)) is True
        assert await store.add_custom_theme(CustomTheme(name="c")) is False

        assert len(store.get().custom_themes) == 2
        assert messages == [("Too many custom themes!", 0)]

    @pytest.mark.asyncio
    async def test_edit_and_delete(self, storage):
        messages = []
        store = SnapshotStore(storage, notify=lambda msg, level: messages.append((msg, level)))
        await store.init()
        await store.add_custom_theme(CustomTheme(name="a"))
        theme_id = store.get().custom_themes[0].id

        assert await store.edit_custom_theme(theme_id, CustomTheme(name="renamed")) is True
        assert store.get().custom_themes[0].name == "renamed"
        assert store.get().custom_themes[0].id == theme_id

        assert await store.edit_custom_theme("nope", CustomTheme(name="x")) is False
        assert messages == [("Editing failed: Custom theme with id: nope does not exist", -1)]

        assert await store.delete_custom_theme("nope") is False
        assert await store.delete_custom_theme(theme_id) is True
        assert store.get().custom_themes == []

    @pytest.mark.asyncio
    async def test_without_snapshot(self, store):
        assert await store.add_custom_theme(CustomTheme(name="a")) is False


class TestCounters:
    @pytest.mark.asyncio
    async def test_add_xp_is_silent(self, store, event_bus):
        await store.init()
        events = []
        event_bus.subscribe(SnapshotUpdatedEvent, events.append)

        await store.add_xp(25)
        await store.add_xp(5)

        assert store.get().xp == 30
        assert events == []

    @pytest.mark.asyncio
    async def test_inbox_and_badges(self, store, event_bus):
        await store.init()
        events = []
        event_bus.subscribe(SnapshotUpdatedEvent, events.append)

        await store.update_inbox_unread_size(4)
        await store.add_badge(Badge(id=3, selected=True))

        snapshot = store.get()
        assert snapshot.inbox_unread_size == 4
        assert [b.id for b in snapshot.inventory.badges] == [3]
        assert len(events) == 2

    @pytest.mark.asyncio
    async def test_has_results(self, store, make_result):
        assert store.has_results() is False
        await store.init()
        assert store.has_results() is False

        snapshot = store.get()
        snapshot.results = [make_result(), make_result()]
        assert store.has_results() is True
        assert store.has_results(offset=1) is True
        assert store.has_results(offset=2) is False


class TestActivityCalendar:
    @pytest.mark.asyncio
    async def test_calendar_views(self, store):
        await store.init()
        activity = store.get().test_activity
        activity.increment(date(2023, 6, 1), 3)
        activity.increment(date(2024, 1, 5))
        activity.increment(date(2024, 12, 30), 2)
        today = date(2024, 12, 31)

        current = store.get_test_activity_calendar("current", today=today)
        assert current.total() == 3

        this_year = store.get_test_activity_calendar("2024", today=today)
        assert this_year.total() == 3

        older = store.get_test_activity_calendar("2023", today=today)
        assert older.total() == 3

        assert store.get_test_activity_calendar("2019", today=today) is None


class TestFromSettings:
    @pytest.mark.asyncio
    async def test_builds_memory_store(self):
        settings = TypeCoreSettings.model_validate(
            {"storage": {"backend": "memory"}, "max_custom_themes": 3}
        )

        store = SnapshotStore.from_settings(settings)
        await store.init()

        assert store.max_custom_themes == 3
        assert isinstance(store.storage.backend, InMemoryBackend)
