"""
Snapshot Store

The store owns the one live :class:`Snapshot`. Every mutation in the core goes
through an instance of :class:`SnapshotStore` that the application constructs
once and passes to the operations that need it.

Guarantees:
    - ``banned``, ``verified`` and ``lb_opt_out`` always carry over from the
      snapshot held before a replacement, whatever the new snapshot says.
    - A replacement is persisted before observers are notified, and observers
      only run after the mutation has completed.
    - Persistence failures never undo an in-memory change.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import TYPE_CHECKING, Callable, Optional

from typecore.events import EventBus, SnapshotUpdatedEvent
from typecore.exceptions import SnapshotInitError
from typecore.integration.remote_config import ConfigurationGate, OfflineConfiguration
from typecore.models.activity import TestActivity
from typecore.models.snapshot import (
    PROTECTED_FIELDS,
    Badge,
    CustomTheme,
    Inventory,
    Snapshot,
    default_snapshot,
)
from typecore.storage.factory import StorageBackendFactory
from typecore.storage.local_store import LocalSnapshotStorage
from typecore.utils.time import now_ms

if TYPE_CHECKING:
    from typecore.config.settings import TypeCoreSettings

logger = logging.getLogger(__name__)

# (message, level) where level is 1 success, 0 notice, -1 error
Notifier = Callable[[str, int], None]

DEFAULT_INIT_RESPONSE_CODE = 500


def log_notification(message: str, level: int = 0) -> None:
    """Notifier used when no UI is attached."""
    if level < 0:
        logger.error(message)
    else:
        logger.info(message)


class SnapshotStore:
    """
    Holder of the current snapshot.

    Args:
        storage: Persistence layer the snapshot is saved to
        event_bus: Bus receiving ``SnapshotUpdatedEvent`` notifications
        configuration: Gate awaited once by :meth:`init`
        notify: Callable receiving user-facing messages
        max_custom_themes: Upper bound on stored custom themes
    """

    def __init__(
        self,
        storage: LocalSnapshotStorage,
        event_bus: Optional[EventBus] = None,
        configuration: Optional[ConfigurationGate] = None,
        notify: Optional[Notifier] = None,
        max_custom_themes: int = 20,
    ) -> None:
        self.storage = storage
        self.event_bus = event_bus or EventBus()
        self.configuration = configuration or OfflineConfiguration()
        self.notify = notify or log_notification
        self.max_custom_themes = max_custom_themes
        self._snapshot: Optional[Snapshot] = None

    @classmethod
    def from_settings(cls, settings: "TypeCoreSettings", **kwargs) -> "SnapshotStore":
        """Build a store whose storage backend is chosen by ``settings``."""
        storage = StorageBackendFactory.from_settings(settings)
        kwargs.setdefault("max_custom_themes", settings.max_custom_themes)
        return cls(storage, **kwargs)

    def get(self) -> Optional[Snapshot]:
        """Return the current snapshot, or None before initialization."""
        return self._snapshot

    async def set(self, new_snapshot: Optional[Snapshot], dispatch_event: bool = True) -> None:
        """
        Replace the held snapshot.

        The protected fields of the outgoing snapshot are reapplied to the new
        one, which is then persisted. Unless ``dispatch_event`` is False, a
        ``SnapshotUpdatedEvent`` is published afterwards.
        """
        previous = self._snapshot
        carried = {
            field: getattr(previous, field) if previous is not None else None
            for field in PROTECTED_FIELDS
        }

        if new_snapshot is not None:
            for field in PROTECTED_FIELDS:
                setattr(new_snapshot, field, None)

        self._snapshot = new_snapshot

        if self._snapshot is not None:
            for field, value in carried.items():
                setattr(self._snapshot, field, value)
            await self.storage.save(self._snapshot)

        if dispatch_event:
            await self._publish(is_initial=False)

    async def init(self) -> Snapshot:
        """
        Establish the initial snapshot.

        Waits for the configuration gate, then installs the persisted snapshot
        or, when there is none, a freshly saved default one.

        Raises:
            SnapshotInitError: If establishment fails. A default snapshot is
                installed before raising.
        """
        await self.configuration.wait_ready()

        try:
            snapshot = await self.storage.load()
            if snapshot is None:
                logger.info("No local snapshot found, creating a new one")
                snapshot = default_snapshot()
                await self.storage.save(snapshot)

            self._snapshot = snapshot
            await self._publish(is_initial=True)
            return snapshot
        except Exception as e:
            logger.error("Snapshot initialization failed", exc_info=True)
            self._snapshot = default_snapshot()
            response_code = getattr(e, "response_code", DEFAULT_INIT_RESPONSE_CODE)
            raise SnapshotInitError(str(e) or type(e).__name__, response_code) from e

    async def reset(self) -> Snapshot:
        """Discard persisted data and install a fresh default snapshot."""
        name = self._snapshot.name if self._snapshot is not None else ""
        await self.storage.clear()
        snapshot = default_snapshot(name)
        await self.set(snapshot)
        return snapshot

    async def close(self) -> None:
        """Release the storage backend. The in-memory snapshot stays readable."""
        await self.storage.close()

    async def _publish(self, is_initial: bool) -> None:
        await self.event_bus.publish(SnapshotUpdatedEvent(is_initial=is_initial, source="snapshot_store"))

    def has_results(self, offset: Optional[int] = None) -> bool:
        """Return whether results are loaded (beyond ``offset`` when given)."""
        if self._snapshot is None or self._snapshot.results is None:
            return False
        return offset is None or len(self._snapshot.results) > offset

    # Custom themes

    def _find_custom_theme(self, theme_id: str) -> Optional[CustomTheme]:
        if self._snapshot is None:
            return None
        return next((t for t in self._snapshot.custom_themes if t.id == theme_id), None)

    async def add_custom_theme(self, theme: CustomTheme) -> bool:
        """Store a copy of ``theme`` under a new local id."""
        snapshot = self._snapshot
        if snapshot is None:
            return False

        if len(snapshot.custom_themes) >= self.max_custom_themes:
            self.notify("Too many custom themes!", 0)
            return False

        new_theme = theme.model_copy(update={"id": f"local_{now_ms()}_{uuid.uuid4().hex[:8]}"})
        snapshot.custom_themes.append(new_theme)
        await self.set(snapshot)
        return True

    async def edit_custom_theme(self, theme_id: str, theme: CustomTheme) -> bool:
        snapshot = self._snapshot
        if snapshot is None:
            return False

        existing = self._find_custom_theme(theme_id)
        if existing is None:
            self.notify(f"Editing failed: Custom theme with id: {theme_id} does not exist", -1)
            return False

        index = next(i for i, t in enumerate(snapshot.custom_themes) if t.id == theme_id)
        snapshot.custom_themes[index] = theme.model_copy(update={"id": theme_id})
        await self.set(snapshot)
        return True

    async def delete_custom_theme(self, theme_id: str) -> bool:
        snapshot = self._snapshot
        if snapshot is None:
            return False

        if self._find_custom_theme(theme_id) is None:
            return False

        snapshot.custom_themes = [t for t in snapshot.custom_themes if t.id != theme_id]
        await self.set(snapshot)
        return True

    # Counters and inventory

    async def add_xp(self, xp: int) -> None:
        """Add ``xp`` to the total. Persists without notifying."""
        snapshot = self._snapshot
        if snapshot is None:
            return
        snapshot.xp += xp
        await self.set(snapshot, dispatch_event=False)

    async def update_inbox_unread_size(self, size: int) -> None:
        snapshot = self._snapshot
        if snapshot is None:
            return
        snapshot.inbox_unread_size = size
        await self.set(snapshot)

    async def add_badge(self, badge: Badge) -> None:
        snapshot = self._snapshot
        if snapshot is None:
            return
        if snapshot.inventory is None:
            snapshot.inventory = Inventory()
        snapshot.inventory.badges.append(badge)
        await self.set(snapshot)

    def get_test_activity_calendar(self, year: str, today: Optional[date] = None) -> Optional[TestActivity]:
        """
        Return activity for the heatmap.

        Args:
            year: ``"current"`` for the rolling last 365 days, or a calendar year
            today: Reference date (defaults to today)
        """
        snapshot = self._snapshot
        if snapshot is None or snapshot.test_activity is None:
            return None

        today = today or date.today()
        if year == "current":
            return snapshot.test_activity.last_year(today)
        if year == str(today.year):
            return snapshot.test_activity.year_calendar(today.year)
        if year.isdigit() and int(year) in snapshot.test_activity.years():
            return snapshot.test_activity.year_calendar(int(year))
        return None


__all__ = ["DEFAULT_INIT_RESPONSE_CODE", "Notifier", "SnapshotStore", "log_notification"]
