"""
Leaderboard Memory

Remembers the last leaderboard rank seen per (mode, mode2, language) so the
result screen can show rank movement. Only ``time`` leaderboards exist.
"""

import logging
from typing import TYPE_CHECKING, Dict, Optional, Union

from typecore.integration.offline_api import OfflineApiClient
from typecore.models.enums import Mode
from typecore.models.snapshot import Snapshot

if TYPE_CHECKING:
    from typecore.core.store import SnapshotStore

logger = logging.getLogger(__name__)


def _default_time_memory() -> Dict[str, Dict[str, int]]:
    return {"15": {"english": 0}, "60": {"english": 0}}


async def update_lb_memory(
    store: "SnapshotStore",
    mode: Union[Mode, str],
    mode2: Union[str, int],
    language: str,
    rank: int,
) -> bool:
    """
    Remember ``rank`` for the given leaderboard and persist the snapshot.

    Returns:
        True when the rank was stored; False for non-time modes or when no
        snapshot is loaded.
    """
    if Mode(mode) != Mode.TIME:
        return False

    snapshot = store.get()
    if snapshot is None:
        return False

    if snapshot.lb_memory is None:
        snapshot.lb_memory = {"time": _default_time_memory()}
    time_memory = snapshot.lb_memory.setdefault(Mode.TIME.value, _default_time_memory())
    time_memory.setdefault(str(mode2), {})[language] = rank

    await store.set(snapshot)
    return True


def get_lb_memory(
    snapshot: Optional[Snapshot],
    mode: Union[Mode, str],
    mode2: Union[str, int],
    language: str,
) -> Optional[int]:
    """Return the remembered rank, or None when nothing was stored."""
    if snapshot is None or snapshot.lb_memory is None:
        return None
    return snapshot.lb_memory.get(Mode(mode).value, {}).get(str(mode2), {}).get(language)


async def refresh_rank(
    store: "SnapshotStore",
    api: OfflineApiClient,
    mode: Union[Mode, str],
    mode2: Union[str, int],
    language: str,
) -> Optional[int]:
    """
    Ask the API for the current rank and remember it.

    Falls back to the remembered rank when the API does not answer with a
    rank.
    """
    response = await api.get_leaderboard_rank(Mode(mode).value, str(mode2), language)
    rank = (response.body.get("data") or {}).get("rank") if response.status == 200 else None

    if isinstance(rank, int):
        await update_lb_memory(store, mode, mode2, language, rank)
        return rank

    logger.debug(
        "Leaderboard rank unavailable (status %s), using remembered rank",
        response.status,
    )
    return get_lb_memory(store.get(), mode, mode2, language)


__all__ = ["get_lb_memory", "refresh_rank", "update_lb_memory"]
