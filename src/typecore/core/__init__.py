"""Snapshot store and the engines operating on it."""

from typecore.core.leaderboard import get_lb_memory, refresh_rank, update_lb_memory
from typecore.core.personal_bests import (
    find_pb,
    find_tag_pb,
    get_active_tags_pb,
    get_local_pb,
    get_tag_pb_wpm,
    save_pb,
    save_tag_pb,
    update_tag_pb,
)
from typecore.core.results import average_of_10, daily_best, delete_local_tag, save_local_result
from typecore.core.store import SnapshotStore
from typecore.core.xp import XpCalculation, calculate_xp, daily_bonus

__all__ = [
    "SnapshotStore",
    "XpCalculation",
    "average_of_10",
    "calculate_xp",
    "daily_best",
    "daily_bonus",
    "delete_local_tag",
    "find_pb",
    "find_tag_pb",
    "get_active_tags_pb",
    "get_lb_memory",
    "get_local_pb",
    "get_tag_pb_wpm",
    "refresh_rank",
    "save_local_result",
    "save_pb",
    "save_tag_pb",
    "update_lb_memory",
    "update_tag_pb",
]
