"""
Snapshot Models

The ``Snapshot`` is the complete local state of one user: result history,
personal-best caches, tags, leaderboard memory and counters. This module also
defines its smaller parts and :func:`default_snapshot`, which materializes the
empty state used on first start and after unrecoverable load failures.
"""

import uuid
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from typecore.models.activity import TestActivity
from typecore.models.base import CamelModel
from typecore.models.personal_best import PersonalBests
from typecore.models.result import Result

PROTECTED_FIELDS = ("banned", "verified", "lb_opt_out")

# mode -> mode2 -> language -> last known rank
LeaderboardMemory = Dict[str, Dict[str, Dict[str, int]]]


class Tag(CamelModel):
    """A user-defined label with its own personal-best table."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str
    active: bool = False
    personal_bests: PersonalBests = Field(default_factory=PersonalBests)

    @field_validator("personal_bests", mode="before")
    @classmethod
    def default_personal_bests(cls, value):
        return {} if value is None else value


class TypingStats(CamelModel):
    """Lifetime typing counters."""

    time_typing: float = 0.0
    started_tests: int = 0
    completed_tests: int = 0


class CustomTheme(CamelModel):
    """A user-defined colour theme."""

    id: str = Field(default="", alias="_id")
    name: str
    colors: List[str] = Field(default_factory=list)


class Badge(CamelModel):
    id: int
    selected: Optional[bool] = None


class Inventory(CamelModel):
    badges: List[Badge] = Field(default_factory=list)


class Snapshot(CamelModel):
    """
    Root aggregate of the local data core.

    Attributes:
        results: Stored results, newest first; None until the first result
        personal_bests: Global personal-best cache
        tags: User tags, unique by id
        lb_memory: Last known leaderboard rank per (mode, mode2, language)
        typing_stats: Lifetime typing counters
        xp: Total experience
        streak: Current daily streak; never above max_streak
        test_activity: Per-day activity calendar
        banned, verified, lb_opt_out: Moderation state that callers cannot
            overwrite through the store
        custom_themes: At most ``max_custom_themes`` user themes
    """

    name: str = ""
    results: Optional[List[Result]] = None
    personal_bests: PersonalBests = Field(default_factory=PersonalBests)
    tags: List[Tag] = Field(default_factory=list)
    lb_memory: Optional[LeaderboardMemory] = None
    typing_stats: TypingStats = Field(default_factory=TypingStats)
    xp: int = 0
    streak: int = 0
    max_streak: int = 0
    test_activity: Optional[TestActivity] = None
    banned: Optional[bool] = None
    verified: Optional[bool] = None
    lb_opt_out: Optional[bool] = None
    custom_themes: List[CustomTheme] = Field(default_factory=list)
    inventory: Optional[Inventory] = None
    inbox_unread_size: int = 0

    @field_validator("personal_bests", "typing_stats", mode="before")
    @classmethod
    def default_when_missing(cls, value):
        return {} if value is None else value

    @field_validator("tags", "custom_themes", mode="before")
    @classmethod
    def empty_list_when_missing(cls, value):
        return [] if value is None else value

    @field_validator("xp", "streak", "max_streak", "inbox_unread_size", mode="before")
    @classmethod
    def zero_when_missing(cls, value):
        return 0 if value is None else value

    def get_tag(self, tag_id: str) -> Optional[Tag]:
        return next((tag for tag in self.tags if tag.id == tag_id), None)

    def active_tag_ids(self) -> List[str]:
        return [tag.id for tag in self.tags if tag.active]

    def last_result_timestamp(self) -> Optional[int]:
        if not self.results:
            return None
        return self.results[0].timestamp


def default_snapshot(name: str = "") -> Snapshot:
    """Return the empty snapshot installed when nothing usable is persisted."""
    return Snapshot(
        name=name,
        personal_bests=PersonalBests(),
        typing_stats=TypingStats(),
        test_activity=TestActivity(),
    )


__all__ = [
    "Badge",
    "CustomTheme",
    "Inventory",
    "LeaderboardMemory",
    "PROTECTED_FIELDS",
    "Snapshot",
    "Tag",
    "TypingStats",
    "default_snapshot",
]
