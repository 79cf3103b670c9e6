"""Data models of the typecore snapshot."""

from typecore.models.activity import TestActivity
from typecore.models.enums import Difficulty, Mode
from typecore.models.personal_best import PersonalBest, PersonalBestKey, PersonalBests
from typecore.models.result import IncompleteTest, Result
from typecore.models.snapshot import (
    PROTECTED_FIELDS,
    Badge,
    CustomTheme,
    Inventory,
    Snapshot,
    Tag,
    TypingStats,
    default_snapshot,
)

__all__ = [
    "Badge",
    "CustomTheme",
    "Difficulty",
    "IncompleteTest",
    "Inventory",
    "Mode",
    "PROTECTED_FIELDS",
    "PersonalBest",
    "PersonalBestKey",
    "PersonalBests",
    "Result",
    "Snapshot",
    "Tag",
    "TestActivity",
    "TypingStats",
    "default_snapshot",
]
