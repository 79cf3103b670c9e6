"""
Result Models

A ``Result`` is one completed test attempt as stored in the snapshot. Legacy
records may lack the punctuation/numbers/lazyMode flags (``None`` here) and may
carry a numeric ``mode2``; both are preserved as-is so that the engines can
apply their own compatibility rules.
"""

import uuid
from typing import List, Optional, Union

from pydantic import Field, field_validator

from typecore.models.base import CamelModel
from typecore.models.enums import Difficulty, Mode


class IncompleteTest(CamelModel):
    """An abandoned attempt that still counts towards XP."""

    acc: float
    seconds: float


class Result(CamelModel):
    """
    One completed typing test.

    Immutable once stored, except for ``tags`` which is pruned when a tag is
    deleted. The XP-only inputs (``char_stats``, ``incomplete_tests``,
    ``funbox``) default to empty so that stored results without them validate.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    mode: Mode
    mode2: Union[str, int]
    punctuation: Optional[bool] = None
    numbers: Optional[bool] = None
    lazy_mode: Optional[bool] = None
    difficulty: Difficulty = Difficulty.NORMAL
    language: str = "english"

    wpm: float = 0.0
    acc: float = 0.0
    raw_wpm: float = 0.0
    consistency: float = 0.0
    timestamp: int = 0

    tags: List[str] = Field(default_factory=list)

    test_duration: float = 0.0
    afk_duration: float = 0.0
    incomplete_test_seconds: float = 0.0
    restart_count: int = 0

    char_stats: List[int] = Field(default_factory=list)
    incomplete_tests: Optional[List[IncompleteTest]] = None
    funbox: List[str] = Field(default_factory=list)

    @field_validator("funbox", mode="before")
    @classmethod
    def split_funbox(cls, value):
        """Accept the legacy '#'-joined funbox string ("none" meaning empty)."""
        if value is None:
            return []
        if isinstance(value, str):
            return [name for name in value.split("#") if name and name != "none"]
        return value


__all__ = ["IncompleteTest", "Result"]
