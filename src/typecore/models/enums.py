"""Enumerations shared by the typecore data models."""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """
    Test modes.

    Each mode scopes its own ``mode2`` domain:

    Attributes:
        TIME: mode2 is a duration in seconds ("15", "60", ...)
        WORDS: mode2 is a word count
        QUOTE: mode2 is a quote identifier, never a difficulty bucket
        ZEN: free typing, mode2 is always "zen"
        CUSTOM: mode2 is always "custom"
    """

    TIME = "time"
    WORDS = "words"
    QUOTE = "quote"
    ZEN = "zen"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


class Difficulty(str, Enum):
    """Test difficulty setting."""

    NORMAL = "normal"
    EXPERT = "expert"
    MASTER = "master"

    def __str__(self) -> str:
        return self.value


__all__ = ["Difficulty", "Mode"]
