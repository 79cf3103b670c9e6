"""
Personal Best Models

This module defines the personal-best cache stored in a snapshot (and, with
the same shape, in every tag):

- ``PersonalBest``: best-known result for one variant key
- ``PersonalBests``: per-mode tables mapping ``mode2`` to a list of entries
- ``PersonalBestKey``: the full lookup key used by the PB engine

Each mode owns a separate table so that ``mode2`` is interpreted per mode
(durations for ``time``, word counts for ``words``, quote ids for ``quote``).
A table cell is normally a list of ``PersonalBest``; older clients sometimes
left other values behind, which are kept verbatim until the cell is next
written.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from typecore.models.base import CamelModel
from typecore.models.enums import Difficulty, Mode

logger = logging.getLogger(__name__)


class PersonalBest(CamelModel):
    """Best result for one (punctuation, numbers, difficulty, language, lazyMode) key."""

    wpm: float
    acc: float
    raw: float = 0.0
    consistency: float = 0.0
    timestamp: int = 0
    punctuation: Optional[bool] = None
    numbers: Optional[bool] = None
    difficulty: Difficulty = Difficulty.NORMAL
    language: str = "english"
    lazy_mode: Optional[bool] = None


# Valid cells validate as a list of PersonalBest; anything else is kept raw.
PersonalBestCell = Annotated[
    Union[List[PersonalBest], Any],
    Field(union_mode="left_to_right"),
]


def _is_valid_cell(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(entry, PersonalBest) for entry in value)


class PersonalBests(CamelModel):
    """
    Personal-best tables keyed by mode, then by ``mode2``.

    Reads never create structure; writes go through :meth:`get_or_create`.
    """

    time: Dict[str, PersonalBestCell] = Field(default_factory=dict)
    words: Dict[str, PersonalBestCell] = Field(default_factory=dict)
    quote: Dict[str, PersonalBestCell] = Field(default_factory=dict)
    zen: Dict[str, PersonalBestCell] = Field(default_factory=dict)
    custom: Dict[str, PersonalBestCell] = Field(default_factory=dict)

    @field_validator("time", "words", "quote", "zen", "custom", mode="before")
    @classmethod
    def empty_table_when_missing(cls, value):
        return {} if value is None else value

    def bucket(self, mode: Union[Mode, str]) -> Dict[str, Any]:
        """Return the mode2 table for a mode."""
        return getattr(self, Mode(mode).value)

    def cell(self, mode: Union[Mode, str], mode2: Union[str, int]) -> Optional[List[PersonalBest]]:
        """
        Return the entries stored for ``(mode, mode2)``.

        Returns:
            The list of entries, or None when the cell is missing or holds
            legacy data that is not a list of personal bests.
        """
        value = self.bucket(mode).get(str(mode2))
        return value if _is_valid_cell(value) else None

    def get_or_create(self, mode: Union[Mode, str], mode2: Union[str, int]) -> List[PersonalBest]:
        """
        Return the writable entry list for ``(mode, mode2)``, creating it if needed.

        A cell holding anything other than a list of personal bests is reset to
        an empty list so that legacy data never blocks new writes.
        """
        table = self.bucket(mode)
        key = str(mode2)
        value = table.get(key)
        if value is None or not _is_valid_cell(value):
            if value is not None:
                logger.warning(
                    "Resetting unreadable personal best cell %s/%s (%s)",
                    Mode(mode).value,
                    key,
                    type(value).__name__,
                )
            value = []
            table[key] = value
        return value

    def entries(self) -> List[PersonalBest]:
        """Return every readable entry across all tables."""
        found: List[PersonalBest] = []
        for mode in Mode:
            for value in self.bucket(mode).values():
                if _is_valid_cell(value):
                    found.extend(value)
        return found


@dataclass(frozen=True)
class PersonalBestKey:
    """
    Full key addressing one personal best.

    ``(mode, mode2)`` selects the table cell, the remaining five fields are the
    variant key matched inside the cell.
    """

    mode: Mode
    mode2: str
    punctuation: bool = False
    numbers: bool = False
    language: str = "english"
    difficulty: Difficulty = Difficulty.NORMAL
    lazy_mode: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", Mode(self.mode))
        object.__setattr__(self, "mode2", str(self.mode2))
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        for flag in ("punctuation", "numbers", "lazy_mode"):
            object.__setattr__(self, flag, bool(getattr(self, flag)))

    @classmethod
    def from_result(cls, result: Any) -> "PersonalBestKey":
        """Build the key a stored result would be filed under."""
        return cls(
            mode=result.mode,
            mode2=str(result.mode2),
            punctuation=bool(result.punctuation),
            numbers=bool(result.numbers),
            language=result.language,
            difficulty=result.difficulty,
            lazy_mode=bool(result.lazy_mode),
        )

    def matches(self, entry: Any) -> bool:
        """
        Compare the variant key of a personal best or result with this key.

        Missing flags on legacy records count as ``False``.
        """
        return (
            bool(entry.punctuation) == self.punctuation
            and bool(entry.numbers) == self.numbers
            and entry.difficulty == self.difficulty
            and entry.language == self.language
            and bool(entry.lazy_mode) == self.lazy_mode
        )

    def matches_exactly(self, result: Any) -> bool:
        """Strict comparison of every key field against a result, without legacy defaults."""
        return (
            result.mode == self.mode
            and result.mode2 == self.mode2
            and result.punctuation is self.punctuation
            and result.numbers is self.numbers
            and result.language == self.language
            and result.difficulty == self.difficulty
            and result.lazy_mode is self.lazy_mode
        )


__all__ = ["PersonalBest", "PersonalBestCell", "PersonalBestKey", "PersonalBests"]
