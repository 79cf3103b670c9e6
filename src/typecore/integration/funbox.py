"""
Funbox Metadata

Funboxes are practice-mode modifiers. The core only needs two facts about
each one: the difficulty weight added to the XP modifier, and whether results
taken with it may become personal bests.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional


@dataclass(frozen=True)
class FunboxMetadata:
    name: str
    difficulty_level: float = 0
    can_get_pb: bool = True


_FUNBOXES: Dict[str, FunboxMetadata] = {
    fb.name: fb
    for fb in (
        FunboxMetadata("58008", 1, can_get_pb=False),
        FunboxMetadata("mirrored", 3),
        FunboxMetadata("upside_down", 3),
        FunboxMetadata("nausea", 2),
        FunboxMetadata("round_round_baby", 3),
        FunboxMetadata("simon_says", 1),
        FunboxMetadata("tts", 1),
        FunboxMetadata("choo_choo", 2),
        FunboxMetadata("arrows", 1, can_get_pb=False),
        FunboxMetadata("rAnDoMcAsE", 2, can_get_pb=False),
        FunboxMetadata("capitals", 1, can_get_pb=False),
        FunboxMetadata("layoutfluid", 1),
        FunboxMetadata("earthquake", 1),
        FunboxMetadata("space_balls", 0),
        FunboxMetadata("gibberish", 1, can_get_pb=False),
        FunboxMetadata("ascii", 1, can_get_pb=False),
        FunboxMetadata("specials", 1, can_get_pb=False),
        FunboxMetadata("plus_one", 0),
        FunboxMetadata("plus_two", 0),
        FunboxMetadata("read_ahead_easy", 1),
        FunboxMetadata("read_ahead", 2),
        FunboxMetadata("read_ahead_hard", 3),
        FunboxMetadata("memory", 3),
        FunboxMetadata("nospace", 0, can_get_pb=False),
        FunboxMetadata("poetry", 0, can_get_pb=False),
        FunboxMetadata("wikipedia", 0, can_get_pb=False),
        FunboxMetadata("weakspot", 0, can_get_pb=False),
        FunboxMetadata("backwards", 3),
    )
}


def get_funbox(name: str) -> Optional[FunboxMetadata]:
    """Return the metadata for ``name``, or None for unknown funboxes."""
    return _FUNBOXES.get(name)


def get_funboxes(names: Iterable[str]) -> List[FunboxMetadata]:
    """Return metadata for every known name, skipping unknown ones."""
    return [fb for fb in (get_funbox(name) for name in names) if fb is not None]


__all__ = ["FunboxMetadata", "get_funbox", "get_funboxes"]
