"""
Personal Best Resolution

Lookup and upsert of personal bests in the global cache and in each tag's own
cache. Entries inside a ``(mode, mode2)`` cell are matched on the variant key
(punctuation, numbers, difficulty, language, lazy mode); flags missing on
older entries count as ``False``.

Quote results never produce personal bests: quote lookups report nothing and
quote upserts leave the cache untouched.
"""

import logging
from typing import Iterable, List, Optional

from typecore.integration.funbox import FunboxMetadata
from typecore.models.enums import Mode
from typecore.models.personal_best import PersonalBest, PersonalBestKey, PersonalBests
from typecore.models.snapshot import Snapshot
from typecore.utils.time import now_ms

logger = logging.getLogger(__name__)


def find_pb(personal_bests: Optional[PersonalBests], key: PersonalBestKey) -> Optional[PersonalBest]:
    """Return the entry of ``personal_bests`` matching ``key``, if any."""
    if personal_bests is None or key.mode == Mode.QUOTE:
        return None
    entries = personal_bests.cell(key.mode, key.mode2)
    if not entries:
        return None
    return next((pb for pb in entries if key.matches(pb)), None)


def get_local_pb(
    snapshot: Optional[Snapshot],
    key: PersonalBestKey,
    funboxes: Iterable[FunboxMetadata] = (),
) -> Optional[PersonalBest]:
    """
    Look up the global personal best for ``key``.

    Returns None when any of the active ``funboxes`` forbids personal bests.
    """
    if not all(fb.can_get_pb for fb in funboxes):
        return None
    if snapshot is None:
        return None
    return find_pb(snapshot.personal_bests, key)


def find_tag_pb(snapshot: Optional[Snapshot], tag_id: str, key: PersonalBestKey) -> Optional[PersonalBest]:
    if snapshot is None:
        return None
    tag = snapshot.get_tag(tag_id)
    if tag is None:
        return None
    return find_pb(tag.personal_bests, key)


def get_tag_pb_wpm(snapshot: Optional[Snapshot], tag_id: str, key: PersonalBestKey) -> float:
    """Return the tag's personal-best wpm for ``key``, or 0."""
    pb = find_tag_pb(snapshot, tag_id, key)
    return pb.wpm if pb is not None else 0


def _upsert(
    personal_bests: PersonalBests,
    key: PersonalBestKey,
    wpm: float,
    acc: float,
    raw: float,
    consistency: float,
) -> PersonalBest:
    entries: List[PersonalBest] = personal_bests.get_or_create(key.mode, key.mode2)
    timestamp = now_ms()

    for pb in entries:
        if key.matches(pb):
            pb.wpm = wpm
            pb.acc = acc
            pb.raw = raw
            pb.consistency = consistency
            pb.timestamp = timestamp
            pb.lazy_mode = key.lazy_mode
            return pb

    pb = PersonalBest(
        wpm=wpm,
        acc=acc,
        raw=raw,
        consistency=consistency,
        timestamp=timestamp,
        punctuation=key.punctuation,
        numbers=key.numbers,
        difficulty=key.difficulty,
        language=key.language,
        lazy_mode=key.lazy_mode,
    )
    entries.append(pb)
    return pb


def save_pb(
    snapshot: Optional[Snapshot],
    key: PersonalBestKey,
    wpm: float,
    acc: float,
    raw: float,
    consistency: float,
) -> Optional[PersonalBest]:
    """
    Record a new global personal best for ``key``.

    The matching entry is overwritten in place, otherwise a new entry is
    appended. Missing tables and cells are created on first write.

    Returns:
        The stored entry, or None for quote results and when there is no
        snapshot.
    """
    if snapshot is None or key.mode == Mode.QUOTE:
        return None
    if snapshot.personal_bests is None:
        snapshot.personal_bests = PersonalBests()
    return _upsert(snapshot.personal_bests, key, wpm, acc, raw, consistency)


def save_tag_pb(
    snapshot: Optional[Snapshot],
    tag_id: str,
    key: PersonalBestKey,
    wpm: float,
    acc: float,
    raw: float,
    consistency: float,
) -> bool:
    """
    Record a personal best in the cache of tag ``tag_id``.

    Returns:
        True when the tag cache was written. False for unknown tags, for quote
        results and when there is no snapshot.
    """
    if snapshot is None or key.mode == Mode.QUOTE:
        return False

    tag = snapshot.get_tag(tag_id)
    if tag is None:
        logger.warning("Cannot save personal best for unknown tag %s", tag_id)
        return False

    if tag.personal_bests is None:
        tag.personal_bests = PersonalBests()
    _upsert(tag.personal_bests, key, wpm, acc, raw, consistency)
    return True


def get_active_tags_pb(snapshot: Optional[Snapshot], key: PersonalBestKey) -> float:
    """Return the highest personal-best wpm for ``key`` among active tags."""
    if snapshot is None:
        return 0

    best: float = 0
    for tag in snapshot.tags:
        if not tag.active:
            continue
        wpm = get_tag_pb_wpm(snapshot, tag.id, key)
        if wpm > best:
            best = wpm
    return best


def update_tag_pb(snapshot: Optional[Snapshot], tag_id: str, key: PersonalBestKey) -> bool:
    """
    Rebuild the tag's personal best for ``key`` from the result history.

    Only results carrying the tag whose key fields equal ``key`` exactly are
    considered; flags missing on a result do not match. When nothing matches
    a zeroed entry is written.
    """
    if snapshot is None or snapshot.get_tag(tag_id) is None:
        return False

    wpm: float = 0
    acc: float = 0
    raw: float = 0
    consistency: float = 0

    for result in snapshot.results or []:
        if tag_id not in result.tags or result.wpm <= wpm:
            continue
        if key.matches_exactly(result):
            wpm = result.wpm
            acc = result.acc
            raw = result.raw_wpm
            consistency = result.consistency

    return save_tag_pb(snapshot, tag_id, key, wpm, acc, raw, consistency)


__all__ = [
    "find_pb",
    "find_tag_pb",
    "get_active_tags_pb",
    "get_local_pb",
    "get_tag_pb_wpm",
    "save_pb",
    "save_tag_pb",
    "update_tag_pb",
]
