"""
Result Ingestion

Adds finished tests to the snapshot and answers the rolling queries the test
screen shows next to a result (average of the last ten, best of the day).
"""

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from typecore.core.personal_bests import save_pb
from typecore.models.enums import Mode
from typecore.models.personal_best import PersonalBestKey
from typecore.models.result import Result
from typecore.models.snapshot import Snapshot, TypingStats
from typecore.utils.time import DAY_MS, local_date, now_ms

if TYPE_CHECKING:
    from typecore.core.store import SnapshotStore

logger = logging.getLogger(__name__)

AVERAGE_WINDOW = 10


async def save_local_result(
    store: "SnapshotStore",
    result: Optional[Result] = None,
    xp: Optional[int] = None,
    streak: Optional[int] = None,
    is_pb: bool = False,
) -> None:
    """
    Fold a finished test into the current snapshot.

    The result is prepended to the history and counted in the typing stats
    and the activity calendar; when ``is_pb`` is set it also becomes the
    global personal best for its key. ``xp`` is added to the total as given
    and ``streak`` replaces the current streak. The snapshot is persisted
    without publishing an update event.
    """
    snapshot = store.get()
    if snapshot is None:
        logger.debug("No snapshot loaded, dropping local result")
        return

    if result is not None:
        if snapshot.results is None:
            snapshot.results = [result]
        else:
            snapshot.results.insert(0, result)

        if snapshot.test_activity is not None:
            snapshot.test_activity.increment(local_date(result.timestamp))

        if snapshot.typing_stats is None:
            snapshot.typing_stats = TypingStats()
        stats = snapshot.typing_stats
        stats.time_typing += result.test_duration + result.incomplete_test_seconds - result.afk_duration
        stats.started_tests += result.restart_count + 1
        stats.completed_tests += 1

        if is_pb:
            save_pb(
                snapshot,
                PersonalBestKey.from_result(result),
                result.wpm,
                result.acc,
                result.raw_wpm,
                result.consistency,
            )

    if xp is not None:
        snapshot.xp += xp

    if streak is not None:
        snapshot.streak = streak
        if snapshot.streak > snapshot.max_streak:
            snapshot.max_streak = snapshot.streak

    await store.set(snapshot, dispatch_event=False)


def _matching_results(snapshot: Snapshot, key: PersonalBestKey) -> Iterator[Result]:
    """Yield results, newest first, whose mode and variant key match ``key``.

    When any tag is active only results carrying one of the active tags are
    yielded.
    """
    active_tags: List[str] = snapshot.active_tag_ids()
    for result in snapshot.results or []:
        if result.mode != key.mode or not key.matches(result):
            continue
        if active_tags and not any(tag_id in result.tags for tag_id in active_tags):
            continue
        yield result


def average_of_10(snapshot: Optional[Snapshot], key: PersonalBestKey) -> Tuple[float, float]:
    """
    Return the average ``(wpm, acc)`` of the ten newest results for ``key``.

    For quotes the average covers the ten newest runs of that quote; when the
    quote was never completed, the ten newest quote results of any id are
    used instead. ``(0, 0)`` is returned when nothing qualifies.
    """
    if snapshot is None:
        return 0, 0

    wpm_sum = acc_sum = 0.0
    count = 0
    last10_wpm = last10_acc = 0.0
    last10_count = 0

    for result in _matching_results(snapshot, key):
        # legacy results may store mode2 as a number
        same_mode2 = str(result.mode2) == key.mode2
        if not same_mode2 and key.mode != Mode.QUOTE:
            continue

        if last10_count < AVERAGE_WINDOW:
            last10_wpm += result.wpm
            last10_acc += result.acc
            last10_count += 1

        if same_mode2:
            wpm_sum += result.wpm
            acc_sum += result.acc
            count += 1
            if count >= AVERAGE_WINDOW:
                break

    if count == 0 and key.mode == Mode.QUOTE:
        if last10_count == 0:
            return 0, 0
        return last10_wpm / last10_count, last10_acc / last10_count

    if count == 0:
        return 0, 0
    return wpm_sum / count, acc_sum / count


def daily_best(snapshot: Optional[Snapshot], key: PersonalBestKey, now: Optional[int] = None) -> float:
    """Return the best wpm for ``key`` within the last 24 hours, or 0."""
    if snapshot is None:
        return 0

    cutoff = (now if now is not None else now_ms()) - DAY_MS
    best: float = 0
    for result in _matching_results(snapshot, key):
        if result.timestamp < cutoff:
            continue
        if key.mode != Mode.QUOTE and str(result.mode2) != key.mode2:
            continue
        if result.wpm > best:
            best = result.wpm
    return best


def delete_local_tag(snapshot: Optional[Snapshot], tag_id: str) -> int:
    """
    Remove ``tag_id`` from every stored result.

    The tag itself and every other field are left alone.

    Returns:
        Number of results that carried the tag.
    """
    if snapshot is None:
        return 0

    touched = 0
    for result in snapshot.results or []:
        if tag_id in result.tags:
            result.tags.remove(tag_id)
            touched += 1
    return touched


__all__ = ["AVERAGE_WINDOW", "average_of_10", "daily_best", "delete_local_tag", "save_local_result"]
