"""Extremal and streak tags over the aggregated top-tier pulls."""

from collections.abc import Sequence
from datetime import timedelta

from gacha_stats.schemas.prettized import RelationTag, StreakTag, TagSet, TopRecord


def derive_tags(values: Sequence[TopRecord], window: timedelta) -> TagSet:
    """Derive luck, relation and streak tags.

    Args:
        values: Top-tier pulls ascending by id.
        window: Length of the time window used by the streak tags.
    """
    if not values:
        return TagSet()

    # min/max keep the first of equal elements, i.e. the earliest id
    return TagSet(
        luck=min(values, key=lambda v: v.used_pity),
        unluck=max(values, key=lambda v: v.used_pity),
        relation=most_repeated(values),
        crazy=densest_window(values, window),
        recent=recent_window(values, window),
    )


def most_repeated(values: Sequence[TopRecord]) -> RelationTag | None:
    """Item pulled most often, reported with its first occurrence."""
    groups: dict[str, list[TopRecord]] = {}
    for value in values:
        groups.setdefault(value.item_id or value.item_name, []).append(value)

    if not groups:
        return None
    members = max(groups.values(), key=len)
    if len(members) < 2:
        return None
    return RelationTag(record=members[0], count=len(members))


def densest_window(values: Sequence[TopRecord], window: timedelta) -> StreakTag | None:
    """Window holding the most pulls anywhere in history.

    Ties prefer the shorter actual span, then the earlier window.
    """
    if len(values) < 2:
        return None

    best_start = 0
    best_count = 0
    best_span = timedelta.max
    start = 0
    for end, value in enumerate(values):
        while value.time - values[start].time > window:
            start += 1
        count = end - start + 1
        span = value.time - values[start].time
        if count > best_count or (count == best_count and span < best_span):
            best_start, best_count, best_span = start, count, span

    return StreakTag(timestamp=int(values[best_start].time.timestamp()), count=best_count)


def recent_window(values: Sequence[TopRecord], window: timedelta) -> StreakTag | None:
    """Window ending at the most recent pull, scanned backwards."""
    if len(values) < 2:
        return None

    last = values[-1]
    start = len(values) - 1
    while start > 0 and last.time - values[start - 1].time <= window:
        start -= 1

    return StreakTag(timestamp=int(values[start].time.timestamp()), count=len(values) - start)
