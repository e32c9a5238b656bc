"""Rank metadata and pity tracking for one category's pull list.

Percentages are rounded half-up to two decimals. The average pity is rounded
to two decimals first and then rounded up to an integer, so an exact 2.00
stays 2 while 2.50 becomes 3.
"""

import math
from collections.abc import Callable, Sequence
from typing import NamedTuple

from gacha_stats.schemas.prettized import (
    Category,
    MidRanking,
    PityRecord,
    RankingSet,
    TierRanking,
    TopRanking,
    TopRecord,
)
from gacha_stats.schemas.record import Business, PullRecord
from gacha_stats.services.category_table import RarityTiers, pity_progress

IsRestricted = Callable[[Business, PullRecord], bool]
ItemNameLookup = Callable[[PullRecord], str | None]


def never_restricted(business: Business, record: PullRecord) -> bool:
    return False


def round2(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def percentage(count: int, total: int) -> float:
    return round2(count / total * 100) if total > 0 else 0


def average_pity(used_pity_sum: int, count: int) -> int:
    return math.ceil(round2(used_pity_sum / count)) if count > 0 else 0


class PityScan(NamedTuple):
    values: list
    used_pity_sum: int
    next_pity: int


def _annotated_fields(record: PullRecord, item_name: ItemNameLookup | None) -> dict:
    fields = record.model_dump()
    if item_name is not None:
        fields["item_name"] = item_name(record) or record.item_name
    return fields


def track_pity(
    business: Business,
    records: Sequence[PullRecord],
    rarity: RarityTiers,
    is_restricted: IsRestricted = never_restricted,
    item_name: ItemNameLookup | None = None,
) -> PityScan:
    """Single forward pass assigning used pity to every top-tier pull.

    `records` must be ascending by id.
    """
    values: list[TopRecord] = []
    pity = 0
    used_pity_sum = 0

    for record in records:
        pity += 1
        if not rarity.is_top(record.rarity_tier):
            continue

        values.append(TopRecord(
            **_annotated_fields(record, item_name),
            used_pity=pity,
            restricted=bool(is_restricted(business, record)),
        ))
        used_pity_sum += pity
        pity = 0

    return PityScan(values=values, used_pity_sum=used_pity_sum, next_pity=pity)


def track_mid_pity(
    records: Sequence[PullRecord],
    rarity: RarityTiers,
    top_resets_mid_pity: bool = False,
    item_name: ItemNameLookup | None = None,
) -> PityScan:
    """Single forward pass assigning used pity to every mid-tier pull.

    With `top_resets_mid_pity` a top-tier pull also clears the mid counter
    without producing a mid value.
    """
    values: list[PityRecord] = []
    pity = 0
    used_pity_sum = 0

    for record in records:
        pity += 1
        if rarity.is_mid(record.rarity_tier):
            values.append(PityRecord(
                **_annotated_fields(record, item_name),
                used_pity=pity,
            ))
            used_pity_sum += pity
            pity = 0
        elif top_resets_mid_pity and rarity.is_top(record.rarity_tier):
            pity = 0

    return PityScan(values=values, used_pity_sum=used_pity_sum, next_pity=pity)


def restricted_used_pity_sum(values: Sequence[TopRecord]) -> int:
    """Pulls spent between consecutive restricted top pulls, summed.

    A restricted pull consumes its own pity plus that of every unrestricted
    top pull since the previous restricted one.
    """
    pending = 0
    total = 0
    for value in values:
        pending += value.used_pity
        if value.restricted:
            total += pending
            pending = 0
    return total


def count_restricted_wins(values: Sequence[TopRecord]) -> int:
    """Restricted top pulls not preceded by an unrestricted top pull."""
    wins = 0
    previous: TopRecord | None = None
    for value in values:
        if value.restricted and (previous is None or previous.restricted):
            wins += 1
        previous = value
    return wins


def build_mid_ranking(
    values: list[PityRecord],
    total: int,
    next_pity: int = 0,
) -> MidRanking:
    count = len(values)
    return MidRanking(
        count=count,
        percentage=percentage(count, total),
        values=values,
        average_pity=average_pity(sum(v.used_pity for v in values), count),
        next_pity=next_pity,
    )


def build_top_ranking(
    values: list[TopRecord],
    total: int,
    next_pity: int = 0,
    next_pity_progress: int = 0,
    restricted_win_count: int | None = None,
    restricted_pity_sum: int | None = None,
) -> TopRanking:
    """Summarize annotated top-tier pulls against a pull total.

    `restricted_win_count` and `restricted_pity_sum` default to what a scan
    of `values` finds. Callers merging several categories pass per-category
    sums instead, since a guarantee never carries across categories.
    """
    count = len(values)
    used_pity_sum = sum(v.used_pity for v in values)
    restricted_count = sum(1 for v in values if v.restricted)
    if restricted_win_count is None:
        restricted_win_count = count_restricted_wins(values)
    if restricted_pity_sum is None:
        restricted_pity_sum = restricted_used_pity_sum(values)
    contested = count - restricted_count + restricted_win_count

    return TopRanking(
        count=count,
        percentage=percentage(count, total),
        values=values,
        average_pity=average_pity(used_pity_sum, count),
        restricted_count=restricted_count,
        restricted_percentage=percentage(restricted_count, total),
        restricted_average_pity=average_pity(restricted_pity_sum, restricted_count),
        restricted_win_count=restricted_win_count,
        restricted_win_percentage=percentage(restricted_win_count, contested),
        next_pity=next_pity,
        next_pity_progress=next_pity_progress,
    )


def compute_rankings(
    business: Business,
    category: Category,
    records: Sequence[PullRecord],
    rarity: RarityTiers,
    is_restricted: IsRestricted = never_restricted,
    item_name: ItemNameLookup | None = None,
    top_resets_mid_pity: bool = False,
) -> RankingSet:
    """Compute low, mid and top tier metadata for one category.

    Records whose rarity is in none of the tiers are counted in the total
    but in no tier.
    """
    total = len(records)
    low_count = sum(1 for r in records if rarity.is_low(r.rarity_tier))
    mid_scan = track_mid_pity(records, rarity, top_resets_mid_pity, item_name)
    top_scan = track_pity(business, records, rarity, is_restricted, item_name)

    return RankingSet(
        low=TierRanking(count=low_count, percentage=percentage(low_count, total)),
        mid=build_mid_ranking(mid_scan.values, total, next_pity=mid_scan.next_pity),
        top=build_top_ranking(
            top_scan.values,
            total,
            next_pity=top_scan.next_pity,
            next_pity_progress=pity_progress(category, top_scan.next_pity),
        ),
    )
