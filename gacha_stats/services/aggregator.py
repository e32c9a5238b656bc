"""Account-wide aggregation of categorized rankings."""

from collections.abc import Sequence
from datetime import timedelta

from gacha_stats.schemas.prettized import (
    AggregatedRecords,
    CategorizedGroup,
    Category,
    RankingSet,
    TierRanking,
)
from gacha_stats.schemas.record import PullRecord
from gacha_stats.services.category_table import CategoryTable
from gacha_stats.services.rankings import (
    build_mid_ranking,
    build_top_ranking,
    percentage,
    restricted_used_pity_sum,
)
from gacha_stats.services.tags import derive_tags


def compute_aggregated(
    records: Sequence[PullRecord],
    categorizeds: dict[Category, CategorizedGroup | None],
    table: CategoryTable,
    window: timedelta,
) -> AggregatedRecords | None:
    """Merge every included category into one account-wide summary.

    Totals come from the id-ordered record list, minus records of excluded
    categories. Percentages and averages are re-derived from merged counts.
    Used pity, restricted wins and restricted pity are taken per category
    since neither pity nor a guarantee carries over between banners.
    """
    if not table.aggregated:
        return None

    excluded_codes = table.excluded_pull_type_codes()
    if excluded_codes:
        records = [r for r in records if r.pull_type_code not in excluded_codes]

    total = len(records)
    groups = [
        group
        for category, group in categorizeds.items()
        if group is not None and category not in table.aggregate_excludes
    ]

    low_count = sum(g.rankings.low.count for g in groups)
    mid_values = sorted(
        (value for g in groups for value in g.rankings.mid.values),
        key=lambda v: v.id,
    )
    top_values = sorted(
        (value for g in groups for value in g.rankings.top.values),
        key=lambda v: v.id,
    )

    return AggregatedRecords(
        total=total,
        start_time=records[0].time if records else None,
        end_time=records[-1].time if records else None,
        rankings=RankingSet(
            low=TierRanking(count=low_count, percentage=percentage(low_count, total)),
            mid=build_mid_ranking(mid_values, total),
            top=build_top_ranking(
                top_values,
                total,
                restricted_win_count=sum(
                    g.rankings.top.restricted_win_count for g in groups
                ),
                restricted_pity_sum=sum(
                    restricted_used_pity_sum(g.rankings.top.values) for g in groups
                ),
            ),
        ),
        tags=derive_tags(top_values, window),
    )
