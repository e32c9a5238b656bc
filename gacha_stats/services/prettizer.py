"""Prettization engine: raw pull history to a structured analytics report.

The engine is a pure function of its inputs. It performs no I/O and keeps no
state between calls.
"""

from collections.abc import Iterable
from datetime import timedelta

from loguru import logger

from gacha_stats.config import settings
from gacha_stats.schemas.prettized import PrettizedRecords
from gacha_stats.schemas.record import Business, PullRecord
from gacha_stats.services.aggregator import compute_aggregated
from gacha_stats.services.categorizer import categorize, group_by_pull_type
from gacha_stats.services.category_table import CategoryTable, category_table
from gacha_stats.services.rankings import IsRestricted, ItemNameLookup, never_restricted


def prettize_records(
    business: Business,
    uid: int,
    records: Iterable[PullRecord],
    *,
    table: CategoryTable | None = None,
    is_restricted: IsRestricted | None = None,
    item_name: ItemNameLookup | None = None,
    streak_window: timedelta | None = None,
) -> PrettizedRecords:
    """Analyze one account's pull history.

    Args:
        business: Game title of the account.
        uid: Account identifier.
        records: Pull records of the account, in any order.
        table: Category table; defaults to the built-in one for `business`.
        is_restricted: Classifier for restricted top-tier items; defaults to
            never restricted.
        item_name: Optional display-name lookup for top-tier items.
        streak_window: Window length for the streak tags; defaults to
            `STREAK_WINDOW_HOURS`.

    Returns:
        PrettizedRecords with one entry per category and the aggregate.
    """
    if table is None:
        table = category_table(business)
    if is_restricted is None:
        is_restricted = never_restricted
    window = streak_window
    if window is None:
        window = timedelta(hours=settings.STREAK_WINDOW_HOURS)

    # Pity is only meaningful over id-ascending order
    ordered = sorted(records, key=lambda r: r.id)

    grouped = group_by_pull_type(ordered)
    categorizeds = categorize(business, grouped, table, is_restricted, item_name)
    aggregated = compute_aggregated(ordered, categorizeds, table, window)

    logger.debug(
        "[{}:{}] prettized {} records into {} categories",
        business.name, uid, len(ordered), len(table.entries),
    )

    return PrettizedRecords(
        business=business,
        uid=uid,
        total=len(ordered),
        start_time=ordered[0].time if ordered else None,
        end_time=ordered[-1].time if ordered else None,
        pull_type_categories=table.pull_type_categories,
        categorizeds=categorizeds,
        aggregated=aggregated,
    )
