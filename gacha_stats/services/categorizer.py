"""Grouping by pull-type code and folding groups into categories."""

from collections import defaultdict
from collections.abc import Iterable

from gacha_stats.schemas.prettized import CategorizedGroup, Category
from gacha_stats.schemas.record import Business, PullRecord
from gacha_stats.services.category_table import CategoryEntry, CategoryTable
from gacha_stats.services.rankings import (
    IsRestricted,
    ItemNameLookup,
    compute_rankings,
    never_restricted,
)


def group_by_pull_type(records: Iterable[PullRecord]) -> dict[int, list[PullRecord]]:
    """Partition records by pull-type code, keeping their relative order."""
    groups: dict[int, list[PullRecord]] = defaultdict(list)
    for record in records:
        groups[record.pull_type_code].append(record)
    return dict(groups)


def collect_entry_records(
    entry: CategoryEntry, grouped: dict[int, list[PullRecord]]
) -> list[PullRecord]:
    """Concatenate every source list of an entry.

    Source lists are individually ordered but their union is not, so merged
    entries are re-sorted by id.
    """
    records: list[PullRecord] = []
    for code in entry.pull_type_codes:
        records.extend(grouped.get(code, ()))
    if entry.is_merged:
        records.sort(key=lambda r: r.id)
    return records


def categorize(
    business: Business,
    grouped: dict[int, list[PullRecord]],
    table: CategoryTable,
    is_restricted: IsRestricted = never_restricted,
    item_name: ItemNameLookup | None = None,
) -> dict[Category, CategorizedGroup | None]:
    """Build one group per category the business knows.

    Categories outside the table map to None. Known categories without any
    records still get an empty, zeroed group.
    """
    categorizeds: dict[Category, CategorizedGroup | None] = dict.fromkeys(Category)

    for entry in table.entries:
        records = collect_entry_records(entry, grouped)
        categorizeds[entry.category] = CategorizedGroup(
            category=entry.category,
            pull_type_code=entry.pull_type_code,
            pull_type_codes=list(entry.pull_type_codes),
            total=len(records),
            start_time=records[0].time if records else None,
            end_time=records[-1].time if records else None,
            last_end_id=records[-1].id if records else None,
            rankings=compute_rankings(
                business,
                entry.category,
                records,
                table.rarity,
                is_restricted,
                item_name,
                top_resets_mid_pity=table.top_resets_mid_pity,
            ),
        )

    return categorizeds
