"""Tests for gacha_stats.services.categorizer."""

from __future__ import annotations

from gacha_stats.schemas.prettized import Category, RankingSet
from gacha_stats.schemas.record import Business
from gacha_stats.services.categorizer import categorize, group_by_pull_type
from gacha_stats.services.category_table import CategoryEntry, CategoryTable, category_table

GENSHIN = Business.GENSHIN_IMPACT


class TestGroupByPullType:
    def test_partitions_and_keeps_order(self, make_record):
        records = [
            make_record(1, 301),
            make_record(2, 200),
            make_record(3, 301),
        ]
        grouped = group_by_pull_type(records)
        assert set(grouped) == {200, 301}
        assert [r.id for r in grouped[301]] == [records[0].id, records[2].id]

    def test_empty(self):
        assert group_by_pull_type([]) == {}


class TestCategorize:
    def test_custom_merge_rule(self, make_record):
        table = CategoryTable(
            entries=(CategoryEntry(Category.CHARACTER, (10, 20)),),
            rarity=category_table(GENSHIN).rarity,
        )
        records = [make_record(1, 10), make_record(2, 20), make_record(3, 10)]
        categorizeds = categorize(GENSHIN, group_by_pull_type(records), table)

        character = categorizeds[Category.CHARACTER]
        assert character.total == 3
        assert character.pull_type_code == 10
        assert character.pull_type_codes == [10, 20]
        assert character.last_end_id == records[2].id
        assert character.start_time == records[0].time
        assert character.end_time == records[2].time

    def test_merged_lists_are_resorted_for_pity(self, make_record):
        records = [
            make_record(1, 301, 3),
            make_record(2, 400, 3),
            make_record(3, 301, 5),
            make_record(4, 400, 5),
        ]
        table = category_table(GENSHIN)
        categorizeds = categorize(GENSHIN, group_by_pull_type(records), table)
        top = categorizeds[Category.CHARACTER].rankings.top
        assert [v.used_pity for v in top.values] == [3, 1]
        assert [v.id for v in top.values] == [records[2].id, records[3].id]

    def test_known_category_without_records_is_empty_group(self, make_record):
        categorizeds = categorize(
            GENSHIN, group_by_pull_type([make_record(1, 301)]), category_table(GENSHIN)
        )
        beginner = categorizeds[Category.BEGINNER]
        assert beginner is not None
        assert beginner.total == 0
        assert beginner.start_time is None
        assert beginner.end_time is None
        assert beginner.last_end_id is None
        assert beginner.rankings == RankingSet()

    def test_foreign_categories_are_none(self):
        categorizeds = categorize(GENSHIN, {}, category_table(GENSHIN))
        assert set(categorizeds) == set(Category)
        assert categorizeds[Category.BANGBOO] is None
        assert categorizeds[Category.COLLABORATION_CHARACTER] is None
        assert categorizeds[Category.EVENT_ODE] is None

    def test_every_record_in_exactly_one_group(self, make_record):
        codes = [100, 200, 301, 400, 302, 500, 301, 302]
        records = [make_record(i + 1, code) for i, code in enumerate(codes)]
        categorizeds = categorize(GENSHIN, group_by_pull_type(records), category_table(GENSHIN))
        assert sum(g.total for g in categorizeds.values() if g) == len(records)
        assert categorizeds[Category.CHARACTER].total == 3
        assert categorizeds[Category.WEAPON].total == 2
