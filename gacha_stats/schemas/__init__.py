"""Pydantic schemas package."""

from gacha_stats.schemas.record import Business, PullRecord, parse_records
from gacha_stats.schemas.prettized import (
    AggregatedRecords,
    CategorizedGroup,
    Category,
    MidRanking,
    PityRecord,
    PrettizedRecords,
    RankingSet,
    RelationTag,
    StreakTag,
    TagSet,
    TierRanking,
    TopRanking,
    TopRecord,
)

__all__ = [
    "Business",
    "PullRecord",
    "parse_records",
    "AggregatedRecords",
    "CategorizedGroup",
    "Category",
    "MidRanking",
    "PityRecord",
    "PrettizedRecords",
    "RankingSet",
    "RelationTag",
    "StreakTag",
    "TagSet",
    "TierRanking",
    "TopRanking",
    "TopRecord",
]
