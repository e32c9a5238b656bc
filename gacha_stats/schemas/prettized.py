"""Pydantic schemas for prettized (analyzed) pull history."""

from datetime import datetime
from enum import Enum

from gacha_stats.schemas.base import FrozenModel
from gacha_stats.schemas.record import Business, PullRecord


class Category(str, Enum):
    """Semantic banner category shared by every business."""

    BEGINNER = "Beginner"
    PERMANENT = "Permanent"
    CHARACTER = "Character"
    WEAPON = "Weapon"
    CHRONICLED = "Chronicled"
    BANGBOO = "Bangboo"
    COLLABORATION_CHARACTER = "CollaborationCharacter"
    COLLABORATION_WEAPON = "CollaborationWeapon"
    PERMANENT_ODE = "PermanentOde"
    EVENT_ODE = "EventOde"


# --- Rankings ---

class PityRecord(PullRecord):
    used_pity: int


class TopRecord(PityRecord):
    restricted: bool = False


class TierRanking(FrozenModel):
    count: int = 0
    percentage: float = 0


class MidRanking(FrozenModel):
    count: int = 0
    percentage: float = 0
    values: list[PityRecord] = []
    average_pity: int = 0
    next_pity: int = 0


class TopRanking(FrozenModel):
    count: int = 0
    percentage: float = 0
    values: list[TopRecord] = []
    average_pity: int = 0
    restricted_count: int = 0
    restricted_percentage: float = 0
    restricted_average_pity: int = 0
    restricted_win_count: int = 0
    restricted_win_percentage: float = 0
    next_pity: int = 0
    next_pity_progress: int = 0  # 0 - 100


class RankingSet(FrozenModel):
    low: TierRanking = TierRanking()
    mid: MidRanking = MidRanking()
    top: TopRanking = TopRanking()


# --- Groups ---

class CategorizedGroup(FrozenModel):
    category: Category
    pull_type_code: int
    pull_type_codes: list[int]
    total: int
    start_time: datetime | None = None
    end_time: datetime | None = None
    last_end_id: str | None = None
    rankings: RankingSet = RankingSet()


# --- Tags ---

class RelationTag(FrozenModel):
    record: TopRecord
    count: int


class StreakTag(FrozenModel):
    timestamp: int  # unix seconds
    count: int


class TagSet(FrozenModel):
    luck: TopRecord | None = None
    unluck: TopRecord | None = None
    relation: RelationTag | None = None
    crazy: StreakTag | None = None
    recent: StreakTag | None = None


class AggregatedRecords(FrozenModel):
    total: int
    start_time: datetime | None = None
    end_time: datetime | None = None
    rankings: RankingSet = RankingSet()
    tags: TagSet = TagSet()


class PrettizedRecords(FrozenModel):
    business: Business
    uid: int
    total: int
    start_time: datetime | None = None
    end_time: datetime | None = None
    pull_type_categories: dict[int, Category]
    categorizeds: dict[Category, CategorizedGroup | None]
    aggregated: AggregatedRecords | None = None
