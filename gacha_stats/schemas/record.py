"""Pydantic schemas for raw pull records."""

from collections.abc import Iterable, Mapping
from enum import IntEnum
from typing import Any

from pydantic import AwareDatetime, TypeAdapter

from gacha_stats.schemas.base import FrozenModel


class Business(IntEnum):
    """Game title whose rule set applies to a record."""

    GENSHIN_IMPACT = 0
    HONKAI_STAR_RAIL = 1
    ZENLESS_ZONE_ZERO = 2
    MILIASTRA_WONDERLAND = 3


class PullRecord(FrozenModel):
    business: Business
    uid: int
    id: str  # sortable, increases with real pull order
    pull_type_code: int
    rarity_tier: int
    time: AwareDatetime
    item_id: str = ""
    item_name: str
    item_type: str
    count: int = 1


_records_adapter = TypeAdapter(list[PullRecord])


def parse_records(rows: Iterable[Mapping[str, Any]]) -> list[PullRecord]:
    """Validate raw rows (camelCase or snake_case keys) into pull records.

    Raises:
        pydantic.ValidationError: If any row is malformed.
    """
    return _records_adapter.validate_python(list(rows))
