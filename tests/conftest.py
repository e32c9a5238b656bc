"""Shared fixtures for the gacha analytics tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gacha_stats.schemas.record import Business, PullRecord

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=8)))
UID = 100000001


def record_id(n: int) -> str:
    """Fixed-width id so lexicographic order matches numeric order."""
    return str(1700000000000000000 + n)


@pytest.fixture
def make_record():
    """Factory for pull records; time advances one minute per id step."""

    def factory(
        n: int,
        pull_type_code: int = 301,
        rarity_tier: int = 3,
        *,
        business: Business = Business.GENSHIN_IMPACT,
        time: datetime | None = None,
        item_id: str = "",
        item_name: str | None = None,
        uid: int = UID,
    ) -> PullRecord:
        return PullRecord(
            business=business,
            uid=uid,
            id=record_id(n),
            pull_type_code=pull_type_code,
            rarity_tier=rarity_tier,
            time=time or BASE_TIME + timedelta(minutes=n),
            item_id=item_id,
            item_name=item_name or f"Item {item_id or n}",
            item_type="Character",
        )

    return factory


@pytest.fixture
def make_records(make_record):
    """Build consecutive records of one pull type from a rarity sequence."""

    def factory(
        rarities: list[int],
        pull_type_code: int = 301,
        *,
        start: int = 1,
        business: Business = Business.GENSHIN_IMPACT,
    ) -> list[PullRecord]:
        return [
            make_record(start + i, pull_type_code, rarity, business=business)
            for i, rarity in enumerate(rarities)
        ]

    return factory
