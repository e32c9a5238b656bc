"""Memoizing access to prettized records, keyed by account and locale."""

from collections.abc import Callable, Sequence
from datetime import timedelta

from loguru import logger

from gacha_stats.config import settings
from gacha_stats.schemas.prettized import PrettizedRecords
from gacha_stats.schemas.record import Business, PullRecord
from gacha_stats.services.prettizer import prettize_records
from gacha_stats.services.rankings import IsRestricted
from gacha_stats.utils.lru import ItemNameCache, LRUCache

RecordSupplier = Callable[[Business, int], Sequence[PullRecord]]
CacheKey = tuple[Business, int, str | None]


class PrettizedRecordsService:
    """Caches engine results until the caller invalidates them.

    The engine has no notion of staleness. Whoever changes an account's
    records (fetching new pulls, importing, deleting) must call
    `invalidate` for that account.
    """

    def __init__(
        self,
        supplier: RecordSupplier,
        *,
        is_restricted: IsRestricted | None = None,
        item_names: ItemNameCache | None = None,
        maxsize: int | None = None,
        streak_window: timedelta | None = None,
    ):
        self.supplier = supplier
        self.is_restricted = is_restricted
        self.item_names = item_names
        self.streak_window = streak_window
        self._cache: LRUCache[CacheKey, PrettizedRecords] = LRUCache(
            settings.PRETTIZED_CACHE_SIZE if maxsize is None else maxsize
        )

    def get(self, business: Business, uid: int, locale: str | None = None) -> PrettizedRecords:
        """Return prettized records for an account, computing them on a miss."""
        key = (business, uid, locale)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(
                "[{}:{}] prettized cache hit (locale={}, hits={}, misses={})",
                business.name, uid, locale, self._cache.hits, self._cache.misses,
            )
            return cached

        try:
            records = self.supplier(business, uid)
        except Exception as e:
            logger.error("[{}:{}] record supplier failed: {}", business.name, uid, e)
            raise

        item_name = None
        if self.item_names is not None and locale is not None:
            item_name = self.item_names.for_locale(locale)

        result = prettize_records(
            business,
            uid,
            records,
            is_restricted=self.is_restricted,
            item_name=item_name,
            streak_window=self.streak_window,
        )
        self._cache.put(key, result)
        logger.info(
            "[{}:{}] prettized {} records (locale={}, hits={}, misses={})",
            business.name, uid, result.total, locale,
            self._cache.hits, self._cache.misses,
        )
        return result

    def invalidate(self, business: Business, uid: int) -> int:
        """Drop every cached locale of one account. Returns entries removed."""
        removed = self._cache.pop_where(lambda key: key[0] == business and key[1] == uid)
        logger.info("[{}:{}] invalidated {} prettized entries", business.name, uid, removed)
        return removed

    def invalidate_all(self) -> int:
        removed = len(self._cache)
        self._cache.clear()
        logger.info("Invalidated all {} prettized entries", removed)
        return removed
