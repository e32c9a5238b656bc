"""Bounded least-recently-used caches owned by their callers."""

from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from gacha_stats.config import settings
from gacha_stats.schemas.record import Business, PullRecord

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class LRUCache(Generic[K, V]):
    """Mapping that evicts the least recently used entry once full."""

    def __init__(self, maxsize: int):
        if maxsize < 1:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self.maxsize = maxsize
        self._data: OrderedDict[K, V] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def get(self, key: K, default: V | None = None) -> V | None:
        value = self._data.get(key, _MISSING)
        if value is _MISSING:
            self.misses += 1
            return default
        self.hits += 1
        self._data.move_to_end(key)
        return value

    def put(self, key: K, value: V) -> None:
        self._data[key] = value
        self._data.move_to_end(key)
        while len(self._data) > self.maxsize:
            self._data.popitem(last=False)

    def pop_where(self, predicate: Callable[[K], bool]) -> int:
        """Drop every key matching `predicate`. Returns number removed."""
        doomed = [key for key in self._data if predicate(key)]
        for key in doomed:
            del self._data[key]
        return len(doomed)

    def clear(self) -> None:
        self._data.clear()


ItemNameResolver = Callable[[Business, str, str], str | None]


class ItemNameCache:
    """Memoizes display names per (business, locale, item id).

    Args:
        resolver: Looks up a display name, returning None when unknown.
        maxsize: Entry limit; defaults to `ITEM_NAME_CACHE_SIZE`.
    """

    def __init__(self, resolver: ItemNameResolver, maxsize: int | None = None):
        self.resolver = resolver
        self._cache: LRUCache[tuple[Business, str, str], str | None] = LRUCache(
            settings.ITEM_NAME_CACHE_SIZE if maxsize is None else maxsize
        )

    def lookup(self, business: Business, locale: str, item_id: str) -> str | None:
        key = (business, locale, item_id)
        if key in self._cache:
            return self._cache.get(key)
        name = self.resolver(business, locale, item_id)
        self._cache.put(key, name)
        return name

    def for_locale(self, locale: str) -> Callable[[PullRecord], str | None]:
        """Bind a locale, producing a per-record lookup for the engine."""
        def lookup(record: PullRecord) -> str | None:
            if not record.item_id:
                return None
            return self.lookup(record.business, locale, record.item_id)
        return lookup

    def clear(self) -> None:
        self._cache.clear()
