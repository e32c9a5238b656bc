"""Tests for gacha_stats.utils.lru."""

from __future__ import annotations

import pytest

from gacha_stats.schemas.record import Business
from gacha_stats.utils.lru import ItemNameCache, LRUCache


class TestLRUCache:
    def test_get_put(self):
        cache = LRUCache(2)
        cache.put("a", 1)
        assert cache.get("a") == 1
        assert cache.get("missing") is None
        assert cache.get("missing", 0) == 0
        assert cache.hits == 1
        assert cache.misses == 2

    def test_evicts_least_recently_used(self):
        cache = LRUCache(2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert len(cache) == 2

    def test_pop_where(self):
        cache = LRUCache(4)
        for key in [("x", 1), ("x", 2), ("y", 1)]:
            cache.put(key, key)
        assert cache.pop_where(lambda key: key[0] == "x") == 2
        assert len(cache) == 1

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            LRUCache(0)

    def test_hit_and_miss_counters(self):
        cache = LRUCache(1)
        cache.get("a")
        cache.put("a", 1)
        cache.get("a")
        cache.put("b", 2)
        cache.get("a")
        assert (cache.hits, cache.misses) == (1, 2)


class TestItemNameCache:
    def test_resolves_once_per_key(self):
        calls = []

        def resolver(business, locale, item_id):
            calls.append((business, locale, item_id))
            return None if item_id == "0" else f"{locale}:{item_id}"

        cache = ItemNameCache(resolver, maxsize=8)
        genshin = Business.GENSHIN_IMPACT
        assert cache.lookup(genshin, "en-us", "1") == "en-us:1"
        assert cache.lookup(genshin, "en-us", "1") == "en-us:1"
        assert cache.lookup(genshin, "en-us", "0") is None
        assert cache.lookup(genshin, "en-us", "0") is None
        assert cache.lookup(Business.HONKAI_STAR_RAIL, "en-us", "1") == "en-us:1"
        assert len(calls) == 3

    def test_zero_maxsize_rejected(self):
        with pytest.raises(ValueError):
            ItemNameCache(lambda business, locale, item_id: None, maxsize=0)

    def test_for_locale_skips_empty_item_id(self, make_record):
        cache = ItemNameCache(lambda business, locale, item_id: "name")
        lookup = cache.for_locale("en-us")
        assert lookup(make_record(1)) is None
        assert lookup(make_record(2, item_id="5")) == "name"
