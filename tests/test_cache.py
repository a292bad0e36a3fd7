"""Tests for the recommendation TTL cache."""

from conftest import make_recommendation

from mood_radio.recommend.cache import CACHE_KEY_PREFIX, RecommendationCache, cache_key


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestCacheKey:
    def test_word_order_and_case_ignored(self):
        assert cache_key("Happy Sunny Day") == cache_key("day  sunny happy")

    def test_prefix(self):
        assert cache_key("calm") == CACHE_KEY_PREFIX + "calm"


class TestRecommendationCache:
    def setup_method(self):
        self.clock = FakeClock()
        self.cache = RecommendationCache(ttl=300, clock=self.clock)
        self.recs = [make_recommendation("a"), make_recommendation("b")]

    def test_miss(self):
        assert self.cache.get("calm") is None
        assert "calm" not in self.cache

    def test_hit_returns_same_list(self):
        self.cache.put("calm evening", self.recs)
        self.clock.now += 299
        assert self.cache.get("evening calm") is self.recs

    def test_expires_at_ttl(self):
        self.cache.put("calm", self.recs)
        self.clock.now += 300
        assert self.cache.get("calm") is None

    def test_stale_entry_is_kept_until_overwritten(self):
        self.cache.put("calm", self.recs)
        self.clock.now += 1000
        assert len(self.cache) == 1

        fresh = [make_recommendation("c")]
        self.cache.put("calm", fresh)
        assert self.cache.get("calm") is fresh
        assert len(self.cache) == 1
