"""Tests for the comparison result LRU cache."""

from devdecision.cache import ComparisonCache, comparison_cache_key
from devdecision.core.models import ComparisonResult, Technology, TechnologyScore, UserConstraints


def _make_result(name="React") -> ComparisonResult:
    tech = Technology(id=1, name=name, category="frontend-framework")
    return ComparisonResult(scores=(TechnologyScore(technology=tech, overall_score=50.0),))


class TestComparisonCacheKey:
    def test_order_matters(self):
        constraints = UserConstraints.empty()
        assert comparison_cache_key([1, 2], constraints) != comparison_cache_key([2, 1], constraints)

    def test_none_matches_empty_constraints(self):
        assert comparison_cache_key([1], None) == comparison_cache_key([1], UserConstraints.empty())

    def test_tag_case_does_not_matter(self):
        upper = UserConstraints.with_priority_tags(["Performance"])
        lower = UserConstraints.with_priority_tags(["performance"])
        assert comparison_cache_key([1, 2], upper) == comparison_cache_key([1, 2], lower)

    def test_key_starts_with_ids(self):
        assert comparison_cache_key([3, 1], None).startswith("3,1:")


class TestComparisonCache:
    def test_get_missing(self):
        assert ComparisonCache().get("nope") is None

    def test_put_and_get(self):
        cache = ComparisonCache()
        result = _make_result()

        cache.put("k", result)

        assert cache.get("k") is result
        assert len(cache) == 1

    def test_evicts_least_recently_used(self):
        cache = ComparisonCache(max_entries=2)
        cache.put("a", _make_result("A"))
        cache.put("b", _make_result("B"))
        cache.get("a")

        cache.put("c", _make_result("C"))

        assert cache.get("b") is None
        assert cache.get("a") is not None
        assert cache.get("c") is not None
        assert len(cache) == 2

    def test_zero_capacity_disables_caching(self):
        cache = ComparisonCache(max_entries=0)
        cache.put("a", _make_result())
        assert cache.get("a") is None
        assert len(cache) == 0

    def test_negative_capacity_treated_as_zero(self):
        assert ComparisonCache(max_entries=-3).max_entries == 0

    def test_clear(self):
        cache = ComparisonCache()
        cache.put("a", _make_result())
        cache.clear()
        assert len(cache) == 0
