"""
Tests for the analysis result cache.

Run with: pytest tests/test_analysis_cache.py -v
"""

import pytest

from framework.analysis_cache import AnalysisCache
from framework.layout_analyzer import analyze


class TestAnalysisCache:
    """Tests for AnalysisCache."""

    def test_get_and_set(self):
        cache = AnalysisCache(max_size=2)
        assert cache.get('a') is None
        cache.set('a', 1)
        assert cache.get('a') == 1
        assert 'a' in cache
        assert len(cache) == 1
        assert cache.hits == 1
        assert cache.misses == 1
        assert cache.hit_rate == 0.5

    def test_evicts_least_recently_used(self):
        cache = AnalysisCache(max_size=2)
        cache.set('a', 1)
        cache.set('b', 2)
        cache.get('a')
        cache.set('c', 3)
        assert 'a' in cache
        assert 'b' not in cache
        assert 'c' in cache

    def test_overwrite_does_not_evict(self):
        cache = AnalysisCache(max_size=2)
        cache.set('a', 1)
        cache.set('b', 2)
        cache.set('a', 3)
        assert len(cache) == 2
        assert cache.get('a') == 3

    def test_clear(self):
        cache = AnalysisCache()
        cache.set('a', 1)
        cache.get('a')
        cache.clear()
        assert len(cache) == 0
        assert cache.hit_rate == 0.0

    @pytest.mark.parametrize('size', [0, -1])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            AnalysisCache(size)

    def test_make_key(self):
        default_key = AnalysisCache.make_key({'f': 'e'})
        assert default_key.endswith('|default')
        assert AnalysisCache.make_key({'f': 'e'}, 'abc') != default_key
        assert AnalysisCache.make_key({'f': 'e'}, '') != default_key
        assert AnalysisCache.make_key({'f': 'E'}, 'abc') == AnalysisCache.make_key({'f': 'e'}, 'abc')

    def test_get_or_analyze(self):
        cache = AnalysisCache()
        calls = []

        def counting_analyze(layout, corpus):
            calls.append((layout, corpus))
            return analyze(layout, corpus, include_breakdown=False)

        first = cache.get_or_analyze({'f': 'e', 'e': 'f'}, 'feed', counting_analyze)
        second = cache.get_or_analyze({'e': 'f', 'f': 'e'}, 'feed', counting_analyze)
        assert first is second
        assert len(calls) == 1
        assert cache.hit_rate == 0.5
