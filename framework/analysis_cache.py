#!/usr/bin/env python3
"""
Result cache for layout analysis.

The analyzer keeps no state between calls. Callers that analyze the same
layout repeatedly (servers, comparison runs) create and own an
AnalysisCache and pass it around explicitly.
"""

import hashlib
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional

from framework.layout_utils import layout_cache_key


class AnalysisCache:
    """
    Least-recently-used cache of analysis results.

    Keys combine a normalized layout serialization with a digest of the
    corpus text, so equivalent layouts share an entry.
    """

    def __init__(self, max_size: int = 256):
        if max_size < 1:
            raise ValueError(f"Cache size must be positive, got {max_size}")
        self.max_size = max_size
        self.hits = 0
        self.misses = 0
        self._cache: "OrderedDict[str, Any]" = OrderedDict()

    @staticmethod
    def make_key(layout_mapping: Optional[Dict[str, str]], corpus_text: Optional[str] = None) -> str:
        """Cache key for a layout/corpus pair (None means the default corpus)."""
        if corpus_text is None:
            corpus_digest = 'default'
        else:
            corpus_digest = hashlib.sha1(str(corpus_text).encode('utf-8')).hexdigest()
        return f"{layout_cache_key(layout_mapping)}|{corpus_digest}"

    def get(self, key: str) -> Optional[Any]:
        """Get item from cache with hit tracking."""
        if key in self._cache:
            self.hits += 1
            self._cache.move_to_end(key)
            return self._cache[key]
        self.misses += 1
        return None

    def set(self, key: str, value: Any) -> None:
        """Add item, evicting the least recently used entry when full."""
        if key in self._cache:
            self._cache.move_to_end(key)
        elif len(self._cache) >= self.max_size:
            self._cache.popitem(last=False)
        self._cache[key] = value

    def get_or_analyze(self,
                       layout_mapping: Optional[Dict[str, str]],
                       corpus_text: Optional[str],
                       analyze_fn: Callable[..., Any]) -> Any:
        """
        Return the cached result for a layout/corpus pair, computing it on a miss.

        Args:
            layout_mapping: Position -> character mapping
            corpus_text: Corpus text, or None for the default corpus
            analyze_fn: Called as analyze_fn(layout_mapping, corpus_text) on a miss
        """
        key = self.make_key(layout_mapping, corpus_text)
        result = self.get(key)
        if result is None:
            result = analyze_fn(layout_mapping, corpus_text)
            self.set(key, result)
        return result

    def clear(self) -> None:
        """Clear cache and reset statistics."""
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return key in self._cache
