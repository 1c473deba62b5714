#!/usr/bin/env python3
"""
Unified manager for analyzing and comparing keyboard layouts.
"""

import logging
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from framework.analysis_cache import AnalysisCache
from framework.config_loader import DEFAULT_CONFIG_PATH, get_config_loader
from framework.data_utils import results_to_dataframe
from framework.layout_analyzer import HIGHER_IS_BETTER, METRIC_FIELDS, AnalysisResult, analyze


logger = logging.getLogger(__name__)


def _analyze_without_breakdown(layout_mapping: Optional[Dict[str, str]],
                               corpus_text: Optional[str]) -> AnalysisResult:
    return analyze(layout_mapping, corpus_text, include_breakdown=False)


class LayoutComparison:
    """
    Runs many layouts over one corpus and ranks them per metric.

    Results are kept in an AnalysisCache owned by this manager (or passed
    in by the caller), so repeated layouts are analyzed once.
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH, cache: Optional[AnalysisCache] = None):
        """
        Initialize the comparison manager.

        Args:
            config_path: Path to configuration file
            cache: Shared result cache (created from the 'cache' config section if None)
        """
        self.config_loader = get_config_loader(config_path)
        if cache is None:
            max_size = self.config_loader.get_cache_config().get('max_size', 256)
            cache = AnalysisCache(max_size)
        self.cache = cache

    def analyze_layout(self, layout_mapping: Optional[Dict[str, str]],
                       corpus_text: Optional[str] = None) -> AnalysisResult:
        """Analyze one layout, reusing a cached result when available."""
        return self.cache.get_or_analyze(layout_mapping, corpus_text, _analyze_without_breakdown)

    def compare_layouts(self, layouts: Dict[str, Dict[str, str]],
                        corpus_text: Optional[str] = None) -> Dict[str, AnalysisResult]:
        """
        Analyze multiple layouts on the same corpus.

        Args:
            layouts: Dict mapping layout names to position -> character mappings
            corpus_text: Corpus text (None = default corpus)

        Returns:
            Dict mapping layout names to results, in input order
        """
        results = {}
        for layout_name, layout_mapping in layouts.items():
            logger.info(f"Analyzing layout: {layout_name}")
            results[layout_name] = self.analyze_layout(layout_mapping, corpus_text)

        logger.debug(f"Cache hit rate: {self.cache.hit_rate:.1%}")
        return results

    def rank_layouts(self, results: Dict[str, AnalysisResult],
                     layouts: Optional[Dict[str, Dict[str, str]]] = None,
                     metrics: Optional[List[str]] = None) -> pd.DataFrame:
        """
        Create a rankings table from analysis results.

        Each metric is ranked separately (rank 1 = best; ties share the
        lowest rank) and layouts are ordered by the sum of their ranks.

        Args:
            results: Layout name -> AnalysisResult
            layouts: Layout name -> mapping, adds a layout_qwerty column
            metrics: Metrics to rank on (default: all)

        Returns:
            DataFrame with columns layout, [layout_qwerty], metric values,
            <metric>_rank columns and total_rank_sum

        Raises:
            ValueError: If an unknown metric is requested
        """
        metrics = list(metrics) if metrics else list(METRIC_FIELDS)
        unknown = [metric for metric in metrics if metric not in METRIC_FIELDS]
        if unknown:
            raise ValueError(f"Unknown metrics: {unknown}. Available: {list(METRIC_FIELDS)}")

        table = results_to_dataframe(results, layouts)
        if table.empty:
            return table

        rank_columns = []
        for metric in metrics:
            rank_col = f"{metric}_rank"
            table[rank_col] = table[metric].rank(method='min', ascending=metric not in HIGHER_IS_BETTER)
            rank_columns.append(rank_col)

        table['total_rank_sum'] = table[rank_columns].sum(axis=1)
        return table.sort_values('total_rank_sum', kind='stable').reset_index(drop=True)


def normalize_metrics(table: pd.DataFrame, metrics: List[str]) -> np.ndarray:
    """
    Scale each metric column to 0-1 where 1 is the best layout.

    Columns where all layouts score the same map to 1.

    Returns:
        Matrix of shape (layouts, metrics)
    """
    matrix = table[metrics].to_numpy(dtype=float)
    if matrix.size == 0:
        return matrix

    minimums = matrix.min(axis=0)
    spans = matrix.max(axis=0) - minimums
    safe_spans = np.where(spans > 0, spans, 1.0)
    normalized = (matrix - minimums) / safe_spans

    lower_is_better = np.array([metric not in HIGHER_IS_BETTER for metric in metrics])
    normalized[:, lower_is_better] = 1.0 - normalized[:, lower_is_better]
    normalized[:, spans == 0] = 1.0

    return normalized
