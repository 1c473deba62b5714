# framework/__init__.py
"""
Keyboard Layout Ergonomics Framework

Physical key model, effort model, trigram classifier and the layout
analyzer, plus common utilities for configuration, output and comparison.
"""

__version__ = "1.0.0"

# Import main classes for easy access
from .analysis_cache import AnalysisCache
from .base_scorer import BaseLayoutScorer, ScoreResult
from .config_loader import ConfigLoader, load_scorer_config
from .layout_analyzer import AnalysisResult, analyze
from .trigram_utils import TrigramCategory

__all__ = [
    'AnalysisCache',
    'AnalysisResult',
    'BaseLayoutScorer',
    'ConfigLoader',
    'ScoreResult',
    'TrigramCategory',
    'analyze',
    'load_scorer_config'
]
