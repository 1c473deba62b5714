#!/usr/bin/env python3
"""
Base classes for keyboard layout scorers.

Provides common interface and result structures for scoring methods.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from framework.layout_utils import format_layout_in_qwerty_order, validate_layout_mapping


logger = logging.getLogger(__name__)


@dataclass
class ScoreResult:
    """
    Standardized result container for keyboard layout scoring.

    Provides a consistent interface for output formatting while allowing
    scorer-specific additional data.
    """

    primary_score: float
    """Main score for this layout (for ergonomics: effort, lower = better)"""

    components: Dict[str, float] = field(default_factory=dict)
    """Individual metrics (e.g., same_finger_bigrams_pct)"""

    scorer_name: str = ""

    layout_mapping: Dict[str, str] = field(default_factory=dict)
    """Position to character mapping used for scoring"""

    metadata: Dict[str, Any] = field(default_factory=dict)

    detailed_breakdown: Dict[str, Any] = field(default_factory=dict)
    """Debug counters for detailed output mode"""

    validation_info: Dict[str, Any] = field(default_factory=dict)

    execution_time: float = 0.0
    """Time taken to calculate scores (seconds)"""

    config_used: Dict[str, Any] = field(default_factory=dict)

    def get_score(self, component_name: Optional[str] = None) -> float:
        """
        Get a specific score component or the primary score.

        Args:
            component_name: Name of component score to retrieve, or None for primary

        Raises:
            KeyError: If component_name not found in components
        """
        if component_name is None:
            return self.primary_score

        if component_name not in self.components:
            available = list(self.components.keys())
            raise KeyError(f"Component '{component_name}' not found. Available: {available}")

        return self.components[component_name]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert result to a flat dictionary suitable for JSON/CSV export.
        """
        result = {
            'primary_score': self.primary_score,
            'scorer_name': self.scorer_name,
            'execution_time': self.execution_time,
        }

        result.update(self.components)

        for key, value in self.metadata.items():
            if isinstance(value, (str, int, float, bool)):
                result[f'meta_{key}'] = value

        for key, value in self.validation_info.items():
            if isinstance(value, (str, int, float, bool)):
                result[f'validation_{key}'] = value

        return result

    def summary(self) -> str:
        """Brief human-readable summary of the results."""
        summary_lines = [
            f"Scorer: {self.scorer_name}",
            f"Primary score: {self.primary_score:.2f}",
        ]

        if self.components:
            summary_lines.append("Components:")
            for name, score in self.components.items():
                summary_lines.append(f"  {name}: {score:.2f}")

        if self.execution_time > 0:
            summary_lines.append(f"Execution time: {self.execution_time:.3f}s")

        return "\n".join(summary_lines)


class BaseLayoutScorer(ABC):
    """
    Abstract base class for keyboard layout scoring methods.

    Handles configuration bookkeeping, layout validation and timing.
    Layout problems are recorded as validation issues, never raised:
    layouts come from user-edited data.
    """

    def __init__(self, layout_mapping: Optional[Dict[str, str]], config: Optional[Dict[str, Any]] = None):
        """
        Initialize the base scorer.

        Args:
            layout_mapping: Dict mapping positions to characters (e.g., {'q': "'"})
            config: Optional configuration dictionary
        """
        self.layout_mapping = dict(layout_mapping) if isinstance(layout_mapping, dict) else {}
        self.config = config or {}
        self.scorer_name = self.__class__.__name__.lower().replace('scorer', '_scorer')

        self.validation_issues = self._validate_layout_mapping()
        self._data_loaded = False

    def _validate_layout_mapping(self) -> List[str]:
        """Collect layout issues and log them."""
        if not self.layout_mapping:
            # An empty mapping means the identity (QWERTY) layout
            return []

        issues = validate_layout_mapping(self.layout_mapping)
        quiet_mode = self.config.get('quiet_mode', False)
        for issue in issues:
            if quiet_mode:
                logger.debug(f"Layout validation: {issue}")
            else:
                logger.warning(f"Layout validation: {issue}")
        return issues

    @abstractmethod
    def load_data_files(self) -> None:
        """
        Load any data the scorer needs (e.g., a corpus file).

        Raises:
            FileNotFoundError: If required data files are missing
        """

    @abstractmethod
    def calculate_scores(self) -> ScoreResult:
        """
        Calculate layout scores using the scorer's methodology.
        """

    def score_layout(self, load_data: bool = True) -> ScoreResult:
        """
        Main entry point for scoring a layout.

        Args:
            load_data: Whether to load data files if not already loaded

        Returns:
            ScoreResult with timing information
        """
        start_time = time.time()

        if load_data and not self._data_loaded:
            self.load_data_files()
            self._data_loaded = True

        result = self.calculate_scores()

        result.execution_time = time.time() - start_time
        result.scorer_name = self.scorer_name
        result.layout_mapping = self.layout_mapping.copy()
        result.config_used = {k: v for k, v in self.config.items() if k != 'text'}
        if self.validation_issues:
            result.validation_info['layout_issues'] = len(self.validation_issues)

        return result

    def get_layout_string(self) -> str:
        """Layout characters in QWERTY position order."""
        return format_layout_in_qwerty_order(self.layout_mapping)
