#!/usr/bin/env python3
"""
Configuration loader for keyboard layout analysis.

Provides unified configuration management using YAML files.
Built-in defaults are merged under the file contents, and common settings
are merged under scorer-specific settings.
"""

import copy
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    'common': {
        'precision': 2,
        'corpus_file': None,
    },
    'ergonomics_analyzer': {
        'description': 'Layout ergonomics analyzer',
        'method': 'Simulates typing a corpus and measures effort, travel, '
                  'same-finger bigrams, stretches and trigram flow',
        'scoring_options': {
            'include_breakdown': True,
            'top_bigrams': 10,
        },
        'output': {
            'primary_score_name': 'effort',
        },
    },
    'cache': {
        'max_size': 256,
    },
    'logging': {
        'level': 'WARNING',
        'format': '%(asctime)s - %(levelname)s - %(message)s',
    },
    'output_formats': {
        'detailed': {'show_breakdown': False, 'show_validation_info': False},
        'csv': {'delimiter': ',', 'precision': 2, 'include_headers': True},
        'score_only': {'precision': 2, 'separator': ' '},
    },
    'layouts': {},
}

# Top-level sections that are not scorer configurations
NON_SCORER_SECTIONS = {'common', 'cache', 'logging', 'output_formats', 'layouts', 'cli'}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigLoader:
    """Handles loading and processing of YAML configuration files."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        self._config_cache: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        """
        Load YAML configuration file merged over the built-in defaults.

        A missing file is only an error when a non-default path was given.

        Returns:
            Full configuration dictionary

        Raises:
            FileNotFoundError: If an explicitly named configuration file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            if str(self.config_path) != DEFAULT_CONFIG_PATH:
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
            self._config_cache = copy.deepcopy(DEFAULT_CONFIG)
            return self._config_cache

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML configuration: {e}")

        if file_config is None:
            file_config = {}
        if not isinstance(file_config, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")

        self._config_cache = _deep_merge(DEFAULT_CONFIG, file_config)
        return self._config_cache

    def get_scorer_config(self, scorer_name: str) -> Dict[str, Any]:
        """
        Get configuration for a specific scorer with common settings merged.

        Args:
            scorer_name: Name of the scorer (e.g., 'ergonomics_analyzer')

        Returns:
            Merged configuration dictionary for the scorer

        Raises:
            ValueError: If scorer not found in configuration
        """
        full_config = self.load_config()

        if scorer_name not in full_config or scorer_name in NON_SCORER_SECTIONS:
            raise ValueError(
                f"Scorer '{scorer_name}' not found in configuration. "
                f"Available scorers: {self.get_available_scorers()}"
            )

        common_config = full_config.get('common', {})
        scorer_config = full_config[scorer_name]

        # Scorer-specific settings take precedence
        merged_config = _deep_merge(common_config, scorer_config)
        merged_config['output_formats'] = copy.deepcopy(full_config.get('output_formats', {}))
        return merged_config

    def get_output_format_config(self, format_name: str) -> Dict[str, Any]:
        """
        Get output format configuration.

        Args:
            format_name: Name of output format (csv, detailed, score_only)
        """
        return dict(self.load_config().get('output_formats', {}).get(format_name, {}))

    def get_cache_config(self) -> Dict[str, Any]:
        return dict(self.load_config().get('cache', {}))

    def get_logging_config(self) -> Dict[str, Any]:
        return dict(self.load_config().get('logging', {}))

    def get_extra_layouts(self) -> Dict[str, str]:
        """Named layouts defined in configuration (QWERTY-order strings)."""
        layouts = self.load_config().get('layouts') or {}
        return {str(name).lower(): str(layout) for name, layout in layouts.items()}

    def get_available_scorers(self) -> List[str]:
        """List scorer sections found in configuration."""
        return [k for k in self.load_config().keys() if k not in NON_SCORER_SECTIONS]

    def validate_scorer_config(self, scorer_name: str) -> List[str]:
        """
        Validate a scorer's configuration and return any issues found.

        Args:
            scorer_name: Name of the scorer to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            config = self.get_scorer_config(scorer_name)
        except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
            return [f"Configuration error: {e}"]

        issues = []

        for section in ['description', 'method', 'output']:
            if section not in config:
                issues.append(f"Missing required section: {section}")

        if 'primary_score_name' not in config.get('output', {}):
            issues.append("Missing primary_score_name in output configuration")

        precision = config.get('precision')
        if not isinstance(precision, int) or precision < 0:
            issues.append(f"Invalid precision: {precision!r}")

        corpus_file = config.get('corpus_file')
        if corpus_file is not None and not Path(corpus_file).exists():
            issues.append(f"Corpus file not found: {corpus_file}")

        return issues


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader(config_path: str = DEFAULT_CONFIG_PATH) -> ConfigLoader:
    """
    Get global configuration loader instance (singleton pattern).

    Args:
        config_path: Path to configuration file
    """
    global _config_loader

    if _config_loader is None or _config_loader.config_path != Path(config_path):
        _config_loader = ConfigLoader(config_path)

    return _config_loader


def load_scorer_config(scorer_name: str, config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Convenience function to load configuration for a specific scorer.

    Args:
        scorer_name: Name of the scorer
        config_path: Path to configuration file
    """
    return get_config_loader(config_path).get_scorer_config(scorer_name)
