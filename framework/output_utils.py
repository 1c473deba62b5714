#!/usr/bin/env python3
"""
Output utilities for keyboard layout analysis.

Common functions for formatting and displaying analysis results in various formats.
"""

import sys
from typing import Any, Dict, List, Optional

import pandas as pd

from framework.base_scorer import ScoreResult
from framework.layout_utils import QWERTY_POSITIONS, format_layout_in_qwerty_order

# Metadata keys not worth repeating in detailed output
EXCLUDED_METADATA = {'description', 'scorer_failed', 'error'}


def _format_value(value: Any, precision: int) -> str:
    if isinstance(value, float):
        return f"{value:.{precision}f}"
    return str(value)


def format_csv_output(result: ScoreResult,
                      config: Optional[Dict[str, Any]] = None,
                      include_metadata: bool = True) -> str:
    """
    Format scoring results as CSV output.

    Args:
        result: ScoreResult object to format
        config: Output format configuration
        include_metadata: Whether to include metadata fields

    Returns:
        CSV formatted string (header line and one data line)
    """
    if config is None:
        config = {}

    delimiter = config.get('delimiter', ',')
    precision = config.get('precision', 2)
    include_headers = config.get('include_headers', True)

    headers = ['primary_score']
    values = [f"{result.primary_score:.{precision}f}"]

    # Components in their own order: metric order is meaningful
    for component, score in result.components.items():
        headers.append(component)
        values.append(f"{score:.{precision}f}")

    if include_metadata:
        headers.extend(['scorer_name', 'execution_time'])
        values.extend([result.scorer_name, f"{result.execution_time:.3f}"])

        for prefix, info in (('validation', result.validation_info), ('meta', result.metadata)):
            for key in sorted(info.keys()):
                value = info[key]
                if key in EXCLUDED_METADATA or not isinstance(value, (str, int, float, bool)):
                    continue
                headers.append(f'{prefix}_{key}')
                values.append(_format_value(value, precision))

    lines = []
    if include_headers:
        lines.append(delimiter.join(headers))
    lines.append(delimiter.join(values))

    return '\n'.join(lines)


def format_score_only_output(result: ScoreResult,
                             config: Optional[Dict[str, Any]] = None,
                             include_components: bool = True) -> str:
    """
    Format scoring results as score-only output (compact format).

    Args:
        result: ScoreResult object to format
        config: Output format configuration
        include_components: Whether to include component scores

    Returns:
        Separator-joined scores string (primary score first)
    """
    if config is None:
        config = {}

    precision = config.get('precision', 2)
    separator = config.get('separator', ' ')

    scores = [f"{result.primary_score:.{precision}f}"]

    if include_components:
        for component, score in result.components.items():
            if component == 'effort':
                continue
            scores.append(f"{score:.{precision}f}")

    return separator.join(scores)


def format_detailed_output(result: ScoreResult,
                           config: Optional[Dict[str, Any]] = None) -> str:
    """
    Format scoring results as detailed human-readable output.

    Args:
        result: ScoreResult object to format
        config: Output format configuration

    Returns:
        Formatted detailed output string
    """
    if config is None:
        config = {}

    precision = config.get('precision', 2)
    show_breakdown = config.get('show_breakdown', False)
    show_validation = config.get('show_validation_info', False)

    lines = []

    if result.components:
        lines.append("Scores:")
        for component, score in result.components.items():
            component_name = component.replace('_', ' ').capitalize()
            lines.append(f"  {component_name:<28}: {score:10.{precision}f}")

    if result.layout_mapping:
        lines.append("")
        lines.append(f"Layout: {format_layout_in_qwerty_order(result.layout_mapping)} → {QWERTY_POSITIONS.upper()}")

    if show_validation and result.validation_info:
        lines.append("\nValidation information:")
        for key, value in sorted(result.validation_info.items()):
            key_name = key.replace('_', ' ').capitalize()
            lines.append(f"  {key_name:<28}: {_format_value(value, precision)}")

    important_metadata = {key: value for key, value in result.metadata.items()
                          if key not in EXCLUDED_METADATA and isinstance(value, (str, int, float, bool))}
    if important_metadata:
        lines.append("\nAdditional information:")
        for key, value in sorted(important_metadata.items()):
            key_name = key.replace('_', ' ').capitalize()
            lines.append(f"  {key_name:<28}: {_format_value(value, precision)}")

    if show_breakdown and result.detailed_breakdown:
        lines.append("\nDetailed breakdown:")
        _format_detailed_breakdown(result.detailed_breakdown, lines, indent="  ", precision=precision)

    return '\n'.join(lines)


def _format_detailed_breakdown(breakdown: Dict[Any, Any],
                               lines: List[str],
                               indent: str = "",
                               precision: int = 2) -> None:
    """
    Recursively format detailed breakdown information.

    Args:
        breakdown: Dictionary of breakdown information
        lines: List to append formatted lines to
        indent: Current indentation string
    """
    for key, value in breakdown.items():
        key_name = str(key).replace('_', ' ').title()

        if isinstance(value, dict):
            lines.append(f"{indent}{key_name}:")
            _format_detailed_breakdown(value, lines, indent + "  ", precision)
        elif isinstance(value, list):
            lines.append(f"{indent}{key_name}:")
            for item in value[:10]:
                if isinstance(item, (tuple, list)) and len(item) >= 2:
                    lines.append(f"{indent}  {item[0]}: {item[1]}")
                else:
                    lines.append(f"{indent}  {item}")
            if len(value) > 10:
                lines.append(f"{indent}  ... and {len(value) - 10} more")
        else:
            lines.append(f"{indent}{key_name}: {_format_value(value, precision)}")


def print_results(result: ScoreResult,
                  output_format: str = "detailed",
                  config: Optional[Dict[str, Any]] = None,
                  file=None) -> None:
    """
    Print scoring results in the specified format.

    Args:
        result: ScoreResult object to print
        output_format: Format type ('detailed', 'csv', 'score_only')
        config: Output format configuration
        file: File object to write to (defaults to stdout)

    Raises:
        ValueError: For an unknown output format
    """
    if file is None:
        file = sys.stdout

    if output_format == "csv":
        output = format_csv_output(result, config)
    elif output_format == "score_only":
        output = format_score_only_output(result, config)
    elif output_format == "detailed":
        output = format_detailed_output(result, config)
    else:
        raise ValueError(f"Unknown output format: {output_format}")

    print(output, file=file)


def format_comparison_table(table: pd.DataFrame,
                            metrics: List[str],
                            precision: int = 2,
                            title: str = "Layout Comparison") -> str:
    """
    Format a comparison table (one row per layout) as aligned text.

    Args:
        table: DataFrame with a 'layout' column and metric columns
        metrics: Metric columns to show, in order
        precision: Decimal places
        title: Table title

    Returns:
        Formatted table string
    """
    if table.empty:
        return "No results to compare"

    name_width = max(20, int(table['layout'].astype(str).str.len().max()))
    column_width = max(precision + 6, 10)

    lines = [f"\n{title}", "=" * len(title)]

    header = f"{'Metric':<28}"
    for name in table['layout']:
        header += f" {str(name)[:column_width]:>{column_width}}"
    lines.append(header)
    lines.append("-" * (28 + (column_width + 1) * len(table)))

    for metric in metrics:
        if metric not in table.columns:
            continue
        row = f"{metric:<28}"
        for value in table[metric]:
            row += f" {value:>{column_width}.{precision}f}"
        lines.append(row)

    if 'total_rank_sum' in table.columns:
        lines.append("")
        lines.append("Ranking (lower rank sum = better overall):")
        ranked = table.sort_values('total_rank_sum')
        for i, (_, row) in enumerate(ranked.iterrows(), 1):
            lines.append(f"  {i:2d}. {str(row['layout']):<{name_width}} rank sum: {row['total_rank_sum']:.1f}")

    return '\n'.join(lines)


def save_comparison_csv(table: pd.DataFrame, csv_file: str) -> None:
    """
    Save a comparison table to CSV.

    Args:
        table: DataFrame with one row per layout
        csv_file: Output CSV file path
    """
    table.to_csv(csv_file, index=False)
