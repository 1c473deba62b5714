#!/usr/bin/env python3
"""
Data utilities for keyboard layout analysis.

Common functions for loading layout definitions from JSON and CSV files
and collecting analysis results into pandas tables.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from framework.layout_utils import format_layout_in_qwerty_order, layout_from_qwerty_string


logger = logging.getLogger(__name__)


def load_csv_with_validation(filepath: str,
                             required_columns: List[str],
                             optional_columns: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Load CSV file with column validation.

    Args:
        filepath: Path to CSV file
        required_columns: List of column names that must be present
        optional_columns: List of optional column names

    Returns:
        Loaded DataFrame (all columns as strings)

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If required columns are missing or the file is empty
    """
    file_path = Path(filepath)

    if not file_path.exists():
        raise FileNotFoundError(f"Data file not found: {filepath}")

    if file_path.suffix.lower() not in ['.csv', '.tsv', '.txt']:
        raise ValueError(f"Unsupported file format: {file_path.suffix}")

    delimiter = '\t' if file_path.suffix.lower() == '.tsv' else ','

    try:
        df = pd.read_csv(filepath, delimiter=delimiter, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ValueError(f"Error reading CSV file {filepath}: {e}")

    if df.empty:
        raise ValueError(f"CSV file is empty: {filepath}")

    missing_columns = [col for col in required_columns if col not in df.columns]
    if missing_columns:
        raise ValueError(
            f"Missing required columns in {filepath}: {missing_columns}. "
            f"Available columns: {list(df.columns)}"
        )

    if optional_columns:
        missing_optional = [col for col in optional_columns if col not in df.columns]
        if missing_optional:
            logger.info(f"Optional columns not found in {filepath}: {missing_optional}")

    return df


def load_layout_json(filepath: str) -> Dict[str, str]:
    """
    Load a layout mapping from a JSON file.

    Accepts either a plain {position: character} object or an object with
    the mapping under a "keys" entry.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the JSON is not a mapping of strings
    """
    file_path = Path(filepath)
    if not file_path.exists():
        raise FileNotFoundError(f"Layout file not found: {filepath}")

    with open(file_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict) and isinstance(data.get('keys'), dict):
        data = data['keys']

    if not isinstance(data, dict):
        raise ValueError(f"Layout file must contain a JSON object: {filepath}")

    layout_mapping = {}
    for position, char in data.items():
        if not isinstance(char, str):
            raise ValueError(f"Layout file {filepath}: value for '{position}' is not a string")
        layout_mapping[str(position).lower()] = char.lower()

    return layout_mapping


def load_layouts_from_csv(filepath: str,
                          name_column: str = 'layout',
                          layout_column: str = 'layout_qwerty') -> Dict[str, Dict[str, str]]:
    """
    Load named layouts from a CSV table.

    Args:
        filepath: CSV file with one layout per row
        name_column: Column holding the layout name
        layout_column: Column holding the layout string in QWERTY position order

    Returns:
        Dict mapping layout names to position -> character mappings

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If columns are missing
    """
    df = load_csv_with_validation(filepath, [name_column, layout_column])

    layouts = {}
    for _, row in df.iterrows():
        name = row[name_column].strip()
        layout_string = row[layout_column].strip('"').replace('\\', '')
        if not name:
            logger.warning(f"Skipping unnamed layout in {filepath}")
            continue
        try:
            layouts[name] = layout_from_qwerty_string(layout_string)
        except ValueError as e:
            logger.warning(f"Skipping layout '{name}' in {filepath}: {e}")

    logger.info(f"Loaded {len(layouts)} layouts from {filepath}")
    return layouts


def results_to_dataframe(results: Dict[str, Any],
                         layouts: Optional[Dict[str, Dict[str, str]]] = None,
                         precision: Optional[int] = None) -> pd.DataFrame:
    """
    Collect analysis results into a table with one row per layout.

    Args:
        results: Layout name -> result object with to_dict(precision)
        layouts: Layout name -> mapping, adds a layout_qwerty column
        precision: Round metric values for display

    Returns:
        DataFrame with a 'layout' column followed by metric columns
    """
    rows = []
    for name, result in results.items():
        row = {'layout': name}
        if layouts is not None:
            row['layout_qwerty'] = format_layout_in_qwerty_order(layouts.get(name, {}))
        row.update(result.to_dict(precision))
        rows.append(row)

    return pd.DataFrame(rows)
