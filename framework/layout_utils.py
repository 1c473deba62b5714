#!/usr/bin/env python3
"""
Layout utilities for keyboard layout analysis.

A layout mapping assigns a character to each physical position:
{'q': "'", 'w': ',', ...} means the key at QWERTY 'q' types an apostrophe.
Positions left out of a mapping keep their QWERTY character.

Common functions for creating, validating, inverting and serializing
layout mappings.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from framework.keyboard import get_key_position


logger = logging.getLogger(__name__)

# Standard 32-key QWERTY position order used by layout strings
QWERTY_POSITIONS = "qwertyuiopasdfghjkl;zxcvbnm,./['"

# Layout strings in QWERTY position order
BUILTIN_LAYOUTS = {
    'qwerty': "qwertyuiopasdfghjkl;zxcvbnm,./",
    'dvorak': "',.pyfgcrlaoeuidhtns;qjkxbmwvz",
    'colemak': "qwfpgjluy;arstdhneiozxcvbkm,./",
    'colemak-dh': "qwfpbjluy;arstgmneiozxcdvkh,./",
    'workman': "qdrwbjfup;ashtgyneoizxmcvkl,./",
    'norman': "qwdfkjurl;asetgyniohzxcvbpm,./",
}


def layout_from_qwerty_string(layout_string: str) -> Dict[str, str]:
    """
    Create a layout mapping from a string in QWERTY position order.

    Args:
        layout_string: Characters for 'qwertyuiop...' positions in order;
                       spaces leave a position unassigned

    Returns:
        Dict mapping position names to characters

    Raises:
        ValueError: If the string is longer than QWERTY_POSITIONS
    """
    if len(layout_string) > len(QWERTY_POSITIONS):
        raise ValueError(f"Layout string has {len(layout_string)} characters "
                         f"(maximum {len(QWERTY_POSITIONS)})")

    return {position: char.lower()
            for position, char in zip(QWERTY_POSITIONS, layout_string)
            if char != ' '}


def layout_from_letters_positions(letters: str, positions: str) -> Dict[str, str]:
    """
    Create a layout mapping from letter and position strings.

    Args:
        letters: Characters to place (e.g., 'etaoin')
        positions: QWERTY positions they go to (e.g., 'FDESGJ')

    Returns:
        Dict mapping position names to characters

    Raises:
        ValueError: If strings have different lengths
    """
    if len(letters) != len(positions):
        raise ValueError(f"Letters length ({len(letters)}) != positions length ({len(positions)})")

    return dict(zip(positions.lower(), letters.lower()))


def get_builtin_layout(name: str, extra_layouts: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Look up a named layout.

    Args:
        name: Layout name (case-insensitive)
        extra_layouts: Additional name -> QWERTY-order string definitions

    Raises:
        ValueError: If the layout name is unknown
    """
    layouts = {**BUILTIN_LAYOUTS, **(extra_layouts or {})}
    key = name.lower()
    if key not in layouts:
        raise ValueError(f"Unknown layout '{name}'. Available: {sorted(layouts)}")
    return layout_from_qwerty_string(layouts[key])


def invert_layout(layout_mapping: Optional[Dict[Any, Any]]) -> Dict[str, str]:
    """
    Build the character -> physical position map for a layout.

    Entries whose position is unknown or whose character is not a
    non-empty string are skipped. Characters are matched case-insensitively.

    Args:
        layout_mapping: Position -> character mapping (may be partial or None)

    Returns:
        Dict mapping lowercase characters to position names
    """
    char_to_position = {}
    if not isinstance(layout_mapping, dict):
        if layout_mapping is not None:
            logger.debug(f"Ignoring layout mapping of type {type(layout_mapping).__name__}")
        return char_to_position

    for position, char in layout_mapping.items():
        key_position = get_key_position(position)
        if key_position is None:
            logger.debug(f"Skipping unknown position {position!r}")
            continue
        if not isinstance(char, str) or not char:
            logger.debug(f"Skipping position {position!r} with unusable character {char!r}")
            continue
        char_to_position[char.lower()] = key_position.name

    return char_to_position


def validate_layout_mapping(layout_mapping: Dict[Any, Any]) -> List[str]:
    """
    Validate a layout mapping for correctness and consistency.

    The analyzer itself tolerates all of these problems; callers use this
    before storing or comparing user-edited layouts.

    Args:
        layout_mapping: Position -> character mapping

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    if not isinstance(layout_mapping, dict):
        return [f"Layout mapping must be a dict, got {type(layout_mapping).__name__}"]

    if not layout_mapping:
        issues.append("Layout mapping is empty")
        return issues

    seen_chars: Dict[str, List[str]] = {}
    for position, char in layout_mapping.items():
        if get_key_position(position) is None:
            issues.append(f"Unknown position: {position!r}")
        if not isinstance(char, str) or not char:
            issues.append(f"Position {position!r} has no character")
            continue
        if len(char) != 1:
            issues.append(f"Position {position!r} maps to multiple characters: {char!r}")
        seen_chars.setdefault(char.lower(), []).append(str(position))

    duplicates = {char: positions for char, positions in seen_chars.items() if len(positions) > 1}
    for char, positions in sorted(duplicates.items()):
        issues.append(f"Character {char!r} assigned to multiple positions: {positions}")

    return issues


def layout_cache_key(layout_mapping: Optional[Dict[Any, Any]]) -> str:
    """
    Normalized serialization of a layout for use as a cache key.

    Only entries the analyzer uses are kept, so mappings that analyze
    identically produce the same key.
    """
    char_to_position = invert_layout(layout_mapping)
    return json.dumps(sorted(char_to_position.items()), separators=(',', ':'))


def format_layout_in_qwerty_order(layout_mapping: Dict[str, str]) -> str:
    """
    Format layout mapping as characters in QWERTY position order.

    Positions without an explicit assignment keep their own character.

    Args:
        layout_mapping: Position -> character mapping

    Returns:
        String of characters in QWERTY_POSITIONS order (e.g. "',.pyf...")
    """
    normalized = {str(pos).lower(): char for pos, char in (layout_mapping or {}).items()
                  if isinstance(char, str) and char}
    return ''.join(normalized.get(pos, pos) for pos in QWERTY_POSITIONS)


def parse_layout_compare(compare_args: List[str],
                         extra_layouts: Optional[Dict[str, str]] = None) -> Dict[str, Dict[str, str]]:
    """
    Parse layout comparison arguments.

    Each argument is either 'name:layout_string' (QWERTY position order) or
    the name of a built-in layout.

    Args:
        compare_args: List of comparison arguments
        extra_layouts: Additional named layouts from configuration

    Returns:
        Dict mapping layout names to layout mappings

    Raises:
        ValueError: If an argument is neither form
    """
    layouts = {}
    for arg in compare_args:
        if ':' in arg:
            name, layout_string = arg.split(':', 1)
            if not name:
                raise ValueError(f"Missing layout name in '{arg}'")
            layouts[name] = layout_from_qwerty_string(layout_string)
        else:
            layouts[arg] = get_builtin_layout(arg, extra_layouts)
    return layouts


def get_hand_distribution(layout_mapping: Dict[str, str]) -> Tuple[int, int]:
    """Count letters assigned to (left, right) hand positions."""
    left = right = 0
    for position, char in layout_mapping.items():
        key_position = get_key_position(position)
        if key_position is None or not isinstance(char, str) or not char.isalpha():
            continue
        if key_position.hand == 'L':
            left += 1
        else:
            right += 1
    return left, right
