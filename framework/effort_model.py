#!/usr/bin/env python3
"""
Keystroke and bigram effort model.

Base effort for a single keystroke depends on the finger and the row it
reaches. Bigram effort starts from the sum of both keystrokes and applies
multiplicative penalties for same-finger use, lateral stretches and
scissors, and a small bonus for alternating hands.

The tables are module constants and are never mutated.
"""

from dataclasses import dataclass
from typing import Dict

from framework.keyboard import KeyPosition, get_key_position


DEFAULT_KEY_EFFORT = 3.0
UNKNOWN_BIGRAM_EFFORT = 5.0

# finger -> row -> effort
BASE_EFFORT: Dict[int, Dict[int, float]] = {
    # Left hand
    1: {0: 4.2, 1: 3.5, 2: 2.4, 3: 3.4},   # Pinky
    2: {0: 3.8, 1: 3.0, 2: 1.8, 3: 2.8},   # Ring
    3: {0: 3.5, 1: 2.7, 2: 1.6, 3: 2.6},   # Middle
    4: {0: 3.3, 1: 2.5, 2: 1.4, 3: 2.4},   # Index
    # Right hand
    7: {0: 3.3, 1: 2.5, 2: 1.4, 3: 2.4},   # Index
    8: {0: 3.5, 1: 2.7, 2: 1.6, 3: 2.6},   # Middle
    9: {0: 3.8, 1: 3.0, 2: 1.8, 3: 2.8},   # Ring
    10: {0: 4.2, 1: 3.5, 2: 2.4, 3: 3.4},  # Pinky
}


@dataclass(frozen=True)
class BigramMultipliers:
    same_finger: float = 8.0
    skip_bigram: float = 4.0
    lateral_stretch: float = 3.5
    scissors: float = 2.8
    pinky_scissors: float = 3.2
    home_row: float = 1.0
    adjacent_finger: float = 1.2
    hand_alternation: float = 0.9


BIGRAM_MULTIPLIERS = BigramMultipliers()

# Index finger reaching into the centre columns while a middle or ring
# finger holds the neighbouring column
LATERAL_STRETCH_COLUMNS = frozenset({
    (3, 5), (5, 3), (2, 5), (5, 2),
    (8, 6), (6, 8), (9, 6), (6, 9),
})


def base_effort(finger: int, row: int) -> float:
    """Effort of a single keystroke, DEFAULT_KEY_EFFORT for unknown entries."""
    return BASE_EFFORT.get(finger, {}).get(row, DEFAULT_KEY_EFFORT)


def key_effort(key: str) -> float:
    position = get_key_position(key)
    if position is None:
        return DEFAULT_KEY_EFFORT
    return base_effort(position.finger, position.row)


def is_lateral_stretch(column1: int, column2: int) -> bool:
    return (column1, column2) in LATERAL_STRETCH_COLUMNS


def is_scissors(pos1: KeyPosition, pos2: KeyPosition) -> bool:
    """Adjacent fingers on the same hand, two or more rows apart."""
    return (pos1.hand == pos2.hand
            and abs(pos1.finger - pos2.finger) == 1
            and abs(pos1.row - pos2.row) >= 2)


def bigram_effort(key1: str, key2: str,
                  multipliers: BigramMultipliers = BIGRAM_MULTIPLIERS) -> float:
    """
    Calculate the effort of typing key2 right after key1.

    Args:
        key1: First physical position name
        key2: Second physical position name
        multipliers: Penalty/bonus factors

    Returns:
        Positive effort scalar; UNKNOWN_BIGRAM_EFFORT if either key is unknown
    """
    pos1 = get_key_position(key1)
    pos2 = get_key_position(key2)
    if pos1 is None or pos2 is None:
        return UNKNOWN_BIGRAM_EFFORT

    effort = base_effort(pos1.finger, pos1.row) + base_effort(pos2.finger, pos2.row)
    row_diff = abs(pos1.row - pos2.row)

    if pos1.finger == pos2.finger and pos1.name != pos2.name:
        if row_diff >= 2:
            effort *= multipliers.skip_bigram
        elif row_diff == 1:
            effort *= multipliers.same_finger

    if is_lateral_stretch(pos1.column, pos2.column):
        effort *= multipliers.lateral_stretch

    if is_scissors(pos1, pos2):
        effort *= multipliers.scissors

    if pos1.hand != pos2.hand:
        effort *= multipliers.hand_alternation

    return effort
