#!/usr/bin/env python3
"""
Physical keyboard model for layout ergonomics analysis.

Defines the fixed grid of physical key positions (named by the character
they carry on US QWERTY), the finger responsible for each key, and the
millimetre coordinates used for finger travel distance.

Rows:    0 = number row, 1 = top row, 2 = home row, 3 = bottom row
Fingers: 1-4 = left hand (pinky to index), 7-10 = right hand (index to pinky)

Lookups return None for unknown positions so that callers decide how to
substitute a default value.
"""

from dataclasses import dataclass
from math import sqrt
from typing import Dict, Optional, Tuple


LEFT_PINKY = 1
LEFT_RING = 2
LEFT_MIDDLE = 3
LEFT_INDEX = 4
RIGHT_INDEX = 7
RIGHT_MIDDLE = 8
RIGHT_RING = 9
RIGHT_PINKY = 10

FINGER_NAMES = {
    LEFT_PINKY: 'Left Pinky', LEFT_RING: 'Left Ring',
    LEFT_MIDDLE: 'Left Middle', LEFT_INDEX: 'Left Index',
    RIGHT_INDEX: 'Right Index', RIGHT_MIDDLE: 'Right Middle',
    RIGHT_RING: 'Right Ring', RIGHT_PINKY: 'Right Pinky',
}

PINKY_FINGERS = frozenset({LEFT_PINKY, RIGHT_PINKY})
INDEX_FINGERS = frozenset({LEFT_INDEX, RIGHT_INDEX})

HOME_ROW = 2

# Where each finger rests before typing starts
HOME_KEYS = {
    LEFT_PINKY: 'a', LEFT_RING: 's', LEFT_MIDDLE: 'd', LEFT_INDEX: 'f',
    RIGHT_INDEX: 'j', RIGHT_MIDDLE: 'k', RIGHT_RING: 'l', RIGHT_PINKY: ';',
}


@dataclass(frozen=True)
class KeyPosition:
    """One physical key slot."""
    name: str
    row: int
    column: int
    finger: int
    coordinate: Tuple[float, float]

    @property
    def hand(self) -> str:
        return get_hand(self.finger)


# name: (row, column, finger)
_KEY_GRID = {
    # Number row
    '`': (0, 0, 1), '1': (0, 1, 1), '2': (0, 2, 2), '3': (0, 3, 3),
    '4': (0, 4, 4), '5': (0, 5, 4), '6': (0, 6, 7), '7': (0, 7, 7),
    '8': (0, 8, 8), '9': (0, 9, 9), '0': (0, 10, 10), '-': (0, 11, 10),
    '=': (0, 12, 10),
    # Top row
    'q': (1, 1, 1), 'w': (1, 2, 2), 'e': (1, 3, 3), 'r': (1, 4, 4),
    't': (1, 5, 4), 'y': (1, 6, 7), 'u': (1, 7, 7), 'i': (1, 8, 8),
    'o': (1, 9, 9), 'p': (1, 10, 10), '[': (1, 11, 10), ']': (1, 12, 10),
    # Home row
    'a': (2, 1, 1), 's': (2, 2, 2), 'd': (2, 3, 3), 'f': (2, 4, 4),
    'g': (2, 5, 4), 'h': (2, 6, 7), 'j': (2, 7, 7), 'k': (2, 8, 8),
    'l': (2, 9, 9), ';': (2, 10, 10), "'": (2, 11, 10),
    # Bottom row
    'z': (3, 1, 1), 'x': (3, 2, 2), 'c': (3, 3, 3), 'v': (3, 4, 4),
    'b': (3, 5, 4), 'n': (3, 6, 7), 'm': (3, 7, 7), ',': (3, 8, 8),
    '.': (3, 9, 9), '/': (3, 10, 10),
}

# Row-staggered coordinates in mm (19.05 mm key pitch)
KEY_COORDINATES = {
    # Number row
    '`': (0, 0), '1': (19.05, 0), '2': (38.1, 0), '3': (57.15, 0),
    '4': (76.2, 0), '5': (95.25, 0), '6': (114.3, 0), '7': (133.35, 0),
    '8': (152.4, 0), '9': (171.45, 0), '0': (190.5, 0), '-': (209.55, 0),
    '=': (228.6, 0),
    # Top row
    'q': (28.575, 19.05), 'w': (47.625, 19.05), 'e': (66.675, 19.05),
    'r': (85.725, 19.05), 't': (104.775, 19.05), 'y': (123.825, 19.05),
    'u': (142.875, 19.05), 'i': (161.925, 19.05), 'o': (180.975, 19.05),
    'p': (200.025, 19.05), '[': (219.075, 19.05), ']': (238.125, 19.05),
    # Home row
    'a': (33.3375, 38.1), 's': (52.3875, 38.1), 'd': (71.4375, 38.1),
    'f': (90.4875, 38.1), 'g': (109.5375, 38.1), 'h': (128.5875, 38.1),
    'j': (147.6375, 38.1), 'k': (166.6875, 38.1), 'l': (185.7375, 38.1),
    ';': (204.7875, 38.1), "'": (223.8375, 38.1),
    # Bottom row
    'z': (42.8625, 57.15), 'x': (61.9125, 57.15), 'c': (80.9625, 57.15),
    'v': (100.0125, 57.15), 'b': (119.0625, 57.15), 'n': (138.1125, 57.15),
    'm': (157.1625, 57.15), ',': (176.2125, 57.15), '.': (195.2625, 57.15),
    '/': (214.3125, 57.15),
}

KEY_POSITIONS: Dict[str, KeyPosition] = {
    name: KeyPosition(name, row, column, finger, KEY_COORDINATES[name])
    for name, (row, column, finger) in _KEY_GRID.items()
}


def get_key_position(name: str) -> Optional[KeyPosition]:
    """
    Look up a physical key by position name.

    Args:
        name: Position name (e.g. 'a', ';'), case-insensitive

    Returns:
        KeyPosition, or None if the name is not one of the fixed slots
    """
    if not isinstance(name, str):
        return None
    return KEY_POSITIONS.get(name.lower())


def is_known_position(name: str) -> bool:
    return get_key_position(name) is not None


def get_hand(finger: int) -> str:
    """Return 'L' or 'R' for a finger id."""
    return 'L' if finger <= LEFT_INDEX else 'R'


def calculate_euclidean_distance(pos1: Tuple[float, float], pos2: Tuple[float, float]) -> float:
    """Calculate Euclidean distance between two coordinates in mm."""
    dx = pos2[0] - pos1[0]
    dy = pos2[1] - pos1[1]
    return sqrt(dx * dx + dy * dy)


def key_distance(key1: str, key2: str) -> float:
    """Distance in mm between two named keys (0.0 if either is unknown)."""
    pos1 = get_key_position(key1)
    pos2 = get_key_position(key2)
    if pos1 is None or pos2 is None:
        return 0.0
    return calculate_euclidean_distance(pos1.coordinate, pos2.coordinate)


def get_home_position(finger: int) -> Optional[KeyPosition]:
    home_key = HOME_KEYS.get(finger)
    if home_key is None:
        return None
    return KEY_POSITIONS[home_key]
