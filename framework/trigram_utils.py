#!/usr/bin/env python3
"""
Trigram classification for keyboard layout analysis.

Each run of three consecutive keys is assigned exactly one category:

  - alt / alt_sfs: hands alternate L-R-L or R-L-R (alt_sfs when the outer
    two keys share a finger)
  - roll_in / roll_out: all on one hand with strictly ordered fingers,
    toward the index finger (in) or toward the pinky (out)
  - redirect / weak_redirect: all on one hand, direction reverses at the
    middle key (weak when no index finger is involved)
  - bigram_roll_in / bigram_roll_out: two keys on one hand, one on the other;
    direction of the same-hand bigram
  - other: everything else

Rules are checked in that order and the first match wins.
"""

from enum import Enum
from typing import Optional

from framework.keyboard import INDEX_FINGERS, get_hand, get_key_position


class TrigramCategory(str, Enum):
    ALT = 'alt'
    ALT_SFS = 'alt_sfs'
    ROLL_IN = 'roll_in'
    ROLL_OUT = 'roll_out'
    REDIRECT = 'redirect'
    WEAK_REDIRECT = 'weak_redirect'
    BIGRAM_ROLL_IN = 'bigram_roll_in'
    BIGRAM_ROLL_OUT = 'bigram_roll_out'
    OTHER = 'other'


def roll_direction(hand: str, finger1: int, finger2: int) -> Optional[str]:
    """
    Direction of a same-hand finger transition.

    Left-hand finger ids increase toward the index finger and right-hand ids
    increase toward the pinky, so 'in' means increasing on the left and
    decreasing on the right.

    Returns:
        'in', 'out', or None when the finger does not change
    """
    if finger1 == finger2:
        return None
    inward = finger1 < finger2 if hand == 'L' else finger1 > finger2
    return 'in' if inward else 'out'


def _is_redirect(finger1: int, finger2: int, finger3: int) -> bool:
    if finger1 == finger3:
        return False
    return ((finger1 < finger2 and finger3 < finger2) or
            (finger1 > finger2 and finger3 > finger2))


def _bigram_roll(hand: str, finger1: int, finger2: int) -> TrigramCategory:
    if roll_direction(hand, finger1, finger2) == 'in':
        return TrigramCategory.BIGRAM_ROLL_IN
    return TrigramCategory.BIGRAM_ROLL_OUT


def classify_trigram(key1: str, key2: str, key3: str) -> TrigramCategory:
    """
    Classify three consecutive physical keys.

    Args:
        key1, key2, key3: Physical position names in typing order

    Returns:
        TrigramCategory (OTHER if any key is unknown)
    """
    pos1 = get_key_position(key1)
    pos2 = get_key_position(key2)
    pos3 = get_key_position(key3)
    if pos1 is None or pos2 is None or pos3 is None:
        return TrigramCategory.OTHER

    finger1, finger2, finger3 = pos1.finger, pos2.finger, pos3.finger
    hand1, hand2, hand3 = get_hand(finger1), get_hand(finger2), get_hand(finger3)

    if hand1 != hand2 and hand2 != hand3:
        if finger1 == finger3:
            return TrigramCategory.ALT_SFS
        return TrigramCategory.ALT

    if hand1 == hand2 == hand3:
        first = roll_direction(hand1, finger1, finger2)
        second = roll_direction(hand1, finger2, finger3)
        if first is not None and first == second:
            return TrigramCategory.ROLL_IN if first == 'in' else TrigramCategory.ROLL_OUT

        if _is_redirect(finger1, finger2, finger3):
            if INDEX_FINGERS.isdisjoint((finger1, finger2, finger3)):
                return TrigramCategory.WEAK_REDIRECT
            return TrigramCategory.REDIRECT

        return TrigramCategory.OTHER

    if hand1 == hand2:
        return _bigram_roll(hand1, finger1, finger2)

    # hand2 == hand3 is the only case left
    return _bigram_roll(hand2, finger2, finger3)
