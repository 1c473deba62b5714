#!/usr/bin/env python3
"""
Text utilities for keyboard layout analysis.

Provides the built-in English sample corpus and functions for reducing
arbitrary text to the lowercase letter stream that the analyzer types.
"""

import re
from collections import Counter
from pathlib import Path
from typing import Dict, List


# Default sample used when no corpus is supplied. Comparisons between
# layouts assume this text unless explicit text is given.
DEFAULT_CORPUS = (
    "the quick brown fox jumps over the lazy dog the five boxing wizards jump quickly "
    "pack my box with five dozen liquor jugs how vexingly quick daft zebras jump "
    "sphinx of black quartz judge my vow waltz bad nymph for quick jigs vex "
    "bright vixens jump dozy fowl quack amazingly few discotheques provide jukeboxes "
    "but zip drives may crash when subject to heavy jolt fixing sewers requires power "
    "and heavy equipment that may cost many grand the early morning mist hung over "
    "the meadow like a soft gray blanket birds chirped merrily in the oak trees that "
    "dotted the landscape while streams bubbled gently through the grass children "
    "played games near the school building teachers prepared lessons for the day "
    "students walked quickly down the hallway carrying books and papers the sun shone "
    "brightly through the windows casting long shadows across the floor computers "
    "hummed quietly in the library where people read books and researched topics of "
    "interest technology has changed how we communicate work and learn in modern society"
)

_NON_LETTERS = re.compile(r'[^a-z]')


def clean_corpus(text: str) -> str:
    """
    Reduce text to the character stream the analyzer types.

    Lower-cases the text and removes every character outside a-z,
    including spaces and punctuation.

    Args:
        text: Input text

    Returns:
        Continuous string of lowercase letters
    """
    if not text:
        return ""
    return _NON_LETTERS.sub('', text.lower())


def get_character_frequencies(text: str, normalize: bool = False) -> Dict[str, float]:
    """
    Count letter frequencies in cleaned text.

    Args:
        text: Input text (cleaned internally)
        normalize: If True, return proportions instead of counts

    Returns:
        Dict mapping characters to counts or proportions
    """
    counts = Counter(clean_corpus(text))
    if not normalize:
        return dict(counts)

    total = sum(counts.values())
    if total == 0:
        return {}
    return {char: count / total for char, count in counts.items()}


def validate_text_input(text: str,
                        min_length: int = 3,
                        min_unique_chars: int = 1) -> List[str]:
    """
    Validate text input for layout analysis.

    The analyzer accepts any text; these are warnings for the caller.

    Args:
        text: Input text to validate
        min_length: Minimum number of letters for trigram statistics
        min_unique_chars: Minimum number of unique letters

    Returns:
        List of validation issues (empty if valid)
    """
    issues = []

    if not text:
        issues.append("Text is empty")
        return issues

    letters = clean_corpus(text)

    if len(letters) < min_length:
        issues.append(f"Text too short: {len(letters)} letters (minimum {min_length})")

    unique_chars = len(set(letters))
    if unique_chars < min_unique_chars:
        issues.append(f"Too few unique letters: {unique_chars} (minimum {min_unique_chars})")

    if letters:
        frequencies = get_character_frequencies(letters, normalize=True)
        dominant_char = max(frequencies, key=frequencies.get)
        if frequencies[dominant_char] > 0.5:
            issues.append(f"Text dominated by single letter '{dominant_char}' "
                          f"({frequencies[dominant_char]:.1%})")

    return issues


def load_text_file(filepath: str) -> str:
    """
    Read a corpus file as UTF-8.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(filepath)
    if not path.is_file():
        raise FileNotFoundError(f"Text file not found: {filepath}")
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()
