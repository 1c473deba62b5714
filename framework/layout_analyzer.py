#!/usr/bin/env python3
"""
Layout ergonomics analysis engine.

Simulates typing a corpus on a layout in a single left-to-right pass and
reduces the per-keystroke, per-bigram and per-trigram events to 17
normalized metrics:

  - effort: average keystroke + transition effort per character
  - distance: average finger travel per character (mm); each finger moves
    from wherever it last typed, starting at its home key
  - pinky_distance: share of total travel made by the pinkies (0-1)
  - pinky_off_home_pct: pinky keystrokes away from the pinky home keys
  - same_finger_bigrams_pct, skip_bigrams_pct, skip_bigrams2_pct,
    lateral_stretch_pct, pinky_scissors_pct, scissors_pct,
    two_row_jumps_pct: per bigram
  - two_row_sfb_pct: share of same-finger bigrams that span 2+ rows
  - trigram_alt_pct, tri_redirect_pct, roll_in_pct, roll_out_pct: per trigram
  - col5_6_pct: keystrokes in the two centre columns

The engine never raises on layout or corpus data: unknown keys fall back to
neutral values and empty input produces an all-zero result.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

from framework.effort_model import bigram_effort, is_lateral_stretch, is_scissors, key_effort
from framework.keyboard import (FINGER_NAMES, HOME_KEYS, KEY_POSITIONS, PINKY_FINGERS,
                                KeyPosition, calculate_euclidean_distance, get_key_position)
from framework.layout_utils import invert_layout
from framework.text_utils import DEFAULT_CORPUS, clean_corpus
from framework.trigram_utils import TrigramCategory, classify_trigram


logger = logging.getLogger(__name__)

CENTER_COLUMNS = (5, 6)

# Same-hand runs at least this long are kept as strings in the breakdown
LONG_SAME_HAND_RUN = 4

# Metrics where a larger value means a better layout
HIGHER_IS_BETTER = frozenset({'trigram_alt_pct', 'roll_in_pct', 'roll_out_pct'})


@dataclass(frozen=True)
class AnalysisResult:
    """
    Ergonomic metrics for one layout on one corpus.

    Percentages are 0-100 except pinky_distance (0-1). Values are stored at
    full precision; use rounded() or to_dict(precision) for display.
    """
    effort: float = 0.0
    distance: float = 0.0
    pinky_distance: float = 0.0
    pinky_off_home_pct: float = 0.0
    same_finger_bigrams_pct: float = 0.0
    skip_bigrams_pct: float = 0.0
    skip_bigrams2_pct: float = 0.0
    lateral_stretch_pct: float = 0.0
    pinky_scissors_pct: float = 0.0
    scissors_pct: float = 0.0
    two_row_sfb_pct: float = 0.0
    two_row_jumps_pct: float = 0.0
    trigram_alt_pct: float = 0.0
    tri_redirect_pct: float = 0.0
    roll_in_pct: float = 0.0
    roll_out_pct: float = 0.0
    col5_6_pct: float = 0.0
    breakdown: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def to_dict(self, precision: Optional[int] = None) -> Dict[str, float]:
        """Metric name -> value, rounded when precision is given."""
        values = {name: getattr(self, name) for name in METRIC_FIELDS}
        if precision is not None:
            values = {name: round(value, precision) for name, value in values.items()}
        return values

    def rounded(self, precision: int = 2) -> 'AnalysisResult':
        return replace(self, **self.to_dict(precision))


METRIC_FIELDS = tuple(f.name for f in fields(AnalysisResult) if f.name != 'breakdown')


def _ratio(numerator: float, denominator: float, scale: float = 100.0) -> float:
    """numerator / denominator * scale, or 0.0 for an empty denominator."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator * scale


@dataclass
class AnalysisAccumulator:
    """
    Running counters for a single analysis call.

    Bigram counters are keyed by the literal bigram of physical keys
    (e.g. 'ed') so the breakdown can show which transitions were counted.
    """
    total_characters: int = 0
    skipped_characters: int = 0
    total_effort: float = 0.0
    total_distance: float = 0.0
    pinky_distance: float = 0.0
    pinky_keystrokes: int = 0
    pinky_off_home: int = 0
    center_column_usage: int = 0

    finger_usage: Counter = field(default_factory=Counter)
    finger_distance: Dict[int, float] = field(default_factory=lambda: defaultdict(float))
    row_usage: Counter = field(default_factory=Counter)
    column_usage: Counter = field(default_factory=Counter)

    same_finger_bigrams: Counter = field(default_factory=Counter)
    two_row_sfb: Counter = field(default_factory=Counter)
    skip_bigrams: Counter = field(default_factory=Counter)
    skip_bigrams2: Counter = field(default_factory=Counter)
    lateral_stretches: Counter = field(default_factory=Counter)
    scissors: Counter = field(default_factory=Counter)
    pinky_scissors: Counter = field(default_factory=Counter)
    two_row_jumps: Counter = field(default_factory=Counter)

    trigram_counts: Dict[TrigramCategory, int] = field(
        default_factory=lambda: {category: 0 for category in TrigramCategory})

    same_hand_runs: Counter = field(default_factory=Counter)
    long_same_hand_strings: Counter = field(default_factory=Counter)

    finger_keys: Dict[int, str] = field(default_factory=lambda: dict(HOME_KEYS))
    prev_position: Optional[KeyPosition] = None
    prev_prev_position: Optional[KeyPosition] = None
    current_run: str = ''

    @property
    def total_bigrams(self) -> int:
        return max(self.total_characters - 1, 0)

    @property
    def total_trigrams(self) -> int:
        return sum(self.trigram_counts.values())

    def record_keystroke(self, char: str, position: KeyPosition) -> None:
        """Account for one typed character at a physical position."""
        finger = position.finger
        self.total_characters += 1
        self.total_effort += key_effort(position.name)
        self.finger_usage[finger] += 1

        last_position = get_key_position(self.finger_keys.get(finger, position.name)) or position
        distance = calculate_euclidean_distance(last_position.coordinate, position.coordinate)
        self.total_distance += distance
        self.finger_distance[finger] += distance
        self.finger_keys[finger] = position.name

        if finger in PINKY_FINGERS:
            self.pinky_distance += distance
            self.pinky_keystrokes += 1
            if position.name != HOME_KEYS[finger]:
                self.pinky_off_home += 1

        if position.column in CENTER_COLUMNS:
            self.center_column_usage += 1

        self.row_usage[position.row] += 1
        self.column_usage[position.column] += 1

        if self.prev_position is not None:
            self._record_bigram(self.prev_position, position)
            self._extend_same_hand_run(char, position)
        else:
            self.current_run = char

        if self.prev_prev_position is not None:
            category = classify_trigram(self.prev_prev_position.name,
                                        self.prev_position.name, position.name)
            self.trigram_counts[category] += 1

        self.prev_prev_position = self.prev_position
        self.prev_position = position

    def _record_bigram(self, prev: KeyPosition, current: KeyPosition) -> None:
        bigram = prev.name + current.name
        row_diff = abs(current.row - prev.row)
        column_diff = abs(current.column - prev.column)

        # Repeating the same key is not a transition
        if prev.name != current.name:
            self.total_effort += bigram_effort(prev.name, current.name)

        if prev.finger == current.finger and prev.name != current.name:
            self.same_finger_bigrams[bigram] += 1
            if row_diff >= 2:
                self.two_row_sfb[bigram] += 1

        if prev.row == current.row:
            if column_diff == 2:
                self.skip_bigrams[bigram] += 1
            elif column_diff == 3:
                self.skip_bigrams2[bigram] += 1

        if row_diff >= 2:
            self.two_row_jumps[bigram] += 1

        if is_lateral_stretch(prev.column, current.column):
            self.lateral_stretches[bigram] += 1

        if is_scissors(prev, current):
            self.scissors[bigram] += 1
            if prev.finger in PINKY_FINGERS or current.finger in PINKY_FINGERS:
                self.pinky_scissors[bigram] += 1

    def _extend_same_hand_run(self, char: str, position: KeyPosition) -> None:
        if position.hand == self.prev_position.hand:
            self.current_run += char
        else:
            self._close_same_hand_run()
            self.current_run = char

    def _close_same_hand_run(self) -> None:
        if not self.current_run:
            return
        self.same_hand_runs[len(self.current_run)] += 1
        if len(self.current_run) >= LONG_SAME_HAND_RUN:
            self.long_same_hand_strings[self.current_run] += 1

    def finish(self) -> None:
        """Flush state that is only complete at the end of the corpus."""
        self._close_same_hand_run()
        self.current_run = ''

    def to_result(self, include_breakdown: bool = True, top_bigrams: int = 10) -> AnalysisResult:
        """Normalize the counters into an AnalysisResult."""
        characters = self.total_characters
        bigrams = self.total_bigrams
        trigrams = self.total_trigrams
        counts = self.trigram_counts
        sfb_count = sum(self.same_finger_bigrams.values())

        result = AnalysisResult(
            effort=_ratio(self.total_effort, characters, 1.0),
            distance=_ratio(self.total_distance, characters, 1.0),
            pinky_distance=_ratio(self.pinky_distance, self.total_distance, 1.0),
            pinky_off_home_pct=_ratio(self.pinky_off_home, self.pinky_keystrokes),
            same_finger_bigrams_pct=_ratio(sfb_count, bigrams),
            skip_bigrams_pct=_ratio(sum(self.skip_bigrams.values()), bigrams),
            skip_bigrams2_pct=_ratio(sum(self.skip_bigrams2.values()), bigrams),
            lateral_stretch_pct=_ratio(sum(self.lateral_stretches.values()), bigrams),
            pinky_scissors_pct=_ratio(sum(self.pinky_scissors.values()), bigrams),
            scissors_pct=_ratio(sum(self.scissors.values()), bigrams),
            two_row_sfb_pct=_ratio(sum(self.two_row_sfb.values()), sfb_count),
            two_row_jumps_pct=_ratio(sum(self.two_row_jumps.values()), bigrams),
            trigram_alt_pct=_ratio(counts[TrigramCategory.ALT] + counts[TrigramCategory.ALT_SFS],
                                   trigrams),
            tri_redirect_pct=_ratio(counts[TrigramCategory.REDIRECT] +
                                    counts[TrigramCategory.WEAK_REDIRECT], trigrams),
            roll_in_pct=_ratio(counts[TrigramCategory.ROLL_IN] +
                               counts[TrigramCategory.BIGRAM_ROLL_IN], trigrams),
            roll_out_pct=_ratio(counts[TrigramCategory.ROLL_OUT] +
                                counts[TrigramCategory.BIGRAM_ROLL_OUT], trigrams),
            col5_6_pct=_ratio(self.center_column_usage, characters),
        )

        if not include_breakdown:
            return result
        return replace(result, breakdown=self.breakdown(top_bigrams))

    def breakdown(self, top_bigrams: int = 10) -> Dict[str, Any]:
        """Debug details: usage distributions, raw counts and worst bigrams."""
        characters = self.total_characters

        finger_usage = {
            FINGER_NAMES[finger]: _ratio(count, characters)
            for finger, count in self.finger_usage.most_common()
        }
        finger_distance = {
            FINGER_NAMES[finger]: distance
            for finger, distance in sorted(self.finger_distance.items())
        }

        return {
            'finger_usage': finger_usage,
            'finger_distance': finger_distance,
            'row_usage': {row: _ratio(self.row_usage[row], characters) for row in range(4)},
            'column_usage': {column: _ratio(count, characters)
                             for column, count in sorted(self.column_usage.items())},
            'raw_stats': {
                'total_characters': characters,
                'skipped_characters': self.skipped_characters,
                'total_effort': self.total_effort,
                'total_distance': self.total_distance,
                'total_bigrams': self.total_bigrams,
                'total_trigrams': self.total_trigrams,
                'same_finger_bigram_count': sum(self.same_finger_bigrams.values()),
                'skip_bigram_count': sum(self.skip_bigrams.values()),
                'lateral_stretch_count': sum(self.lateral_stretches.values()),
                'scissors_count': sum(self.scissors.values()),
            },
            'trigram_breakdown': {category.value: count
                                  for category, count in self.trigram_counts.items()},
            'same_finger_bigrams': self.same_finger_bigrams.most_common(top_bigrams),
            'skip_bigrams': self.skip_bigrams.most_common(top_bigrams),
            'lateral_stretches': self.lateral_stretches.most_common(top_bigrams),
            'scissors': self.scissors.most_common(top_bigrams),
            'same_hand_runs': dict(sorted(self.same_hand_runs.items())),
            'long_same_hand_strings': self.long_same_hand_strings.most_common(top_bigrams),
        }


def analyze(layout_mapping: Optional[Dict[str, str]] = None,
            corpus_text: Optional[str] = None,
            include_breakdown: bool = True,
            top_bigrams: int = 10) -> AnalysisResult:
    """
    Analyze the ergonomics of a layout on a corpus.

    Args:
        layout_mapping: Position -> character mapping; positions not listed
                        keep their QWERTY character (None = QWERTY)
        corpus_text: Text to type; None uses DEFAULT_CORPUS. Only a-z
                     (after lower-casing) is significant.
        include_breakdown: Attach debug counters to the result
        top_bigrams: Number of entries in each breakdown bigram list

    Returns:
        AnalysisResult at full precision
    """
    if corpus_text is None:
        text = DEFAULT_CORPUS
    elif isinstance(corpus_text, str):
        text = corpus_text
    else:
        logger.warning(f"Ignoring corpus of type {type(corpus_text).__name__}")
        text = ''

    char_to_position = invert_layout(layout_mapping)
    accumulator = AnalysisAccumulator()

    for char in clean_corpus(text):
        position = KEY_POSITIONS.get(char_to_position.get(char, char))
        if position is None:
            accumulator.skipped_characters += 1
            continue
        accumulator.record_keystroke(char, position)

    accumulator.finish()
    logger.debug(f"Analyzed {accumulator.total_characters} characters "
                 f"({accumulator.skipped_characters} skipped)")

    return accumulator.to_result(include_breakdown, top_bigrams)
