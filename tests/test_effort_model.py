"""
Tests for the keystroke and bigram effort model.

Run with: pytest tests/test_effort_model.py -v
"""

import pytest

from framework.effort_model import (BIGRAM_MULTIPLIERS, DEFAULT_KEY_EFFORT, UNKNOWN_BIGRAM_EFFORT,
                                    BigramMultipliers, base_effort, bigram_effort, is_lateral_stretch,
                                    is_scissors, key_effort)
from framework.keyboard import KEY_POSITIONS


class TestKeyEffort:
    """Tests for single keystroke effort."""

    def test_home_row_is_easiest(self):
        for finger in (1, 2, 3, 4, 7, 8, 9, 10):
            home = base_effort(finger, 2)
            assert all(home < base_effort(finger, row) for row in (0, 1, 3))

    def test_known_values(self):
        assert key_effort('a') == pytest.approx(2.4)
        assert key_effort('f') == pytest.approx(1.4)
        assert key_effort('q') == pytest.approx(3.5)
        assert key_effort('1') == pytest.approx(4.2)

    def test_hands_are_symmetric(self):
        assert key_effort('a') == key_effort(';')
        assert key_effort('r') == key_effort('u')

    def test_unknown_values_use_default(self):
        assert key_effort('enter') == DEFAULT_KEY_EFFORT
        assert base_effort(5, 2) == DEFAULT_KEY_EFFORT
        assert base_effort(1, 7) == DEFAULT_KEY_EFFORT


class TestBigramClassification:
    """Tests for lateral stretch and scissors detection."""

    @pytest.mark.parametrize('columns', [(3, 5), (5, 3), (2, 5), (5, 2), (8, 6), (6, 8), (9, 6), (6, 9)])
    def test_lateral_stretch_columns(self, columns):
        assert is_lateral_stretch(*columns)

    @pytest.mark.parametrize('columns', [(4, 5), (5, 6), (3, 4), (1, 5), (7, 6)])
    def test_not_lateral_stretch(self, columns):
        assert not is_lateral_stretch(*columns)

    def test_scissors(self):
        assert is_scissors(KEY_POSITIONS['q'], KEY_POSITIONS['x'])
        assert is_scissors(KEY_POSITIONS['c'], KEY_POSITIONS['r'])
        assert is_scissors(KEY_POSITIONS['2'], KEY_POSITIONS['s']) is False
        assert is_scissors(KEY_POSITIONS['3'], KEY_POSITIONS['v'])

    def test_scissors_needs_adjacent_fingers_on_one_hand(self):
        assert not is_scissors(KEY_POSITIONS['q'], KEY_POSITIONS['c'])
        assert not is_scissors(KEY_POSITIONS['v'], KEY_POSITIONS['u'])
        assert not is_scissors(KEY_POSITIONS['w'], KEY_POSITIONS['s'])


class TestBigramEffort:
    """Tests for bigram transition effort."""

    def test_hand_alternation(self):
        assert bigram_effort('f', 'j') == pytest.approx(2.52)

    def test_same_finger_adjacent_row(self):
        assert bigram_effort('f', 'r') == pytest.approx(31.2)

    def test_same_finger_two_rows(self):
        assert bigram_effort('r', 'v') == pytest.approx(19.6)

    def test_lateral_stretch(self):
        assert bigram_effort('d', 'g') == pytest.approx(10.5)
        assert bigram_effort('e', 't') == pytest.approx(18.2)

    def test_scissors(self):
        assert bigram_effort('c', 'r') == pytest.approx(14.28)

    def test_same_hand_no_penalty(self):
        assert bigram_effort('a', 's') == pytest.approx(4.2)

    def test_same_finger_same_row_has_no_penalty(self):
        assert bigram_effort('f', 'g') == pytest.approx(2.8)

    def test_unknown_key(self):
        assert bigram_effort('a', 'enter') == UNKNOWN_BIGRAM_EFFORT
        assert bigram_effort(None, 'a') == UNKNOWN_BIGRAM_EFFORT

    def test_always_positive(self):
        keys = list(KEY_POSITIONS)
        assert all(bigram_effort(a, b) > 0 for a in keys for b in keys)

    def test_custom_multipliers(self):
        gentle = BigramMultipliers(same_finger=2.0)
        assert bigram_effort('f', 'r', gentle) == pytest.approx(7.8)
        assert BIGRAM_MULTIPLIERS.same_finger == 8.0
