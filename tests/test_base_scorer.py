"""
Tests for the scorer base class and result container.

Run with: pytest tests/test_base_scorer.py -v
"""

import logging

import pytest

from framework.base_scorer import BaseLayoutScorer, ScoreResult


class CountingScorer(BaseLayoutScorer):
    """Scores a layout by the number of assigned positions."""

    def __init__(self, layout_mapping, config=None):
        super().__init__(layout_mapping, config)
        self.loads = 0

    def load_data_files(self):
        self.loads += 1

    def calculate_scores(self):
        return ScoreResult(primary_score=float(len(self.layout_mapping)),
                           components={'positions': float(len(self.layout_mapping))})


class TestScoreResult:
    """Tests for ScoreResult."""

    def test_to_dict(self):
        result = ScoreResult(primary_score=1.5, components={'effort': 1.5},
                             scorer_name='test', metadata={'corpus': 'default', 'skip': [1]},
                             validation_info={'layout_issues': 2})
        flat = result.to_dict()
        assert flat['primary_score'] == 1.5
        assert flat['effort'] == 1.5
        assert flat['meta_corpus'] == 'default'
        assert flat['validation_layout_issues'] == 2
        assert 'meta_skip' not in flat

    def test_summary(self):
        summary = ScoreResult(primary_score=2.0, components={'effort': 2.0}, scorer_name='test').summary()
        assert 'Primary score: 2.00' in summary
        assert 'effort: 2.00' in summary


class TestBaseLayoutScorer:
    """Tests for BaseLayoutScorer bookkeeping."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            BaseLayoutScorer({})

    def test_score_layout(self):
        scorer = CountingScorer({'f': 'e'}, {'text': 'secret', 'precision': 2})
        result = scorer.score_layout()
        assert scorer.scorer_name == 'counting_scorer'
        assert result.scorer_name == 'counting_scorer'
        assert result.primary_score == 1.0
        assert result.layout_mapping == {'f': 'e'}
        assert result.config_used == {'precision': 2}
        assert result.execution_time >= 0

    def test_data_loaded_once(self):
        scorer = CountingScorer({})
        scorer.score_layout()
        scorer.score_layout()
        assert scorer.loads == 1

    def test_skip_loading(self):
        scorer = CountingScorer({})
        scorer.score_layout(load_data=False)
        assert scorer.loads == 0

    def test_non_dict_layout(self):
        assert CountingScorer('qwerty').layout_mapping == {}

    def test_validation_issues_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger='framework.base_scorer'):
            scorer = CountingScorer({'enter': 'a'})
        assert scorer.validation_issues
        assert 'Unknown position' in caplog.text
        assert scorer.score_layout().validation_info['layout_issues'] == 1

    def test_quiet_mode_logs_at_debug(self, caplog):
        with caplog.at_level(logging.WARNING, logger='framework.base_scorer'):
            CountingScorer({'enter': 'a'}, {'quiet_mode': True})
        assert caplog.text == ''
