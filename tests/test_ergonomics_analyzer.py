"""
Tests for the ergonomics scorer and its command-line interface.

Run with: pytest tests/test_ergonomics_analyzer.py -v
"""

import json
from pathlib import Path

import pytest

from ergonomics_analyzer import ErgonomicsScorer, main
from framework.base_scorer import ScoreResult
from framework.layout_analyzer import METRIC_FIELDS
from framework.layout_utils import get_builtin_layout

REPO_CONFIG = str(Path(__file__).resolve().parent.parent / 'config.yaml')


class TestErgonomicsScorer:
    """Tests for ErgonomicsScorer."""

    def test_score_layout(self):
        scorer = ErgonomicsScorer(get_builtin_layout('qwerty'))
        result = scorer.score_layout()
        assert isinstance(result, ScoreResult)
        assert result.scorer_name == 'ergonomics_scorer'
        assert result.primary_score == 11.13
        assert list(result.components) == list(METRIC_FIELDS)
        assert result.metadata['corpus'] == 'default'
        assert result.metadata['left_hand_letters'] == 15
        assert result.execution_time >= 0
        assert 'finger_usage' in result.detailed_breakdown

    def test_empty_layout_is_qwerty(self):
        result = ErgonomicsScorer({}).score_layout()
        assert result.primary_score == 11.13
        assert result.validation_info.get('layout_issues') is None

    def test_precision(self):
        result = ErgonomicsScorer(None, {'precision': 4}).score_layout()
        assert result.primary_score == 11.1337

    def test_text_from_config(self):
        result = ErgonomicsScorer({}, {'text': 'aaaa'}).score_layout()
        assert result.primary_score == 2.4
        assert result.metadata['corpus'] == 'custom'
        assert result.metadata['corpus_letters'] == 4

    def test_empty_text_gives_zeros(self):
        result = ErgonomicsScorer({}, {'text': ''}).score_layout()
        assert all(value == 0.0 for value in result.components.values())

    def test_corpus_file(self, tmp_path):
        corpus = tmp_path / 'corpus.txt'
        corpus.write_text('qx', encoding='utf-8')
        result = ErgonomicsScorer({}, {'corpus_file': str(corpus)}).score_layout()
        assert result.get_score('scissors_pct') == 100.0

    def test_missing_corpus_file(self, tmp_path):
        scorer = ErgonomicsScorer({}, {'corpus_file': str(tmp_path / 'missing.txt')})
        with pytest.raises(FileNotFoundError):
            scorer.score_layout()

    def test_invalid_layout_is_reported_not_raised(self):
        result = ErgonomicsScorer({'enter': 'a', 'f': 'e'}, {'quiet_mode': True}).score_layout()
        assert result.validation_info['layout_issues'] == 1

    def test_without_breakdown(self):
        config = {'scoring_options': {'include_breakdown': False}}
        assert ErgonomicsScorer({}, config).score_layout().detailed_breakdown == {}

    def test_config_text_excluded_from_config_used(self):
        result = ErgonomicsScorer({}, {'text': 'abc'}).score_layout()
        assert 'text' not in result.config_used

    def test_get_score(self):
        result = ErgonomicsScorer({}, {'text': 'qx'}).score_layout()
        assert result.get_score() == result.primary_score
        with pytest.raises(KeyError):
            result.get_score('missing')

    def test_layout_string(self):
        scorer = ErgonomicsScorer(get_builtin_layout('dvorak'))
        assert scorer.get_layout_string().startswith("',.pyfgcrl")


class TestCommandLine:
    """Tests for main()."""

    def run(self, capsys, *args):
        code = main(['--config', REPO_CONFIG, *args])
        captured = capsys.readouterr()
        return code, captured.out, captured.err

    def test_default_detailed_output(self, capsys):
        code, out, _ = self.run(capsys)
        assert code == 0
        assert 'Scores:' in out
        assert '11.13' in out
        assert 'Same finger bigrams pct' in out

    def test_csv_output(self, capsys):
        code, out, _ = self.run(capsys, '--layout', 'qwerty', '--csv')
        assert code == 0
        header, values = out.strip().splitlines()
        assert header.startswith('primary_score,effort,distance')
        assert values.startswith('11.13,11.13,17.04')

    def test_score_only_output(self, capsys):
        code, out, _ = self.run(capsys, '--score-only', '--text', 'aaaa')
        assert code == 0
        scores = out.split()
        assert scores[0] == '2.40'
        assert len(scores) == len(METRIC_FIELDS)

    def test_precision_option(self, capsys):
        _, out, _ = self.run(capsys, '--score-only', '--precision', '4')
        assert out.split()[0] == '11.1337'

    def test_layout_string(self, capsys):
        _, out, _ = self.run(capsys, '--layout-string', "',.pyfgcrlaoeuidhtns;qjkxbmwvz", '--score-only')
        assert out.split()[0] == '7.69'

    def test_configured_layout(self, capsys):
        code, _, _ = self.run(capsys, '--layout', 'halmak', '--score-only')
        assert code == 0

    def test_letters_and_positions(self, capsys):
        code, out, _ = self.run(capsys, '--letters', 'e', '--positions', 'F', '--text', 'e', '--score-only')
        assert code == 0
        assert out.split()[0] == '1.40'

    def test_letters_without_positions(self, capsys):
        with pytest.raises(SystemExit):
            main(['--config', REPO_CONFIG, '--letters', 'abc'])

    def test_layout_file(self, capsys, tmp_path):
        layout_file = tmp_path / 'layout.json'
        layout_file.write_text(json.dumps({'keys': {'f': 'e', 'e': 'f'}}), encoding='utf-8')
        _, out, _ = self.run(capsys, '--layout-file', str(layout_file), '--text', 'e', '--score-only')
        assert out.split()[0] == '1.40'

    def test_text_file(self, capsys, tmp_path):
        text_file = tmp_path / 'text.txt'
        text_file.write_text('aaaa', encoding='utf-8')
        _, out, _ = self.run(capsys, '--text-file', str(text_file), '--score-only')
        assert out.split()[0] == '2.40'

    def test_breakdown(self, capsys):
        _, out, _ = self.run(capsys, '--breakdown')
        assert 'Detailed breakdown:' in out
        assert 'Finger Usage:' in out

    def test_unknown_layout(self, capsys):
        code, _, err = self.run(capsys, '--layout', 'nonexistent')
        assert code == 1
        assert 'Unknown layout' in err

    def test_missing_text_file(self, capsys, tmp_path):
        code, _, err = self.run(capsys, '--text-file', str(tmp_path / 'missing.txt'))
        assert code == 1
        assert 'not found' in err

    def test_missing_config(self, capsys, tmp_path):
        code = main(['--config', str(tmp_path / 'missing.yaml')])
        assert code == 1
