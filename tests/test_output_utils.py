"""
Tests for result formatting.

Run with: pytest tests/test_output_utils.py -v
"""

import io

import pandas as pd
import pytest

from framework.base_scorer import ScoreResult
from framework.output_utils import (format_comparison_table, format_csv_output, format_detailed_output,
                                    format_score_only_output, print_results, save_comparison_csv)


@pytest.fixture
def result():
    return ScoreResult(
        primary_score=2.5,
        components={'effort': 2.5, 'distance': 10.25, 'roll_in_pct': 50.0},
        scorer_name='ergonomics_scorer',
        layout_mapping={'f': 'e', 'e': 'f'},
        metadata={'corpus': 'custom', 'description': 'skipped', 'nested': {'a': 1}},
        validation_info={'text_issues': 0},
        detailed_breakdown={'finger_usage': {'Left Index': 50.0},
                            'same_finger_bigrams': [('fr', 3), ('ju', 1)]},
        execution_time=0.01,
    )


def test_csv_output(result):
    header, values = format_csv_output(result).splitlines()
    assert header.split(',')[:4] == ['primary_score', 'effort', 'distance', 'roll_in_pct']
    assert values.split(',')[:4] == ['2.50', '2.50', '10.25', '50.00']
    assert 'meta_corpus' in header
    assert 'validation_text_issues' in header
    assert 'meta_description' not in header
    assert 'meta_nested' not in header


def test_csv_output_options(result):
    output = format_csv_output(result, {'delimiter': ';', 'precision': 1, 'include_headers': False},
                               include_metadata=False)
    assert output == '2.5;2.5;10.2;50.0'


def test_score_only_output(result):
    assert format_score_only_output(result) == '2.50 10.25 50.00'
    assert format_score_only_output(result, {'precision': 0, 'separator': ','},
                                    include_components=False) == '2'


def test_detailed_output(result):
    output = format_detailed_output(result)
    assert 'Scores:' in output
    assert 'Roll in pct' in output
    assert 'Layout: qwfrtyuiopasdeghjkl;zxcvbnm,./[\' → QWERTYUIOPASDFGHJKL;ZXCVBNM,./[\'' in output
    assert 'Corpus' in output
    assert 'skipped' not in output
    assert 'Detailed breakdown' not in output


def test_detailed_output_with_breakdown(result):
    output = format_detailed_output(result, {'show_breakdown': True, 'show_validation_info': True})
    assert 'Detailed breakdown:' in output
    assert 'Left Index: 50.00' in output
    assert 'fr: 3' in output
    assert 'Validation information:' in output


def test_print_results(result):
    buffer = io.StringIO()
    print_results(result, 'score_only', file=buffer)
    assert buffer.getvalue() == '2.50 10.25 50.00\n'


def test_print_results_unknown_format(result):
    with pytest.raises(ValueError):
        print_results(result, 'xml')


@pytest.fixture
def table():
    return pd.DataFrame([
        {'layout': 'qwerty', 'effort': 11.13, 'roll_in_pct': 18.37, 'total_rank_sum': 3.0},
        {'layout': 'dvorak', 'effort': 7.69, 'roll_in_pct': 22.73, 'total_rank_sum': 2.0},
    ])


def test_comparison_table(table):
    output = format_comparison_table(table, ['effort', 'roll_in_pct', 'missing'])
    assert 'qwerty' in output and 'dvorak' in output
    assert '11.13' in output
    assert 'missing' not in output
    ranking = output.split('Ranking')[1]
    assert ranking.index('dvorak') < ranking.index('qwerty')


def test_comparison_table_empty():
    assert format_comparison_table(pd.DataFrame(), ['effort']) == "No results to compare"


def test_save_comparison_csv(table, tmp_path):
    path = tmp_path / 'comparison.csv'
    save_comparison_csv(table, str(path))
    loaded = pd.read_csv(path)
    assert list(loaded['layout']) == ['qwerty', 'dvorak']
