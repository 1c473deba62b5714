"""
Tests for the layout comparison command.

Run with: pytest tests/test_compare_layouts.py -v
"""

from pathlib import Path

import pandas as pd
import pytest

from compare_layouts import create_heatmap_plot, filter_and_order_metrics, main
from framework.layout_analyzer import METRIC_FIELDS

REPO_CONFIG = str(Path(__file__).resolve().parent.parent / 'config.yaml')


def test_filter_and_order_metrics():
    assert filter_and_order_metrics(None) == list(METRIC_FIELDS)
    assert filter_and_order_metrics(['distance', 'effort', 'distance']) == ['distance', 'effort']
    with pytest.raises(ValueError):
        filter_and_order_metrics(['speed'])


def test_compare_builtin_layouts(capsys):
    code = main(['--config', REPO_CONFIG, '--layouts', 'qwerty', 'dvorak', '--metrics', 'effort'])
    out = capsys.readouterr().out
    assert code == 0
    assert '11.13' in out
    assert '7.69' in out


def test_rankings_and_heatmap(capsys, tmp_path):
    rankings = tmp_path / 'rankings.csv'
    output = tmp_path / 'comparison.png'
    code = main(['--config', REPO_CONFIG, '--layouts', 'qwerty', 'colemak', 'mine:abc',
                 '--metrics', 'effort', 'roll_in_pct',
                 '--rankings', str(rankings), '--output', str(output)])
    assert code == 0
    table = pd.read_csv(rankings)
    assert list(table.columns) == ['layout', 'layout_qwerty', 'effort', 'roll_in_pct',
                                   'effort_rank', 'roll_in_pct_rank', 'total_rank_sum']
    assert set(table['layout']) == {'qwerty', 'colemak', 'mine'}
    assert (tmp_path / 'comparison_heatmap.png').exists()


def test_layouts_csv_and_text(capsys, tmp_path):
    layouts_csv = tmp_path / 'layouts.csv'
    layouts_csv.write_text('layout,layout_qwerty\nswap,qwertyuiopasdfhgjkl\n', encoding='utf-8')
    code = main(['--config', REPO_CONFIG, '--layouts-csv', str(layouts_csv), '--layouts', 'qwerty',
                 '--text', 'the the the', '--metrics', 'same_finger_bigrams_pct'])
    out = capsys.readouterr().out
    assert code == 0
    assert '37.50' in out


def test_default_layouts(capsys):
    code = main(['--config', REPO_CONFIG, '--quiet', '--metrics', 'effort'])
    out = capsys.readouterr().out
    assert code == 0
    assert 'workman' in out


def test_unknown_metric(capsys):
    code = main(['--config', REPO_CONFIG, '--metrics', 'speed'])
    assert code == 1
    assert 'Unknown metrics' in capsys.readouterr().err


def test_unwritable_rankings(capsys, tmp_path):
    code = main(['--config', REPO_CONFIG, '--rankings', str(tmp_path / 'no' / 'dir' / 'r.csv')])
    assert code == 1


def test_heatmap_path_without_png_suffix(tmp_path):
    table = pd.DataFrame({'layout': ['a', 'b'], 'effort': [1.0, 2.0]})
    path = create_heatmap_plot(table, ['effort'], str(tmp_path / 'plot'))
    assert path.endswith('plot_heatmap.png')
    assert Path(path).exists()
