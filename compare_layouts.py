#!/usr/bin/env python3
"""
Keyboard layout comparison with metric filtering

(c) Arno Klein (arnoklein.info), MIT License (see LICENSE)

Analyzes several layouts on the same corpus, ranks them per metric and by
total rank sum, and optionally saves a rankings table and a heatmap of the
normalized metrics.

Examples:
    # Built-in layouts on the built-in English sample
    python compare_layouts.py --layouts qwerty dvorak colemak workman

    # Custom layout strings (QWERTY position order) next to named ones
    python compare_layouts.py --layouts qwerty "mine:qwfpbjluy;arstgmneiozxcdvkh,./"

    # Specific metrics in custom order, saved rankings and heatmap
    python compare_layouts.py --layouts qwerty dvorak colemak --metrics effort same_finger_bigrams_pct roll_in_pct --rankings rankings.csv --output comparison.png

    # Layouts from a CSV table, scored on a text file
    python compare_layouts.py --layouts-csv layouts.csv --text-file sample.txt

Input format:
  --layouts-csv files need columns: layout,layout_qwerty
  (layout_qwerty is the layout string in QWERTY position order)

Rankings output:
  CSV with columns: layout, layout_qwerty, [metric values], [metric_ranks], total_rank_sum
  Layouts ordered by total rank sum (lower = better overall performance)
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd

from framework.cli_utils import configure_logging, handle_common_errors, validate_file_access
from framework.config_loader import DEFAULT_CONFIG_PATH, get_config_loader
from framework.data_utils import load_layouts_from_csv
from framework.layout_analyzer import HIGHER_IS_BETTER, METRIC_FIELDS
from framework.layout_utils import parse_layout_compare
from framework.output_utils import format_comparison_table, save_comparison_csv
from framework.text_utils import load_text_file
from framework.unified_scorer import LayoutComparison, normalize_metrics


logger = logging.getLogger(__name__)

DEFAULT_LAYOUTS = ['qwerty', 'dvorak', 'colemak', 'colemak-dh', 'workman']


def filter_and_order_metrics(requested_metrics: Optional[List[str]] = None) -> List[str]:
    """
    Return the metrics to compare, in the requested order.

    Raises:
        ValueError: If a requested metric does not exist
    """
    if not requested_metrics:
        return list(METRIC_FIELDS)

    unknown = [metric for metric in requested_metrics if metric not in METRIC_FIELDS]
    if unknown:
        raise ValueError(f"Unknown metrics: {unknown}. Available: {', '.join(METRIC_FIELDS)}")

    return list(dict.fromkeys(requested_metrics))


def create_heatmap_plot(table: pd.DataFrame, metrics: List[str], output_path: str) -> str:
    """
    Save a heatmap with layouts on the y-axis and metrics on the x-axis.

    Args:
        table: Rankings table (one row per layout, best first)
        metrics: Metric columns to plot
        output_path: Image path; '_heatmap' is added before a .png suffix

    Returns:
        Path the heatmap was written to
    """
    data_matrix = normalize_metrics(table, metrics)
    layout_names = [str(name) for name in table['layout']]

    fig, ax = plt.subplots(figsize=(max(12, len(metrics) * 0.8), max(6, len(layout_names) * 0.4)))

    im = ax.imshow(data_matrix, cmap='RdYlBu', aspect='auto', vmin=0, vmax=1)

    ax.set_xticks(range(len(metrics)))
    ax.set_yticks(range(len(layout_names)))
    ax.set_xticklabels([metric.replace('_', ' ').title() for metric in metrics],
                       rotation=45, ha='right', fontsize=9)
    ax.set_yticklabels(layout_names, fontsize=8)

    cbar = fig.colorbar(im, ax=ax, shrink=0.8)
    cbar.set_label('Normalized (0 = worst, 1 = best)', rotation=270, labelpad=20)

    # Annotate with raw values for smaller matrices
    if len(layout_names) <= 20 and len(metrics) <= 17:
        for i in range(len(layout_names)):
            for j, metric in enumerate(metrics):
                text_color = 'white' if data_matrix[i, j] < 0.25 or data_matrix[i, j] > 0.75 else 'black'
                ax.text(j, i, f'{table[metric].iloc[i]:.2f}', ha='center', va='center',
                        color=text_color, fontsize=7)

    higher = [m for m in metrics if m in HIGHER_IS_BETTER]
    subtitle = f"higher is better for: {', '.join(higher)}" if higher else "lower is better for all metrics"
    ax.set_title(f'Keyboard Layout Comparison (sorted by rank sum)\n'
                 f'{len(layout_names)} layouts across {len(metrics)} metrics; {subtitle}',
                 fontsize=12, fontweight='bold', pad=20)
    ax.set_xlabel('Metrics', fontsize=11)
    ax.set_ylabel('Keyboard Layouts', fontsize=11)

    fig.tight_layout()

    if output_path.endswith('.png'):
        heatmap_path = output_path.replace('.png', '_heatmap.png')
    else:
        heatmap_path = output_path + '_heatmap.png'
    fig.savefig(heatmap_path, dpi=300, bbox_inches='tight', facecolor='white', edgecolor='none')
    plt.close(fig)

    return heatmap_path


def collect_layouts(args: argparse.Namespace, extra_layouts: Dict[str, str]) -> Dict[str, Dict[str, str]]:
    """Layouts named on the command line and/or loaded from CSV."""
    layouts = {}
    if args.layouts_csv:
        layouts.update(load_layouts_from_csv(args.layouts_csv))
    if args.layouts:
        layouts.update(parse_layout_compare(args.layouts, extra_layouts))
    if not layouts:
        layouts = parse_layout_compare(DEFAULT_LAYOUTS, extra_layouts)
    return layouts


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Compare keyboard layouts across ergonomic metrics and rank them',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Built-in layouts
  python compare_layouts.py --layouts qwerty dvorak colemak

  # Rankings table and heatmap for selected metrics
  python compare_layouts.py --layouts qwerty dvorak --metrics effort distance --rankings rankings.csv --output comparison.png
        """
    )

    parser.add_argument('--layouts', nargs='+',
                        help="Layout names or 'name:layout_string' entries "
                             f"(default: {' '.join(DEFAULT_LAYOUTS)})")
    parser.add_argument('--layouts-csv',
                        help='CSV file with layout,layout_qwerty columns')

    text_sources = parser.add_mutually_exclusive_group()
    text_sources.add_argument('--text', help='Text to analyze (default: built-in English sample)')
    text_sources.add_argument('--text-file', help='Path to text file to analyze')

    parser.add_argument('--metrics', nargs='*',
                        help='Specific metrics to include (in order). If not specified, all metrics are used.')
    parser.add_argument('--rankings',
                        help='Save rankings table to CSV file (e.g., --rankings rankings.csv)')
    parser.add_argument('--output', '-o',
                        help='Heatmap image path (no plot is made without it)')
    parser.add_argument('--precision', type=int,
                        help='Decimal places for displayed metrics (default: from config)')
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH,
                        help=f'Path to configuration file (default: {DEFAULT_CONFIG_PATH})')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the comparison table')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print detailed information')

    return parser


@handle_common_errors
def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)

    config_loader = get_config_loader(args.config)
    logging_config = config_loader.get_logging_config()
    if args.verbose:
        logging_config['level'] = 'INFO'
    configure_logging(logging_config, args.quiet)

    precision = args.precision
    if precision is None:
        precision = config_loader.load_config().get('common', {}).get('precision', 2)

    metrics = filter_and_order_metrics(args.metrics)
    layouts = collect_layouts(args, config_loader.get_extra_layouts())

    text = None
    if args.text_file:
        text = load_text_file(args.text_file)
    elif args.text is not None:
        text = args.text
    else:
        corpus_file = config_loader.load_config().get('common', {}).get('corpus_file')
        if corpus_file:
            text = load_text_file(corpus_file)

    for path in (args.rankings, args.output):
        if path and not validate_file_access(path, 'w'):
            raise ValueError(f"Cannot write to {path}: directory does not exist")

    comparison = LayoutComparison(args.config)
    results = comparison.compare_layouts(layouts, text)
    table = comparison.rank_layouts(results, layouts, metrics)

    print(format_comparison_table(table, metrics, precision))

    if args.rankings:
        columns = ['layout', 'layout_qwerty'] + metrics + [f"{m}_rank" for m in metrics] + ['total_rank_sum']
        rankings = table[columns].round({metric: precision for metric in metrics})
        save_comparison_csv(rankings, args.rankings)
        if not args.quiet:
            print(f"\nRankings saved to {args.rankings}")

    if args.output:
        heatmap_path = create_heatmap_plot(table, metrics, args.output)
        if not args.quiet:
            print(f"Heatmap saved to {heatmap_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
