#!/usr/bin/env python3
"""
Ergonomics Analyzer for scoring keyboard layouts.

(c) Arno Klein (arnoklein.info), MIT License (see LICENSE)

Simulate typing a corpus on a keyboard layout and measure how hard it is on the hands:

  - **Effort**: per-key base effort by finger and row, plus a transition effort for
    every bigram (same-finger, skip, lateral stretch, scissors and alternation multipliers)
  - **Distance**: each finger moves from the last key it typed, starting on its home key
  - **Bigram metrics**: same-finger bigrams, skip bigrams, lateral stretches, scissors,
    two-row jumps
  - **Trigram metrics**: alternation, redirects, inward and outward rolls
  - **Center columns**: share of keystrokes on the T/G/B and Y/H/N columns

Every metric is lower-is-better except trigram alternation and rolls.

Usage:

  # QWERTY on the built-in English sample
  python ergonomics_analyzer.py

  # A named layout
  python ergonomics_analyzer.py --layout colemak

  # A layout string in QWERTY position order
  python ergonomics_analyzer.py --layout-string "',.pyfgcrlaoeuidhtns;qjkxbmwvz"

  # Letters placed at QWERTY positions, scored on a text file
  python ergonomics_analyzer.py --letters "etaoinshrlcu" --positions "FDESGJWXRTYZ" --text-file sample.txt

  # CSV output
  python ergonomics_analyzer.py --layout dvorak --text "hello world" --csv

  # Score only
  python ergonomics_analyzer.py --layout dvorak --score-only
"""

import logging
import sys
from typing import Any, Dict, List, Optional

from framework.base_scorer import BaseLayoutScorer, ScoreResult
from framework.cli_utils import (configure_logging, create_standard_parser, get_layout_from_args,
                                 handle_common_errors)
from framework.config_loader import get_config_loader
from framework.layout_analyzer import AnalysisResult, analyze
from framework.layout_utils import get_hand_distribution
from framework.output_utils import print_results
from framework.text_utils import clean_corpus, load_text_file, validate_text_input


logger = logging.getLogger(__name__)

SCORER_NAME = 'ergonomics_analyzer'


class ErgonomicsScorer(BaseLayoutScorer):
    """
    Layout scorer reporting the ergonomic metrics of a layout on a corpus.

    The primary score is effort (lower = better); all 17 metrics are
    returned as components.
    """

    def __init__(self, layout_mapping: Optional[Dict[str, str]], config: Optional[Dict[str, Any]] = None):
        super().__init__(layout_mapping, config)
        scoring_options = self.config.get('scoring_options', {})
        self.include_breakdown = scoring_options.get('include_breakdown', True)
        self.top_bigrams = scoring_options.get('top_bigrams', 10)
        self.precision = self.config.get('precision', 2)
        self.text: Optional[str] = self.config.get('text')
        self.analysis: Optional[AnalysisResult] = None

    def load_data_files(self) -> None:
        """Load the corpus file named in configuration, unless text was given directly."""
        corpus_file = self.config.get('corpus_file')
        if self.text is None and corpus_file:
            logger.info(f"Loading corpus from {corpus_file}")
            self.text = load_text_file(corpus_file)

    def _report_text_issues(self) -> List[str]:
        if self.text is None:
            return []
        issues = validate_text_input(self.text)
        for issue in issues:
            if self.config.get('quiet_mode', False):
                logger.debug(f"Text validation: {issue}")
            else:
                logger.warning(f"Text validation: {issue}")
        return issues

    def calculate_scores(self) -> ScoreResult:
        """
        Analyze the layout and package the metrics as a ScoreResult.

        Returns:
            ScoreResult with effort as primary score and the rounded metrics as components
        """
        text_issues = self._report_text_issues()

        self.analysis = analyze(self.layout_mapping, self.text,
                                include_breakdown=self.include_breakdown,
                                top_bigrams=self.top_bigrams)
        components = self.analysis.to_dict(self.precision)
        left_letters, right_letters = get_hand_distribution(self.layout_mapping)

        return ScoreResult(
            primary_score=components['effort'],
            components=components,
            metadata={
                'corpus': 'custom' if self.text is not None else 'default',
                'corpus_letters': len(clean_corpus(self.text)) if self.text is not None else None,
                'left_hand_letters': left_letters,
                'right_hand_letters': right_letters,
                'precision': self.precision,
                'description': 'Effort, travel, bigram and trigram ergonomics from a simulated typing pass',
            },
            validation_info={
                'text_issues': len(text_issues),
            },
            detailed_breakdown=dict(self.analysis.breakdown),
        )


def _read_text_argument(args) -> Optional[str]:
    """Corpus text from --text or --text-file (None = use configuration/default)."""
    if args.text_file:
        return load_text_file(args.text_file)
    return args.text


@handle_common_errors
def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point using the standardized framework."""

    cli_parser = create_standard_parser(SCORER_NAME)
    args = cli_parser.parse_args(argv)

    config_loader = get_config_loader(args.config)
    configure_logging(config_loader.get_logging_config(), args.quiet)

    config = config_loader.get_scorer_config(SCORER_NAME)
    config['quiet_mode'] = args.quiet
    if args.precision is not None:
        config['precision'] = args.precision

    text = _read_text_argument(args)
    if text is not None:
        config['text'] = text

    layout_mapping = get_layout_from_args(args, config_loader.get_extra_layouts())

    scorer = ErgonomicsScorer(layout_mapping, config)
    result = scorer.score_layout()

    output_format = args.output_format
    output_config = dict(config.get('output_formats', {}).get(output_format, {}))
    if args.precision is not None:
        output_config['precision'] = args.precision
    if args.breakdown:
        output_config['show_breakdown'] = True

    print_results(result, output_format, output_config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
