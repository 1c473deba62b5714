#!/usr/bin/env python3
"""
CLI utilities for keyboard layout analysis.

Common functions for command-line argument parsing, help text generation,
logging setup and standardized CLI interfaces across scripts.
"""

import argparse
import functools
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from framework.config_loader import DEFAULT_CONFIG_PATH, get_config_loader
from framework.data_utils import load_layout_json
from framework.layout_utils import (BUILTIN_LAYOUTS, get_builtin_layout, layout_from_letters_positions,
                                    layout_from_qwerty_string)


logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ['detailed', 'csv', 'score_only']


class StandardCLIParser:
    """
    Standardized command-line argument parser for layout analysis scripts.

    Provides consistent argument handling and help text across scripts.
    """

    def __init__(self, scorer_name: str, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize the CLI parser for a specific scorer.

        Args:
            scorer_name: Name of the scorer section in configuration (e.g., 'ergonomics_analyzer')
            config_path: Path to configuration file
        """
        self.scorer_name = scorer_name

        try:
            self.scorer_config = get_config_loader(config_path).get_scorer_config(scorer_name)
        except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
            logger.warning(f"Could not load configuration: {e}")
            self.scorer_config = {}

        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser with standard arguments."""
        description = self.scorer_config.get('description', f'{self.scorer_name} for keyboard layouts')
        method = self.scorer_config.get('method', 'Keyboard layout analysis')

        parser = argparse.ArgumentParser(
            description=f"{description}\n\nMethod: {method}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._generate_epilog()
        )

        self._add_layout_arguments(parser)
        self._add_input_output_arguments(parser)

        return parser

    def _add_layout_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add mutually exclusive layout definition arguments (default: QWERTY)."""
        layout_group = parser.add_argument_group('Layout Definition')
        sources = layout_group.add_mutually_exclusive_group()

        sources.add_argument(
            '--layout',
            dest='layout',
            help=f"Named layout ({', '.join(BUILTIN_LAYOUTS)} or one defined in config)"
        )
        sources.add_argument(
            '--layout-string',
            dest='layout_string',
            help="Layout characters in QWERTY position order (qwertyuiopasdfghjkl;zxcvbnm,./)"
        )
        sources.add_argument(
            '--letters', '--layout-letters',
            dest='letters',
            help="String of characters in the layout (e.g., 'etaoinshrlcu'); requires --positions"
        )
        sources.add_argument(
            '--layout-file',
            dest='layout_file',
            help="JSON file with a position -> character mapping"
        )

        layout_group.add_argument(
            '--positions', '--layout-positions', '--qwerty-keys',
            dest='positions',
            help="String of corresponding QWERTY positions (e.g., 'FDESGJWXRTYZ')"
        )

    def _add_input_output_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add standard input and output arguments."""
        input_group = parser.add_argument_group('Input Options')

        text_sources = input_group.add_mutually_exclusive_group()
        text_sources.add_argument(
            '--text',
            dest='text',
            help="Text to analyze (default: built-in English sample)"
        )
        text_sources.add_argument(
            '--text-file',
            dest='text_file',
            help="Path to text file to analyze"
        )

        input_group.add_argument(
            '--config',
            dest='config',
            default=DEFAULT_CONFIG_PATH,
            help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})"
        )

        output_group = parser.add_argument_group('Output Options')

        output_group.add_argument(
            '--output-format',
            dest='output_format',
            choices=OUTPUT_FORMATS,
            default='detailed',
            help="Output format (default: detailed)"
        )
        output_group.add_argument(
            '--csv',
            dest='csv',
            action='store_true',
            help="Output in CSV format (same as --output-format csv)"
        )
        output_group.add_argument(
            '--detailed',
            dest='detailed',
            action='store_true',
            help="Detailed output (same as --output-format detailed)"
        )
        output_group.add_argument(
            '--score-only',
            dest='score_only',
            action='store_true',
            help="Output only scores (same as --output-format score_only)"
        )
        output_group.add_argument(
            '--breakdown',
            dest='breakdown',
            action='store_true',
            help="Include usage distributions and worst bigrams in detailed output"
        )
        output_group.add_argument(
            '--precision',
            dest='precision',
            type=int,
            help="Decimal places for displayed metrics (default: from config)"
        )
        output_group.add_argument(
            '--quiet',
            dest='quiet',
            action='store_true',
            help="Suppress warnings"
        )

    def _generate_epilog(self) -> str:
        """Generate epilog text with examples."""
        basic_cmd = f"python {self.scorer_name}.py --layout dvorak"

        lines = [
            "Examples:",
            "  # Basic analysis",
            f"  {basic_cmd}",
            "",
            "  # Custom text",
            f"  {basic_cmd} --text 'the quick brown fox'",
            "",
            "  # CSV output",
            f"  {basic_cmd} --csv",
            "",
        ]
        return "\n".join(lines)

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments with validation.

        Args:
            args: List of arguments (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        parsed_args = self.parser.parse_args(args)
        parsed_args.output_format = determine_output_mode(parsed_args)

        if bool(parsed_args.letters) != bool(parsed_args.positions):
            self.parser.error("--letters and --positions must be given together")

        if parsed_args.precision is not None and parsed_args.precision < 0:
            self.parser.error("--precision must be zero or positive")

        return parsed_args


def create_standard_parser(scorer_name: str,
                           config_path: str = DEFAULT_CONFIG_PATH) -> StandardCLIParser:
    """
    Create a standardized CLI parser for a scorer.

    Args:
        scorer_name: Name of the scorer
        config_path: Path to configuration file
    """
    return StandardCLIParser(scorer_name, config_path)


def handle_common_errors(func):
    """
    Decorator to handle common CLI errors gracefully.

    Args:
        func: Function to wrap (typically main())

    Returns:
        Wrapped function returning a process exit code
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user.", file=sys.stderr)
            return 130
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except (ValueError, json.JSONDecodeError, yaml.YAMLError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except PermissionError as e:
            print(f"Permission error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            traceback.print_exc()
            return 1

    return wrapper


def configure_logging(logging_config: Optional[Dict[str, Any]] = None, quiet: bool = False) -> None:
    """
    Configure root logging from the 'logging' configuration section.

    Args:
        logging_config: Dict with 'level' and 'format'
        quiet: Only show errors
    """
    logging_config = logging_config or {}
    level_name = 'ERROR' if quiet else str(logging_config.get('level', 'WARNING')).upper()
    level = getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(
        level=level,
        format=logging_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    )


def get_layout_from_args(args: argparse.Namespace,
                         extra_layouts: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Build a layout mapping from whichever layout argument was given.

    Args:
        args: Parsed command-line arguments
        extra_layouts: Named layouts from configuration

    Returns:
        Position -> character mapping; empty for QWERTY

    Raises:
        ValueError: For unknown layout names or malformed layout strings
        FileNotFoundError: If --layout-file does not exist
    """
    if getattr(args, 'layout_file', None):
        return load_layout_json(args.layout_file)

    if getattr(args, 'layout_string', None):
        return layout_from_qwerty_string(args.layout_string)

    letters = getattr(args, 'letters', None)
    positions = getattr(args, 'positions', None)
    if letters or positions:
        if not letters or not positions:
            raise ValueError("Layout letters and positions must both be specified")
        return layout_from_letters_positions(letters, positions)

    if getattr(args, 'layout', None):
        return get_builtin_layout(args.layout, extra_layouts)

    return {}


def determine_output_mode(args: argparse.Namespace) -> str:
    """
    Determine the output mode from parsed arguments.

    Shortcut flags take precedence over --output-format.

    Returns:
        Output mode string ('csv', 'detailed', 'score_only')
    """
    if getattr(args, 'csv', False):
        return 'csv'
    if getattr(args, 'score_only', False):
        return 'score_only'
    if getattr(args, 'detailed', False):
        return 'detailed'

    return getattr(args, 'output_format', None) or 'detailed'


def validate_file_access(filepath: str, mode: str = 'r') -> bool:
    """
    Check that a file can be read, or that its directory exists for writing.

    Args:
        filepath: Path to file to check
        mode: Access mode ('r', 'w', 'a')
    """
    path = Path(filepath)
    if mode == 'r':
        return path.is_file()
    if mode in ('w', 'a'):
        parent = path.parent
        return parent.exists() and parent.is_dir()
    return False
