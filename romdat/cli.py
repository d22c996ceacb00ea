"""Command-line interface for romdat."""

import sys
import logging
import argparse
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

from romdat import __version__
from romdat import clrmamepro, logiqx
from romdat.config.loader import load_config, get_config_value, ConfigError
from romdat.config.validator import validate_config, ValidationError

FORMATS = ['clrmamepro', 'logiqx']


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='romdat',
        description='Read, write and convert ROM management DAT files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a ClrMamePro DAT to Logiqx XML
  romdat convert games.dat games.xml --to logiqx

  # Rewrite a ClrMamePro DAT without quoted values
  romdat convert games.dat clean.dat --no-quotes

  # Summarize a DAT
  romdat info games.dat
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to romdat.yaml (default: ./romdat.yaml if present)'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    convert = subparsers.add_parser(
        'convert', parents=[common], help='Convert a DAT between formats'
    )
    convert.add_argument('input', type=Path, help='Input DAT file')
    convert.add_argument('output', type=Path, help='Output DAT file')
    convert.add_argument(
        '--from',
        dest='input_format',
        choices=FORMATS,
        help='Input format (default: logiqx for .xml files, clrmamepro otherwise)'
    )
    convert.add_argument(
        '--to',
        dest='output_format',
        choices=FORMATS,
        help='Output format. Overrides config.'
    )
    convert.add_argument(
        '--game-element',
        choices=['game', 'machine'],
        help='Element name written for each game. Overrides config.'
    )
    _add_quotes_argument(convert)

    info = subparsers.add_parser('info', parents=[common], help='Summarize a ClrMamePro DAT')
    info.add_argument('input', type=Path, help='Input DAT file')
    _add_quotes_argument(info)

    return parser


def _add_quotes_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--quotes',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Whether ClrMamePro values are double-quoted. Overrides config.'
    )


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging', {})

    # Get log level
    level_str = logging_config.get('level', 'INFO').upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    # File handler (if configured)
    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file)
            # Create parent directory if it doesn't exist
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except OSError as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    # Configure root logger
    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def detect_format(path: Path) -> str:
    """Guess a DAT format from its file extension."""
    return 'logiqx' if path.suffix.lower() == '.xml' else 'clrmamepro'


def _resolve_quotes(args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    if args.quotes is not None:
        return args.quotes
    return get_config_value(config, 'clrmamepro.quotes', True)


def run_convert(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """
    Convert a DAT between formats through the internal model.

    Returns:
        Exit code
    """
    quotes = _resolve_quotes(args, config)
    input_format = args.input_format or detect_format(args.input)
    output_format = args.output_format or get_config_value(config, 'output.format', 'clrmamepro')
    game_element = args.game_element or get_config_value(config, 'output.game_element', 'game')

    logger.info(f"Converting {args.input} ({input_format}) -> {args.output} ({output_format})")

    if input_format == 'logiqx':
        document = logiqx.deserialize(args.input)
    else:
        parsed = clrmamepro.deserialize(args.input, quotes=quotes)
        if parsed is None:
            print(f"Error: Could not read {args.input}", file=sys.stderr)
            return 1
        document = clrmamepro.to_internal(parsed)

    if output_format == 'logiqx':
        logiqx.serialize_to_file(document, args.output, game_element=game_element)
    else:
        records = clrmamepro.from_internal(document, game=(game_element == 'game'))
        clrmamepro.serialize_to_file(records, args.output, quotes=quotes)

    return 0


def run_info(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """
    Print a summary of a ClrMamePro DAT.

    Returns:
        Exit code
    """
    quotes = _resolve_quotes(args, config)
    document = clrmamepro.deserialize(args.input, quotes=quotes)
    if document is None:
        print(f"Error: Could not read {args.input}", file=sys.stderr)
        return 1

    for line in summarize(document):
        print(line)
    return 0


def summarize(document: clrmamepro.MetadataFile) -> list:
    """
    Describe a parsed ClrMamePro document.

    Returns:
        Report lines: header name, block counts, item counts and the number
        of preserved unrecognized lines
    """
    header = document.clrmamepro
    lines = [f"Name: {header.name if header and header.name else '(none)'}"]

    variants = Counter(game.variant.value for game in document.game)
    lines.append(f"Blocks: {len(document.game)}")
    for variant, count in sorted(variants.items()):
        lines.append(f"  {variant}: {count}")

    items = Counter()
    for game in document.game:
        for keyword in clrmamepro.models.ITEM_TYPES:
            value = getattr(game, keyword)
            if isinstance(value, list):
                items[keyword] += len(value)
            elif value is not None:
                items[keyword] += 1

    lines.append(f"Items: {sum(items.values())}")
    for keyword in clrmamepro.models.ITEM_TYPES:
        if items[keyword]:
            lines.append(f"  {keyword}: {items[keyword]}")

    additional = len(document.additional_elements)
    if header is not None:
        additional += len(header.additional_elements)
    for game in document.game:
        additional += len(game.additional_elements)
        for keyword in clrmamepro.models.ITEM_TYPES:
            value = getattr(game, keyword)
            for item in (value if isinstance(value, list) else [value]):
                if item is not None:
                    additional += len(item.additional_elements)
    lines.append(f"Unrecognized entries preserved: {additional}")

    return lines


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for romdat CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load and validate configuration
    try:
        config = load_config(args.config)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config)

    try:
        if args.command == 'convert':
            return run_convert(args, config)
        return run_info(args, config)
    except clrmamepro.RequiredFieldMissingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except logiqx.LogiqxError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
