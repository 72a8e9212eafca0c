"""
Command line entry point.

    mkcallable [--output PATH] [--export] [--extended] [--config FILE]
               [--log-level LEVEL] [--no-format] FILE...
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .generator import CallableGenerator
from .utils.config import MkcallableConfig
from .utils.exceptions import FormatError, MkcallableError
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mkcallable",
        description="Generate ugo callable wrappers from //ugo:callable directives.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Go source files to scan")
    parser.add_argument("--output", "-o", metavar="PATH", help="output file, stdout if omitted")
    parser.add_argument(
        "--export",
        action="store_true",
        default=None,
        help="synthesize exported names for func placeholders",
    )
    parser.add_argument(
        "--extended",
        action="store_true",
        default=None,
        help="generate only CallableExFunc wrappers",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging level",
    )
    parser.add_argument(
        "--no-format",
        action="store_false",
        dest="format_enabled",
        default=None,
        help="skip gofmt and print the raw text",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the generator; exits with status 1 on failure."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.files:
        parser.print_usage(sys.stderr)
        sys.exit(1)

    try:
        config = MkcallableConfig(args.config).apply_overrides(
            output=args.output,
            export=args.export,
            extended_only=args.extended,
            format_enabled=args.format_enabled,
            log_level=args.log_level,
        )
        setup_logging(config.logging.level, config.logging.log_file)
        CallableGenerator(config).run(args.files)
    except FormatError as e:
        logger.error(str(e))
        located = e.get_formatter_errors()
        for line in located:
            logger.error(line)
        if not located and e.formatter_output:
            sys.stderr.write(e.formatter_output)
        sys.stderr.write(e.raw_source)
        sys.exit(1)
    except (MkcallableError, OSError) as e:
        logger.error(str(e))
        sys.exit(1)

    return 0


if __name__ == "__main__":
    main()
