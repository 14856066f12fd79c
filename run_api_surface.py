#!/usr/bin/env python3
"""
Print the public API surface of Kotlin sources.

Walks a file or directory, parses every Kotlin file and prints the public
declarations of each one with implementation bodies elided.

Usage:
    python run_api_surface.py path/to/project
    python run_api_surface.py src/main/kotlin/Main.kt --log-level INFO
    python run_api_surface.py path/to/project --strict
"""

import argparse
import logging
import sys
from typing import List, Optional

from apisurface.config import USAGE
from common.errors import SurfaceError
from common.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command-line parser.

    The path is collected with ``nargs="*"`` so that a wrong argument count
    is reported with the usage line instead of an argparse error exit.
    """
    parser = argparse.ArgumentParser(
        description="Kotlin public API surface printer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_api_surface.py ./src\n"
            "  python run_api_surface.py ./src --strict --log-level INFO\n"
        ),
    )

    parser.add_argument(
        "paths",
        nargs="*",
        help="Kotlin file or directory to walk (exactly one).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for stderr diagnostics. Default: WARNING",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Abort on files whose syntax tree contains error nodes.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Process exit code: 0 on success or usage error, 1 when the run was
        aborted by a failure.
    """
    args = build_arg_parser().parse_args(argv)

    if len(args.paths) != 1:
        print(USAGE)
        return 0

    configure_structured_logging(getattr(logging, args.log_level))
    run_id = set_run_id()
    logger.info("Starting run %s for %s", run_id, args.paths[0])

    from apisurface.extractor import process_path

    try:
        stats = process_path(args.paths[0], strict=args.strict)
    except FileNotFoundError as e:
        logger.error("File error: %s", e)
        return 1
    except SurfaceError as e:
        logger.error("Run aborted: %s", e)
        return 1

    logger.info("Finished: %s", stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
