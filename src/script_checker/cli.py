#!/usr/bin/env python3
"""
Command-line interface for the script checker.

Usage:
    ygo-script-check                       # scan the current directory
    ygo-script-check script/ expansions/   # scan several folders
    python -m script_checker --core ./libocgcore.so --verbose script/
"""

import argparse
import logging
import sys
from typing import List, Optional

from .checker import check_scripts
from .config import CheckerSettings
from .engine.core import load_core
from .errors import CheckerError
from .sentry_config import init_sentry, report_fatal, report_validation_failure
from .types import ValidationStatus

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ygo-script-check",
        description="Load every card script in the given folders into ygopro-core "
                    "and report parse errors",
    )
    parser.add_argument("folders", nargs="*", help="Script folders (default: current directory)")
    parser.add_argument("--core", type=str, default=None,
                        help="Path to the ocgcore shared library (default: ./libocgcore.*)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = CheckerSettings.from_env()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(message)s",
        stream=sys.stderr,
    )
    if settings.rejected_log_level:
        logger.warning(f"Unknown LOG_LEVEL {settings.rejected_log_level!r}, using {settings.log_level}")
    sentry_enabled = init_sentry(settings)

    if args.folders:
        for folder in args.folders:
            logger.info(f"Passed script folder {folder}")
    else:
        logger.info("No folder passed, using the current directory")

    core_path = args.core or settings.core_path
    try:
        status = check_scripts(args.folders, lambda: load_core(core_path))
    except CheckerError as e:
        logger.error(str(e))
        if sentry_enabled:
            report_fatal(e)
        return 1

    if status is ValidationStatus.FAILURE and sentry_enabled:
        report_validation_failure(args.folders or ["."])
    return status.exit_code


if __name__ == "__main__":
    sys.exit(main())
