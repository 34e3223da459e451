"""Main CLI entry point for pkglicense.

Scans the project for package.json files, checks dependency licenses
against an optional allow-list, and writes or verifies the license
snapshot.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from pkglicense import __version__
from pkglicense.cli.check import check_command

logger = logging.getLogger("pkglicense.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pkglicense",
        description="pkglicense - Package License Checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-a",
        "--allowOnly",
        dest="allow_only",
        metavar="FILE",
        help="JSON file with a list of allowed license patterns (case-insensitive regular expressions)",
    )
    parser.add_argument(
        "-t",
        "--target",
        metavar="FILE",
        help="Output filename for the license snapshot (default: package-license.json)",
    )
    parser.add_argument(
        "-e",
        "--excluded",
        metavar="FILE",
        help="JSON file with a list of package names exempt from the allow-list",
    )
    parser.add_argument(
        "-c",
        "--ci",
        nargs="?",
        const="true",
        default=None,
        metavar="BOOL",
        help="Verify the existing snapshot instead of writing it; fails when it differs",
    )
    parser.add_argument(
        "-d",
        "--direct",
        default=None,
        metavar="BOOL",
        help="Only inspect direct dependencies (default: true); pass false for the full dependency tree",
    )
    parser.add_argument(
        "-r",
        "--root",
        metavar="DIR",
        help="Project root to scan (default: current directory)",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help=(
            "Optional TOML/JSON settings file (keys: allow_only, excluded, target, "
            "ci, direct, include_dev, skip_dirs, max_depth). A pyproject.toml is "
            "read from its [tool.pkglicense] table. Flags take precedence."
        ),
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Also inspect devDependencies",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        return check_command(args)
    except KeyboardInterrupt:
        logger.warning("License check interrupted by user (Ctrl+C)")
        return 130


if __name__ == "__main__":
    sys.exit(main())
