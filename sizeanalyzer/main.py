"""Main CLI entry point for sizeanalyzer.

Provides commands: check-project, gradle-config
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from sizeanalyzer.cli.check_project import check_project_command
from sizeanalyzer.cli.gradle_config import gradle_config_command
from sizeanalyzer.config.loader import load_analyzer_config
from sizeanalyzer.parsers.base import ConfigurationError
from sizeanalyzer.parsers.gradle import ToolingVersion
from sizeanalyzer.suggesters.base import Category

logger = logging.getLogger("sizeanalyzer.cli")


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
        console=console,
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
    )


def _tooling_version(value: str) -> ToolingVersion:
    version = ToolingVersion.parse(value)
    if version is None:
        raise argparse.ArgumentTypeError(
            f"invalid plugin version {value!r}, expected major.minor.patch"
        )
    return version


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sizeanalyzer - Android app size reduction suggestions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--config",
        help=(
            "Optional analyzer configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. When omitted, built-in "
            "defaults are used."
        ),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser(
        "check-project",
        help="Check an Android Studio project directory for size savings",
    )
    check_parser.add_argument(
        "directory",
        help="Android Studio project directory",
    )
    check_parser.add_argument(
        "-d",
        "--display-all",
        action="store_true",
        help=(
            "Display each individual suggestion within a category. "
            "By default only the category summary is displayed."
        ),
    )
    check_parser.add_argument(
        "-c",
        "--category",
        action="append",
        choices=[category.value for category in Category],
        help="Display only suggestions of this category (repeatable)",
    )

    gradle_parser = subparsers.add_parser(
        "gradle-config",
        help="Print the configuration extracted from a build.gradle script as JSON",
    )
    gradle_parser.add_argument(
        "build_file",
        help="Path to a build.gradle script",
    )
    gradle_parser.add_argument(
        "--min-sdk",
        type=_positive_int,
        help="Minimum SDK inherited from a parent project (default: from config)",
    )
    gradle_parser.add_argument(
        "--tooling-version",
        type=_tooling_version,
        help="Android Gradle plugin version inherited from a parent project",
    )
    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_analyzer_config(args.config)
    except ConfigurationError as exc:
        logger.error(str(exc))
        return 1

    if args.command == "check-project":
        return check_project_command(args, config)
    elif args.command == "gradle-config":
        return gradle_config_command(args, config)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
