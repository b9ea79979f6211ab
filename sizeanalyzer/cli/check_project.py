"""check-project command implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from sizeanalyzer.analyzers.project_analyzer import ProjectAnalyzer
from sizeanalyzer.cli.terminal import TerminalReport
from sizeanalyzer.config.schema import AnalyzerConfig
from sizeanalyzer.parsers.base import RecoverableError

logger = logging.getLogger("sizeanalyzer.cli.check_project")


def check_project_command(
    args, config: AnalyzerConfig, console: Optional[Console] = None
) -> int:
    """Execute check-project command.

    Args:
        args: Parsed command-line arguments containing:
            - directory: Android Studio project directory
            - display_all: Print each suggestion, not only category totals
            - category: Category names to restrict the report to (optional)
        config: Analyzer configuration.
        console: Output console (optional).

    Returns:
        int: Exit code.
    """
    directory = Path(args.directory)
    if not directory.is_dir():
        logger.error("Project directory not found: %s", directory)
        return 1

    logger.debug("Checking project %s", directory.resolve())
    analyzer = ProjectAnalyzer.from_config(config)
    try:
        suggestions = analyzer.analyze(directory)
    except (OSError, RecoverableError) as exc:
        logger.error("Failed to analyze %s: %s", directory, exc)
        return 1

    logger.debug("Found %d suggestions", len(suggestions))
    TerminalReport(
        suggestions,
        categories=getattr(args, "category", None) or (),
        display_details=getattr(args, "display_all", False),
        console=console,
    ).display()
    return 0
