"""gradle-config command implementation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from sizeanalyzer.config.schema import AnalyzerConfig
from sizeanalyzer.parsers.base import GradleParseError
from sizeanalyzer.parsers.gradle import ToolingVersion, extract_config

logger = logging.getLogger("sizeanalyzer.cli.gradle_config")


def gradle_config_command(
    args, config: AnalyzerConfig, console: Optional[Console] = None
) -> int:
    """Print the configuration extracted from one build script as JSON.

    Args:
        args: Parsed command-line arguments containing:
            - build_file: Path to the ``build.gradle`` script
            - min_sdk: Inherited minimum SDK (optional)
            - tooling_version: Inherited plugin version (optional)
        config: Analyzer configuration supplying the default minimum SDK.
        console: Output console (optional).

    Returns:
        int: Exit code (1 when the script cannot be read or parsed).
    """
    console = console or Console()
    build_file = Path(args.build_file)
    try:
        source = build_file.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.error("Failed to read %s: %s", build_file, exc)
        return 1

    min_sdk = getattr(args, "min_sdk", None) or config.project.default_min_sdk_version
    tooling: Optional[ToolingVersion] = getattr(args, "tooling_version", None)
    try:
        resolved = extract_config(source, min_sdk, tooling)
    except GradleParseError as exc:
        logger.error("Failed to parse %s: %s", build_file, exc)
        return 1

    console.print_json(json.dumps(resolved.to_dict()))
    return 0
