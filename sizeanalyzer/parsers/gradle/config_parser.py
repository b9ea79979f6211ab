"""Build-script configuration extraction.

Parses a Groovy ``build.gradle`` script and derives a :class:`ResolvedConfig`
without executing it: one walk over the parse tree with a
:class:`ScopeVisitor` feeding a fresh :class:`ConfigAccumulator`, then the
accumulator is frozen with the caller's inherited defaults.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Optional

from sizeanalyzer.parsers.gradle.accumulator import ConfigAccumulator
from sizeanalyzer.parsers.gradle.config_model import ResolvedConfig, ToolingVersion
from sizeanalyzer.parsers.gradle.grammar import GRADLE_PARSER
from sizeanalyzer.parsers.gradle.handler import PropertyAssignmentHandler
from sizeanalyzer.parsers.gradle.nodes import Node
from sizeanalyzer.parsers.gradle.scope import ScopeChain, ScopeVisitor

log = logging.getLogger("sizeanalyzer.parsers.gradle.config_parser")


def assemble(
    accumulator: ConfigAccumulator,
    default_min_sdk_version: int = 1,
    default_tooling_version: Optional[ToolingVersion] = None,
) -> ResolvedConfig:
    """Freeze the accumulator, filling gaps from the inherited defaults."""
    candidate = accumulator.min_sdk_candidate
    min_sdk_version = (
        candidate if candidate is not None and candidate > 0 else default_min_sdk_version
    )
    return ResolvedConfig(
        min_sdk_version=min_sdk_version,
        plugin_kind=accumulator.plugin_kind,
        tooling_version=accumulator.tooling_version or default_tooling_version,
        proguard_configs=MappingProxyType(dict(accumulator.proguard_configs)),
        bundle_split_config=accumulator.bundle_split_config,
    )


def extract_from_tree(
    tree: Node,
    source: str,
    default_min_sdk_version: int = 1,
    default_tooling_version: Optional[ToolingVersion] = None,
) -> ResolvedConfig:
    """Extract the configuration from an already parsed script.

    Args:
        tree: Root node returned by ``GRADLE_PARSER.parse(source)``.
        source: The script text the tree was parsed from.
        default_min_sdk_version: Used when the script declares no positive
            ``minSdkVersion``.
        default_tooling_version: Used when the script declares no Android
            Gradle plugin classpath.

    Returns:
        ResolvedConfig: Read-only configuration record.
    """
    accumulator = ConfigAccumulator()
    visitor = ScopeVisitor(source, PropertyAssignmentHandler(accumulator))
    visitor.visit(tree, ScopeChain())
    config = assemble(accumulator, default_min_sdk_version, default_tooling_version)
    log.debug(
        "Extracted minSdkVersion=%d plugin=%s tooling=%s build types=%s",
        config.min_sdk_version,
        config.plugin_kind.value,
        config.tooling_version,
        sorted(config.proguard_configs),
    )
    return config


def extract_config(
    source: str,
    default_min_sdk_version: int = 1,
    default_tooling_version: Optional[ToolingVersion] = None,
) -> ResolvedConfig:
    """Parse ``source`` and extract its configuration.

    Raises:
        GradleParseError: If the script cannot be parsed.
    """
    tree = GRADLE_PARSER.parse(source)
    return extract_from_tree(
        tree, source, default_min_sdk_version, default_tooling_version
    )


__all__ = ["assemble", "extract_from_tree", "extract_config"]
