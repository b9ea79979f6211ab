"""Groovy ``build.gradle`` configuration extraction."""

from sizeanalyzer.parsers.gradle.config_model import (
    DEFAULT_BUILD_TYPE,
    BundleSplitConfig,
    PluginKind,
    ProguardConfig,
    ResolvedConfig,
    ToolingVersion,
)
from sizeanalyzer.parsers.gradle.config_parser import extract_config, extract_from_tree
from sizeanalyzer.parsers.gradle.grammar import GRADLE_PARSER, GradleScriptParser

__all__ = [
    "DEFAULT_BUILD_TYPE",
    "BundleSplitConfig",
    "PluginKind",
    "ProguardConfig",
    "ResolvedConfig",
    "ToolingVersion",
    "extract_config",
    "extract_from_tree",
    "GRADLE_PARSER",
    "GradleScriptParser",
]
