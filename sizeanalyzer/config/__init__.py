"""Analyzer configuration."""

from sizeanalyzer.config.loader import load_analyzer_config
from sizeanalyzer.config.schema import AnalyzerConfig, ProjectConfig, SuggesterConfig

__all__ = [
    "AnalyzerConfig",
    "ProjectConfig",
    "SuggesterConfig",
    "load_analyzer_config",
]
