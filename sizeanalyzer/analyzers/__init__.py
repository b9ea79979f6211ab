"""Project tree analysis."""

from sizeanalyzer.analyzers.project_analyzer import ProjectAnalyzer

__all__ = ["ProjectAnalyzer"]
