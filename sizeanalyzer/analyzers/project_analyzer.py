"""Walks an Android Studio project directory and collects suggestions.

Every directory holding a build script becomes a project whose context
inherits from the nearest enclosing project. Project suggesters run once per
project, tree suggesters once per file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from sizeanalyzer.config.schema import AnalyzerConfig
from sizeanalyzer.model.context import GradleContext
from sizeanalyzer.model.file_data import FileData
from sizeanalyzer.model.project import Project
from sizeanalyzer.parsers.base import RecoverableError
from sizeanalyzer.suggesters.base import (
    ProjectSuggester,
    ProjectTreeSuggester,
    Suggestion,
)
from sizeanalyzer.suggesters.bundle_split import BundleSplitSuggester
from sizeanalyzer.suggesters.large_files import LargeFilesSuggester
from sizeanalyzer.suggesters.proguard import ProguardSuggester
from sizeanalyzer.suggesters.questionable_files import QuestionableFilesSuggester

logger = logging.getLogger("sizeanalyzer.analyzers.project_analyzer")


class ProjectAnalyzer:
    """Applies project and tree suggesters across a project directory."""

    def __init__(
        self,
        project_suggesters: Sequence[ProjectSuggester],
        tree_suggesters: Sequence[ProjectTreeSuggester],
        config: Optional[AnalyzerConfig] = None,
    ) -> None:
        self.project_suggesters = list(project_suggesters)
        self.tree_suggesters = list(tree_suggesters)
        self.config = config or AnalyzerConfig.default()

    @classmethod
    def from_config(cls, config: Optional[AnalyzerConfig] = None) -> "ProjectAnalyzer":
        """Analyzer with the standard set of suggesters."""
        config = config or AnalyzerConfig.default()
        thresholds = config.suggesters
        return cls(
            project_suggesters=[
                ProguardSuggester(),
                BundleSplitSuggester(thresholds.bundle_plugin_version),
            ],
            tree_suggesters=[
                LargeFilesSuggester(thresholds.large_file_threshold),
                QuestionableFilesSuggester(thresholds.questionable_file_threshold),
            ],
            config=config,
        )

    def analyze(self, root: Path) -> List[Suggestion]:
        """Analyze the project directory ``root``."""
        root = Path(root)
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        project = self._create_project(root, None)
        return self._analyze_project(root, project, root)

    def _create_project(self, directory: Path, parent: Optional[Project]) -> Optional[Project]:
        build_file = directory / self.config.project.build_file_name
        if not build_file.is_file():
            return None
        try:
            return Project.create(directory, parent, self.config.project)
        except RecoverableError as exc:
            logger.warning("Skipping project %s: %s - treating as plain directory", build_file, exc)
            return None

    def _analyze_project(
        self, root: Path, project: Optional[Project], directory: Path
    ) -> List[Suggestion]:
        suggestions: List[Suggestion] = []
        if project is not None:
            for suggester in self.project_suggesters:
                suggestions.extend(
                    suggester.process_project(project.context, project.directory)
                )
        suggestions.extend(self._analyze_directory(root, project, directory))
        return suggestions

    def _analyze_directory(
        self, root: Path, project: Optional[Project], directory: Path
    ) -> List[Suggestion]:
        suggestions: List[Suggestion] = []
        ignored = set(self.config.project.ignored_directories)
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            logger.warning("Failed to list %s: %s", directory, exc)
            return suggestions

        for entry in entries:
            if entry.name in ignored:
                continue
            if entry.is_dir():
                sub_project = self._create_project(entry, project)
                if sub_project is not None:
                    suggestions.extend(self._analyze_project(root, sub_project, entry))
                else:
                    suggestions.extend(self._analyze_directory(root, project, entry))
            elif entry.is_file():
                suggestions.extend(self._analyze_file(root, project, entry))
        return suggestions

    def _analyze_file(
        self, root: Path, project: Optional[Project], path: Path
    ) -> List[Suggestion]:
        if project is not None:
            context = project.context
            file_data = FileData.from_path(path, root, project.directory)
        else:
            context = GradleContext.default(self.config.project.default_min_sdk_version)
            file_data = FileData.from_path(path, root)

        suggestions: List[Suggestion] = []
        for suggester in self.tree_suggesters:
            suggestions.extend(suggester.process_project_entry(context, file_data))
        return suggestions


__all__ = ["ProjectAnalyzer"]
