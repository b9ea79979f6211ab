"""Suggestion records and the suggester interfaces.

Project suggesters look at a project's extracted context once per project;
tree suggesters look at every file found while walking the project tree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from sizeanalyzer.model.context import GradleContext
from sizeanalyzer.model.file_data import FileData


class Category(str, Enum):
    """Report grouping of a suggestion; values are the CLI category names."""

    LARGE_FILES = "large-files"
    PROGUARD = "proguard"
    BUNDLE_CONFIG = "bundle-config"


class IssueType(str, Enum):
    MEDIA_STREAMING = "media-streaming"
    LARGE_FILES_DYNAMIC_FEATURE = "large-files-dynamic-feature"
    PROGUARD_NO_SHRINKING = "proguard-no-shrinking"
    PROGUARD_NO_OBFUSCATION = "proguard-no-obfuscation"
    QUESTIONABLE_FILE = "questionable-file"
    BUNDLES_NO_ABI_SPLITTING = "bundles-no-abi-splitting"
    BUNDLES_NO_DENSITY_SPLITTING = "bundles-no-density-splitting"
    BUNDLES_NO_LANGUAGE_SPLITTING = "bundles-no-language-splitting"
    BUNDLES_OLD_GRADLE_PLUGIN = "bundles-old-gradle-plugin"


@dataclass(frozen=True)
class Suggestion:
    """One size-saving suggestion.

    Attributes:
        issue_type: What was found.
        category: Report section the suggestion is listed under.
        message: Human-readable advice.
        estimated_bytes_saved: Estimated savings, None when unknown.
    """

    issue_type: IssueType
    category: Category
    message: str
    estimated_bytes_saved: Optional[int] = None

    @property
    def bytes_saved(self) -> int:
        return self.estimated_bytes_saved or 0

    def __str__(self) -> str:
        if self.estimated_bytes_saved is None:
            return self.message
        return f"{self.message} (saves {self.estimated_bytes_saved} bytes)"


class ProjectSuggester(ABC):
    """Rule evaluated once per Gradle project."""

    @abstractmethod
    def process_project(
        self, context: GradleContext, project_dir: Path
    ) -> List[Suggestion]:
        raise NotImplementedError


class ProjectTreeSuggester(ABC):
    """Rule evaluated for every file in a project tree."""

    @abstractmethod
    def process_project_entry(
        self, context: GradleContext, file_data: FileData
    ) -> List[Suggestion]:
        raise NotImplementedError


__all__ = [
    "Category",
    "IssueType",
    "Suggestion",
    "ProjectSuggester",
    "ProjectTreeSuggester",
]
