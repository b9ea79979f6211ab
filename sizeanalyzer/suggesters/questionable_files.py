"""Suggestions for files under ``src/main`` that do not look like app content."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import List

from sizeanalyzer.model.context import GradleContext
from sizeanalyzer.model.file_data import FileData
from sizeanalyzer.suggesters.base import (
    Category,
    IssueType,
    ProjectTreeSuggester,
    Suggestion,
)

SMALL_FILE_SIZE_LIMIT = 1024

STANDARD_PROJECT_FILES = (
    re.compile(r"^(?!src/main/).*$"),  # anything outside src/main/
    re.compile(r"src/main/res/.*"),
    re.compile(r"src/main/assets/.*"),
    re.compile(r"src/main/java/.*"),
    re.compile(r"src/main/AndroidManifest\.xml"),
)


def suggestion_message(path: PurePosixPath) -> str:
    return (
        f"File {path} does not appear to be a needed file. Consider removing this file or "
        "placing it in the assets directory. If the file is added through a library "
        "dependency, consider using packagingOptions to exclude the file "
        "https://google.github.io/android-gradle-dsl/current/"
        "com.android.build.gradle.internal.dsl.PackagingOptions.html"
    )


def is_standard_project_file(file_data: FileData) -> bool:
    path = str(file_data.path_within_module)
    return any(pattern.fullmatch(path) for pattern in STANDARD_PROJECT_FILES)


class QuestionableFilesSuggester(ProjectTreeSuggester):
    def __init__(self, size_limit: int = SMALL_FILE_SIZE_LIMIT) -> None:
        self.size_limit = size_limit

    def process_project_entry(
        self, context: GradleContext, file_data: FileData
    ) -> List[Suggestion]:
        if file_data.size < self.size_limit or is_standard_project_file(file_data):
            return []
        return [
            Suggestion(
                IssueType.QUESTIONABLE_FILE,
                Category.LARGE_FILES,
                suggestion_message(file_data.path_within_root),
                file_data.size,
            )
        ]
