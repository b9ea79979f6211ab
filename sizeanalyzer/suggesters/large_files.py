"""Suggestions for large asset and media files."""

from __future__ import annotations

import re
from typing import List

from sizeanalyzer.model.context import GradleContext
from sizeanalyzer.model.file_data import FileData
from sizeanalyzer.suggesters.base import (
    Category,
    IssueType,
    ProjectTreeSuggester,
    Suggestion,
)

MEDIA_FILE_TYPES = frozenset(
    {
        "mp4", "m4p", "m4v", "mpg", "mp2", "mpeg", "mpe", "mpv", "m2v", "vob", "rm",
        "mp3", "3gp", "aa", "aac", "wav", "flac", "m4a", "mpc", "mmf", "wma", "wv",
    }
)

PROJECT_ASSET_FILES = (
    re.compile(r"src/main/res/.*"),
    re.compile(r"src/main/resources/.*"),
    re.compile(r"src/main/assets/.*"),
)

SMALL_FILE_SIZE_LIMIT = 10 * 1024


def is_project_asset_file(file_data: FileData) -> bool:
    path = str(file_data.path_within_module)
    return any(pattern.fullmatch(path) for pattern in PROJECT_ASSET_FILES)


class LargeFilesSuggester(ProjectTreeSuggester):
    """Large assets belong in on-demand modules; large media can be streamed."""

    def __init__(self, size_limit: int = SMALL_FILE_SIZE_LIMIT) -> None:
        self.size_limit = size_limit

    def process_project_entry(
        self, context: GradleContext, file_data: FileData
    ) -> List[Suggestion]:
        if context.on_demand or file_data.size < self.size_limit:
            return []

        is_media = file_data.extension in MEDIA_FILE_TYPES
        path = file_data.path_within_root
        suggestions = []
        if is_media or is_project_asset_file(file_data):
            suggestions.append(
                Suggestion(
                    IssueType.LARGE_FILES_DYNAMIC_FEATURE,
                    Category.LARGE_FILES,
                    f"Place large file {path} inside an on demand dynamic-feature "
                    "to avoid bundling in apk",
                    file_data.size,
                )
            )
        if is_media:
            suggestions.append(
                Suggestion(
                    IssueType.MEDIA_STREAMING,
                    Category.LARGE_FILES,
                    f"Stream media file {path} from the internet to avoid bundling in apk",
                    file_data.size,
                )
            )
        return suggestions
