"""Size-saving suggestion rules."""

from sizeanalyzer.suggesters.base import (
    Category,
    IssueType,
    ProjectSuggester,
    ProjectTreeSuggester,
    Suggestion,
)
from sizeanalyzer.suggesters.bundle_split import BundleSplitSuggester
from sizeanalyzer.suggesters.large_files import LargeFilesSuggester
from sizeanalyzer.suggesters.proguard import ProguardSuggester
from sizeanalyzer.suggesters.questionable_files import QuestionableFilesSuggester

__all__ = [
    "Category",
    "IssueType",
    "ProjectSuggester",
    "ProjectTreeSuggester",
    "Suggestion",
    "BundleSplitSuggester",
    "LargeFilesSuggester",
    "ProguardSuggester",
    "QuestionableFilesSuggester",
]
