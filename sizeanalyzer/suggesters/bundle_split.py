"""App Bundle split configuration suggestions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from sizeanalyzer.model.context import GradleContext
from sizeanalyzer.parsers.gradle.config_model import PluginKind, ToolingVersion
from sizeanalyzer.suggesters.base import (
    Category,
    IssueType,
    ProjectSuggester,
    Suggestion,
)

log = logging.getLogger("sizeanalyzer.suggesters.bundle_split")

NO_ABI_SPLITTING_MESSAGE = (
    "Your App Bundle is not configured to split APKs by ABI, consider enabling it for maximum "
    "app size reduction."
)
NO_DISPLAY_DENSITY_SPLITTING_MESSAGE = (
    "Your App Bundle is not configured to split APKs by screen density, consider enabling it for "
    "maximum app size reduction."
)
NO_LANGUAGE_SPLITTING_MESSAGE = (
    "Your App Bundle is not configured to split APKs by languages, consider enabling it for "
    "maximum app size reduction."
)
OLD_GRADLE_PLUGIN_MESSAGE = (
    "Consider upgrading to the Android Gradle plugin version 3.2 or later to use Android App "
    "Bundles. This will likely offer significant app size savings. To learn more, visit "
    "https://developer.android.com/guide/app-bundle/."
)

BUNDLE_PLUGIN_VERSION = ToolingVersion(3, 2)


class BundleSplitSuggester(ProjectSuggester):
    """Flags disabled split dimensions, or a plugin too old for bundles."""

    def __init__(self, minimum_plugin_version: Optional[ToolingVersion] = None) -> None:
        self.minimum_plugin_version = minimum_plugin_version or BUNDLE_PLUGIN_VERSION

    def process_project(self, context: GradleContext, project_dir: Path) -> List[Suggestion]:
        if context.plugin_kind is not PluginKind.APPLICATION:
            return []

        version = context.tooling_version
        if version is not None and version < self.minimum_plugin_version:
            log.debug("Android Gradle plugin %s predates App Bundles", version)
            return [
                Suggestion(
                    IssueType.BUNDLES_OLD_GRADLE_PLUGIN,
                    Category.BUNDLE_CONFIG,
                    OLD_GRADLE_PLUGIN_MESSAGE,
                )
            ]

        splits = context.bundle_split_config
        suggestions = []
        if not splits.abi_split_enabled:
            suggestions.append(
                Suggestion(
                    IssueType.BUNDLES_NO_ABI_SPLITTING,
                    Category.BUNDLE_CONFIG,
                    NO_ABI_SPLITTING_MESSAGE,
                )
            )
        if not splits.density_split_enabled:
            suggestions.append(
                Suggestion(
                    IssueType.BUNDLES_NO_DENSITY_SPLITTING,
                    Category.BUNDLE_CONFIG,
                    NO_DISPLAY_DENSITY_SPLITTING_MESSAGE,
                )
            )
        if not splits.language_split_enabled:
            suggestions.append(
                Suggestion(
                    IssueType.BUNDLES_NO_LANGUAGE_SPLITTING,
                    Category.BUNDLE_CONFIG,
                    NO_LANGUAGE_SPLITTING_MESSAGE,
                )
            )
        return suggestions
