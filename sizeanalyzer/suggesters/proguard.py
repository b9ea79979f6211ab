"""Code shrinking and obfuscation suggestions for application projects."""

from __future__ import annotations

from pathlib import Path
from typing import List

from sizeanalyzer.model.context import GradleContext
from sizeanalyzer.parsers.gradle.config_model import DEFAULT_BUILD_TYPE, PluginKind
from sizeanalyzer.suggesters.base import (
    Category,
    IssueType,
    ProjectSuggester,
    Suggestion,
)

NO_CODE_SHRINKING = (
    "It seems that you are not using Proguard/R8, consider enabling it in your application."
)
NO_OBFUSCATION = (
    "Your application is not using Proguard or R8 obfuscation, consider enabling it to save "
    "space."
)


class ProguardSuggester(ProjectSuggester):
    """Checks the release build type, or the default one, for R8/Proguard use."""

    def process_project(self, context: GradleContext, project_dir: Path) -> List[Suggestion]:
        if context.plugin_kind is not PluginKind.APPLICATION:
            return []

        configs = context.proguard_configs
        config = configs.get("release", configs.get(DEFAULT_BUILD_TYPE))
        no_shrinking = Suggestion(
            IssueType.PROGUARD_NO_SHRINKING, Category.PROGUARD, NO_CODE_SHRINKING
        )
        no_obfuscation = Suggestion(
            IssueType.PROGUARD_NO_OBFUSCATION, Category.PROGUARD, NO_OBFUSCATION
        )
        if config is None or not config.has_proguard_rules:
            return [no_shrinking, no_obfuscation]

        suggestions = []
        if not config.minify_enabled:
            suggestions.append(no_shrinking)
        if not config.obfuscation_enabled:
            suggestions.append(no_obfuscation)
        return suggestions
