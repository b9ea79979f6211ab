"""Per-project context handed to the suggestion rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from sizeanalyzer.parsers.gradle.config_model import (
    BundleSplitConfig,
    PluginKind,
    ProguardConfig,
    ResolvedConfig,
    ToolingVersion,
)


@dataclass(frozen=True)
class GradleContext:
    """Extracted build configuration plus the manifest's on-demand flag."""

    config: ResolvedConfig
    on_demand: bool = False

    @classmethod
    def default(cls, min_sdk_version: int = 1) -> "GradleContext":
        """Context for files that belong to no Gradle project."""
        return cls(ResolvedConfig(min_sdk_version=min_sdk_version))

    @property
    def min_sdk_version(self) -> int:
        return self.config.min_sdk_version

    @property
    def plugin_kind(self) -> PluginKind:
        return self.config.plugin_kind

    @property
    def tooling_version(self) -> Optional[ToolingVersion]:
        return self.config.tooling_version

    @property
    def proguard_configs(self) -> Mapping[str, ProguardConfig]:
        return self.config.proguard_configs

    @property
    def bundle_split_config(self) -> BundleSplitConfig:
        return self.config.bundle_split_config


__all__ = ["GradleContext"]
