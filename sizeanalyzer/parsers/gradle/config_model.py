"""Configuration records produced by the build-script extractor."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

DEFAULT_BUILD_TYPE = "android.default"
TOOLING_COORDINATE_PREFIX = "com.android.tools.build:gradle:"

_VERSION_PATTERN = re.compile(r"([0-9]+)\.([0-9]+)\..*", re.DOTALL)


class PluginKind(str, Enum):
    """Which Android Gradle plugin a build script applies."""

    UNKNOWN = "unknown"
    APPLICATION = "application"
    DYNAMIC_FEATURE = "dynamic-feature"
    FEATURE = "feature"


PLUGIN_IDS: Dict[str, PluginKind] = {
    "com.android.application": PluginKind.APPLICATION,
    "com.android.dynamic-feature": PluginKind.DYNAMIC_FEATURE,
    "com.android.feature": PluginKind.FEATURE,
}


@dataclass(frozen=True, order=True)
class ToolingVersion:
    """Android Gradle plugin version, compared on (major, minor)."""

    major: int
    minor: int

    @classmethod
    def parse(cls, raw: str) -> Optional["ToolingVersion"]:
        """Parse ``major.minor.rest``; None when the text has another shape.

        Variables and two-part versions (``3.4``) do not parse.
        """
        match = _VERSION_PATTERN.fullmatch(raw)
        if match is None:
            return None
        return cls(int(match.group(1)), int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class ProguardConfig:
    """Shrinking and obfuscation flags of one build type."""

    minify_enabled: bool = False
    has_proguard_rules: bool = False
    obfuscation_enabled: bool = True


@dataclass(frozen=True)
class BundleSplitConfig:
    """App Bundle split dimensions; every dimension splits unless disabled."""

    abi_split_enabled: bool = True
    density_split_enabled: bool = True
    language_split_enabled: bool = True


@dataclass(frozen=True)
class ResolvedConfig:
    """Frozen result of one build-script extraction."""

    min_sdk_version: int
    plugin_kind: PluginKind = PluginKind.UNKNOWN
    tooling_version: Optional[ToolingVersion] = None
    proguard_configs: Mapping[str, ProguardConfig] = field(
        default_factory=lambda: MappingProxyType({})
    )
    bundle_split_config: BundleSplitConfig = field(default_factory=BundleSplitConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view, suitable for JSON output."""
        return {
            "min_sdk_version": self.min_sdk_version,
            "plugin_kind": self.plugin_kind.value,
            "tooling_version": (
                asdict(self.tooling_version) if self.tooling_version else None
            ),
            "proguard_configs": {
                name: asdict(config)
                for name, config in sorted(self.proguard_configs.items())
            },
            "bundle_split_config": asdict(self.bundle_split_config),
        }


__all__ = [
    "DEFAULT_BUILD_TYPE",
    "TOOLING_COORDINATE_PREFIX",
    "PLUGIN_IDS",
    "PluginKind",
    "ToolingVersion",
    "ProguardConfig",
    "BundleSplitConfig",
    "ResolvedConfig",
]
