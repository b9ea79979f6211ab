"""Mutable state of one extraction run.

State transitions are kept as small pure functions (:func:`upsert_proguard`,
:func:`offer_min_sdk`) so they can be tested without walking a tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from sizeanalyzer.parsers.gradle.config_model import (
    BundleSplitConfig,
    PluginKind,
    ProguardConfig,
    ToolingVersion,
)

SPLIT_DIMENSIONS = {
    "abi": "abi_split_enabled",
    "density": "density_split_enabled",
    "language": "language_split_enabled",
}


def upsert_proguard(
    configs: Mapping[str, ProguardConfig], build_type: str, **changes: Any
) -> Dict[str, ProguardConfig]:
    """Return a copy of ``configs`` with ``build_type`` created or updated."""
    current = configs.get(build_type, ProguardConfig())
    updated = dict(configs)
    updated[build_type] = replace(current, **changes)
    return updated


def offer_min_sdk(current: Optional[int], candidate: int) -> Optional[int]:
    """Keep the smallest positive minimum SDK seen so far."""
    if candidate <= 0:
        return current
    if current is None or current <= 0 or candidate < current:
        return candidate
    return current


@dataclass
class ConfigAccumulator:
    """Build state for a single script; never shared between runs."""

    min_sdk_candidate: Optional[int] = None
    proguard_configs: Dict[str, ProguardConfig] = field(default_factory=dict)
    bundle_split_config: BundleSplitConfig = field(default_factory=BundleSplitConfig)
    tooling_version: Optional[ToolingVersion] = None
    plugin_kind: PluginKind = PluginKind.UNKNOWN

    def offer_min_sdk(self, candidate: int) -> None:
        self.min_sdk_candidate = offer_min_sdk(self.min_sdk_candidate, candidate)

    def update_proguard(self, build_type: str, **changes: Any) -> None:
        self.proguard_configs = upsert_proguard(
            self.proguard_configs, build_type, **changes
        )

    def set_split(self, dimension: str, enabled: bool) -> None:
        self.bundle_split_config = replace(
            self.bundle_split_config, **{SPLIT_DIMENSIONS[dimension]: enabled}
        )


__all__ = [
    "SPLIT_DIMENSIONS",
    "upsert_proguard",
    "offer_min_sdk",
    "ConfigAccumulator",
]
