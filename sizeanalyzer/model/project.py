"""Gradle project model.

A project is a directory holding a ``build.gradle`` script. Its context is
extracted from that script, seeded with the parent project's minimum SDK and
plugin version, and completed with the on-demand flag from the module's
Android manifest.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sizeanalyzer.config.schema import ProjectConfig
from sizeanalyzer.model.context import GradleContext
from sizeanalyzer.parsers.base import ConfigurationError
from sizeanalyzer.parsers.gradle import extract_config

logger = logging.getLogger("sizeanalyzer.model.project")

DIST_URI = "http://schemas.android.com/apk/distribution"
ON_DEMAND_VALUES = ("true", "1")


def is_on_demand(manifest_path: Path) -> bool:
    """Whether the manifest declares ``<dist:module dist:onDemand="true">``.

    An unreadable or malformed manifest counts as not on demand.
    """
    try:
        tree = ET.parse(manifest_path)
    except (OSError, ET.ParseError) as exc:
        logger.warning("Failed to parse android manifest %s: %s", manifest_path, exc)
        return False

    module_tag = f"{{{DIST_URI}}}module"
    for element in tree.iter():
        if not isinstance(element.tag, str) or element.tag.lower() != module_tag.lower():
            continue
        on_demand = element.get(f"{{{DIST_URI}}}onDemand")
        if on_demand is not None:
            return on_demand in ON_DEMAND_VALUES
    return False


@dataclass(frozen=True)
class Project:
    """A Gradle project directory and its resolved context."""

    directory: Path
    context: GradleContext

    @classmethod
    def create(
        cls,
        directory: Path,
        parent: Optional["Project"] = None,
        config: Optional[ProjectConfig] = None,
    ) -> "Project":
        """Build the project rooted at ``directory``.

        Args:
            directory: Directory containing the build script.
            parent: Nearest enclosing project, whose minimum SDK and plugin
                version are inherited when the script declares none.
            config: Project settings; defaults apply when omitted.

        Raises:
            ConfigurationError: If the directory has no readable build script.
            GradleParseError: If the build script cannot be parsed.
        """
        config = config or ProjectConfig()
        build_file = directory / config.build_file_name
        if not build_file.is_file():
            raise ConfigurationError(
                f"Invalid project directory with no gradle build file: {build_file.resolve()}"
            )

        if parent is not None:
            default_min_sdk = parent.context.min_sdk_version
            default_tooling = parent.context.tooling_version
        else:
            default_min_sdk = config.default_min_sdk_version
            default_tooling = None

        try:
            content = build_file.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ConfigurationError(f"Failed to read {build_file}: {exc}") from exc

        resolved = extract_config(content, default_min_sdk, default_tooling)

        manifest = directory / config.manifest_path
        on_demand = manifest.is_file() and is_on_demand(manifest)
        logger.debug(
            "Project %s: minSdkVersion=%d on_demand=%s",
            directory,
            resolved.min_sdk_version,
            on_demand,
        )
        return cls(directory=directory, context=GradleContext(resolved, on_demand))


__all__ = ["DIST_URI", "Project", "is_on_demand"]
