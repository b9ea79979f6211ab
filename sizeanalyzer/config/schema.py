"""Configuration schema definitions using Pydantic for validation.

Analyzer settings are grouped by the component that reads them. Unknown keys
are accepted so configuration files stay forward compatible.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

from sizeanalyzer.parsers.gradle.config_model import ToolingVersion


class ProjectConfig(BaseModel):
    """Settings for the project model and directory walker.

    Attributes:
        build_file_name: File that marks a directory as a Gradle project.
        manifest_path: Manifest location relative to a project directory.
        ignored_directories: Directory names never descended into.
        default_min_sdk_version: Minimum SDK assumed when no script sets one.
    """

    build_file_name: str = "build.gradle"
    manifest_path: str = "src/main/AndroidManifest.xml"
    ignored_directories: List[str] = Field(
        default_factory=lambda: [".gradle", ".idea", "build"]
    )
    default_min_sdk_version: int = Field(default=1, ge=1)

    model_config = {"extra": "allow"}

    @field_validator("build_file_name")
    @classmethod
    def validate_build_file_name(cls, v: str) -> str:
        """Build file name must be a bare file name."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid build file name: {v!r}")
        return v


class SuggesterConfig(BaseModel):
    """Thresholds used by the suggestion rules.

    Attributes:
        large_file_threshold: Size in bytes from which a file counts as large.
        questionable_file_threshold: Size in bytes from which an unexpected
            file under ``src/main`` is reported.
        minimum_bundle_plugin_version: Oldest Android Gradle plugin that
            builds App Bundles, as ``major.minor.patch``.
    """

    large_file_threshold: int = Field(default=10 * 1024, ge=0)
    questionable_file_threshold: int = Field(default=1024, ge=0)
    minimum_bundle_plugin_version: str = "3.2.0"

    model_config = {"extra": "allow"}

    @field_validator("minimum_bundle_plugin_version")
    @classmethod
    def validate_plugin_version(cls, v: str) -> str:
        """Validate that the version has a ``major.minor.patch`` shape."""
        if ToolingVersion.parse(v) is None:
            raise ValueError(
                f"Invalid plugin version '{v}'. Expected major.minor.patch"
            )
        return v

    @property
    def bundle_plugin_version(self) -> ToolingVersion:
        return ToolingVersion.parse(self.minimum_bundle_plugin_version)


class AnalyzerConfig(BaseModel):
    """Top-level analyzer configuration.

    Attributes:
        project: Project model and walker settings.
        suggesters: Suggestion rule thresholds.
    """

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    suggesters: SuggesterConfig = Field(default_factory=SuggesterConfig)

    @classmethod
    def default(cls) -> "AnalyzerConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzerConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
