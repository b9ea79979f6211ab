from __future__ import annotations

from pathlib import Path

import pytest

from sizeanalyzer.config.schema import ProjectConfig
from sizeanalyzer.model import FileData, GradleContext, Project, is_on_demand
from sizeanalyzer.parsers.base import ConfigurationError, GradleParseError
from sizeanalyzer.parsers.gradle import PluginKind, ToolingVersion

ON_DEMAND_MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android"
    xmlns:dist="http://schemas.android.com/apk/distribution"
    package="com.example.feature">
    <dist:module dist:onDemand="{value}" dist:title="@string/title_feature">
        <dist:fusing dist:include="true" />
    </dist:module>
</manifest>
"""


def _write_module(directory: Path, script: str, manifest: str | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "build.gradle").write_text(script, encoding="utf-8")
    if manifest is not None:
        manifest_path = directory / "src" / "main" / "AndroidManifest.xml"
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        manifest_path.write_text(manifest, encoding="utf-8")
    return directory


def test_is_on_demand(tmp_path: Path) -> None:
    enabled = tmp_path / "enabled.xml"
    enabled.write_text(ON_DEMAND_MANIFEST.format(value="true"), encoding="utf-8")
    disabled = tmp_path / "disabled.xml"
    disabled.write_text(ON_DEMAND_MANIFEST.format(value="false"), encoding="utf-8")
    plain = tmp_path / "plain.xml"
    plain.write_text('<manifest package="com.example"/>', encoding="utf-8")

    assert is_on_demand(enabled)
    assert not is_on_demand(disabled)
    assert not is_on_demand(plain)


def test_malformed_manifest_is_not_on_demand(tmp_path: Path) -> None:
    manifest = tmp_path / "AndroidManifest.xml"
    manifest.write_text("<manifest><unclosed></manifest>", encoding="utf-8")

    assert not is_on_demand(manifest)


def test_create_project_reads_script_and_manifest(tmp_path: Path) -> None:
    feature = _write_module(
        tmp_path / "feature",
        "apply plugin: 'com.android.dynamic-feature'\n",
        ON_DEMAND_MANIFEST.format(value="true"),
    )

    project = Project.create(feature)

    assert project.directory == feature
    assert project.context.plugin_kind is PluginKind.DYNAMIC_FEATURE
    assert project.context.on_demand
    assert project.context.min_sdk_version == 1


def test_child_project_inherits_min_sdk_and_tooling_version(tmp_path: Path) -> None:
    root = _write_module(
        tmp_path,
        "buildscript {\n"
        "    dependencies {\n"
        "        classpath 'com.android.tools.build:gradle:3.1.4'\n"
        "    }\n"
        "}\n"
        "android { defaultConfig { minSdkVersion 19 } }\n",
    )
    app = _write_module(tmp_path / "app", "apply plugin: 'com.android.application'\n")
    lib = _write_module(tmp_path / "lib", "android { defaultConfig { minSdkVersion 23 } }\n")

    parent = Project.create(root)
    app_project = Project.create(app, parent)
    lib_project = Project.create(lib, parent)

    assert parent.context.tooling_version == ToolingVersion(3, 1)
    assert app_project.context.min_sdk_version == 19
    assert app_project.context.tooling_version == ToolingVersion(3, 1)
    assert not app_project.context.on_demand
    assert lib_project.context.min_sdk_version == 23


def test_default_min_sdk_comes_from_config(tmp_path: Path) -> None:
    module = _write_module(tmp_path / "app", "apply plugin: 'com.android.application'\n")

    project = Project.create(module, config=ProjectConfig(default_min_sdk_version=16))

    assert project.context.min_sdk_version == 16


def test_missing_build_file_raises_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="no gradle build file"):
        Project.create(tmp_path)


def test_unparsable_build_file_raises(tmp_path: Path) -> None:
    module = _write_module(tmp_path / "broken", "android {\n")

    with pytest.raises(GradleParseError):
        Project.create(module)


def test_file_data_paths(tmp_path: Path) -> None:
    module = tmp_path / "app"
    asset = module / "src" / "main" / "assets" / "Intro.MP4"
    asset.parent.mkdir(parents=True)
    asset.write_bytes(b"\0" * 42)

    in_module = FileData.from_path(asset, tmp_path, module)
    loose = FileData.from_path(asset, tmp_path)

    assert str(in_module.path_within_root) == "app/src/main/assets/Intro.MP4"
    assert str(in_module.path_within_module) == "src/main/assets/Intro.MP4"
    assert str(loose.path_within_module) == "Intro.MP4"
    assert in_module.size == 42
    assert in_module.extension == "mp4"


def test_default_context() -> None:
    context = GradleContext.default(21)

    assert context.min_sdk_version == 21
    assert context.plugin_kind is PluginKind.UNKNOWN
    assert context.tooling_version is None
    assert not context.on_demand
