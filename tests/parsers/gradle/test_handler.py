from __future__ import annotations

from sizeanalyzer.parsers.gradle.accumulator import (
    ConfigAccumulator,
    offer_min_sdk,
    upsert_proguard,
)
from sizeanalyzer.parsers.gradle.config_model import (
    DEFAULT_BUILD_TYPE,
    BundleSplitConfig,
    PluginKind,
    ProguardConfig,
    ToolingVersion,
)
from sizeanalyzer.parsers.gradle.handler import (
    PropertyAssignmentHandler,
    Scope,
    parse_sdk_version,
)


def test_upsert_proguard_returns_new_mapping() -> None:
    before = {"debug": ProguardConfig(minify_enabled=True)}

    updated = upsert_proguard(before, "release", minify_enabled=True)

    assert before == {"debug": ProguardConfig(minify_enabled=True)}
    assert updated["release"] == ProguardConfig(minify_enabled=True)
    assert updated["debug"] is before["debug"]


def test_upsert_proguard_keeps_unchanged_fields() -> None:
    configs = upsert_proguard({}, "release", has_proguard_rules=True)
    configs = upsert_proguard(configs, "release", minify_enabled=True)

    assert configs["release"] == ProguardConfig(
        minify_enabled=True, has_proguard_rules=True, obfuscation_enabled=True
    )


def test_offer_min_sdk_keeps_smallest_positive() -> None:
    assert offer_min_sdk(None, 21) == 21
    assert offer_min_sdk(21, 16) == 16
    assert offer_min_sdk(16, 21) == 16
    assert offer_min_sdk(16, 0) == 16
    assert offer_min_sdk(None, -1) is None


def test_parse_sdk_version() -> None:
    assert parse_sdk_version("15") == 15
    assert parse_sdk_version("'15'") == 15
    assert parse_sdk_version('"21"') == 21
    assert parse_sdk_version("rootProject.ext.minSdk") is None
    assert parse_sdk_version("'P'") is None


def test_scope_build_type() -> None:
    assert Scope("release", "buildTypes").build_type == "release"
    assert Scope("defaultConfig", "android").build_type == DEFAULT_BUILD_TYPE
    assert Scope().build_type == DEFAULT_BUILD_TYPE


def test_proguard_flags_are_keyed_by_build_type() -> None:
    accumulator = ConfigAccumulator()
    handler = PropertyAssignmentHandler(accumulator)

    assert handler.assign("minifyEnabled", "true", Scope("release", "buildTypes"))
    assert handler.assign("useProguard", "false", Scope("release", "buildTypes"))
    assert handler.assign("proguardFiles", "'rules.pro'", Scope("debug", "buildTypes"))
    assert not handler.assign("minifyEnabled", "isCi", Scope("release", "buildTypes"))
    assert not handler.assign("proguardFiles", "", Scope("release", "buildTypes"))

    assert accumulator.proguard_configs == {
        "release": ProguardConfig(minify_enabled=True, obfuscation_enabled=False),
        "debug": ProguardConfig(has_proguard_rules=True),
    }


def test_enable_split_requires_bundle_dimension_scope() -> None:
    accumulator = ConfigAccumulator()
    handler = PropertyAssignmentHandler(accumulator)

    assert handler.assign("enableSplit", "false", Scope("density", "bundle"))
    assert not handler.assign("enableSplit", "false", Scope("abi", "splits"))
    assert not handler.assign("enableSplit", "false", Scope("texture", "bundle"))

    assert accumulator.bundle_split_config == BundleSplitConfig(density_split_enabled=False)


def test_classpath_sets_tooling_version() -> None:
    accumulator = ConfigAccumulator()
    handler = PropertyAssignmentHandler(accumulator)
    scope = Scope("dependencies", "buildscript")

    assert not handler.assign("classpath", "'com.google.gms:google-services:4.3.0'", scope)
    assert not handler.assign("classpath", "'com.android.tools.build:gradle:$agp'", scope)
    assert accumulator.tooling_version is None

    assert handler.assign("classpath", "'com.android.tools.build:gradle:3.4.0'", scope)
    assert accumulator.tooling_version == ToolingVersion(3, 4)


def test_unknown_properties_are_ignored() -> None:
    accumulator = ConfigAccumulator()
    handler = PropertyAssignmentHandler(accumulator)

    assert not handler.assign("targetSdkVersion", "28", Scope("defaultConfig", "android"))
    assert not handler.assign(None, "28", Scope())
    assert accumulator == ConfigAccumulator()


def test_apply_plugin_only_at_top_level() -> None:
    accumulator = ConfigAccumulator()
    handler = PropertyAssignmentHandler(accumulator)

    assert not handler.named_call(
        "apply", {"plugin": "'com.android.application'"}, "subprojects"
    )
    assert not handler.named_call("apply", {"plugin": "'kotlin-android'"}, None)
    assert accumulator.plugin_kind is PluginKind.UNKNOWN

    assert handler.named_call("apply", {"plugin": "'com.android.feature'"}, None)
    assert accumulator.plugin_kind is PluginKind.FEATURE
