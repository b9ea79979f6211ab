"""Tests for sizeanalyzer CLI entrypoints."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

import sizeanalyzer.main as main


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(sys, "argv", ["sizeanalyzer", *argv])
    return main.main()


def test_main_dispatches_check_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Verify that `main` parses args and dispatches check_project_command."""
    captured: dict[str, object] = {}

    def fake_check_project_command(args, config) -> int:
        captured["args"] = args
        captured["config"] = config
        return 0

    monkeypatch.setattr(main, "check_project_command", fake_check_project_command)

    exit_code = _run(
        monkeypatch,
        "--config",
        '{"project": {"default_min_sdk_version": 16}}',
        "check-project",
        str(tmp_path),
        "-d",
        "-c",
        "proguard",
        "-c",
        "large-files",
    )

    assert exit_code == 0
    args = captured["args"]
    assert args.directory == str(tmp_path)
    assert args.display_all is True
    assert args.category == ["proguard", "large-files"]
    assert captured["config"].project.default_min_sdk_version == 16


def test_check_project_prints_report(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "app").mkdir()
    (tmp_path / "app" / "build.gradle").write_text(
        "apply plugin: 'com.android.application'\n", encoding="utf-8"
    )

    exit_code = _run(monkeypatch, "check-project", str(tmp_path), "--display-all")

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Efficiently configuring proguard can save up to" in output
    assert "It seems that you are not using Proguard/R8" in output


def test_check_project_with_no_suggestions(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = _run(monkeypatch, "check-project", str(tmp_path))

    assert exit_code == 0
    assert "No size saving suggestions found." in capsys.readouterr().out


def test_check_project_missing_directory(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    assert _run(monkeypatch, "check-project", str(tmp_path / "missing")) == 1


def test_gradle_config_prints_json(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    build_file = tmp_path / "build.gradle"
    build_file.write_text(
        "apply plugin: 'com.android.application'\n"
        "android {\n"
        "    buildTypes {\n"
        "        release {\n"
        "            minifyEnabled true\n"
        "        }\n"
        "    }\n"
        "}\n",
        encoding="utf-8",
    )

    exit_code = _run(
        monkeypatch,
        "gradle-config",
        str(build_file),
        "--min-sdk",
        "19",
        "--tooling-version",
        "3.3.2",
    )

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["min_sdk_version"] == 19
    assert data["plugin_kind"] == "application"
    assert data["tooling_version"] == {"major": 3, "minor": 3}
    assert data["proguard_configs"]["release"]["minify_enabled"] is True
    assert data["bundle_split_config"]["abi_split_enabled"] is True


def test_gradle_config_parse_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    build_file = tmp_path / "build.gradle"
    build_file.write_text("android {\n", encoding="utf-8")

    assert _run(monkeypatch, "gradle-config", str(build_file)) == 1


def test_gradle_config_missing_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    assert _run(monkeypatch, "gradle-config", str(tmp_path / "build.gradle")) == 1


def test_invalid_config_exits_with_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    exit_code = _run(
        monkeypatch,
        "--config",
        '{"project": {"default_min_sdk_version": 0}}',
        "check-project",
        str(tmp_path),
    )

    assert exit_code == 1


def test_invalid_tooling_version_is_rejected(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        _run(monkeypatch, "gradle-config", str(tmp_path), "--tooling-version", "3.4")


def test_no_command_prints_help(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(monkeypatch) == 1
    assert "check-project" in capsys.readouterr().out
