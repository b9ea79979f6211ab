"""Helpers for loading analyzer configuration from TOML/JSON sources.

This module provides a single entry point `load_analyzer_config`
that accepts various configuration sources:

* None -> default AnalyzerConfig
* dict -> AnalyzerConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from sizeanalyzer.config.schema import AnalyzerConfig
from sizeanalyzer.parsers.base import ConfigurationError

logger = logging.getLogger("sizeanalyzer.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _guess_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith("{") else "toml"


def _is_file(path: Path) -> bool:
    # Inline TOML can be longer than the OS allows for a file name.
    try:
        return path.is_file()
    except OSError:
        return False


def _parse_text(text: str, fmt: str) -> Dict[str, Any]:
    try:
        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Invalid {fmt.upper()} configuration: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError("Top-level configuration must be a mapping/dict")
    return data


def _validate(data: Dict[str, Any]) -> AnalyzerConfig:
    try:
        return AnalyzerConfig.from_dict(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid analyzer configuration: {exc}") from exc


def load_analyzer_config(source: ConfigSource) -> AnalyzerConfig:
    """Load AnalyzerConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns AnalyzerConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        AnalyzerConfig instance.

    Raises:
        ConfigurationError: If the source cannot be parsed or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default AnalyzerConfig")
        return AnalyzerConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading AnalyzerConfig from provided dict")
        return _validate(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None

        if _is_file(path):
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _guess_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _guess_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        return _validate(_parse_text(text, fmt))

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["ConfigSource", "load_analyzer_config"]
