"""Property handlers for the build-script extractor.

Each handler recognizes a fixed set of DSL property names and, given the
scope the visitor resolved, applies its effect to the shared
:class:`ConfigAccumulator`. The catalogue is closed: names no handler claims
are ignored.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Mapping, NamedTuple, Optional

from sizeanalyzer.parsers.gradle.accumulator import SPLIT_DIMENSIONS, ConfigAccumulator
from sizeanalyzer.parsers.gradle.config_model import (
    DEFAULT_BUILD_TYPE,
    PLUGIN_IDS,
    TOOLING_COORDINATE_PREFIX,
    ToolingVersion,
)
from sizeanalyzer.parsers.gradle.text import (
    int_literal_value,
    is_number_string,
    is_string_literal,
    parse_bool,
    string_literal_value,
)

log = logging.getLogger("sizeanalyzer.parsers.gradle.handler")


class Scope(NamedTuple):
    """Names of the enclosing configuration blocks of a property."""

    parent: Optional[str] = None
    grandparent: Optional[str] = None

    @property
    def build_type(self) -> str:
        """Build type a property under this scope belongs to."""
        if self.grandparent == "buildTypes" and self.parent:
            return self.parent
        return DEFAULT_BUILD_TYPE


class PropertyHandler(ABC):
    """Abstract base class for DSL property handlers."""

    @abstractmethod
    def can_handle(self, property_name: str) -> bool:
        """Check if this handler can process the given property."""
        raise NotImplementedError

    @abstractmethod
    def handle(
        self,
        property_name: str,
        value: str,
        scope: Scope,
        accumulator: ConfigAccumulator,
    ) -> bool:
        """Apply a property sighting to the accumulator.

        Args:
            property_name: DSL property or method name, e.g. ``minSdkVersion``.
            value: Exact source text of the assigned value or arguments.
            scope: Enclosing block names resolved by the visitor.
            accumulator: Build state of the current extraction.

        Returns:
            True if the accumulator was updated, False otherwise.
        """
        raise NotImplementedError


def parse_sdk_version(value: str) -> Optional[int]:
    """Integer SDK level from ``15`` or ``'15'``; None for anything else."""
    if is_string_literal(value):
        value = string_literal_value(value)
    if not is_number_string(value):
        return None
    return int_literal_value(value)


class MinSdkVersionHandler(PropertyHandler):
    """``minSdkVersion``, in any scope; the smallest positive value wins."""

    def can_handle(self, property_name: str) -> bool:
        return property_name == "minSdkVersion"

    def handle(self, property_name, value, scope, accumulator) -> bool:
        version = parse_sdk_version(value)
        if version is None:
            log.debug("Ignoring non-literal minSdkVersion %r", value)
            return False
        accumulator.offer_min_sdk(version)
        return True


class ProguardHandler(PropertyHandler):
    """Shrinking flags, keyed by the build type they are declared in."""

    FLAGS = {
        "minifyEnabled": "minify_enabled",
        "useProguard": "obfuscation_enabled",
    }

    def can_handle(self, property_name: str) -> bool:
        return property_name in self.FLAGS or property_name == "proguardFiles"

    def handle(self, property_name, value, scope, accumulator) -> bool:
        build_type = scope.build_type
        if property_name == "proguardFiles":
            if not value:
                return False
            accumulator.update_proguard(build_type, has_proguard_rules=True)
            return True

        enabled = parse_bool(value)
        if enabled is None:
            log.debug("Ignoring non-boolean %s %r", property_name, value)
            return False
        accumulator.update_proguard(build_type, **{self.FLAGS[property_name]: enabled})
        return True


class EnableSplitHandler(PropertyHandler):
    """``bundle { abi|density|language { enableSplit <bool> } }``."""

    def can_handle(self, property_name: str) -> bool:
        return property_name == "enableSplit"

    def handle(self, property_name, value, scope, accumulator) -> bool:
        if scope.grandparent != "bundle" or scope.parent not in SPLIT_DIMENSIONS:
            return False
        enabled = parse_bool(value)
        if enabled is None:
            return False
        accumulator.set_split(scope.parent, enabled)
        return True


class ClasspathHandler(PropertyHandler):
    """Android Gradle plugin version from ``buildscript { dependencies { ... } }``."""

    def can_handle(self, property_name: str) -> bool:
        return property_name == "classpath"

    def handle(self, property_name, value, scope, accumulator) -> bool:
        if scope.parent != "dependencies" or scope.grandparent != "buildscript":
            return False
        coordinate = string_literal_value(value)
        if coordinate is None or not coordinate.startswith(TOOLING_COORDINATE_PREFIX):
            return False
        version = ToolingVersion.parse(coordinate[len(TOOLING_COORDINATE_PREFIX):])
        if version is None:
            log.debug("Unparsable Android Gradle plugin version in %s", coordinate)
            return False
        accumulator.tooling_version = version
        return True


class PropertyAssignmentHandler:
    """Routes property sightings and named-argument calls to the catalogue."""

    def __init__(self, accumulator: ConfigAccumulator) -> None:
        self.accumulator = accumulator
        self.handlers: List[PropertyHandler] = [
            MinSdkVersionHandler(),
            ProguardHandler(),
            EnableSplitHandler(),
            ClasspathHandler(),
        ]

    def assign(self, property_name: Optional[str], value: str, scope: Scope) -> bool:
        """Handle ``property value`` or ``property = value`` under ``scope``."""
        if not property_name:
            return False
        for handler in self.handlers:
            if handler.can_handle(property_name):
                handled = handler.handle(property_name, value, scope, self.accumulator)
                if handled:
                    log.debug(
                        "%s = %s (parent=%s, grandparent=%s)",
                        property_name,
                        value,
                        scope.parent,
                        scope.grandparent,
                    )
                return handled
        return False

    def named_call(
        self,
        call_name: Optional[str],
        arguments: Mapping[str, str],
        enclosing: Optional[str],
    ) -> bool:
        """Handle ``call key: value, ...``; only top-level ``apply plugin:`` counts."""
        if call_name != "apply" or enclosing is not None or "plugin" not in arguments:
            return False
        plugin_id = string_literal_value(arguments["plugin"])
        kind = PLUGIN_IDS.get(plugin_id) if plugin_id is not None else None
        if kind is None:
            return False
        self.accumulator.plugin_kind = kind
        log.debug("Applied plugin %s", plugin_id)
        return True


__all__ = [
    "Scope",
    "PropertyHandler",
    "MinSdkVersionHandler",
    "ProguardHandler",
    "EnableSplitHandler",
    "ClasspathHandler",
    "PropertyAssignmentHandler",
    "parse_sdk_version",
]
