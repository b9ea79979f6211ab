"""Parsers package.

Build-script parsers and the shared error hierarchy live here.
"""

from sizeanalyzer.parsers.base import (
    ConfigurationError,
    GradleParseError,
    ParseError,
    RecoverableError,
)

__all__ = [
    "ConfigurationError",
    "GradleParseError",
    "ParseError",
    "RecoverableError",
]
