"""Exception hierarchy shared by the build-script parsers and project model.

Recoverable errors describe expected failure conditions on user input: the
caller skips the offending file or directory and keeps walking the project.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================

class RecoverableError(Exception):
    """Base class for recoverable business errors.

    These errors indicate expected failure conditions that can be handled
    gracefully by skipping the current item and continuing processing.
    """
    pass


class ConfigurationError(RecoverableError):
    """Configuration error - can skip current target and continue.

    Raised when analyzer configuration is invalid or a directory handed to
    the project model is not a Gradle project.
    """
    pass


class ParseError(RecoverableError):
    """Source parsing error - can skip current file and continue.

    Raised when a build script cannot be parsed due to syntax errors
    or unsupported constructs.
    """
    pass


class GradleParseError(ParseError):
    """A Groovy build script could not be turned into a parse tree."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


__all__ = [
    "RecoverableError",
    "ConfigurationError",
    "ParseError",
    "GradleParseError",
]
