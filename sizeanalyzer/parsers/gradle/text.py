"""Literal recovery from source spans.

The extractor never evaluates expressions. Values are read back as the exact
substring of the script each node was parsed from, then classified by shape:
quoted string, all-digit number, or one of the words ``true``/``false``.
"""

from __future__ import annotations

from typing import Optional

from sizeanalyzer.parsers.gradle.nodes import ArgumentTuple, Node, Span


def span_of(node: Node) -> Optional[Span]:
    """Return the source span covering ``node``.

    Argument tuples without a recorded span of their own are measured from
    their first to their last child; a single-argument tuple is the span of
    that argument.
    """
    if isinstance(node, ArgumentTuple):
        children = list(node.children())
        if len(children) == 1 and not node.named:
            return span_of(children[0])
        if node.span is not None:
            return node.span
        spans = [span for span in (child.span for child in children) if span is not None]
        if not spans:
            return None
        first, last = spans[0], spans[-1]
        return Span(first.start, last.end, first.line, first.column)
    return node.span


def node_text(node: Node, source: str) -> str:
    """Exact source text of ``node``; empty when it has no position."""
    span = span_of(node)
    if span is None:
        return ""
    return source[span.start:span.end]


def is_string_literal(token: str) -> bool:
    return (token.startswith('"') and token.endswith('"')) or (
        token.startswith("'") and token.endswith("'")
    )


def string_literal_value(token: str) -> Optional[str]:
    """Strip matching quotes; None for anything that is not ``'x'``/``"x"``."""
    if len(token) > 2 and is_string_literal(token):
        return token[1:-1]
    return None


def is_number_string(token: Optional[str]) -> bool:
    return bool(token) and all(char.isdigit() for char in token)


def int_literal_value(token: str, default: Optional[int] = None) -> Optional[int]:
    """Parse an integer token, falling back to ``default``."""
    try:
        return int(token)
    except ValueError:
        return default


def parse_bool(token: str) -> Optional[bool]:
    # Only the literal words count; 1/0, "yes" and the like are not booleans.
    if token == "true":
        return True
    if token == "false":
        return False
    return None


__all__ = [
    "span_of",
    "node_text",
    "is_string_literal",
    "string_literal_value",
    "is_number_string",
    "int_literal_value",
    "parse_bool",
]
