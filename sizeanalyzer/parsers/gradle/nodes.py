"""Parse-tree node kinds for Groovy build scripts.

The extractor only needs to tell a handful of node shapes apart, so the tree
produced by the grammar is folded into a closed set of frozen dataclasses:

    Call            name(args) / name { ... } / receiver.name args
    Assignment      target = value
    ArgumentTuple   the arguments of a call, positional and named
    Literal         number, string, boolean or null constant
    PropertyAccess  receiver.name
    VariableRef     bare identifier
    Block           closure or statement block
    Other           any other construct; only its children matter

Every node records the source span it was parsed from so literal text can be
recovered exactly as written.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Span:
    """Half-open character range ``[start, end)`` into the script source."""

    start: int
    end: int
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Literal:
    """Constant value. ``kind`` is one of number, string, boolean, null."""

    kind: str
    span: Optional[Span] = None
    interpolated: bool = False

    @property
    def is_constant(self) -> bool:
        # "...${x}..." is a template, not a constant.
        return not self.interpolated


@dataclass(frozen=True)
class VariableRef:
    name: str
    span: Optional[Span] = None


@dataclass(frozen=True)
class PropertyAccess:
    receiver: "Node"
    name: str
    span: Optional[Span] = None


@dataclass(frozen=True)
class NamedArgument:
    """``key: value`` entry inside an argument list."""

    key: str
    value: "Node"
    span: Optional[Span] = None


@dataclass(frozen=True)
class ArgumentTuple:
    """Arguments of a call.

    ``span`` is only set when the arguments were parsed as one contiguous
    source range; synthesized tuples (parenthesized arguments followed by a
    trailing closure, empty argument lists) leave it unset.
    """

    items: Tuple["Node", ...] = ()
    named: Tuple[NamedArgument, ...] = ()
    span: Optional[Span] = None

    def children(self) -> Iterator[Union["Node", NamedArgument]]:
        yield from self.items
        yield from self.named


@dataclass(frozen=True)
class Block:
    statements: Tuple["Node", ...] = ()
    span: Optional[Span] = None


@dataclass(frozen=True)
class Call:
    """Method call. ``receiver`` is None for implicit-this calls."""

    name: Optional[str]
    arguments: ArgumentTuple
    receiver: Optional["Node"] = None
    span: Optional[Span] = None

    @property
    def is_closure_container(self) -> bool:
        """True for ``name { ... }``: a single positional closure argument."""
        args = self.arguments
        return (
            not args.named
            and len(args.items) == 1
            and isinstance(args.items[0], Block)
        )


@dataclass(frozen=True)
class Assignment:
    target: "Node"
    value: "Node"
    span: Optional[Span] = None


@dataclass(frozen=True)
class Other:
    """Unmodelled syntax (operators, control flow, collections, ...)."""

    kind: str
    children: Tuple["Node", ...] = ()
    span: Optional[Span] = None


Node = Union[
    Call,
    Assignment,
    ArgumentTuple,
    Literal,
    PropertyAccess,
    VariableRef,
    Block,
    Other,
]


__all__ = [
    "Span",
    "Literal",
    "VariableRef",
    "PropertyAccess",
    "NamedArgument",
    "ArgumentTuple",
    "Block",
    "Call",
    "Assignment",
    "Other",
    "Node",
]
