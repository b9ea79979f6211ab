"""Scope-tracking walk over a parsed build script.

The Gradle DSL expresses configuration nesting in two interchangeable ways::

    android.defaultConfig.minSdkVersion 15
    android { defaultConfig { minSdkVersion 15 } }

Both must resolve ``minSdkVersion`` to parent ``defaultConfig`` and
grandparent ``android``. The visitor reconstructs these names from the
chain of enclosing calls and from the receivers of dotted expressions,
without evaluating anything.

The chain of enclosing calls is an immutable value passed down the
recursion, so any sub-tree can be visited on its own with a hand-built
chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from sizeanalyzer.parsers.gradle.handler import PropertyAssignmentHandler, Scope
from sizeanalyzer.parsers.gradle.nodes import (
    ArgumentTuple,
    Assignment,
    Block,
    Call,
    Literal,
    Node,
    Other,
    PropertyAccess,
    VariableRef,
)
from sizeanalyzer.parsers.gradle.text import node_text


@dataclass(frozen=True)
class CallFrame:
    """One enclosing call: its name and whether it is ``name { ... }``."""

    name: Optional[str]
    closure_container: bool = False

    @classmethod
    def of(cls, call: Call) -> "CallFrame":
        return cls(call.name, call.is_closure_container)


@dataclass(frozen=True)
class ScopeChain:
    """Enclosing calls, outermost first."""

    frames: Tuple[CallFrame, ...] = ()

    def push(self, frame: CallFrame) -> "ScopeChain":
        return ScopeChain(self.frames + (frame,))

    @property
    def innermost(self) -> Optional[CallFrame]:
        return self.frames[-1] if self.frames else None

    def nearest_container(self, skip_innermost: bool = True) -> Optional[str]:
        """Name of the closest ``name { ... }`` frame, scanning outward.

        With ``skip_innermost`` the innermost frame is not considered, so the
        result names a block *around* the current call.
        """
        frames = self.frames[:-1] if skip_innermost else self.frames
        for frame in reversed(frames):
            if frame.closure_container:
                return frame.name
        return None

    def __len__(self) -> int:
        return len(self.frames)


def valid_parent_name(node: Optional[Node]) -> Optional[str]:
    """Name a receiver contributes to the scope, if any.

    In ``defaultConfig.minSdkVersion 14`` the receiver ``defaultConfig`` is a
    valid parent. ``this`` and computed receivers are not.
    """
    if isinstance(node, PropertyAccess):
        return node.name
    if isinstance(node, VariableRef) and node.name != "this":
        return node.name
    return None


class ScopeVisitor:
    """Walks a script tree and reports property sightings to a handler."""

    def __init__(self, source: str, handler: PropertyAssignmentHandler) -> None:
        self.source = source
        self.handler = handler

    def visit(self, node: Node, chain: ScopeChain = ScopeChain()) -> None:
        if isinstance(node, Call):
            self._visit_call(node, chain)
        elif isinstance(node, Assignment):
            self._visit_assignment(node, chain)
        elif isinstance(node, ArgumentTuple):
            for item in node.items:
                self.visit(item, chain)
            for named in node.named:
                self.visit(named.value, chain)
        elif isinstance(node, Block):
            for statement in node.statements:
                self.visit(statement, chain)
        elif isinstance(node, PropertyAccess):
            self.visit(node.receiver, chain)
        elif isinstance(node, Other):
            for child in node.children:
                self.visit(child, chain)
        elif isinstance(node, (Literal, VariableRef)):
            return
        else:
            raise TypeError(f"Unsupported node kind: {type(node).__name__}")

    def _visit_call(self, call: Call, chain: ScopeChain) -> None:
        innermost = chain.innermost
        parent = innermost.name if innermost is not None else None
        grandparent = chain.nearest_container()
        inner = chain.push(CallFrame.of(call))

        arguments = call.arguments
        if arguments.named and not arguments.items:
            values = {
                named.key: node_text(named.value, self.source)
                for named in arguments.named
            }
            self.handler.named_call(
                call.name, values, chain.nearest_container(skip_innermost=False)
            )
        else:
            receiver = call.receiver
            receiver_name = valid_parent_name(receiver)
            if receiver_name is not None:
                grandparent = parent
                parent = receiver_name
                if isinstance(receiver, PropertyAccess):
                    outer = valid_parent_name(receiver.receiver)
                    if outer is not None:
                        grandparent = outer
            self.handler.assign(
                call.name, node_text(arguments, self.source), Scope(parent, grandparent)
            )

        if call.receiver is not None:
            self.visit(call.receiver, inner)
        self.visit(arguments, inner)

    def _visit_assignment(self, assignment: Assignment, chain: ScopeChain) -> None:
        innermost = chain.innermost
        target, value = assignment.target, assignment.value
        if (
            innermost is not None
            and isinstance(value, Literal)
            and value.is_constant
            and isinstance(target, (PropertyAccess, VariableRef))
        ):
            parent = innermost.name
            grandparent = chain.nearest_container()
            if isinstance(target, PropertyAccess):
                # The grandparent override is unconditional, even when the
                # outer receiver yields no name.
                grandparent = parent
                parent = valid_parent_name(target.receiver)
                if isinstance(target.receiver, PropertyAccess):
                    grandparent = valid_parent_name(target.receiver.receiver)
            self.handler.assign(
                target.name, node_text(value, self.source), Scope(parent, grandparent)
            )

        self.visit(target, chain)
        self.visit(value, chain)


__all__ = [
    "CallFrame",
    "ScopeChain",
    "Scope",
    "ScopeVisitor",
    "valid_parent_name",
]
