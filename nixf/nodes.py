"""Syntax tree nodes produced by the parser.

Nodes may be shared between later stages, so they are plain objects
compared by identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar

from .range import Point, Range


class NodeKind(Enum):
    """The concrete kind of a node."""

    INTERPOLABLE_PARTS = auto()
    # Parentheses, keywords and other nodes where only the location matters.
    MISC = auto()
    EXPR_INT = auto()
    EXPR_FLOAT = auto()
    EXPR_STRING = auto()
    EXPR_PATH = auto()
    EXPR_PAREN = auto()

    @property
    def is_expr(self) -> bool:
        return self.name.startswith("EXPR_")


@dataclass(eq=False)
class Node:
    """Base of all nodes: a kind and a source range."""

    kind: ClassVar[NodeKind]
    range: Range

    def __post_init__(self) -> None:
        if not hasattr(type(self), "kind"):
            raise TypeError(f"{type(self).__name__} is abstract")

    @property
    def begin(self) -> Point:
        return self.range.begin

    @property
    def end(self) -> Point:
        return self.range.end


@dataclass(eq=False)
class Expr(Node):
    """Base of all expression nodes."""


@dataclass(eq=False)
class ExprInt(Expr):
    kind: ClassVar[NodeKind] = NodeKind.EXPR_INT
    value: int


@dataclass(eq=False)
class ExprFloat(Expr):
    kind: ClassVar[NodeKind] = NodeKind.EXPR_FLOAT
    value: float


class InterpolablePartKind(Enum):
    ESCAPED = auto()
    INTERPOLATION = auto()


class InterpolablePart:
    """One piece of a string or path: literal text or an interpolation."""

    def __init__(self, value: str | Expr) -> None:
        if isinstance(value, str):
            self.kind = InterpolablePartKind.ESCAPED
        elif isinstance(value, Expr):
            self.kind = InterpolablePartKind.INTERPOLATION
        else:
            raise TypeError(f"cannot make a part from {type(value).__name__}")
        self._value = value

    def escaped(self) -> str:
        """Return the literal text; only valid for escaped parts."""
        if self.kind is not InterpolablePartKind.ESCAPED:
            raise ValueError("part is an interpolation, not text")
        return self._value  # type: ignore[return-value]

    def interpolation(self) -> Expr:
        """Return the interpolated expression; only valid for interpolations."""
        if self.kind is not InterpolablePartKind.INTERPOLATION:
            raise ValueError("part is text, not an interpolation")
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"InterpolablePart({self._value!r})"


@dataclass(eq=False)
class InterpolatedParts(Node):
    kind: ClassVar[NodeKind] = NodeKind.INTERPOLABLE_PARTS
    fragments: list[InterpolablePart]


@dataclass(eq=False)
class ExprString(Expr):
    kind: ClassVar[NodeKind] = NodeKind.EXPR_STRING
    parts: InterpolatedParts


@dataclass(eq=False)
class ExprPath(Expr):
    kind: ClassVar[NodeKind] = NodeKind.EXPR_PATH
    parts: InterpolatedParts


@dataclass(eq=False)
class Misc(Node):
    """A node where only the location matters, such as a parenthesis."""

    kind: ClassVar[NodeKind] = NodeKind.MISC


@dataclass(eq=False)
class ExprParen(Expr):
    kind: ClassVar[NodeKind] = NodeKind.EXPR_PAREN
    expr: Expr | None
    lparen: Misc | None
    rparen: Misc | None