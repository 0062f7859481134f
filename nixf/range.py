"""Source positions and ranges."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point:
    """A point in the source: zero-based line, column and offset.

    Points are normally produced by the lexer, which keeps the line and
    column in step with the offset.
    """

    line: int = 0
    column: int = 0
    offset: int = 0

    def is_at(self, line: int, column: int, offset: int) -> bool:
        """Return True if this point is at the given position."""
        return (self.line, self.column, self.offset) == (line, column, offset)


@dataclass(frozen=True)
class Range:
    """A half-open span of source text between two points."""

    begin: Point = field(default_factory=Point)
    end: Point = field(default_factory=Point)

    @classmethod
    def at(cls, point: Point) -> Range:
        """Return an empty range located at ``point``."""
        return cls(point, point)