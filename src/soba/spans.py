from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A concrete source position.

    Offsets are 0-based UTF-8 byte offsets; line/column are 1-based and count
    characters, for user-facing messages.
    """

    offset: int
    line: int
    column: int

    @classmethod
    def start(cls) -> Position:
        return cls(offset=0, line=1, column=1)

    def advance(self, ch: str) -> Position:
        offset = self.offset + len(ch.encode("utf-8"))
        if ch == "\n":
            return Position(offset=offset, line=self.line + 1, column=1)
        return Position(offset=offset, line=self.line, column=self.column + 1)


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) of source text."""

    start: Position
    end: Position

    @classmethod
    def single(cls, pos: Position) -> Span:
        return cls(start=pos, end=pos)

    def merge(self, other: Span) -> Span:
        return Span(start=min(self.start, other.start), end=max(self.end, other.end))

    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def length(self) -> int:
        return self.end.offset - self.start.offset

    def format(self) -> str:
        return f"{self.start.line}:{self.start.column}"
