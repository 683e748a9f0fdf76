from __future__ import annotations

from dataclasses import dataclass, replace

from .errors import InvalidSpanError


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A concrete source position.

    All fields are 0-based. ``byte`` counts UTF-8 bytes from the start of the
    text. Arithmetic moves ``col`` and ``byte`` only and never crosses a line;
    use ``newline()`` for that.
    """

    row: int = 0
    col: int = 0
    byte: int = 0

    def advance(self, width: int = 1) -> Position:
        return Position(row=self.row, col=self.col + 1, byte=self.byte + width)

    def retreat(self, width: int = 1) -> Position:
        if self.col < 1 or self.byte < width:
            raise InvalidSpanError(f"cannot move back from {self}")
        return Position(row=self.row, col=self.col - 1, byte=self.byte - width)

    def newline(self) -> Position:
        return Position(row=self.row + 1, col=0, byte=self.byte)

    def __add__(self, n: int) -> Position:
        if n < 0:
            return self - (-n)
        return Position(row=self.row, col=self.col + n, byte=self.byte + n)

    def __sub__(self, n: int) -> Position:
        if n > self.col or n > self.byte:
            raise InvalidSpanError(f"cannot move {n} columns back from {self}")
        return Position(row=self.row, col=self.col - n, byte=self.byte - n)


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single file."""

    start: Position
    end: Position
    file: str = "<memory>"

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidSpanError(f"invalid span: start {self.start} is after end {self.end}")

    @classmethod
    def at(cls, pos: Position, *, file: str = "<memory>") -> Span:
        return cls(start=pos, end=pos, file=file)

    @staticmethod
    def join(first: Span, last: Span) -> Span:
        return Span(start=first.start, end=last.end, file=first.file)

    def finish(self, end: Position) -> Span:
        return replace(self, end=end)

    def __add__(self, n: int) -> Span:
        return replace(self, end=self.end + n)

    def __sub__(self, n: int) -> Span:
        return replace(self, end=self.end - n)

    def format(self) -> str:
        return f"{self.file}:{self.start.row + 1}:{self.start.col + 1}"
