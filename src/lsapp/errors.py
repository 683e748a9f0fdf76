from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .spans import Span


class InvalidSpanError(RuntimeError):
    """Internal invariant violation: a position or span was inverted.

    This is a bug in the scanner, not a problem with the input, and it is
    deliberately not a ParseError so callers cannot catch it by accident.
    """


@dataclass(slots=True)
class ParseError(Exception):
    span: Span
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.span.format()}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


@dataclass(slots=True)
class UnexpectedToken(ParseError):
    expected: str = ""
    found: str = ""


class ExpectedHeader(ParseError):
    """The document does not open with a ``[Section]`` heading."""


class MalformedHeader(ParseError):
    """A heading is not ``[`` text ``]``."""


class UnterminatedEntry(ParseError):
    """A key is not followed by ``=`` on its line."""
