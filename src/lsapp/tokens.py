from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span


class TokenKind(str, Enum):
    TEXT = "TEXT"
    ARGUMENT = "ARGUMENT"

    LBRACKET = "["
    RBRACKET = "]"
    EQUAL = "="
    SEMICOLON = ";"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span

    def describe(self) -> str:
        if self.kind is TokenKind.TEXT:
            return f"text {self.lexeme!r}"
        if self.kind is TokenKind.ARGUMENT:
            return f"field code %{self.lexeme}"
        return f"'{self.kind.value}'"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.span.format()})"
