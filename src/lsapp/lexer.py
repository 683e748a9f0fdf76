from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .spans import Position, Span
from .tokens import Token, TokenKind


class LexState(Enum):
    READ_KEY = "key"
    READ_HEADER = "header"
    READ_VALUE = "value"
    READ_EXEC = "exec"


# Characters that end a text run, per state. Line breaks and "#" always do.
_STOPS = {
    LexState.READ_KEY: "[]=",
    LexState.READ_HEADER: "]",
    LexState.READ_VALUE: ";",
    LexState.READ_EXEC: "",
}

_BLANKS = (" ", "\t")
_LINE_BREAKS = ("\r", "\n")


def _width(ch: str) -> int:
    return len(ch.encode("utf-8", "surrogatepass"))


@dataclass(slots=True)
class _Cursor:
    """Character cursor with a pushback stack.

    ``next`` pops from the pushback stack before reading the source, and
    ``push`` moves the position back by exactly what ``next`` added.
    """

    src: str
    i: int = 0
    pos: Position = field(default_factory=Position)
    back: list[str] = field(default_factory=list)

    def peek(self) -> str:
        if self.back:
            return self.back[-1]
        if self.i >= len(self.src):
            return ""
        return self.src[self.i]

    def next(self) -> str:
        if self.back:
            ch = self.back.pop()
        elif self.i < len(self.src):
            ch = self.src[self.i]
            self.i += 1
        else:
            return ""
        self.pos = self.pos.advance(_width(ch))
        return ch

    def push(self, ch: str) -> None:
        self.pos = self.pos.retreat(_width(ch))
        self.back.append(ch)


class Lexer:
    """Lazy tokenizer for Desktop Entry text.

    The scan state decides which characters are structural: brackets and
    ``=`` only matter while reading a key, ``;`` only inside a value, and
    ``%`` field codes only inside an ``Exec`` value. Every line break
    resets the state to reading a key.
    """

    def __init__(
        self,
        src: str,
        *,
        file: str = "<memory>",
        state: LexState = LexState.READ_KEY,
    ) -> None:
        self.file = file
        self._cur = _Cursor(src=src)
        self._state = state
        self._key = ""

    @property
    def state(self) -> LexState:
        return self._state

    @property
    def position(self) -> Position:
        return self._cur.pos

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        tok = self.next_token()
        if tok is None:
            raise StopIteration
        return tok

    def next_token(self) -> Token | None:
        cur = self._cur
        while True:
            ch = cur.peek()
            if ch == "":
                return None

            if ch in _BLANKS and self._state is not LexState.READ_EXEC:
                self.skip_whitespace()
                continue
            if ch == "#":
                self.skip_comment()
                continue
            if ch in _LINE_BREAKS:
                self.advance_line()
                continue

            if ch == "[" and self._state is LexState.READ_KEY:
                self._state = LexState.READ_HEADER
                return self._single(TokenKind.LBRACKET)
            if ch == "]" and self._state in (LexState.READ_KEY, LexState.READ_HEADER):
                # An unmatched "]" while reading a key is still emitted; the
                # parser reports it.
                self._state = LexState.READ_KEY
                return self._single(TokenKind.RBRACKET)
            if ch == "=" and self._state is LexState.READ_KEY:
                if self._key.rstrip(" \t") == "Exec":
                    self._state = LexState.READ_EXEC
                else:
                    self._state = LexState.READ_VALUE
                return self._single(TokenKind.EQUAL)
            if ch == ";" and self._state is LexState.READ_VALUE:
                return self._single(TokenKind.SEMICOLON)
            if ch == "%" and self._state is LexState.READ_EXEC:
                return self._argument()

            start = cur.pos
            text = self.read_text()
            if self._state is LexState.READ_KEY:
                self._key = text
            return Token(TokenKind.TEXT, text, self._span(start))

    def read_text(self) -> str:
        """Consume a run of text up to the current state's delimiter."""
        cur = self._cur
        stops = _STOPS[self._state]
        buf: list[str] = []
        while True:
            ch = cur.peek()
            if ch == "" or ch in _LINE_BREAKS or ch == "#" or ch in stops:
                break
            if ch == "%" and self._state is LexState.READ_EXEC:
                cur.next()
                follower = cur.peek()
                if follower.isalpha():
                    cur.push("%")
                    break
                buf.append("%")
                if follower and follower not in _LINE_BREAKS and follower != "#":
                    buf.append(cur.next())
                continue
            buf.append(cur.next())
        return "".join(buf)

    def skip_whitespace(self) -> None:
        cur = self._cur
        while cur.peek() in _BLANKS:
            cur.next()

    def skip_comment(self) -> None:
        cur = self._cur
        while True:
            ch = cur.next()
            if ch == "":
                return
            if ch in _LINE_BREAKS:
                cur.push(ch)
                self.advance_line()
                return

    def advance_line(self) -> None:
        """Consume one line break (``\\n``, ``\\r\\n`` or ``\\r``)."""
        cur = self._cur
        ch = cur.next()
        if ch == "\r":
            nxt = cur.next()
            if nxt and nxt != "\n":
                cur.push(nxt)
        elif ch != "\n":
            if ch:
                cur.push(ch)
            return

        cur.pos = cur.pos.newline()
        self._state = LexState.READ_KEY
        self._key = ""

    def _argument(self) -> Token:
        cur = self._cur
        start = cur.pos
        cur.next()
        follower = cur.peek()
        # The line break stays for advance_line.
        if follower == "" or follower in _LINE_BREAKS:
            return Token(TokenKind.ARGUMENT, "\0", self._span(start))
        cur.next()
        return Token(TokenKind.ARGUMENT, follower, self._span(start))

    def _single(self, kind: TokenKind) -> Token:
        start = self._cur.pos
        ch = self._cur.next()
        return Token(kind, ch, self._span(start))

    def _span(self, start: Position) -> Span:
        return Span(start=start, end=self._cur.pos, file=self.file)


def tokenize(src: str, *, file: str = "<memory>") -> list[Token]:
    return list(Lexer(src, file=file))
