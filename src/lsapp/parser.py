from __future__ import annotations

from .ast import (
    Document,
    Entry,
    ExecPart,
    ExecValue,
    ListValue,
    Literal,
    Placeholder,
    Section,
    SimpleValue,
    Value,
)
from .errors import ExpectedHeader, MalformedHeader, UnexpectedToken, UnterminatedEntry
from .lexer import Lexer
from .spans import Position, Span
from .tokens import Token, TokenKind


def _describe(tok: Token | None) -> str:
    return "end of line" if tok is None else tok.describe()


class Parser:
    """Recursive-descent builder from the token stream to a Document.

    Keeps a small stack of tokens that were read ahead and pushed back.
    """

    def __init__(self, src: str, *, file: str = "<memory>") -> None:
        self.file = file
        self._lexer = Lexer(src, file=file)
        self._fwd: list[Token] = []

    def parse(self) -> Document:
        sections: list[Section] = []

        first = self._peek()
        if first is None:
            return Document(span=Span.at(Position(), file=self.file))
        if first.kind is not TokenKind.LBRACKET:
            raise ExpectedHeader(
                span=first.span,
                message=f"expected a section header, found {first.describe()}",
                hint="start the file with a heading such as [Desktop Entry]",
            )

        while (tok := self._peek()) is not None:
            if tok.kind is TokenKind.LBRACKET:
                sections.append(self.match_heading())
            elif tok.kind is TokenKind.TEXT:
                entry = self.match_entry()
                cur = sections[-1]
                sections[-1] = Section(
                    span=Span.join(cur.span, entry.span),
                    heading=cur.heading,
                    entries=cur.entries + (entry,),
                )
            else:
                self._next()
                raise UnexpectedToken(
                    span=tok.span,
                    message=f"expected a key or section header, found {tok.describe()}",
                    expected="key or '['",
                    found=tok.describe(),
                )

        return Document(span=Span.join(sections[0].span, sections[-1].span), sections=tuple(sections))

    def match_heading(self) -> Section:
        open_ = self._next()
        if open_ is None or open_.kind is not TokenKind.LBRACKET:
            raise self._malformed_header(open_, "'['")

        row = open_.span.start.row
        name = self._next_on_row(row)
        if name is None or name.kind is not TokenKind.TEXT:
            raise self._malformed_header(name, "a section name", after=open_)

        close = self._next_on_row(row)
        if close is None or close.kind is not TokenKind.RBRACKET:
            raise self._malformed_header(close, "']'", after=name)

        return Section(span=Span.join(open_.span, close.span), heading=name.lexeme.strip(" \t"))

    def match_entry(self) -> Entry:
        key = self._next()
        if key is None or key.kind is not TokenKind.TEXT:
            raise self._unexpected(key, "a key")
        row = key.span.start.row

        locale: str | None = None
        last = key
        tok = self._next_on_row(row)
        if tok is not None and tok.kind is TokenKind.LBRACKET:
            text = self._next_on_row(row)
            if text is None or text.kind is not TokenKind.TEXT:
                raise self._unexpected(text, "a locale", after=tok)
            close = self._next_on_row(row)
            if close is None or close.kind is not TokenKind.RBRACKET:
                raise self._unexpected(close, "']'", after=text)
            locale = text.lexeme.strip(" \t")
            last = close
            tok = self._next_on_row(row)

        if tok is None:
            raise UnterminatedEntry(
                span=Span.join(key.span, last.span),
                message=f"entry {key.lexeme.strip()!r} has no '='",
                hint="write entries as Key=Value",
            )
        if tok.kind is not TokenKind.EQUAL:
            raise self._unexpected(tok, "'='")
        equal = tok

        run: list[Token] = []
        while (tok := self._next_on_row(equal.span.start.row)) is not None:
            run.append(tok)

        name = key.lexeme.strip(" \t")
        value = self._classify(name, equal, run)
        return Entry(span=Span.join(key.span, value.span), key=name, locale=locale, value=value)

    def _classify(self, key: str, equal: Token, run: list[Token]) -> Value:
        if run:
            span = Span.join(run[0].span, run[-1].span)
        else:
            span = Span.at(equal.span.end, file=self.file)

        if key == "Exec":
            parts: list[ExecPart] = []
            for tok in run:
                if tok.kind is TokenKind.ARGUMENT:
                    parts.append(Placeholder(span=tok.span, code=tok.lexeme))
                elif tok.kind is TokenKind.TEXT:
                    parts.append(Literal(span=tok.span, text=tok.lexeme))
                else:
                    raise self._unexpected(tok, "command text or a field code")
            return ExecValue(span=span, parts=tuple(parts))

        if any(tok.kind is TokenKind.SEMICOLON for tok in run):
            items: list[str] = []
            buf: list[str] = []
            for tok in run:
                if tok.kind is TokenKind.SEMICOLON:
                    items.append("".join(buf))
                    buf = []
                else:
                    buf.append(self._text_of(tok))
            # Lists are ";"-terminated; only a non-empty tail is an item.
            if buf and "".join(buf):
                items.append("".join(buf))
            return ListValue(span=span, items=tuple(items))

        return SimpleValue(span=span, text="".join(self._text_of(tok) for tok in run))

    def _text_of(self, tok: Token) -> str:
        if tok.kind is not TokenKind.TEXT:
            raise self._unexpected(tok, "value text")
        return tok.lexeme

    def _next(self) -> Token | None:
        if self._fwd:
            return self._fwd.pop()
        return self._lexer.next_token()

    def _peek(self) -> Token | None:
        tok = self._next()
        if tok is not None:
            self._unread(tok)
        return tok

    def _unread(self, tok: Token) -> None:
        self._fwd.append(tok)

    def _next_on_row(self, row: int) -> Token | None:
        """Next token if it starts on ``row``; a later row belongs to the next item."""
        tok = self._next()
        if tok is not None and tok.span.start.row != row:
            self._unread(tok)
            return None
        return tok

    def _eof_span(self) -> Span:
        return Span.at(self._lexer.position, file=self.file)

    def _malformed_header(
        self, tok: Token | None, expected: str, *, after: Token | None = None
    ) -> MalformedHeader:
        return MalformedHeader(
            span=self._span_of(tok, after),
            message=f"malformed section header: expected {expected}, found {_describe(tok)}",
            hint="section headers look like [Desktop Entry]",
        )

    def _span_of(self, tok: Token | None, after: Token | None) -> Span:
        # A missing token is reported right after the last token of the item,
        # or at the end of input.
        if tok is not None:
            return tok.span
        if after is not None:
            return Span.at(after.span.end, file=self.file)
        return self._eof_span()

    def _unexpected(self, tok: Token | None, expected: str, *, after: Token | None = None) -> UnexpectedToken:
        found = _describe(tok)
        return UnexpectedToken(
            span=self._span_of(tok, after),
            message=f"expected {expected}, found {found}",
            expected=expected,
            found=found,
        )