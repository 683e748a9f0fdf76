from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .spans import Span


@dataclass(frozen=True, slots=True)
class Node:
    span: Span


@dataclass(frozen=True, slots=True)
class Literal(Node):
    text: str


@dataclass(frozen=True, slots=True)
class Placeholder(Node):
    """A ``%x`` field code; ``code`` is ``"\\0"`` for a bare ``%`` at end of input."""

    code: str


ExecPart = Literal | Placeholder


@dataclass(frozen=True, slots=True)
class SimpleValue(Node):
    text: str


@dataclass(frozen=True, slots=True)
class ListValue(Node):
    items: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ExecValue(Node):
    parts: tuple[ExecPart, ...] = ()

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(p.code for p in self.parts if isinstance(p, Placeholder))


Value = SimpleValue | ListValue | ExecValue


@dataclass(frozen=True, slots=True)
class Entry(Node):
    key: str
    value: Value
    locale: str | None = None


@dataclass(frozen=True, slots=True)
class Section(Node):
    heading: str
    entries: tuple[Entry, ...] = ()

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def entry(self, key: str, locale: str | None = None) -> Entry | None:
        # Last one wins when a key is repeated.
        found = None
        for e in self.entries:
            if e.key == key and e.locale == locale:
                found = e
        return found

    def get(self, key: str, locale: str | None = None) -> Value | None:
        e = self.entry(key, locale)
        return e.value if e is not None else None

    def locales(self, key: str) -> tuple[str, ...]:
        """Locale qualifiers present for ``key``, in source order."""
        seen: list[str] = []
        for e in self.entries:
            if e.key == key and e.locale is not None and e.locale not in seen:
                seen.append(e.locale)
        return tuple(seen)


@dataclass(frozen=True, slots=True)
class Document(Node):
    sections: tuple[Section, ...] = ()

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def section(self, heading: str) -> Section | None:
        for s in self.sections:
            if s.heading == heading:
                return s
        return None
