from __future__ import annotations

from enum import Enum
from pathlib import Path

from .ast import Section, Value
from .format import format_value


class Column(str, Enum):
    NAME = "name"
    COMMENT = "comment"
    PATH = "path"
    FILENAME = "filename"
    CATEGORIES = "categories"
    ICON = "icon"

    @classmethod
    def parse(cls, s: str) -> Column:
        try:
            return cls(s.strip().lower())
        except ValueError:
            raise ValueError(f"unsupported column type `{s}`") from None


DEFAULT_COLUMNS: tuple[Column, ...] = (Column.NAME, Column.COMMENT, Column.PATH)


class Separator(Enum):
    COMMA = ","
    TAB = "\t"
    SPACES = " "


def locale_candidates(lang: str) -> list[str]:
    """Locale qualifiers to try for ``lang``, most specific first.

    ``lang`` has the POSIX shape ``lang_COUNTRY.ENCODING@MODIFIER``; the
    encoding never takes part in matching.
    """
    rest, _, modifier = lang.partition("@")
    rest = rest.split(".", 1)[0]
    language, _, country = rest.partition("_")
    out: list[str] = []
    if country and modifier:
        out.append(f"{language}_{country}@{modifier}")
    if country:
        out.append(f"{language}_{country}")
    if modifier:
        out.append(f"{language}@{modifier}")
    out.append(language)
    return out


def localized(section: Section, key: str, lang: str | None = None) -> Value | None:
    if lang:
        for candidate in locale_candidates(lang):
            value = section.get(key, candidate)
            if value is not None:
                return value
    return section.get(key)


def cell(
    column: Column,
    path: Path,
    section: Section,
    *,
    lang: str | None = None,
    with_ext: bool = False,
) -> str:
    if column is Column.PATH:
        return str(path)
    if column is Column.FILENAME:
        return path.name if with_ext else path.stem

    if column is Column.NAME:
        value = localized(section, "Name", lang)
    elif column is Column.COMMENT:
        value = localized(section, "Comment", lang)
    elif column is Column.CATEGORIES:
        value = section.get("Categories")
    else:
        value = section.get("Icon")
    return "" if value is None else format_value(value)


def _quote(s: str) -> str:
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


def render_rows(rows: list[list[str]], separator: Separator, *, quote: bool = False) -> list[str]:
    if quote:
        rows = [[_quote(c) for c in row] for row in rows]
    if separator is not Separator.SPACES:
        return [separator.value.join(row) for row in rows]

    widths: list[int] = []
    for row in rows:
        for i, c in enumerate(row):
            if i == len(widths):
                widths.append(0)
            widths[i] = max(widths[i], len(c))
    out: list[str] = []
    for row in rows:
        padded = [c.ljust(widths[i]) for i, c in enumerate(row[:-1])]
        out.append(" ".join(padded + row[-1:]))
    return out
