from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .ast import Document
from .config import expand_source
from .errors import ParseError
from .parser import Parser


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileError:
    path: str
    error: ParseError | OSError | UnicodeDecodeError

    def __str__(self) -> str:
        if isinstance(self.error, ParseError):
            return str(self.error)
        return f"{self.path}: {self.error}"


@dataclass(frozen=True, slots=True)
class ScanResult:
    documents: dict[str, Document] = field(default_factory=dict)  # path -> document
    errors: tuple[FileError, ...] = ()


def parse_source(src: str, *, file: str = "<memory>") -> Document:
    return Parser(src, file=file).parse()


def parse_file(path: str | Path) -> Document:
    p = Path(path).expanduser().resolve()
    src = p.read_text(encoding="utf-8")
    return parse_source(src, file=str(p))


def enumerate_desktop_files(
    sources: Iterable[str | Path], *, suffix: str | None = ".desktop"
) -> list[Path]:
    """Regular files directly inside each source directory, in sorted order.

    Only names ending in ``suffix`` are kept unless it is None. Sources that
    do not exist or cannot be listed are skipped.
    """
    files: list[Path] = []
    for source in sources:
        d = expand_source(source)
        try:
            children = sorted(d.iterdir())
        except OSError as e:
            logger.debug("skipping source %s: %s", d, e)
            continue
        files.extend(
            c for c in children if c.is_file() and (suffix is None or c.name.endswith(suffix))
        )
    return files


def scan(paths: Iterable[str | Path]) -> ScanResult:
    """Parse every path, collecting failures instead of stopping at the first."""
    documents: dict[str, Document] = {}
    errors: list[FileError] = []
    for path in paths:
        p = str(path)
        try:
            documents[p] = parse_file(path)
        except (ParseError, OSError, UnicodeDecodeError) as e:
            logger.warning("skipping %s: %s", p, e)
            errors.append(FileError(path=p, error=e))
            continue
        logger.debug("parsed %s", p)
    return ScanResult(documents=documents, errors=tuple(errors))
