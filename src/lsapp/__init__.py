from __future__ import annotations

from .api import ScanResult, enumerate_desktop_files, parse_file, parse_source, scan
from .ast import Document, Entry, ExecValue, ListValue, Literal, Placeholder, Section, SimpleValue
from .errors import (
    ExpectedHeader,
    InvalidSpanError,
    MalformedHeader,
    ParseError,
    UnexpectedToken,
    UnterminatedEntry,
)
from .format import format_document
from .lexer import Lexer, LexState, tokenize

__all__ = [
    "Document",
    "Entry",
    "ExecValue",
    "ExpectedHeader",
    "InvalidSpanError",
    "LexState",
    "Lexer",
    "ListValue",
    "Literal",
    "MalformedHeader",
    "ParseError",
    "Placeholder",
    "ScanResult",
    "Section",
    "SimpleValue",
    "UnexpectedToken",
    "UnterminatedEntry",
    "enumerate_desktop_files",
    "format_document",
    "parse_file",
    "parse_source",
    "scan",
    "tokenize",
]
