from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, is_dataclass
from pathlib import Path

from .api import enumerate_desktop_files, scan
from .columns import DEFAULT_COLUMNS, Column, Separator, cell, render_rows
from .config import DESKTOP_ENTRY, default_sources, expand_source, split_sources


logger = logging.getLogger(__name__)


def _to_jsonable(obj):
    if is_dataclass(obj):
        return {k: _to_jsonable(v) for k, v in asdict(obj).items()}
    if isinstance(obj, tuple):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, list):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    return obj


def _columns(value: str) -> list[Column]:
    try:
        return [Column.parse(s) for s in value.split(",") if s.strip()]
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="lsapp", description="List installed applications scanned from .desktop files"
    )
    ap.add_argument(
        "-S",
        "--sources",
        action="append",
        default=[],
        help="Source directories for .desktop files, comma separated (repeatable; "
        "defaults to $LSAPP_SOURCES or the standard application directories)",
    )
    ap.add_argument(
        "-d",
        "--data",
        type=_columns,
        default=list(DEFAULT_COLUMNS),
        help="Columns to print: name, comment, path, filename, categories, icon (default: name,comment,path)",
    )
    ap.add_argument("-l", "--lang", help="Language to use for name and comment, if available")
    ap.add_argument("-x", "--with-ext", action="store_true", help="Include extension in filename")
    sep = ap.add_mutually_exclusive_group()
    sep.add_argument(
        "-c", "--comma", dest="separator", action="store_const", const=Separator.COMMA,
        help="Separate columns with commas",
    )
    sep.add_argument(
        "-t", "--tab", dest="separator", action="store_const", const=Separator.TAB,
        help="Separate columns with tabs (default)",
    )
    sep.add_argument(
        "-s", "--spaces", dest="separator", action="store_const", const=Separator.SPACES,
        help="Separate columns with spaces as padding",
    )
    ap.add_argument("-q", "--quote", action="store_true", help="Quote values in columns")
    ap.add_argument("--json", action="store_true", help="Print parsed documents as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log every file parsed")
    ap.set_defaults(separator=Separator.TAB)
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    sources = [s for raw in args.sources for s in split_sources(raw)] or default_sources()
    readable = [s for s in sources if expand_source(s).is_dir()]
    if not readable:
        logger.error("no readable source directories among: %s", ", ".join(sources))
        return 1

    res = scan(enumerate_desktop_files(readable))

    if args.json:
        payload = {
            "files": {k: _to_jsonable(v) for k, v in res.documents.items()},
            "errors": [str(e) for e in res.errors],
        }
        print(json.dumps(payload, indent=2, sort_keys=True))
        return 0

    rows: list[list[str]] = []
    for path, doc in res.documents.items():
        section = doc.section(DESKTOP_ENTRY)
        if section is None:
            logger.info("no [%s] section in %s", DESKTOP_ENTRY, path)
            continue
        rows.append(
            [cell(c, Path(path), section, lang=args.lang, with_ext=args.with_ext) for c in args.data]
        )

    for line in render_rows(rows, args.separator, quote=args.quote):
        print(line)
    return 0
