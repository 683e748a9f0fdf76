from __future__ import annotations

import argparse
from pathlib import Path

from lsapp.lexer import Lexer


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="dump_tokens")
    ap.add_argument("path", help="A .desktop file")
    args = ap.parse_args(argv)

    p = Path(args.path).expanduser()
    lexer = Lexer(p.read_text(encoding="utf-8"), file=str(p))
    for i, tok in enumerate(lexer):
        s = tok.span
        print(
            f"{i:>4}: {tok.kind.name:<9} {tok.lexeme!r:<32} "
            f"{s.start.row}:{s.start.col}-{s.end.row}:{s.end.col} state={lexer.state.name}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
