from __future__ import annotations

import argparse
from pathlib import Path

from lsapp.testing import generate_corpus_files


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="generate_desktop_corpus",
        description="Write a deterministic set of generated .desktop files",
    )
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=300, help="Number of .desktop files")
    ap.add_argument(
        "--out",
        default="tests/fixtures/desktop_corpus",
        help="Directory that receives an applications/ tree per seed",
    )
    args = ap.parse_args(argv)

    apps = Path(args.out).resolve() / f"seed{args.seed}-n{args.count}" / "applications"
    apps.mkdir(parents=True, exist_ok=True)

    written = 0
    for name, src in generate_corpus_files(seed=args.seed, count=args.count):
        (apps / name).write_text(src, encoding="utf-8")
        written += 1

    # The directory can be fed straight to `lsapp -S`.
    print(f"{written} files in {apps}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
