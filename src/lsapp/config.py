from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path


DEFAULT_SOURCES: tuple[str, ...] = (
    "/usr/share/applications",
    "/usr/local/share/applications",
    "~/.local/share/applications",
)

SOURCES_ENV = "LSAPP_SOURCES"

DESKTOP_ENTRY = "Desktop Entry"


def split_sources(value: str) -> list[str]:
    return [s.strip() for s in value.split(",") if s.strip()]


def default_sources(environ: Mapping[str, str] | None = None) -> list[str]:
    """Source directories from ``LSAPP_SOURCES``, else the built-in defaults."""
    env = os.environ if environ is None else environ
    raw = env.get(SOURCES_ENV, "")
    if raw.strip():
        return split_sources(raw)
    return list(DEFAULT_SOURCES)


def expand_source(path: str | Path) -> Path:
    return Path(path).expanduser()
