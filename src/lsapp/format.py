from __future__ import annotations

from . import ast as A


def format_document(doc: A.Document) -> str:
    out: list[str] = []
    for section in doc.sections:
        if out:
            out.append("")
        out.append(f"[{section.heading}]")
        for entry in section.entries:
            out.append(_format_entry(entry))
    if not out:
        return ""
    return "\n".join(out) + "\n"


def _format_entry(entry: A.Entry) -> str:
    key = entry.key if entry.locale is None else f"{entry.key}[{entry.locale}]"
    return f"{key}={format_value(entry.value)}"


def format_value(value: A.Value) -> str:
    if isinstance(value, A.ExecValue):
        return "".join(_format_exec_part(p) for p in value.parts)
    if isinstance(value, A.ListValue):
        return "".join(item + ";" for item in value.items)
    return value.text


def _format_exec_part(part: A.ExecPart) -> str:
    if isinstance(part, A.Placeholder):
        # A bare "%" at end of input has no code.
        return "%" if part.code == "\0" else f"%{part.code}"
    return part.text
