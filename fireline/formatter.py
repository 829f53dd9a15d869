"""
Markdown table formatter
========================

Re-aligns every pipe table so the columns line up in a monospace editor:

    |DATE|時間|EVENT|          | DATE       | 時間  | EVENT       |
    |-|-|-|             ->   | ---------- | ----- | ----------- |
    |2025-11-26|14:51|起火|    | 2025-11-26 | 14:51 | 起火        |

Widths are display widths: East Asian wide and full-width characters take
two columns. The metadata block is removed first and the result is signed
again, keeping the old VALIDATION flag and VERSION.
"""

from __future__ import annotations
import unicodedata
from typing import List

from . import metadata as meta_codec
from .sections import split_cells

MIN_COLUMN_WIDTH = 3


def display_width(text: str) -> int:
    width = 0
    for ch in text:
        if unicodedata.combining(ch):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return width


def _is_separator(cells: List[str]) -> bool:
    return all(c.replace("-", "").replace(":", "").replace(" ", "") == "" for c in cells)


def format_table(rows: List[str]) -> List[str]:
    """Align one table (list of `|...|` lines). Single lines are returned as is."""
    if len(rows) < 2:
        return rows
    table = [split_cells(r) for r in rows]
    ncols = max(len(r) for r in table)
    sep_idx = 1 if _is_separator(table[1]) else -1

    widths = [0] * ncols
    for i, row in enumerate(table):
        if i == sep_idx:
            continue
        for j, cell in enumerate(row):
            widths[j] = max(widths[j], display_width(cell))
    widths = [max(w, MIN_COLUMN_WIDTH) for w in widths]

    out: List[str] = []
    for i, row in enumerate(table):
        parts = []
        for j in range(ncols):
            if i == sep_idx:
                parts.append("-" * widths[j])
            else:
                cell = row[j] if j < len(row) else ""
                parts.append(cell + " " * (widths[j] - display_width(cell)))
        out.append("| " + " | ".join(parts) + " |")
    return out


def format_markdown(text: str) -> str:
    """Align all tables and re-sign the document."""
    meta, clean = meta_codec.extract(text)

    out: List[str] = []
    buf: List[str] = []
    for line in clean.split("\n"):
        s = line.strip()
        if s.startswith("|") and s.endswith("|"):
            buf.append(line)
            continue
        if buf:
            out.extend(format_table(buf))
            buf = []
        out.append(line)
    if buf:
        out.extend(format_table(buf))

    validated = meta.validation if meta else False
    version = meta.version if meta else None
    return meta_codec.sign("\n".join(out), validated, version=version)
