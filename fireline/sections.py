"""
Section extraction
==================

The corpus marks every region it cares about with an HTML comment pair:

    <!-- FIRE_CAUSE_START -->
    外牆大型維修工程的棚架起火。
    <!-- FIRE_CAUSE_END -->

Helpers here find those regions and split pipe-table lines into cells.
They never raise: a missing start marker gives an empty result, a missing
end marker gives everything up to the end of the text.
"""

from __future__ import annotations
from typing import List

from .patterns import DEFAULT_PATTERNS, PatternTable


def section_lines(text: str, name: str, patterns: PatternTable = DEFAULT_PATTERNS) -> List[str]:
    """Raw lines between the first `<name>_START` marker and its `<name>_END`."""
    markers = patterns.markers(name)
    out: List[str] = []
    inside = False
    for line in text.split("\n"):
        if not inside:
            if markers.start.search(line):
                inside = True
            continue
        if markers.end.search(line):
            break
        out.append(line)
    return out


def section_blocks(text: str, name: str, patterns: PatternTable = DEFAULT_PATTERNS) -> List[List[str]]:
    """Every closed `<name>_START ... <name>_END` block, in document order.

    Used for repeated sections such as PHASE. A block without an end marker
    is not returned.
    """
    markers = patterns.markers(name)
    blocks: List[List[str]] = []
    current: List[str] = []
    inside = False
    for line in text.split("\n"):
        if markers.start.search(line):
            inside = True
            current = []
            continue
        if inside and markers.end.search(line):
            blocks.append(current)
            inside = False
            continue
        if inside:
            current.append(line)
    return blocks


def extract_section(text: str, name: str, patterns: PatternTable = DEFAULT_PATTERNS) -> str:
    """Text of a section as one line.

    Lines are trimmed, blank lines and comment-only lines (e.g.
    `<!-- TRANSLATE_TEXT -->`) are skipped, and the rest is joined with
    single spaces.
    """
    kept = []
    for line in section_lines(text, name, patterns):
        s = line.strip()
        if s and not patterns.comment_line.match(s):
            kept.append(s)
    return " ".join(kept)


def extract_notes(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> List[str]:
    """Bullet items (`- note`) of the NOTES section."""
    notes: List[str] = []
    for line in section_lines(text, "NOTES", patterns):
        s = line.strip()
        if s.startswith("- "):
            notes.append(s[2:].strip())
    return notes


# ---------------- Pipe tables ----------------
def is_table_line(line: str) -> bool:
    return line.strip().startswith("|")


def split_cells(line: str) -> List[str]:
    """Split `| a | b |` into ["a", "b"] (outer empty cells dropped)."""
    parts = line.strip().split("|")
    if parts and parts[0].strip() == "":
        parts = parts[1:]
    if parts and parts[-1].strip() == "":
        parts = parts[:-1]
    return [p.strip() for p in parts]


def is_separator_row(cells: List[str]) -> bool:
    """True for `|---|:---:|` style rows (only dashes, colons, spaces)."""
    if not cells:
        return False
    saw_dash = False
    for c in cells:
        for ch in c:
            if ch == "-":
                saw_dash = True
            elif ch not in ": \t":
                return False
    return saw_dash


def key_value_rows(lines: List[str], header_keys=("KEY", "項目", "项目")) -> List[List[str]]:
    """Data rows of a KEY | VALUE table (header and separator rows removed)."""
    rows: List[List[str]] = []
    for line in lines:
        if not is_table_line(line):
            continue
        cells = split_cells(line)
        if not cells or is_separator_row(cells):
            continue
        if cells[0].upper() in header_keys:
            continue
        rows.append(cells)
    return rows
