"""
Precompiled pattern table
=========================

Every regular expression the parser needs lives in one immutable
`PatternTable`. A `TimelineParser` builds it once (or receives one) and passes
it down to the section, row and casualty helpers, so nothing is recompiled
per line and nothing is kept in mutable module globals.

Section markers look like this in the markdown:

    <!-- TIMELINE_TABLE_START -->
    ...
    <!-- TIMELINE_TABLE_END -->
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple
import re

# Section names used by the corpus (the *_START / *_END comment pairs).
SECTION_NAMES: Tuple[str, ...] = (
    "BASIC_INFO",
    "FIRE_CAUSE",
    "SEVERITY",
    "TIMELINE_TABLE",
    "KEY_STATISTICS",
    "SOURCES",
    "NOTES",
    "PHASE",
    "PHASE_INFO",
    "PHASE_DESCRIPTION",
    "LONG_TERM_TRACKING",
    "CATEGORY_METRICS",
)


@dataclass(frozen=True)
class SectionMarkers:
    """Start/end pattern pair for one named section."""
    name: str
    start: re.Pattern[str]
    end: re.Pattern[str]


def _markers(name: str) -> SectionMarkers:
    return SectionMarkers(
        name=name,
        start=re.compile(rf"<!--\s*{name}_START\s*-->"),
        end=re.compile(rf"<!--\s*{name}_END\s*-->"),
    )


def _all_markers() -> Mapping[str, SectionMarkers]:
    return MappingProxyType({name: _markers(name) for name in SECTION_NAMES})


@dataclass(frozen=True)
class PatternTable:
    """Read-only bundle of compiled patterns shared by one parser instance."""

    # **11月26日**
    date_bold: re.Pattern[str] = re.compile(r"\*\*(\d{1,2})月(\d{1,2})日\*\*")
    # ### 11月26日（星期三）
    date_heading: re.Pattern[str] = re.compile(r"^#{1,3}\s*(\d{1,2})月(\d{1,2})日")
    date_iso: re.Pattern[str] = re.compile(r"^\d{4}-\d{2}-\d{2}$")
    time_hhmm: re.Pattern[str] = re.compile(r"^\d{1,2}:\d{2}$")
    link: re.Pattern[str] = re.compile(r"\[(.*?)\]\((.*?)\)")
    comment_line: re.Pattern[str] = re.compile(r"^\s*<!--.*-->\s*$")
    file_type: re.Pattern[str] = re.compile(r"<!--\s*FILE_TYPE:\s*(\w+)\s*-->")
    # DEAD:13 or DEAD:13(ON_SITE:9,TRANSIT:4) -> ("DEAD", "13")
    status_code: re.Pattern[str] = re.compile(r"^([A-Z_]+)\s*:\s*(\d+)")
    legacy_dead: re.Pattern[str] = re.compile(r"(\d+)\s*(?:名|人)?\s*死")
    legacy_injured: re.Pattern[str] = re.compile(r"(\d+)\s*(?:名|人)?\s*[傷伤]")
    legacy_missing: re.Pattern[str] = re.compile(r"(\d+)\s*(?:名|人)?\s*(?:失蹤|失踪|下落不明)")
    leading_int: re.Pattern[str] = re.compile(r"^\s*(\d+)")
    leading_float: re.Pattern[str] = re.compile(r"^\s*(-?\d+(?:\.\d+)?)")
    sections: Mapping[str, SectionMarkers] = field(default_factory=_all_markers)

    def markers(self, name: str) -> SectionMarkers:
        """Return the start/end markers for a section name (e.g. "NOTES")."""
        try:
            return self.sections[name]
        except KeyError:
            raise KeyError(f"Unknown section name: {name!r}") from None


DEFAULT_PATTERNS = PatternTable()
