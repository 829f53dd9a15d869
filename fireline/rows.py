"""
Timeline table rows
===================

Turns pipe-table rows into `TimelineEvent` objects.

Two ways of locating the fields of a row:

- ColumnMapStrategy: the table sits between TIMELINE_TABLE markers and has a
  header row; columns are found by header name (see columns.py).
- PositionalStrategy: older files without markers. Cells are read by fixed
  position (date, time, description, category, casualties, source, video,
  photo, end) and the date comes from headings like **11月26日**.

The strategy is picked once per document. Bad rows are dropped and logged;
one broken row never fails the whole document.

Table states (column-map mode):

    Outside --start marker--> InTable(no header) --header row--> InTable(map)
       ^                                                             |
       +------------------------- end marker ------------------------+
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from . import columns as col
from .casualties import parse_casualties
from .datetimes import compose_datetime, is_iso_date, is_valid_time
from .errors import FormatError, InsufficientCells, InvalidRow, InvalidTimeFormat, StructuralError, UnmappedColumn
from .identity import event_id
from .models import STATUS_NONE, EventSource, Photo, TimelineEvent
from .patterns import DEFAULT_PATTERNS, PatternTable
from .sections import is_separator_row, is_table_line, split_cells

logger = logging.getLogger(__name__)

TABLE_SECTION = "TIMELINE_TABLE"
DEFAULT_LEGACY_YEAR = 2025


@dataclass(frozen=True)
class RowCells:
    """Raw text of the fields of one row (empty string when absent)."""
    date: str = ""
    time: str = ""
    description: str = ""
    category: str = ""
    casualties: str = ""
    source: str = ""
    video: str = ""
    photo: str = ""
    end: str = ""
    status_note: str = ""


class RowStrategy:
    """Knows where each field of a row lives."""

    def cells_for(self, cells: List[str]) -> RowCells:
        raise NotImplementedError


class ColumnMapStrategy(RowStrategy):
    def __init__(self, column_map: Dict[str, int]) -> None:
        self.column_map = dict(column_map)

    def _get(self, cells: List[str], token: str) -> str:
        idx = self.column_map.get(token)
        if idx is None or idx >= len(cells):
            return ""
        return cells[idx]

    def cells_for(self, cells: List[str]) -> RowCells:
        idx = self.column_map.get(col.TIME)
        if idx is None:
            raise UnmappedColumn("table has no TIME column")
        if idx >= len(cells):
            raise InsufficientCells(f"row has {len(cells)} cells, TIME is column {idx + 1}")
        status_note = self._get(cells, "STATUS_NOTE") or self._get(cells, "STATUS")
        return RowCells(
            date=self._get(cells, col.DATE),
            time=self._get(cells, col.TIME),
            description=self._get(cells, col.EVENT),
            category=self._get(cells, col.CATEGORY),
            casualties=self._get(cells, col.CASUALTIES),
            source=self._get(cells, col.SOURCE),
            video=self._get(cells, col.VIDEO),
            photo=self._get(cells, col.PHOTO),
            end=self._get(cells, col.END),
            status_note=status_note,
        )


class PositionalStrategy(RowStrategy):
    # date | time | description | category | casualties | source | video | photo | end
    MIN_CELLS = 5

    def cells_for(self, cells: List[str]) -> RowCells:
        if len(cells) < self.MIN_CELLS:
            raise InsufficientCells(f"row has {len(cells)} cells, need at least {self.MIN_CELLS}")
        padded = list(cells) + [""] * (9 - len(cells))
        return RowCells(*padded[:9])


@dataclass
class TableResult:
    """Events of one document plus what was dropped on the way."""
    events: List[TimelineEvent] = field(default_factory=list)
    dropped: List[Tuple[int, str]] = field(default_factory=list)
    header_seen: bool = False
    positional: bool = False

    @property
    def well_formed(self) -> bool:
        return (self.header_seen or self.positional) and bool(self.events)


# ---------------- Cell helpers ----------------
def parse_sources(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> List[EventSource]:
    """`[name](url)` links, or comma separated plain names."""
    text = (text or "").strip()
    if not text or text == STATUS_NONE:
        return []
    links = patterns.link.findall(text)
    if links:
        return [EventSource(name=name.strip(), url=url.strip()) for name, url in links]
    names = [n.strip() for n in text.replace("，", ",").split(",")]
    return [EventSource(name=n) for n in names if n and n != STATUS_NONE]


def parse_photos(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> List[Photo]:
    """`[caption](url)` links, or comma separated URLs."""
    text = (text or "").strip()
    if not text or text == STATUS_NONE:
        return []
    links = patterns.link.findall(text)
    if links:
        return [Photo(url=url.strip(), caption=caption.strip()) for caption, url in links]
    return [Photo(url=u.strip()) for u in text.split(",") if u.strip()]


def parse_video_url(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> str:
    """URL of the first `[text](url)` link, or the text itself if it is a URL."""
    text = (text or "").strip()
    if not text:
        return ""
    m = patterns.link.search(text)
    if m:
        return m.group(2).strip()
    if text.startswith("http"):
        return text
    return ""


def is_end_flag(text: str) -> bool:
    return (text or "").strip().lower() in ("x", "true")


def has_table_markers(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> bool:
    return bool(patterns.markers(TABLE_SECTION).start.search(text))


# ---------------- Row parser ----------------
class RowParser:
    """Parses timeline table rows; holds only the shared pattern table."""

    def __init__(self, patterns: Optional[PatternTable] = None, legacy_year: int = DEFAULT_LEGACY_YEAR) -> None:
        self.patterns = patterns or DEFAULT_PATTERNS
        self.legacy_year = legacy_year

    def parse_row(self, cells: List[str], strategy: RowStrategy, current_date: str) -> Tuple[TimelineEvent, str]:
        """Parse one data row.

        Returns the event and the running date to use for the next row.
        Raises StructuralError / FormatError for rows that must be dropped.
        """
        p = self.patterns
        fields = strategy.cells_for(cells)

        if is_iso_date(fields.date, p):
            current_date = fields.date.strip()

        time_str = fields.time.strip()
        if not time_str:
            raise InvalidRow("TIME cell is empty")
        if not is_valid_time(time_str, p):
            raise InvalidTimeFormat(f"invalid time format: {time_str!r}")
        if not current_date:
            raise InvalidRow("no date for row")

        category = fields.category.strip()
        event = TimelineEvent(
            id=event_id(current_date, time_str, category),
            date=current_date,
            time=time_str,
            date_time=compose_datetime(current_date, time_str, p),
            description=fields.description.strip(),
            category=category,
            casualties=parse_casualties(fields.casualties, p),
            sources=parse_sources(fields.source, p),
            photos=parse_photos(fields.photo, p),
            video_url=parse_video_url(fields.video, p),
            is_category_end=is_end_flag(fields.end),
            status_note=fields.status_note.strip(),
        )
        return event, current_date

    def parse_table(self, text: str) -> TableResult:
        """Parse every timeline row of a document.

        Uses the column-map strategy when TIMELINE_TABLE markers exist,
        the positional strategy otherwise.
        """
        if has_table_markers(text, self.patterns):
            return self._parse_marked(text.split("\n"))
        return self._parse_positional(text.split("\n"))

    def _try_row(self, result: TableResult, lineno: int, cells: List[str],
                 strategy: RowStrategy, current_date: str) -> str:
        try:
            event, current_date = self.parse_row(cells, strategy, current_date)
        except (StructuralError, FormatError) as e:
            logger.debug("Dropping row at line %d: %s", lineno, e)
            result.dropped.append((lineno, str(e)))
            return current_date
        result.events.append(event)
        return current_date

    def _parse_marked(self, lines: List[str]) -> TableResult:
        markers = self.patterns.markers(TABLE_SECTION)
        result = TableResult()
        in_table = False
        strategy: Optional[ColumnMapStrategy] = None
        current_date = ""

        for lineno, line in enumerate(lines, start=1):
            s = line.strip()
            if markers.start.search(s):
                in_table, strategy = True, None
                continue
            if markers.end.search(s):
                in_table, strategy = False, None
                continue
            if not in_table or not is_table_line(s):
                continue
            cells = split_cells(s)
            if is_separator_row(cells):
                continue
            if strategy is None:
                # rows before the header are ignored
                if col.is_header_row(cells):
                    strategy = ColumnMapStrategy(col.build_column_map(cells))
                    result.header_seen = True
                continue
            current_date = self._try_row(result, lineno, cells, strategy, current_date)
        return result

    def _heading_date(self, line: str) -> Optional[str]:
        m = self.patterns.date_bold.search(line) or self.patterns.date_heading.match(line)
        if not m:
            return None
        month, day = int(m.group(1)), int(m.group(2))
        return f"{self.legacy_year:04d}-{month:02d}-{day:02d}"

    def _parse_positional(self, lines: List[str]) -> TableResult:
        result = TableResult(positional=True)
        strategy = PositionalStrategy()
        current_date = ""

        for lineno, line in enumerate(lines, start=1):
            s = line.strip()
            if not is_table_line(s):
                heading = self._heading_date(s)
                if heading:
                    current_date = heading
                continue
            cells = split_cells(s)
            if is_separator_row(cells) or col.is_header_row(cells):
                continue
            current_date = self._try_row(result, lineno, cells, strategy, current_date)
        return result
