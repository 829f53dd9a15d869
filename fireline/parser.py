"""
Document assembler (markdown -> TimelineDocument)
=================================================

`TimelineParser` is the entry point for parsing. It:

1) strips the metadata block (and keeps it on the document),
2) reads each named section (basic info, fire cause, statistics, ...),
3) hands the timeline table to the row parser,
4) returns a fresh document object.

Missing sections give empty/zero fields; checking that a document is
complete is the job of a separate validation pass. The one exception is a
malformed DURATION, which is raised to the caller (there is no row to skip).

Two document shapes are supported:
- FIRE_TIMELINE: one incident, one event table (`parse_document`)
- DETAILED_TIMELINE: phases, long-term tracking, metrics
  (`parse_detailed_timeline`)
"""

from __future__ import annotations
import logging
from typing import List, Optional

from . import columns as col
from . import metadata as meta_codec
from .casualties import parse_casualties
from .config import FirelineConfig
from .datetimes import is_iso_date, parse_date_range, parse_duration
from .identity import event_id, find_collisions
from .models import (
    BasicInfo, CategoryMetric, DetailedTimelineDocument, FirefighterCasualties,
    KeyStatistics, LongTermTrackingEvent, Phase, Source, TimelineDocument, TimelineEvent,
)
from .patterns import PatternTable
from .rows import RowParser
from .sections import (
    extract_notes, extract_section, is_separator_row, is_table_line,
    key_value_rows, section_blocks, section_lines, split_cells,
)

logger = logging.getLogger(__name__)

FILE_TYPE_TIMELINE = "FIRE_TIMELINE"
FILE_TYPE_DETAILED = "DETAILED_TIMELINE"

# KEY_STATISTICS key -> KeyStatistics attribute (plain integer rows)
_INT_STATS = {
    "FINAL_DEATHS": "final_deaths",
    "FIREFIGHTERS_DEPLOYED": "firefighters_deployed",
    "FIRE_VEHICLES": "fire_vehicles",
    "HELP_CASES": "help_cases",
    "HELP_CASES_PROCESSED": "help_cases_processed",
    "SHELTER_USERS": "shelter_users",
    "MISSING_PERSONS": "missing_persons",
    "UNIDENTIFIED_BODIES": "unidentified_bodies",
}


class TimelineParser:
    """Parses fire timeline markdown. Safe to reuse across documents."""

    def __init__(self, patterns: Optional[PatternTable] = None,
                 config: Optional[FirelineConfig] = None) -> None:
        self.config = config or FirelineConfig()
        self.patterns = patterns or PatternTable()
        self.rows = RowParser(self.patterns, legacy_year=self.config.legacy_year)

    # ---------------- Helpers ----------------
    def _int(self, value: str) -> int:
        m = self.patterns.leading_int.match(value or "")
        return int(m.group(1)) if m else 0

    def _float(self, value: str) -> float:
        m = self.patterns.leading_float.match(value or "")
        return float(m.group(1)) if m else 0.0

    def _warn_collisions(self, events: List[TimelineEvent], where: str) -> None:
        for eid, positions in find_collisions(events).items():
            logger.warning("Event ID %s shared by %d events in %s (rows %s)",
                           eid, len(positions), where, positions)

    def parse_file_type(self, text: str) -> str:
        """Value of `<!-- FILE_TYPE: X -->`, or "" if the tag is absent."""
        m = self.patterns.file_type.search(text)
        return m.group(1) if m else ""

    # ---------------- Standard timeline ----------------
    def parse_document(self, text: str) -> TimelineDocument:
        metadata, clean = meta_codec.extract(text)
        p = self.patterns

        table = self.rows.parse_table(clean)
        if table.dropped:
            logger.debug("Dropped %d timeline rows", len(table.dropped))
        self._warn_collisions(table.events, "timeline")

        doc = TimelineDocument(
            basic_info=self.parse_basic_info(clean),
            fire_cause=extract_section(clean, "FIRE_CAUSE", p),
            severity=extract_section(clean, "SEVERITY", p),
            events=table.events,
            key_statistics=self.parse_key_statistics(clean),
            sources=self.parse_sources_section(clean),
            notes=extract_notes(clean, p),
            metadata=metadata,
        )
        logger.info("Parsed timeline %r: %d events", doc.basic_info.incident_id, len(doc.events))
        return doc

    def parse_basic_info(self, text: str) -> BasicInfo:
        info = BasicInfo()
        for cells in key_value_rows(section_lines(text, "BASIC_INFO", self.patterns)):
            if len(cells) < 2:
                continue
            key, value = cells[0], cells[1]
            if key == "INCIDENT_ID":
                info.incident_id = value
            elif key == "INCIDENT_NAME":
                info.incident_name = value
            elif key == "DATE_RANGE":
                info.date_range = value
                _, info.start_date, info.end_date = parse_date_range(value, self.patterns)
            elif key == "LOCATION":
                info.location = value
            elif key == "MAP":
                info.map = value
                m = self.patterns.link.search(value)
                if m:
                    info.map_name, info.map_url = m.group(1).strip(), m.group(2).strip()
                else:
                    info.map_url = value
            elif key == "DISASTER_LEVEL":
                info.disaster_level = value
            elif key == "DURATION":
                # InvalidDurationFormat propagates: scalar field, nothing to skip
                if value:
                    info.duration = parse_duration(value)
            elif key == "AFFECTED_BUILDINGS":
                info.affected_buildings = self._int(value)
            elif key == "SOURCES":
                info.sources = value
        return info

    def parse_key_statistics(self, text: str) -> KeyStatistics:
        stats = KeyStatistics()
        for cells in key_value_rows(section_lines(text, "KEY_STATISTICS", self.patterns)):
            if len(cells) < 2:
                continue
            key, value = cells[0], cells[1]
            if key in _INT_STATS:
                setattr(stats, _INT_STATS[key], self._int(value))
            elif key == "FIREFIGHTER_CASUALTIES":
                # "INJURED:11,DEAD:1"
                c = parse_casualties(value, self.patterns)
                stats.firefighter_casualties = FirefighterCasualties(
                    deaths=c.count("DEAD") + c.count("FIREFIGHTER_DEAD"),
                    injured=c.count("INJURED") + c.count("FIREFIGHTER_INJURED"),
                )
        return stats

    def parse_sources_section(self, text: str) -> List[Source]:
        """SOURCE_NAME | SOURCE_TITLE | SOURCE_URL rows."""
        sources: List[Source] = []
        for line in section_lines(text, "SOURCES", self.patterns):
            if not is_table_line(line):
                continue
            cells = split_cells(line)
            if not cells or is_separator_row(cells) or cells[0].upper() == "SOURCE_NAME":
                continue
            if len(cells) < 3:
                continue
            url = cells[2]
            if url.startswith("<") and url.endswith(">"):
                url = url[1:-1]
            sources.append(Source(name=cells[0], title=cells[1], url=url))
        return sources

    # ---------------- Detailed timeline ----------------
    def parse_detailed_timeline(self, text: str) -> DetailedTimelineDocument:
        metadata, clean = meta_codec.extract(text)
        doc = DetailedTimelineDocument(
            phases=self.parse_phases(clean),
            long_term_tracking=self.parse_long_term_tracking(clean),
            category_metrics=self.parse_category_metrics(clean),
            notes=extract_notes(clean, self.patterns),
            metadata=metadata,
        )
        self._warn_collisions(doc.all_events(), "detailed timeline")
        logger.info("Parsed detailed timeline: %d phases, %d tracking events, %d metrics",
                    len(doc.phases), len(doc.long_term_tracking), len(doc.category_metrics))
        return doc

    def parse_phases(self, text: str) -> List[Phase]:
        phases: List[Phase] = []
        for n, block in enumerate(section_blocks(text, "PHASE", self.patterns), start=1):
            phases.append(self._parse_phase("\n".join(block), n))
        return phases

    def _parse_phase(self, content: str, number: int) -> Phase:
        p = self.patterns
        phase = Phase(id=f"phase-{number}")
        for cells in key_value_rows(section_lines(content, "PHASE_INFO", p)):
            if len(cells) < 2:
                continue
            key, value = cells[0], cells[1]
            if key == "PHASE_NAME":
                phase.phase_name = value
            elif key == "PHASE_CATEGORY":
                phase.phase_category = value
            elif key == "DATE_RANGE":
                phase.date_range, phase.start_date, phase.end_date = parse_date_range(value, p)
            elif key == "STATUS":
                phase.status = value
        phase.description = extract_section(content, "PHASE_DESCRIPTION", p)
        phase.events = self.rows.parse_table(content).events
        return phase

    def parse_long_term_tracking(self, text: str) -> List[LongTermTrackingEvent]:
        """DATE | CATEGORY | EVENT | STATUS | NOTE rows (no time of day)."""
        events: List[LongTermTrackingEvent] = []
        column_map = None
        for line in section_lines(text, "LONG_TERM_TRACKING", self.patterns):
            if not is_table_line(line):
                continue
            cells = split_cells(line)
            if is_separator_row(cells):
                continue
            if col.is_header_row(cells):
                column_map = col.build_column_map(cells)
                continue
            cmap = column_map or {col.DATE: 0, col.CATEGORY: 1, col.EVENT: 2, "STATUS": 3, "NOTE": 4}

            def get(token: str) -> str:
                i = cmap.get(token)
                return cells[i] if i is not None and i < len(cells) else ""

            date = get(col.DATE)
            if not is_iso_date(date, self.patterns):
                logger.debug("Dropping long-term tracking row without ISO date: %r", line)
                continue
            category = get(col.CATEGORY)
            events.append(LongTermTrackingEvent(
                id=event_id(date, "", category),
                date=date,
                category=category,
                event=get(col.EVENT),
                status=get("STATUS"),
                note=get("NOTE"),
            ))
        return events

    def parse_category_metrics(self, text: str) -> List[CategoryMetric]:
        """CATEGORY | METRIC_KEY | METRIC_LABEL | METRIC_VALUE | METRIC_UNIT rows."""
        metrics: List[CategoryMetric] = []
        for line in section_lines(text, "CATEGORY_METRICS", self.patterns):
            if not is_table_line(line):
                continue
            cells = split_cells(line)
            if is_separator_row(cells) or len(cells) < 5:
                continue
            category, key = cells[0], cells[1]
            if category.upper() == "CATEGORY" or key.upper() == "METRIC_KEY":
                continue
            if not category or not key:
                continue
            metrics.append(CategoryMetric(
                category=category,
                metric_key=key,
                metric_label=cells[2],
                metric_value=self._float(cells[3]),
                metric_unit=cells[4],
            ))
        return metrics
