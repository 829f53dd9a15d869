"""
Data model
==========

Each parsed markdown file becomes a `TimelineDocument` (standard timeline)
or a `DetailedTimelineDocument` (phased timeline). Documents are built fresh
for every parse call and never shared between calls.

`to_dict()` returns the camelCase JSON shape consumed by the uploader and
the `parse` CLI command.

Casualties are stored as an item list (`CasualtyItem`) because the corpus
keeps adding new casualty types. Scalar deaths/injured/missing numbers are a
projection of that list (`CasualtyData.totals`).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional

STATUS_NONE = "STATUS_NONE"
STATUS_UPDATE = "STATUS_UPDATE"

TIME_ALL_DAY = "TIME_ALL_DAY"
TIME_ONGOING = "TIME_ONGOING"

# Closed set of casualty types accepted by the status-code grammar.
CASUALTY_TYPES: FrozenSet[str] = frozenset({
    "DEAD",
    "INJURED",
    "MISSING",
    "FIREFIGHTER_DEAD",
    "FIREFIGHTER_INJURED",
    "REMAINING_CASES",
    "UNIDENTIFIED",
})


@dataclass(frozen=True)
class CasualtyItem:
    type: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "count": self.count}


@dataclass(frozen=True)
class CasualtyTotals:
    """Scalar view of a casualty item list."""
    deaths: int = 0
    injured: int = 0
    missing: int = 0


@dataclass
class CasualtyData:
    """Casualty cell of one timeline row.

    status is "" (nothing recognised), STATUS_NONE (explicitly no casualties)
    or STATUS_UPDATE (at least one item). raw keeps the cell text for audit.
    """
    status: str = ""
    raw: str = ""
    items: List[CasualtyItem] = field(default_factory=list)

    def count(self, casualty_type: str) -> int:
        """Sum of all items of one type (0 if absent)."""
        return sum(i.count for i in self.items if i.type == casualty_type)

    def totals(self, fold_firefighters: bool = True) -> CasualtyTotals:
        """Project the item list onto deaths/injured/missing.

        With fold_firefighters=True, FIREFIGHTER_DEAD counts towards deaths
        and FIREFIGHTER_INJURED towards injured.
        """
        deaths = self.count("DEAD")
        injured = self.count("INJURED")
        if fold_firefighters:
            deaths += self.count("FIREFIGHTER_DEAD")
            injured += self.count("FIREFIGHTER_INJURED")
        return CasualtyTotals(deaths=deaths, injured=injured, missing=self.count("MISSING"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "raw": self.raw,
            "items": [i.to_dict() for i in self.items],
        }


@dataclass(frozen=True)
class EventSource:
    name: str
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class Photo:
    url: str
    caption: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"url": self.url}
        if self.caption:
            out["caption"] = self.caption
        return out


@dataclass(frozen=True)
class Source:
    """Document-level source (SOURCES table row)."""
    name: str
    title: str = ""
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "title": self.title, "url": self.url}


@dataclass
class Duration:
    raw: str = ""
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def total_seconds(self) -> int:
        return ((self.days * 24 + self.hours) * 60 + self.minutes) * 60 + self.seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "raw": self.raw,
            "days": self.days,
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
        }


@dataclass
class BasicInfo:
    incident_id: str = ""
    incident_name: str = ""
    date_range: str = ""
    start_date: str = ""
    end_date: str = ""
    location: str = ""
    # Full markdown link "[text](url)", kept as-is for translation.
    map: str = ""
    map_name: str = ""
    map_url: str = ""
    disaster_level: str = ""
    duration: Duration = field(default_factory=Duration)
    affected_buildings: int = 0
    sources: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "incidentId": self.incident_id,
            "incidentName": self.incident_name,
            "dateRange": self.date_range,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "location": self.location,
            "map": self.map,
            "disasterLevel": self.disaster_level,
            "duration": self.duration.to_dict(),
            "affectedBuildings": self.affected_buildings,
            "sources": self.sources,
        }


@dataclass
class FirefighterCasualties:
    deaths: int = 0
    injured: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"deaths": self.deaths, "injured": self.injured}


@dataclass
class KeyStatistics:
    final_deaths: int = 0
    firefighter_casualties: FirefighterCasualties = field(default_factory=FirefighterCasualties)
    firefighters_deployed: int = 0
    fire_vehicles: int = 0
    help_cases: int = 0
    help_cases_processed: int = 0
    shelter_users: int = 0
    missing_persons: int = 0
    unidentified_bodies: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "finalDeaths": self.final_deaths,
            "firefighterCasualties": self.firefighter_casualties.to_dict(),
            "firefightersDeployed": self.firefighters_deployed,
            "fireVehicles": self.fire_vehicles,
            "helpCases": self.help_cases,
            "helpCasesProcessed": self.help_cases_processed,
            "shelterUsers": self.shelter_users,
            "missingPersons": self.missing_persons,
            "unidentifiedBodies": self.unidentified_bodies,
        }


@dataclass
class TimelineEvent:
    """One parsed timeline row.

    `id` depends only on date, normalized time and category, so the same
    row in the English and Chinese files gets the same ID.
    """
    id: str
    date: str
    time: str
    date_time: str
    description: str = ""
    category: str = ""
    casualties: CasualtyData = field(default_factory=CasualtyData)
    sources: List[EventSource] = field(default_factory=list)
    photos: List[Photo] = field(default_factory=list)
    video_url: str = ""
    is_category_end: bool = False
    # Only filled for detailed-timeline tables with a STATUS_NOTE column.
    status_note: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "time": self.time,
            "dateTime": self.date_time,
            "description": self.description,
            "category": self.category,
            "casualties": self.casualties.to_dict(),
            "sources": [s.to_dict() for s in self.sources],
            "isCategoryEnd": self.is_category_end,
        }
        if self.video_url:
            out["videoUrl"] = self.video_url
        if self.photos:
            out["photos"] = [p.to_dict() for p in self.photos]
        if self.status_note:
            out["statusNote"] = self.status_note
        return out


@dataclass
class Metadata:
    """Contents of the <!-- METADATA_START ... METADATA_END --> block."""
    last_modify: Optional[datetime] = None
    version: str = ""
    hash: str = ""
    validation: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lastModify": self.last_modify.isoformat() if self.last_modify else None,
            "version": self.version,
            "hash": self.hash,
            "validation": self.validation,
        }


@dataclass
class TimelineDocument:
    basic_info: BasicInfo = field(default_factory=BasicInfo)
    fire_cause: str = ""
    severity: str = ""
    events: List[TimelineEvent] = field(default_factory=list)
    key_statistics: KeyStatistics = field(default_factory=KeyStatistics)
    sources: List[Source] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    metadata: Optional[Metadata] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "basicInfo": self.basic_info.to_dict(),
            "fireCause": self.fire_cause,
            "severity": self.severity,
            "timeline": [e.to_dict() for e in self.events],
            "keyStatistics": self.key_statistics.to_dict(),
            "sources": [s.to_dict() for s in self.sources],
            "notes": list(self.notes),
        }


@dataclass
class Phase:
    id: str
    phase_name: str = ""
    phase_category: str = ""
    date_range: str = ""
    start_date: str = ""
    end_date: str = ""
    status: str = ""
    description: str = ""
    events: List[TimelineEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "phaseName": self.phase_name,
            "phaseCategory": self.phase_category,
            "dateRange": self.date_range,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "status": self.status,
            "description": self.description,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class LongTermTrackingEvent:
    """Follow-up item without a time of day (inquiry hearings, rehousing...)."""
    id: str
    date: str
    category: str = ""
    event: str = ""
    status: str = ""
    note: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "category": self.category,
            "event": self.event,
            "status": self.status,
            "note": self.note,
        }


@dataclass(frozen=True)
class CategoryMetric:
    category: str
    metric_key: str
    metric_label: str = ""
    metric_value: float = 0.0
    metric_unit: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "metricKey": self.metric_key,
            "metricLabel": self.metric_label,
            "metricValue": self.metric_value,
            "metricUnit": self.metric_unit,
        }


@dataclass
class DetailedTimelineDocument:
    phases: List[Phase] = field(default_factory=list)
    long_term_tracking: List[LongTermTrackingEvent] = field(default_factory=list)
    category_metrics: List[CategoryMetric] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    metadata: Optional[Metadata] = None

    def all_events(self) -> List[TimelineEvent]:
        """Phase events flattened in document order."""
        return [e for p in self.phases for e in p.events]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "phases": [p.to_dict() for p in self.phases],
            "longTermTracking": [e.to_dict() for e in self.long_term_tracking],
            "categoryMetrics": [m.to_dict() for m in self.category_metrics],
            "notes": list(self.notes),
        }
