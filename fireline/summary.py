"""
Summary projection
==================

A short overview of one incident, as shown in incident listings:

- title / date range come from BASIC_INFO
- deaths and missing persons come from KEY_STATISTICS (the official figures)
- injured is summed over the timeline rows, since there is no final figure
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from .models import TimelineDocument


@dataclass(frozen=True)
class TimelineSummary:
    title: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    total_events: int = 0
    total_deaths: int = 0
    total_injured: int = 0
    total_missing: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "description": self.description,
            "totalEvents": self.total_events,
            "totalDeaths": self.total_deaths,
            "totalInjured": self.total_injured,
            "totalMissing": self.total_missing,
        }


def summarize(doc: TimelineDocument, fold_firefighters: bool = True) -> TimelineSummary:
    info = doc.basic_info
    injured = sum(e.casualties.totals(fold_firefighters).injured for e in doc.events)
    return TimelineSummary(
        title=info.incident_name,
        start_date=info.start_date,
        end_date=info.end_date,
        description=info.date_range,
        total_events=len(doc.events),
        total_deaths=doc.key_statistics.final_deaths,
        total_injured=injured,
        total_missing=doc.key_statistics.missing_persons,
    )
