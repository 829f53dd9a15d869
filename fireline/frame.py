"""
Tabular projection (events -> pandas DataFrame)
===============================================

Flat views of parsed events for analysis and spreadsheet export:

- events_frame: one row per event (casualty projection as columns)
- casualty_frame: one row per casualty item (long format)
- casualty_totals: item counts grouped by casualty type

export_events picks the output format from the file suffix
(.csv / .json / .xlsx).
"""

from __future__ import annotations
import logging
import os
from typing import Iterable, List

import pandas as pd

from .models import TimelineEvent

logger = logging.getLogger(__name__)

EVENT_COLUMNS = [
    "id", "date", "time", "date_time", "category", "description",
    "deaths", "injured", "missing", "casualty_status", "casualties_raw",
    "sources", "video_url", "photo_count", "is_category_end", "status_note",
]

CASUALTY_COLUMNS = ["event_id", "date", "category", "type", "count"]

EXPORT_FORMATS = (".csv", ".json", ".xlsx")

_FIREFIGHTER_FOLD = {"FIREFIGHTER_DEAD": "DEAD", "FIREFIGHTER_INJURED": "INJURED"}


def events_frame(events: Iterable[TimelineEvent], fold_firefighters: bool = True) -> pd.DataFrame:
    rows = []
    for e in events:
        t = e.casualties.totals(fold_firefighters)
        rows.append({
            "id": e.id,
            "date": e.date,
            "time": e.time,
            "date_time": e.date_time,
            "category": e.category,
            "description": e.description,
            "deaths": t.deaths,
            "injured": t.injured,
            "missing": t.missing,
            "casualty_status": e.casualties.status,
            "casualties_raw": e.casualties.raw,
            "sources": "; ".join(s.name for s in e.sources),
            "video_url": e.video_url,
            "photo_count": len(e.photos),
            "is_category_end": e.is_category_end,
            "status_note": e.status_note,
        })
    return pd.DataFrame(rows, columns=EVENT_COLUMNS)


def casualty_frame(events: Iterable[TimelineEvent]) -> pd.DataFrame:
    """Long format: one row per casualty item."""
    rows = [
        {"event_id": e.id, "date": e.date, "category": e.category, "type": i.type, "count": i.count}
        for e in events
        for i in e.casualties.items
    ]
    return pd.DataFrame(rows, columns=CASUALTY_COLUMNS)


def casualty_totals(events: Iterable[TimelineEvent], fold_firefighters: bool = True) -> pd.Series:
    """Sum of item counts per casualty type (index sorted by type).

    With fold_firefighters=True, FIREFIGHTER_DEAD / FIREFIGHTER_INJURED are
    counted under DEAD / INJURED, as in CasualtyData.totals.
    """
    df = casualty_frame(events)
    if df.empty:
        return pd.Series(dtype="int64", name="count")
    if fold_firefighters:
        df["type"] = df["type"].replace(_FIREFIGHTER_FOLD)
    return df.groupby("type")["count"].sum().sort_index()


def export_events(events: List[TimelineEvent], path: str) -> str:
    """Write events to CSV, JSON (records) or XLSX. Returns the path written."""
    ext = os.path.splitext(path)[1].lower()
    if ext not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format {ext!r}. Use one of: {', '.join(EXPORT_FORMATS)}")
    df = events_frame(events)
    if ext == ".csv":
        df.to_csv(path, index=False, encoding="utf-8")
    elif ext == ".json":
        df.to_json(path, orient="records", force_ascii=False, indent=2)
    else:
        df.to_excel(path, index=False, engine="openpyxl")
    logger.info("Exported %d events to %s", len(df), path)
    return path
