"""
Event identity
==============

An event ID is the first 12 hex characters of

    sha256(date + "|" + normalize_time(time) + "|" + category)

Description, sources, photos and video are left out on purpose: they are
translated, so the zh-HK, zh-CN and English files would otherwise give the
same event three different IDs. The uploader relies on this to upsert
(find-by-ID, then create or update).

Two genuinely different events with the same date, time and category get
the same ID. `find_collisions` reports those so they can be logged.
"""

from __future__ import annotations
import hashlib
from typing import Dict, Iterable, List

from .datetimes import normalize_time

ID_LENGTH = 12


def event_id(date: str, time: str, category: str) -> str:
    data = "|".join([date, normalize_time(time), category])
    return hashlib.sha256(data.encode("utf-8")).hexdigest()[:ID_LENGTH]


def find_collisions(events: Iterable) -> Dict[str, List[int]]:
    """Map ID -> positions, for IDs carried by more than one event."""
    seen: Dict[str, List[int]] = {}
    for i, e in enumerate(events):
        seen.setdefault(e.id, []).append(i)
    return {k: v for k, v in seen.items() if len(v) > 1}
