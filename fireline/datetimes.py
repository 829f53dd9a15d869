"""
Date and time normalization
===========================

Small helpers shared by the row parser and the document assembler:

- normalize_time("14:50左右") -> "14:50"
- compose_datetime("2025-11-26", "9:05") -> "2025-11-26T09:05:00"
- parse_duration("01:19:27:00") -> Duration(days=1, hours=19, minutes=27)
- parse_date_range("2025-11-26 至 2025-11-28")
      -> ("2025-11-26 - 2025-11-28", "2025-11-26", "2025-11-28")
"""

from __future__ import annotations
from typing import Tuple

from .errors import InvalidDurationFormat, InvalidTimeFormat
from .models import TIME_ALL_DAY, TIME_ONGOING, Duration
from .patterns import DEFAULT_PATTERNS, PatternTable

SENTINEL_TIMES = frozenset({TIME_ALL_DAY, TIME_ONGOING})

# "about" markers editors put around a time: 14:50左右, 約14:50, ~14:50
DECORATIVE_TIME_MARKERS = ("左右", "前後", "前后", "約", "约", "approx.", "approximately", "~")

# Separators understood by parse_date_range, tried in order.
DATE_RANGE_SEPARATORS = ("至", " to ", " - ", "/")


def normalize_time(text: str) -> str:
    """Strip decorative markers; anything else passes through trimmed."""
    s = (text or "").strip()
    for marker in DECORATIVE_TIME_MARKERS:
        s = s.replace(marker, "")
    return s.strip()


def is_sentinel_time(text: str) -> bool:
    return (text or "").strip() in SENTINEL_TIMES


def is_valid_time(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> bool:
    """HH:MM (after normalization) or one of the sentinel tokens."""
    if is_sentinel_time(text):
        return True
    return bool(patterns.time_hhmm.match(normalize_time(text)))


def is_iso_date(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> bool:
    return bool(patterns.date_iso.match((text or "").strip()))


def compose_datetime(date: str, time: str, patterns: PatternTable = DEFAULT_PATTERNS) -> str:
    """ISO datetime string for a row. Sentinel times map to midnight."""
    if is_sentinel_time(time):
        return f"{date}T00:00:00"
    t = normalize_time(time)
    if not patterns.time_hhmm.match(t):
        raise InvalidTimeFormat(f"invalid time format: {time!r}")
    hh, mm = t.split(":")
    return f"{date}T{int(hh):02d}:{mm}:00"


def _duration_int(part: str, raw: str) -> int:
    try:
        value = int(part.strip())
    except ValueError:
        raise InvalidDurationFormat(f"invalid duration format: {raw!r}, expected dd:hh:mm:ss") from None
    if value < 0:
        raise InvalidDurationFormat(f"invalid duration format: {raw!r}, negative component")
    return value


def parse_duration(text: str) -> Duration:
    """Parse `dd:hh:mm:ss`, or the older `hh:mm` form.

    Raises InvalidDurationFormat for any other number of components.
    """
    raw = (text or "").strip()
    parts = raw.split(":")
    if len(parts) == 2:
        return Duration(raw=raw, hours=_duration_int(parts[0], raw), minutes=_duration_int(parts[1], raw))
    if len(parts) != 4:
        raise InvalidDurationFormat(f"invalid duration format: {raw!r}, expected dd:hh:mm:ss")
    d, h, m, s = (_duration_int(p, raw) for p in parts)
    return Duration(raw=raw, days=d, hours=h, minutes=m, seconds=s)


def parse_date_range(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> Tuple[str, str, str]:
    """Return (display, start, end).

    Ranges are displayed as "start - end". A single ISO date is its own start
    and end. Text we cannot read passes through unchanged (display, start and
    end all equal the input).
    """
    raw = (text or "").strip()
    for sep in DATE_RANGE_SEPARATORS:
        if sep in raw:
            parts = raw.split(sep)
            if len(parts) == 2:
                start, end = parts[0].strip(), parts[1].strip()
                return f"{start} - {end}", start, end
    return raw, raw, raw
