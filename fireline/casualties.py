"""
Casualty grammar
================

Two encodings are found in the CASUALTIES column:

1) Status codes (current format), chosen whenever the text has a colon:

       DEAD:13,INJURED:7,MISSING:200
       DEAD:13(ON_SITE:9,TRANSIT:4),INJURED:7

   Only the first number after each TYPE is kept; the parenthesised
   breakdown is dropped. `STATUS_NONE` means "explicitly no casualties".

2) Legacy Chinese free text, clauses separated by a full-width comma:

       128死79傷，150名失蹤

   A later clause restates an earlier one, so each type keeps the last
   count seen: "5死，其後增至12死" means 12 dead, not 17.
"""

from __future__ import annotations
import logging
from typing import Dict, List

from .models import CASUALTY_TYPES, STATUS_NONE, STATUS_UPDATE, CasualtyData, CasualtyItem
from .patterns import DEFAULT_PATTERNS, PatternTable

logger = logging.getLogger(__name__)


def _split_top_level(text: str) -> List[str]:
    """Split on commas that are not inside parentheses."""
    parts: List[str] = []
    depth = 0
    buf: List[str] = []
    for ch in text:
        if ch in "(（":
            depth += 1
        elif ch in ")）" and depth > 0:
            depth -= 1
        if ch in ",，" and depth == 0:
            parts.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    parts.append("".join(buf))
    return [p.strip() for p in parts if p.strip()]


def _parse_status_codes(text: str, patterns: PatternTable) -> List[CasualtyItem]:
    items: List[CasualtyItem] = []
    for token in _split_top_level(text):
        m = patterns.status_code.match(token)
        if not m:
            continue
        ctype, num = m.group(1), m.group(2)
        if ctype not in CASUALTY_TYPES:
            logger.debug("Ignoring unknown casualty type %r in %r", ctype, text)
            continue
        items.append(CasualtyItem(type=ctype, count=int(num)))
    return items


def _parse_legacy(text: str, patterns: PatternTable) -> List[CasualtyItem]:
    found: Dict[str, int] = {}
    for clause in text.split("，"):
        clause = clause.strip()
        if not clause:
            continue
        for ctype, pattern in (
            ("DEAD", patterns.legacy_dead),
            ("INJURED", patterns.legacy_injured),
            ("MISSING", patterns.legacy_missing),
        ):
            m = pattern.search(clause)
            if m:
                found[ctype] = int(m.group(1))
    return [CasualtyItem(type=ctype, count=n) for ctype, n in found.items()]


def parse_casualties(text: str, patterns: PatternTable = DEFAULT_PATTERNS) -> CasualtyData:
    """Parse one casualty cell. The raw text is always kept."""
    raw = text or ""
    stripped = raw.strip()
    if stripped == STATUS_NONE:
        return CasualtyData(status=STATUS_NONE, raw=raw)
    if not stripped:
        return CasualtyData(status="", raw=raw)

    if ":" in stripped or "：" in stripped:
        items = _parse_status_codes(stripped.replace("：", ":"), patterns)
    else:
        items = _parse_legacy(stripped, patterns)

    return CasualtyData(status=STATUS_UPDATE if items else "", raw=raw, items=items)
