"""
Column mapping (header row -> column index)
===========================================

Timeline tables are edited by hand in English, Traditional Chinese and
Simplified Chinese, so the same column shows up under different headers
("TIME", "時間", "时间"). We map each header cell to one canonical token and
remember its position:

    | DATE | 時間 | EVENT | ... |   ->   {"DATE": 0, "TIME": 1, "EVENT": 2, ...}

Headers we do not know are kept, uppercased (e.g. "STATUS_NOTE"), so callers
can still read extra columns by name.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

DATE = "DATE"
TIME = "TIME"
EVENT = "EVENT"
CATEGORY = "CATEGORY"
CASUALTIES = "CASUALTIES"
SOURCE = "SOURCE"
VIDEO = "VIDEO"
PHOTO = "PHOTO"
END = "END"

CANONICAL_COLUMNS = (DATE, TIME, EVENT, CATEGORY, CASUALTIES, SOURCE, VIDEO, PHOTO, END)

# A row counts as a header row if any of these appear.
HEADER_TRIGGERS = frozenset({DATE, TIME, EVENT})

_SYNONYMS: Dict[str, Iterable[str]] = {
    DATE: ("DATE", "日期"),
    TIME: ("TIME", "時間", "时间"),
    EVENT: ("EVENT", "EVENTS", "DESCRIPTION", "事件", "事件描述", "描述", "內容", "内容"),
    CATEGORY: ("CATEGORY", "類別", "类别", "分類", "分类"),
    CASUALTIES: ("CASUALTIES", "CASUALTY", "傷亡", "伤亡", "傷亡人數", "伤亡人数"),
    SOURCE: ("SOURCE", "SOURCES", "來源", "来源", "資料來源", "资料来源"),
    VIDEO: ("VIDEO", "VIDEOS", "影片", "視頻", "视频"),
    PHOTO: ("PHOTO", "PHOTOS", "圖片", "图片", "相片", "照片"),
    END: ("END", "IS_CATEGORY_END", "結束", "结束"),
}

# synonym (uppercased) -> canonical token; read-only
HEADER_SYNONYMS: Mapping[str, str] = MappingProxyType({
    alias.upper(): token
    for token in CANONICAL_COLUMNS
    for alias in _SYNONYMS[token]
})


def normalize_header(cell: str) -> str:
    """Canonical token for a header cell, or the cell uppercased if unknown."""
    key = cell.strip().upper()
    return HEADER_SYNONYMS.get(key, key)


def is_header_row(cells: List[str]) -> bool:
    """True if at least one cell is a DATE, TIME or EVENT header."""
    return any(normalize_header(c) in HEADER_TRIGGERS for c in cells)


def build_column_map(cells: List[str]) -> Dict[str, int]:
    """Map canonical token -> column index. The first occurrence wins."""
    out: Dict[str, int] = {}
    for i, cell in enumerate(cells):
        token = normalize_header(cell)
        if token:
            out.setdefault(token, i)
    return out
