from __future__ import annotations

import pytest

from fireline import columns as col


@pytest.mark.parametrize(
    "cell, token",
    [
        ("TIME", col.TIME),
        ("time", col.TIME),
        ("時間", col.TIME),
        ("时间", col.TIME),
        ("日期", col.DATE),
        ("Description", col.EVENT),
        ("事件", col.EVENT),
        ("類別", col.CATEGORY),
        ("伤亡", col.CASUALTIES),
        ("來源", col.SOURCE),
        ("視頻", col.VIDEO),
        ("圖片", col.PHOTO),
        ("結束", col.END),
    ],
)
def test_normalize_header_synonyms(cell, token):
    assert col.normalize_header(cell) == token


def test_unknown_header_passes_through_uppercased():
    assert col.normalize_header(" status_note ") == "STATUS_NOTE"


def test_is_header_row_needs_a_trigger_column():
    assert col.is_header_row(["日期", "時間", "事件"])
    assert col.is_header_row(["foo", "EVENT"])
    assert not col.is_header_row(["CATEGORY", "SOURCE"])
    assert not col.is_header_row(["2025-11-26", "14:51", "起火"])


def test_build_column_map_first_occurrence_wins():
    cmap = col.build_column_map(["TIME", "時間", "EVENT", "STATUS_NOTE"])
    assert cmap[col.TIME] == 0
    assert cmap[col.EVENT] == 2
    assert cmap["STATUS_NOTE"] == 3


def test_synonym_table_is_read_only():
    with pytest.raises(TypeError):
        col.HEADER_SYNONYMS["WHEN"] = col.TIME


def test_every_canonical_column_has_synonyms():
    assert set(col.HEADER_SYNONYMS.values()) == set(col.CANONICAL_COLUMNS)
    for token in col.CANONICAL_COLUMNS:
        assert col.normalize_header(token) == token
        assert col.normalize_header(token.lower()) == token
