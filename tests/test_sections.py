from __future__ import annotations

import pytest

from fireline.sections import (
    extract_notes,
    extract_section,
    is_separator_row,
    key_value_rows,
    section_blocks,
    section_lines,
    split_cells,
)


def test_extract_section_joins_trimmed_lines(incident_md):
    assert extract_section(incident_md, "FIRE_CAUSE") == "外牆大型維修工程的棚架起火。"
    assert extract_section(incident_md, "SEVERITY") == "是次火警為香港60年來最嚴重的火災事故。"


def test_extract_section_skips_blank_and_comment_lines():
    text = "<!-- FIRE_CAUSE_START -->\n  <!-- TRANSLATE_TEXT -->\n\n  first  \nsecond\n<!-- FIRE_CAUSE_END -->"
    assert extract_section(text, "FIRE_CAUSE") == "first second"


def test_missing_section_is_empty():
    assert extract_section("no markers here", "SEVERITY") == ""
    assert section_lines("no markers here", "SEVERITY") == []


def test_unterminated_section_runs_to_end():
    text = "<!-- SEVERITY_START -->\nline one\nline two"
    assert extract_section(text, "SEVERITY") == "line one line two"


def test_markers_tolerate_extra_whitespace():
    text = "<!--SEVERITY_START   -->\nbad\n<!--   SEVERITY_END-->"
    assert extract_section(text, "SEVERITY") == "bad"


def test_unknown_section_name_raises():
    with pytest.raises(KeyError):
        section_lines("", "NOT_A_SECTION")


def test_extract_notes(incident_md):
    assert extract_notes(incident_md) == ["Note 1", "Note 2"]


def test_section_blocks_returns_closed_blocks_only():
    text = (
        "<!-- PHASE_START -->\na\n<!-- PHASE_END -->\n"
        "<!-- PHASE_START -->\nb\nc\n<!-- PHASE_END -->\n"
        "<!-- PHASE_START -->\nunclosed\n"
    )
    assert section_blocks(text, "PHASE") == [["a"], ["b", "c"]]


def test_split_cells_drops_outer_pipes_only():
    assert split_cells("| a | b |") == ["a", "b"]
    assert split_cells("| | 14:51 | x |") == ["", "14:51", "x"]
    assert split_cells("| a | | |") == ["a", "", ""]


def test_is_separator_row():
    assert is_separator_row(["---", ":--:", " -- "])
    assert not is_separator_row(["---", "x"])
    assert not is_separator_row(["", ""])
    assert not is_separator_row([])


def test_key_value_rows_skip_header_and_separator():
    lines = ["| KEY | VALUE |", "|-----|-------|", "| A | 1 |", "plain text", "| 項目 | 值 |", "| B | 2 |"]
    assert key_value_rows(lines) == [["A", "1"], ["B", "2"]]
