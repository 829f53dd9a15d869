from __future__ import annotations

from fireline import metadata
from fireline.formatter import display_width, format_markdown, format_table


def test_display_width_counts_wide_characters_twice():
    assert display_width("abc") == 3
    assert display_width("時間") == 4
    assert display_width("ＡＢ") == 4


def test_format_table_aligns_columns():
    rows = ["|DATE|時間|", "|-|-|", "|2025-11-26|14:51|"]
    assert format_table(rows) == [
        "| DATE       | 時間  |",
        "| ---------- | ----- |",
        "| 2025-11-26 | 14:51 |",
    ]


def test_format_table_minimum_width_and_ragged_rows():
    rows = ["| a | b |", "| x |"]
    assert format_table(rows) == [
        "| a   | b   |",
        "| x   |     |",
    ]


def test_single_line_is_left_alone():
    assert format_table(["|x|"]) == ["|x|"]


def test_format_markdown_keeps_validation_and_verifies():
    signed = metadata.sign("# T\n\n|DATE|TIME|\n|-|-|\n|2025-11-26|9:05|\n\ntext", True, version="3")
    out = format_markdown(signed)
    meta = metadata.verify(out)
    assert meta.validation is True
    assert meta.version == "3"
    _, clean = metadata.extract(out)
    assert clean == (
        "# T\n\n"
        "| DATE       | TIME |\n"
        "| ---------- | ---- |\n"
        "| 2025-11-26 | 9:05 |\n\n"
        "text"
    )


def test_format_markdown_unsigned_input_is_signed_unvalidated():
    out = format_markdown("|a|b|\n|-|-|")
    assert metadata.verify(out).validation is False
