"""
File loader (markdown file -> document)
=======================================

The only place (besides the exporters) that touches the filesystem.
Parsers work on strings; this module reads the file and picks the parser.

Files declare their shape with a tag near the top:

    <!-- FILE_TYPE: FIRE_TIMELINE -->
    <!-- FILE_TYPE: DETAILED_TIMELINE -->

Files without a tag are read as detailed timelines.
"""

from __future__ import annotations
from typing import Optional, Union

from .models import DetailedTimelineDocument, TimelineDocument
from .parser import FILE_TYPE_TIMELINE, TimelineParser

AnyDocument = Union[TimelineDocument, DetailedTimelineDocument]


def read_markdown(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_markdown(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)


def load_timeline(path: str, parser: Optional[TimelineParser] = None) -> TimelineDocument:
    return (parser or TimelineParser()).parse_document(read_markdown(path))


def load_detailed_timeline(path: str, parser: Optional[TimelineParser] = None) -> DetailedTimelineDocument:
    return (parser or TimelineParser()).parse_detailed_timeline(read_markdown(path))


def load_any(path: str, parser: Optional[TimelineParser] = None) -> AnyDocument:
    """Parse a file with the parser its FILE_TYPE tag asks for."""
    parser = parser or TimelineParser()
    text = read_markdown(path)
    if parser.parse_file_type(text) == FILE_TYPE_TIMELINE:
        return parser.parse_document(text)
    return parser.parse_detailed_timeline(text)
