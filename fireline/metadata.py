"""
Metadata block (content integrity)
==================================

Signed files end with a block like:

    <!-- METADATA_START
    VALIDATION: TRUE
    LAST_MODIFY: 2025-12-01T08:00:00Z
    HASH: 3f2a...  (hex SHA-256)
    METADATA_END -->

The hash covers the "clean content": the file with every metadata block
removed and trailing newlines trimmed. So the block never hashes itself, and
signing an already signed file replaces the old block instead of stacking a
second one.

If a file carries several blocks, the first one is read and all of them are
stripped from the clean content. A start marker with no end marker before the
next start marker is not a block; it stays in the clean content as text.
"""

from __future__ import annotations
import hashlib
import logging
import re
from datetime import datetime, timezone
from typing import Optional, Tuple

from .errors import HashMismatch, NoHashFound, NoMetadataBlock
from .models import Metadata

logger = logging.getLogger(__name__)

TAG_START = "<!-- METADATA_START"
TAG_END = "METADATA_END -->"

_BLOCK_RE = re.compile(
    r"<!--\s*METADATA_START\s*\n((?:(?!METADATA_START).)*?)\n\s*METADATA_END\s*-->", re.DOTALL)


def _parse_timestamp(value: str) -> Optional[datetime]:
    """RFC 3339 timestamp -> aware datetime (None if unreadable)."""
    v = value.strip()
    if v.endswith("Z") or v.endswith("z"):
        v = v[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(v)
    except ValueError:
        logger.debug("Unreadable LAST_MODIFY value: %r", value)
        return None


def _parse_block(body: str) -> Metadata:
    meta = Metadata()
    for line in body.split("\n"):
        key, sep, val = line.strip().partition(":")
        if not sep:
            continue
        key, val = key.strip(), val.strip()
        if key == "VALIDATION":
            meta.validation = val.upper() == "TRUE"
        elif key == "LAST_MODIFY":
            meta.last_modify = _parse_timestamp(val)
        elif key == "HASH":
            meta.hash = val
        elif key == "VERSION":
            meta.version = val
    return meta


def extract(text: str) -> Tuple[Optional[Metadata], str]:
    """Split text into (metadata or None, clean content)."""
    match = _BLOCK_RE.search(text)
    clean = text
    # dropping a nested block can close up an outer one; strip until stable
    while True:
        stripped = _BLOCK_RE.sub("", clean)
        if stripped == clean:
            break
        clean = stripped
    clean = clean.rstrip("\n")
    if match is None:
        return None, clean
    return _parse_block(match.group(1)), clean


def calculate_hash(text: str) -> str:
    """Hex SHA-256 of the clean content (safe to call on signed text)."""
    _, clean = extract(text)
    return hashlib.sha256(clean.encode("utf-8")).hexdigest()


def format_timestamp(when: datetime) -> str:
    """RFC 3339 in UTC with second precision, e.g. 2025-12-01T08:00:00Z."""
    return when.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_block(digest: str, validated: bool, when: datetime, version: Optional[str] = None) -> str:
    lines = [
        TAG_START,
        f"VALIDATION: {'TRUE' if validated else 'FALSE'}",
        f"LAST_MODIFY: {format_timestamp(when)}",
        f"HASH: {digest}",
    ]
    if version:
        lines.append(f"VERSION: {version}")
    lines.append(TAG_END)
    return "\n".join(lines)


def sign(text: str, validated: bool, version: Optional[str] = None,
         now: Optional[datetime] = None) -> str:
    """Return clean content followed by a freshly built metadata block.

    Any previous block is dropped, including its VERSION.
    """
    _, clean = extract(text)
    digest = calculate_hash(clean)
    when = now or datetime.now(timezone.utc)
    logger.info("Signing content hash=%s validated=%s", digest[:12], validated)
    return clean + "\n\n" + build_block(digest, validated, when, version)


def verify(text: str) -> Metadata:
    """Check the stored HASH against the clean content.

    Returns the metadata on success. Raises NoMetadataBlock, NoHashFound or
    HashMismatch otherwise.
    """
    meta, clean = extract(text)
    if meta is None:
        raise NoMetadataBlock()
    if not meta.hash:
        raise NoHashFound()
    actual = calculate_hash(clean)
    if actual != meta.hash:
        raise HashMismatch(expected=meta.hash, actual=actual)
    return meta
