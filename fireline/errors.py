"""
Error types
===========

Three families, matching how each one is handled:

- StructuralError: a table row is malformed (too few cells, no TIME column).
  The row parser drops the row and keeps going.
- FormatError: a value has the wrong shape (time, duration). Dropped for
  table rows, raised to the caller for scalar fields such as DURATION.
- IntegrityError: the metadata block is missing or its hash does not match.
  Always raised; never repaired silently.
"""

from __future__ import annotations


class FirelineError(ValueError):
    """Base class for every error raised by fireline."""


# ---------------- Structural (row-scoped) ----------------
class StructuralError(FirelineError):
    pass

class InsufficientCells(StructuralError):
    pass

class InvalidRow(StructuralError):
    pass

class UnmappedColumn(StructuralError):
    pass


# ---------------- Format ----------------
class FormatError(FirelineError):
    pass

class InvalidTimeFormat(FormatError):
    pass

class InvalidDurationFormat(FormatError):
    pass


# ---------------- Integrity (always propagated) ----------------
class IntegrityError(FirelineError):
    pass

class NoMetadataBlock(IntegrityError):
    def __init__(self, message: str = "no metadata block found") -> None:
        super().__init__(message)

class NoHashFound(IntegrityError):
    def __init__(self, message: str = "no hash found in metadata") -> None:
        super().__init__(message)

class HashMismatch(IntegrityError):
    """Stored HASH differs from the hash of the current clean content."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"hash mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
