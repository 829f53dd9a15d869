"""
fireline package
================

Parser and integrity tools for bilingual fire-incident timeline markdown.

- Parsing entry point: `fireline.parser.TimelineParser`.
- Metadata block (hash, sign, verify): `fireline.metadata`.
- The CLI entry point is in `fireline/cli.py`.
"""

__version__ = '0.1.0'
