"""
fireline Command Line Interface (CLI)
=====================================

Run it like:

    fireline parse   docs/incident.md            # JSON to stdout
    fireline verify  docs/incident.md            # check the content hash
    fireline sign    docs/incident.md --validated
    fireline format  docs/incident.md            # align tables, re-sign
    fireline export  docs/incident.md -o events.csv
    fireline summary docs/incident.md

`sign` and `format` rewrite the file in place unless `-o` is given.

Errors from the library (bad duration, hash mismatch, ...) are printed as a
single `Error: ...` line and the command exits with status 1.
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from . import metadata as meta_codec
from .config import LOG_LEVELS, FirelineConfig, load_config
from .formatter import format_markdown
from .frame import export_events
from .loader import load_any, load_timeline, read_markdown, write_markdown
from .models import DetailedTimelineDocument
from .parser import TimelineParser
from .summary import summarize

logger = logging.getLogger(__name__)


def _dump(obj) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def _out_path(args) -> str:
    return args.output or args.file


# ---------------- Commands ----------------
def cmd_parse(args, cfg: FirelineConfig) -> int:
    parser = TimelineParser(config=cfg)
    if args.type == "timeline":
        doc = load_timeline(args.file, parser)
    elif args.type == "detailed":
        doc = parser.parse_detailed_timeline(read_markdown(args.file))
    else:
        doc = load_any(args.file, parser)
    _dump(doc.to_dict())
    return 0


def cmd_sign(args, cfg: FirelineConfig) -> int:
    signed = meta_codec.sign(read_markdown(args.file), args.validated, version=args.doc_version)
    path = _out_path(args)
    write_markdown(path, signed)
    print(f"Signed {path}")
    return 0


def cmd_verify(args, cfg: FirelineConfig) -> int:
    meta = meta_codec.verify(read_markdown(args.file))
    logger.info("Verified %s", args.file)
    print(f"OK {args.file} hash={meta.hash} validation={'TRUE' if meta.validation else 'FALSE'}")
    return 0


def cmd_format(args, cfg: FirelineConfig) -> int:
    formatted = format_markdown(read_markdown(args.file))
    path = _out_path(args)
    write_markdown(path, formatted)
    print(f"Formatted {path}")
    return 0


def cmd_export(args, cfg: FirelineConfig) -> int:
    doc = load_any(args.file, TimelineParser(config=cfg))
    events = doc.all_events() if isinstance(doc, DetailedTimelineDocument) else doc.events
    if not events:
        print("Nothing to export: no timeline events found.")
        return 0
    out = args.output
    if not os.path.isabs(out) and cfg.export_dir:
        os.makedirs(cfg.export_dir, exist_ok=True)
        out = os.path.join(cfg.export_dir, out)
    export_events(events, out)
    print(f"Exported {len(events)} events to {out}")
    return 0


def cmd_summary(args, cfg: FirelineConfig) -> int:
    doc = load_timeline(args.file, TimelineParser(config=cfg))
    s = summarize(doc, fold_firefighters=not args.no_fold)
    if args.json:
        _dump(s.to_dict())
        return 0
    print(f"{s.title} ({s.description})")
    print(f"events={s.total_events} deaths={s.total_deaths} injured={s.total_injured} missing={s.total_missing}")
    return 0


# ---------------- Argument parsing ----------------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="fireline", description="Fire incident timeline tools")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("--config", default=None, help="Path to YAML config (default: fireline.yaml if present)")
    ap.add_argument("--log-level", choices=sorted(LOG_LEVELS), default=None,
                    help="Override the configured log level")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Parse a markdown file and print JSON")
    p.add_argument("file")
    p.add_argument("--type", choices=("auto", "timeline", "detailed"), default="auto")
    p.set_defaults(func=cmd_parse)

    p = sub.add_parser("sign", help="Append a fresh metadata block")
    p.add_argument("file")
    p.add_argument("--validated", action="store_true", help="Mark the content as validated")
    p.add_argument("--doc-version", default=None, help="VERSION value to store in the block")
    p.add_argument("-o", "--output", default=None)
    p.set_defaults(func=cmd_sign)

    p = sub.add_parser("verify", help="Check the stored content hash")
    p.add_argument("file")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("format", help="Align tables and re-sign")
    p.add_argument("file")
    p.add_argument("-o", "--output", default=None)
    p.set_defaults(func=cmd_format)

    p = sub.add_parser("export", help="Export timeline events (.csv, .json, .xlsx)")
    p.add_argument("file")
    p.add_argument("-o", "--output", required=True)
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("summary", help="Print the incident summary")
    p.add_argument("file")
    p.add_argument("--json", action="store_true")
    p.add_argument("--no-fold", action="store_true",
                   help="Do not count firefighter casualties in the totals")
    p.set_defaults(func=cmd_summary)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the fireline CLI."""
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
        if args.log_level:
            cfg.log_level = args.log_level
        logging.basicConfig(level=cfg.logging_level(), format="%(levelname)s %(name)s: %(message)s")
        return args.func(args, cfg)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
