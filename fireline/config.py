"""
Configuration
=============

Optional YAML file, e.g. `fireline.yaml`:

    legacy_year: 2025     # year used for legacy "**11月26日**" headings
    log_level: info       # debug | info | warn | error
    export_dir: exports   # default directory for `fireline export`

A missing file gives the defaults. Unknown keys are ignored.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, fields
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "fireline.yaml"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class FirelineConfig:
    legacy_year: int = 2025
    log_level: str = "info"
    export_dir: Optional[str] = None

    def logging_level(self) -> int:
        return LOG_LEVELS.get(str(self.log_level).lower(), logging.INFO)


def load_config(path: Optional[str] = None) -> FirelineConfig:
    """Read a YAML config file into a FirelineConfig."""
    path = path or DEFAULT_CONFIG_FILE
    if not os.path.exists(path):
        return FirelineConfig()
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")

    known = {f.name for f in fields(FirelineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.debug("Ignoring unknown config keys in %s: %s", path, unknown)
    cfg = FirelineConfig(**{k: v for k, v in data.items() if k in known})
    cfg.legacy_year = int(cfg.legacy_year)
    return cfg
