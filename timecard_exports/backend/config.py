from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)


@dataclass
class ExportSettings:
    pdf_margin: float = 36.0
    page_size: str = "LETTER"  # LETTER or A4
    divider_color: str = "#AAAAAA"
    brand_name: str = "Phase 2"
    subject_prefix: str = "Timecard Report"
    log_level: str = "INFO"
    log_dir: str | None = None


# Environment variables that override individual settings.
ENV_OVERRIDES = {
    "TIMECARD_PDF_MARGIN": "pdf_margin",
    "TIMECARD_PAGE_SIZE": "page_size",
    "TIMECARD_BRAND_NAME": "brand_name",
    "TIMECARD_SUBJECT_PREFIX": "subject_prefix",
    "TIMECARD_LOG_LEVEL": "log_level",
    "TIMECARD_LOG_DIR": "log_dir",
}


def load_settings(path: str) -> ExportSettings:
    """Read settings from a JSON object; unknown keys are ignored."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    known = {f.name for f in fields(ExportSettings)}
    settings = ExportSettings(**{k: v for k, v in data.items() if k in known})
    settings.pdf_margin = float(settings.pdf_margin)
    return settings


def apply_env_overrides(settings: ExportSettings) -> ExportSettings:
    for var, attr in ENV_OVERRIDES.items():
        raw = os.environ.get(var)
        if raw is None or not raw.strip():
            continue
        if attr == "pdf_margin":
            try:
                margin = float(raw)
            except ValueError:
                logger.warning("Ignoring %s=%r: not a number", var, raw)
                continue
            if margin <= 0:
                logger.warning("Ignoring %s=%r: must be positive", var, raw)
                continue
            settings.pdf_margin = margin
        else:
            setattr(settings, attr, raw.strip())
    return settings


def load_from_env(default_path: str | None = None) -> ExportSettings:
    """Load settings from TIMECARD_CONFIG_PATH or a default path, then env overrides.

    A missing or unreadable file falls back to the defaults.
    """
    path = os.environ.get("TIMECARD_CONFIG_PATH") or default_path
    settings = ExportSettings()
    if path and os.path.isfile(path):
        try:
            settings = load_settings(path)
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Could not load settings from %s: %s", path, exc)
    return apply_env_overrides(settings)
