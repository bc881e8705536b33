"""Export a week of timecards from a JSON file to CSV, PDF and HTML.

Input is either a list of stored timecard records, or an object:

    {"job": {"name": ..., "number": ...}, "weekStart": "2024-02-04",
     "submittedBy": ..., "timecards": [...]}

Command-line options override values found in the file.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv

from .backend.config import ExportSettings, apply_env_overrides, load_from_env, load_settings
from .backend.errors import TimecardExportError
from .backend.exporters.csv import build_csv
from .backend.exporters.html import build_timecards_email
from .backend.exporters.pdf import build_pdf
from .backend.filenames import build_filename
from .backend.forms import ExportPayload
from .backend.logging_config import setup_logging
from .backend.normalize import normalize_all

logger = logging.getLogger(__name__)

FORMATS = ("csv", "pdf", "html")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timecard-exports",
        description="Render weekly timecards as payroll CSV, PDF report and HTML email body.",
    )
    parser.add_argument("input", help="JSON file with timecard records")
    parser.add_argument("--week-start", help="Sunday of the week, e.g. 2024-02-04")
    parser.add_argument("--job-name")
    parser.add_argument("--job-number", help="Job code; also used in output filenames")
    parser.add_argument("--submitted-by")
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=FORMATS,
        help="Output format; repeat for several (default: all)",
    )
    parser.add_argument("--out-dir", default=".", help="Directory for output files")
    parser.add_argument("--config", help="Settings JSON (default: $TIMECARD_CONFIG_PATH)")
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser


def load_input(path: str) -> dict[str, Any]:
    """Read the input file into {job, weekStart, submittedBy, timecards}."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        return {"job": {}, "weekStart": None, "submittedBy": None, "timecards": data}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a list of timecards or an object")
    timecards = data.get("timecards")
    job = data.get("job")
    return {
        "job": job if isinstance(job, dict) else {},
        "weekStart": data.get("weekStart"),
        "submittedBy": data.get("submittedBy"),
        "timecards": timecards if isinstance(timecards, list) else [],
    }


def _settings(args: argparse.Namespace) -> ExportSettings:
    if args.config:
        return apply_env_overrides(load_settings(args.config))
    return load_from_env()


async def export(payload: ExportPayload, formats: list[str], out_dir: str, settings: ExportSettings) -> list[str]:
    """Write the requested outputs and return their paths."""
    os.makedirs(out_dir, exist_ok=True)
    week_start = payload.get("weekStart")
    job_number = payload.get("jobNumber")
    written: list[str] = []
    for fmt in formats:
        path = os.path.join(out_dir, build_filename(week_start, job_number, fmt))
        if fmt == "csv":
            data = build_csv(payload["timecards"], week_start).encode("utf-8")
        elif fmt == "pdf":
            data = await build_pdf(payload, settings)
        else:
            data = build_timecards_email(payload, settings).encode("utf-8")
        with open(path, "wb") as f:
            f.write(data)
        logger.info("Wrote %s", path)
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        settings = _settings(args)
    except (OSError, ValueError, TypeError) as exc:
        print(f"Error: could not load settings: {exc}", file=sys.stderr)
        return 2
    setup_logging(args.log_level or settings.log_level, settings.log_dir)

    try:
        data = load_input(args.input)
    except (OSError, ValueError) as exc:
        print(f"Error: could not read {args.input}: {exc}", file=sys.stderr)
        return 2

    job = data["job"]
    payload: ExportPayload = {
        "jobName": args.job_name or job.get("name"),
        "jobNumber": args.job_number or job.get("number"),
        "submittedBy": args.submitted_by or data["submittedBy"],
        "weekStart": args.week_start or data["weekStart"],
        "timecards": normalize_all(data["timecards"]),
    }
    formats = list(dict.fromkeys(args.formats or FORMATS))

    try:
        written = asyncio.run(export(payload, formats, args.out_dir, settings))
    except (TimecardExportError, OSError) as exc:
        logger.error("Export failed: %s", exc)
        return 1
    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
