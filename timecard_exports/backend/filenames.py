"""Attachment filenames for timecard exports."""

from __future__ import annotations

from typing import Any

from .parsers import parse_week_start, week_ending


def week_ending_label(week_start: Any) -> str | None:
    """Week-ending date as YYYY-MM-DD, or None if the week start is unreadable."""
    start = parse_week_start(week_start)
    if start is None:
        return None
    return week_ending(start).isoformat()


def build_filename(week_start: Any, job_code: Any, extension: str) -> str:
    """Build "<week ending> <job code>.<ext>".

    - The job code part is dropped when blank.
    - An unreadable week start is used as-is (trimmed), or "timecards" if empty.
    """
    base = week_ending_label(week_start)
    if base is None:
        base = str(week_start or "").strip() or "timecards"
    code = str(job_code or "").strip()
    ext = extension.lstrip(".")
    return f"{base} {code}.{ext}" if code else f"{base}.{ext}"


def build_csv_filename(week_start: Any, job_code: Any = None) -> str:
    return build_filename(week_start, job_code, "csv")


def build_pdf_filename(week_start: Any, job_code: Any = None) -> str:
    return build_filename(week_start, job_code, "pdf")
