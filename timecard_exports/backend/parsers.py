"""Week-start parsing and the date labels printed on exports.

Week starts arrive from stored records and request payloads in whatever form
the client sent. Anything we cannot read as a calendar date yields None and
callers fall back to the raw string.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any

from .utils import safe_text

_MONTHS = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}


def parse_week_start(value: Any) -> date | None:
    """Parse a week-start value into a date.

    Supported:
    - date / datetime objects.
    - ISO: YYYY-MM-DD, or an ISO datetime (the date part is used).
    - Numeric: M/D/YYYY.
    - Month names: "February 4, 2024", "4 February 2024".
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value or "").strip()
    if not s:
        return None

    iso = re.fullmatch(r"(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?", s)
    if iso:
        return _make_date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))

    mdy_num = re.fullmatch(r"(\d{1,2})/(\d{1,2})/(\d{4})", s)
    if mdy_num:
        return _make_date(int(mdy_num.group(3)), int(mdy_num.group(1)), int(mdy_num.group(2)))

    low = s.lower()
    mdy = re.fullmatch(r"([a-z]+)\.?\s+(\d{1,2})(?:st|nd|rd|th)?\s*,?\s*(\d{4})", low)
    if mdy:
        m = _MONTHS.get(mdy.group(1))
        if m:
            return _make_date(int(mdy.group(3)), m, int(mdy.group(2)))

    dmy = re.fullmatch(r"(\d{1,2})(?:st|nd|rd|th)?\s+([a-z]+)\.?\s*,?\s*(\d{4})", low)
    if dmy:
        m = _MONTHS.get(dmy.group(2))
        if m:
            return _make_date(int(dmy.group(3)), m, int(dmy.group(1)))

    return None


def week_ending(start: date) -> date:
    """Saturday of the week that starts on `start`."""
    return start + timedelta(days=6)


def format_short_date(d: date) -> str:
    """M/D/YYYY without zero padding, e.g. 2/5/2024."""
    return f"{d.month}/{d.day}/{d.year}"


def format_week_label(week_start: Any) -> str:
    """Return "<start> - <end>" for a readable week start, else the raw text."""
    start = parse_week_start(week_start)
    if start is None:
        return safe_text(week_start)
    return f"{format_short_date(start)} - {format_short_date(week_ending(start))}"


def _make_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None
