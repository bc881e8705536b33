"""Payroll-import CSV export for normalized timecards."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import timedelta
from typing import Any

from ..days import DAY_KEYS
from ..fields import resolve_field
from ..parsers import format_short_date, parse_week_start
from ..utils import format_plain, to_number

logger = logging.getLogger(__name__)

CSV_HEADERS: tuple[str, ...] = (
    "Employee Name",
    "Employee Code",
    "Job Code",
    "DETAIL_DATE",
    "Sub-Section",
    "Activity Code",
    "Cost Code",
    "H_Hours",
    "P_HOURS",
    "",
    "",
)


def render_csv(rows: Iterable[Sequence[object]]) -> str:
    """Render rows to CSV text joined by "\\n" with no trailing newline.

    - Fields with commas, quotes, CR or LF are quoted, quotes doubled.
    - None renders as an empty field.
    """
    buf = io.StringIO()
    # "\r\n" makes the writer quote fields holding either CR or LF.
    writer = csv.writer(buf, lineterminator="\r\n", quoting=csv.QUOTE_MINIMAL)
    out: list[str] = []
    for row in rows:
        buf.seek(0)
        buf.truncate()
        writer.writerow(["" if v is None else v for v in row])
        out.append(buf.getvalue()[:-2])
    return "\n".join(out)


def build_csv(timecards: Sequence[Mapping[str, Any]] | None, week_start: Any) -> str:
    """Expand normalized timecards to one row per line per active day.

    The header is followed by a blank spacer row the importer expects, even
    when there are no timecards. Days with zero hours and zero production
    are skipped.
    """
    rows: list[list[object]] = [list(CSV_HEADERS), [""] * len(CSV_HEADERS)]
    if not timecards:
        return render_csv(rows)

    start = parse_week_start(week_start)
    if start is None:
        logger.warning("Invalid weekStart %r; using raw value for dates", week_start)

    def detail_date(offset: int) -> str:
        if start is None:
            return str(week_start or "")
        return format_short_date(start + timedelta(days=offset))

    for tc in timecards:
        lines = tc.get("lines") if isinstance(tc, Mapping) else None
        for line in lines if isinstance(lines, list) else []:
            if not isinstance(line, Mapping):
                continue
            production = line.get("production")
            production = production if isinstance(production, Mapping) else {}
            for offset, key in enumerate(DAY_KEYS):
                hours_val = to_number(line.get(key))
                production_val = to_number(production.get(key))
                if hours_val == 0 and production_val == 0:
                    continue
                rows.append(
                    [
                        tc.get("employeeName") or "",
                        resolve_field(tc, "employeeCode"),
                        line.get("jobNumber") or "",
                        detail_date(offset),
                        resolve_field(line, "area"),
                        resolve_field(line, "account"),
                        resolve_field(line, "costCode"),
                        format_plain(hours_val) if hours_val else "",
                        format_plain(production_val) if production_val else "",
                        "",
                        "",
                    ]
                )
    return render_csv(rows)
