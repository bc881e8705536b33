"""Timecard normalization and totals.

Every exporter consumes the same canonical shape:

    {..., "lines": [Line, ...], "totals": {"hoursTotal", "productionTotal", "lineTotal"}}

Flat records pass through untouched. Legacy `jobs[].days[]` records are
rebuilt into lines; malformed input degrades to empty lines and zero totals
rather than raising, so one bad record never blocks a batch export.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .days import DAY_KEYS, day_key, empty_week
from .fields import resolve_field
from .forms import FLAT, Line, LineTotals, RawTimecard, TimecardTotals, timecard_shape
from .utils import to_number


def normalize(raw: RawTimecard | Any) -> dict[str, Any]:
    """Return the canonical `lines` + `totals` form of a stored timecard.

    The result of a flat record is the record itself; treat it as read-only.
    """
    if timecard_shape(raw) == FLAT:
        return raw
    record: dict[str, Any] = dict(raw) if isinstance(raw, Mapping) else {}
    jobs = record.get("jobs")
    lines = [build_line(job) for job in (jobs if isinstance(jobs, list) else [])]
    totals = record.get("totals")
    if not isinstance(totals, Mapping):
        totals = aggregate_totals(lines)
    return {**record, "lines": lines, "totals": totals}


def normalize_all(raws: Iterable[Any]) -> list[dict[str, Any]]:
    return [normalize(raw) for raw in raws]


def build_line(job: Any) -> Line:
    """Build one normalized line from a legacy job entry."""
    job = job if isinstance(job, Mapping) else {}
    hours = empty_week()
    production = empty_week()
    unit_cost = empty_week()

    days = job.get("days")
    for position, day in enumerate(days if isinstance(days, list) else []):
        day = day if isinstance(day, Mapping) else {}
        key = day_key(_day_index(day, position))
        if key is None:
            continue
        hours[key] = to_number(day.get("hours"))
        production[key] = to_number(day.get("production"))
        unit_cost[key] = to_number(day.get("unitCost"))

    line: dict[str, Any] = {
        "jobNumber": job.get("jobNumber") or "",
        "area": job.get("area") or "",
        "account": resolve_field(job, "jobAccount"),
        "costCode": resolve_field(job, "costCode"),
        "difH": job.get("difH") or "",
        "difP": job.get("difP") or "",
        "difC": job.get("difC") or "",
        "production": production,
        "unitCost": unit_cost,
    }
    line.update(hours)
    line["totals"] = line_totals(hours, production, unit_cost)
    return line  # type: ignore[return-value]


def line_totals(
    hours: Mapping[str, Any], production: Mapping[str, Any], unit_cost: Mapping[str, Any]
) -> LineTotals:
    """Hours, production and dollar totals for one line.

    The dollar total is production times unit cost, day by day.
    """
    return {
        "hours": sum(to_number(hours.get(k)) for k in DAY_KEYS),
        "production": sum(to_number(production.get(k)) for k in DAY_KEYS),
        "lineTotal": sum(
            to_number(production.get(k)) * to_number(unit_cost.get(k)) for k in DAY_KEYS
        ),
    }


def aggregate_totals(lines: Iterable[Any]) -> TimecardTotals:
    """Sum per-line totals across a timecard."""
    agg: TimecardTotals = {"hoursTotal": 0, "productionTotal": 0, "lineTotal": 0}
    for line in lines:
        totals = line.get("totals") if isinstance(line, Mapping) else None
        totals = totals if isinstance(totals, Mapping) else {}
        agg["hoursTotal"] += to_number(totals.get("hours"))
        agg["productionTotal"] += to_number(totals.get("production"))
        agg["lineTotal"] += to_number(totals.get("lineTotal"))
    return agg


def _day_index(day: Mapping[str, Any], position: int) -> int:
    # Records without a usable dayOfWeek are assumed to be stored Sun..Sat.
    value = day.get("dayOfWeek")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if 0 <= value < len(DAY_KEYS):
            # A fractional in-range index matches no day and is dropped.
            return int(value) if float(value).is_integer() else -1
    return position
