"""Record shapes and the export request.

Stored timecards come in two shapes. Flat records already carry `lines`;
legacy records nest per-day values under `jobs[].days[]`. The normalizer is
the only place that tells them apart (see `timecard_shape`).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from typing_extensions import NotRequired, TypedDict

FLAT: Literal["flat"] = "flat"
LEGACY: Literal["legacy"] = "legacy"


class DayEntry(TypedDict):
    """One day of a legacy job entry."""

    dayOfWeek: NotRequired[int]
    hours: NotRequired[float]
    production: NotRequired[float]
    unitCost: NotRequired[float]


class JobEntry(TypedDict):
    jobNumber: NotRequired[str]
    area: NotRequired[str]
    acct: NotRequired[str]
    account: NotRequired[str]
    costCode: NotRequired[str]
    difH: NotRequired[str]
    difP: NotRequired[str]
    difC: NotRequired[str]
    days: NotRequired[list[DayEntry]]


class LineTotals(TypedDict):
    hours: float
    production: float
    lineTotal: float


class TimecardTotals(TypedDict):
    hoursTotal: float
    productionTotal: float
    lineTotal: float


class Line(TypedDict):
    """A normalized line; hours sit directly under sun..sat."""

    jobNumber: str
    area: str
    account: str
    costCode: str
    difH: NotRequired[str]
    difP: NotRequired[str]
    difC: NotRequired[str]
    sun: float
    mon: float
    tue: float
    wed: float
    thu: float
    fri: float
    sat: float
    production: dict[str, float]
    unitCost: dict[str, float]
    totals: LineTotals


class FlatTimecard(TypedDict):
    lines: list[Line]
    totals: NotRequired[TimecardTotals]
    employeeName: NotRequired[str]
    employeeCode: NotRequired[str]
    employeeId: NotRequired[str]
    employeeNumber: NotRequired[str]


class LegacyTimecard(TypedDict):
    jobs: NotRequired[list[JobEntry]]
    totals: NotRequired[TimecardTotals]
    employeeName: NotRequired[str]
    employeeCode: NotRequired[str]
    employeeId: NotRequired[str]
    employeeNumber: NotRequired[str]


RawTimecard = FlatTimecard | LegacyTimecard


def timecard_shape(raw: RawTimecard | Any) -> Literal["flat", "legacy"]:
    """Return FLAT when the record carries a non-empty `lines` list."""
    if isinstance(raw, Mapping):
        lines = raw.get("lines")
        if isinstance(lines, list) and lines:
            return FLAT
    return LEGACY


@dataclass
class ExportRequest:
    """A request to email one week's timecards for a job."""

    job_id: str
    week_start: str
    timecard_ids: list[str] = field(default_factory=list)
    recipients: list[str] = field(default_factory=list)


def request_from_dict(data: Mapping[str, Any]) -> ExportRequest:
    """Convert a callable payload to an `ExportRequest` with basic coercion."""
    ids = data.get("timecardIds")
    recipients = data.get("recipients")
    return ExportRequest(
        job_id=str(data.get("jobId") or ""),
        week_start=str(data.get("weekStart") or ""),
        timecard_ids=[str(x) for x in ids if x] if isinstance(ids, list) else [],
        recipients=[str(x) for x in recipients if x] if isinstance(recipients, list) else [],
    )


def validate_request(request: ExportRequest) -> list[str]:
    """Return a list of human-readable issues if validation fails."""
    issues: list[str] = []
    if not request.job_id.strip():
        issues.append("jobId is required")
    if not request.timecard_ids:
        issues.append("timecardIds array is required")
    if not request.week_start.strip():
        issues.append("weekStart is required")
    if not request.recipients:
        issues.append("recipients array is required")
    return issues


class ExportPayload(TypedDict):
    """What the PDF and HTML renderers need for one job-week."""

    timecards: list[dict[str, Any]]
    jobName: NotRequired[str | None]
    jobNumber: NotRequired[str | None]
    submittedBy: NotRequired[str | None]
    weekStart: NotRequired[str | None]
