"""Printed cells shared by the PDF and HTML reports."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..days import DAY_KEYS, DAY_LABELS
from ..fields import resolve_field
from ..utils import format_amount, safe_text

REPORT_COLUMNS: tuple[str, ...] = (
    "Job",
    "Area",
    "Acct",
    "Cost",
    *DAY_LABELS,
    "Tot Hrs",
    "Tot Prod",
    "Line $",
)


def line_cells(line: Any) -> list[str]:
    """Identifying fields, the seven day hours, then the three line totals."""
    line = line if isinstance(line, Mapping) else {}
    totals = line.get("totals")
    totals = totals if isinstance(totals, Mapping) else {}
    return [
        safe_text(line.get("jobNumber")),
        safe_text(resolve_field(line, "area")),
        safe_text(resolve_field(line, "account")),
        safe_text(resolve_field(line, "costCode")),
        *(format_amount(line.get(k)) for k in DAY_KEYS),
        format_amount(totals.get("hours")),
        format_amount(totals.get("production")),
        format_amount(totals.get("lineTotal")),
    ]


def timecard_totals(tc: Any) -> dict[str, str]:
    """Formatted aggregate totals as carried on the normalized timecard."""
    totals = tc.get("totals") if isinstance(tc, Mapping) else None
    totals = totals if isinstance(totals, Mapping) else {}
    return {
        "hoursTotal": format_amount(totals.get("hoursTotal")),
        "productionTotal": format_amount(totals.get("productionTotal")),
        "lineTotal": format_amount(totals.get("lineTotal")),
    }
