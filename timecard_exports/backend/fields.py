"""Ordered field fallbacks shared by the normalizer and every exporter.

Older records store the same value under different names. Each logical field
below lists the record keys to try, first non-empty value wins:

- employeeCode: employeeCode, employeeId, employeeNumber
- area: area, subsectionArea
- account: account, acct
- jobAccount: acct, account (legacy job entries)
- costCode: costCode, difC
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

FIELD_FALLBACKS: dict[str, tuple[str, ...]] = {
    "employeeCode": ("employeeCode", "employeeId", "employeeNumber"),
    "area": ("area", "subsectionArea"),
    "account": ("account", "acct"),
    "jobAccount": ("acct", "account"),
    "costCode": ("costCode", "difC"),
}


def resolve_field(record: Any, name: str) -> Any:
    """Return the first non-empty value for a logical field, else ""."""
    if not isinstance(record, Mapping):
        return ""
    for key in FIELD_FALLBACKS.get(name, (name,)):
        value = record.get(key)
        if value:
            return value
    return ""
