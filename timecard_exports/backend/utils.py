from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any


def to_number(value: Any) -> float:
    """Coerce a stored value to a finite number, 0 for anything unusable."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        n = value
    else:
        try:
            s = str(value).strip()
            n = float(s) if s else 0
        except (TypeError, ValueError):
            return 0
    if isinstance(n, float) and not math.isfinite(n):
        return 0
    return n


def format_amount(value: Any) -> str:
    """Integers print bare, everything else with two decimals."""
    n = to_number(value)
    if float(n).is_integer():
        return str(int(n))
    return f"{n:.2f}"


def format_plain(value: Any) -> str:
    """Render a number the way it was entered: 8, 7.5, 0.25."""
    n = to_number(value)
    if float(n).is_integer():
        return str(int(n))
    return repr(float(n))


def safe_text(value: Any) -> str:
    """Trimmed text, "-" when blank."""
    if value is None:
        return "-"
    return str(value).strip() or "-"


def normalize_recipients(*groups: Iterable[Any] | None) -> list[str]:
    """Merge recipient lists, trimming and de-duplicating while preserving order."""
    out: list[str] = []
    seen: set[str] = set()
    for group in groups:
        if not isinstance(group, (list, tuple)):
            continue
        for value in group:
            if not isinstance(value, str):
                continue
            t = value.strip()
            if not t or t in seen:
                continue
            seen.add(t)
            out.append(t)
    return out
