"""The fixed Sunday-first week used to index every per-day timecard value."""

from __future__ import annotations

DAY_KEYS: tuple[str, ...] = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
DAY_LABELS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def empty_week() -> dict[str, float]:
    """Return a zero-filled mapping over the seven day keys."""
    return {key: 0 for key in DAY_KEYS}


def day_key(index: int) -> str | None:
    """Return the key for a 0-6 day index, or None when out of range."""
    if 0 <= index < len(DAY_KEYS):
        return DAY_KEYS[index]
    return None
