"""Pure stateless helpers — parsing and formatting only, never raises."""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo


def to_number(value: object) -> float | None:
    """Parse a profile-style numeric string. None if empty or not finite."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        if not value.strip():
            return None
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return min(hi, max(lo, value))


def parse_timestamp(value: object) -> datetime | None:
    """Resolve a string, datetime, date or epoch-millis value to an aware datetime.

    Naive values are taken as UTC. Returns None when the value cannot be
    resolved to a real instant.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, date):
            dt = datetime.combine(value, time.min)
        elif isinstance(value, (int, float)):
            if not math.isfinite(value):
                return None
            dt = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            dt = datetime.fromisoformat(text)
        else:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        # offsets near year 1 or 9999 cannot be expressed in UTC
        dt.astimezone(timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
    return dt


def percent(value: float) -> int:
    """Whole percent, halves rounded up (progress values are never negative)."""
    return int(math.floor(value + 0.5))


def to_iso(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def format_date(iso: str, tz_name: str = "UTC", long: bool = False) -> str:
    """Short ("05 Mar") or long ("5 March") day label. "-" when unparseable."""
    dt = parse_timestamp(iso)
    if dt is None:
        return "-"
    try:
        local = dt.astimezone(ZoneInfo(tz_name))
    except OverflowError:
        return "-"
    if long:
        return f"{local.day} {local.strftime('%B')}"
    return local.strftime("%d %b")


def fixed(value: float) -> str:
    """One decimal place."""
    return f"{value:.1f}"


def signed(value: float) -> str:
    """One decimal place with an explicit + for positive values."""
    return f"{'+' if value > 0 else ''}{value:.1f}"
