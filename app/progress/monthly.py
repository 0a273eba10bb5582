"""Calendar-month buckets over the weight series."""

from __future__ import annotations

from zoneinfo import ZoneInfo

from app.progress.features import parse_timestamp
from app.progress.models import MeasurementRecord, MonthlyStat


def aggregate_monthly(weight_series: list[MeasurementRecord], tz_name: str = "UTC") -> list[MonthlyStat]:
    """Start/end/count/change per calendar month of a newest-first weight series.

    Records are walked oldest-first, so `start` is the first sample of a month
    and `end` the last. Buckets come out in the order first seen.
    """
    if not weight_series:
        return []
    tz = ZoneInfo(tz_name)

    buckets: dict[str, dict] = {}
    for rec in reversed(weight_series):
        recorded = parse_timestamp(rec.recorded_at)
        if recorded is None:
            continue
        try:
            local = recorded.astimezone(tz)
        except OverflowError:
            continue
        key = f"{local.year:04d}-{local.month:02d}"
        bucket = buckets.get(key)
        if bucket is None:
            buckets[key] = {
                "key": key,
                "label": local.strftime("%B %Y"),
                "start": rec.value,
                "end": rec.value,
                "count": 1,
            }
            continue
        bucket["end"] = rec.value
        bucket["count"] += 1

    return [MonthlyStat(**b, change=b["end"] - b["start"]) for b in buckets.values()]
