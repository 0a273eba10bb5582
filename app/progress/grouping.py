"""Partition records by measurement type."""

from __future__ import annotations

from datetime import datetime, timezone

from app.progress.features import parse_timestamp
from app.progress.models import MeasurementGroups, MeasurementRecord, MeasurementType

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _recorded(rec: MeasurementRecord) -> datetime:
    return parse_timestamp(rec.recorded_at) or _EPOCH


def sort_desc(records: list[MeasurementRecord]) -> list[MeasurementRecord]:
    """Newest first by recordedAt. Run once upstream of `group`."""
    return sorted(records, key=_recorded, reverse=True)


def group(records: list[MeasurementRecord]) -> MeasurementGroups:
    """Stable partition by type. Types with no records get no key."""
    groups: MeasurementGroups = {}
    for rec in records:
        groups.setdefault(rec.type, []).append(rec)
    return groups


def series(groups: MeasurementGroups, measurement_type: MeasurementType) -> list[MeasurementRecord]:
    """Bucket for `measurement_type`; absent and empty buckets both read as []."""
    return groups.get(measurement_type) or []
