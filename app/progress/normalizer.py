"""Validate raw platform payloads into typed records. Invalid input degrades to None."""

from __future__ import annotations

import math
import uuid
from typing import Any

from app.progress.features import parse_timestamp, to_iso
from app.progress.measurement_types import parse_measurement_type
from app.progress.models import MeasurementRecord, ProgressPhoto


def _finite(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def normalize(raw: Any) -> MeasurementRecord | None:
    """Coerce one raw measurement entry into a MeasurementRecord.

    Rejects (returns None) on an unknown type, a non-finite value or a
    recordedAt that does not resolve to a real instant. Never raises.
    """
    if not isinstance(raw, dict):
        return None

    mtype = parse_measurement_type(raw.get("type"))
    if mtype is None:
        return None

    value = _finite(raw.get("value"))
    if value is None:
        return None

    recorded = parse_timestamp(raw.get("recordedAt"))
    if recorded is None:
        return None
    recorded_at = to_iso(recorded)

    raw_id = raw.get("id")
    raw_user = raw.get("userId")
    return MeasurementRecord(
        id=str(raw_id) if raw_id else f"{mtype.value}-{recorded_at}",
        user_id=str(raw_user) if raw_user else "",
        type=mtype,
        value=value,
        unit=_str_or_none(raw.get("unit")),
        recorded_at=recorded_at,
        notes=_str_or_none(raw.get("notes")),
    )


def normalize_many(payload: Any) -> list[MeasurementRecord]:
    """Normalize a list payload, dropping invalid entries. Non-lists yield []."""
    if not isinstance(payload, list):
        return []
    records: list[MeasurementRecord] = []
    for entry in payload:
        rec = normalize(entry)
        if rec is not None:
            records.append(rec)
    return records


def normalize_photo(raw: Any) -> ProgressPhoto | None:
    """Accept a bare data-URL string or a {id, data, uploadedAt} dict."""
    if not raw:
        return None
    if isinstance(raw, str):
        data = raw
        raw = {}
    elif isinstance(raw, dict) and isinstance(raw.get("data"), str):
        data = raw["data"]
    else:
        return None
    if not data:
        return None

    photo_id = raw.get("id")
    uploaded_at = raw.get("uploadedAt")
    return ProgressPhoto(
        id=photo_id if isinstance(photo_id, str) and photo_id else f"photo-{uuid.uuid4().hex[:8]}",
        data=data,
        uploaded_at=uploaded_at if isinstance(uploaded_at, str) and uploaded_at else None,
    )


def normalize_photos(payload: Any) -> list[ProgressPhoto]:
    """Read the `photos` list of a photo endpoint response."""
    items = payload.get("photos") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        return []
    photos: list[ProgressPhoto] = []
    for item in items:
        photo = normalize_photo(item)
        if photo is not None:
            photos.append(photo)
    return photos
