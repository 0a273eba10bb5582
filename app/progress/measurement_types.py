"""
Measurement type catalog.

Each entry maps a measurement type to:
  - label: human-readable name shown on cards and summaries
  - unit: default display unit when a record carries none

ORDER is the display order for body-measurement summaries
(weight first, height last).
"""

from __future__ import annotations

from dataclasses import dataclass

from app.progress.models import MeasurementType


@dataclass(frozen=True, slots=True)
class MeasurementMeta:
    label: str
    unit: str


MEASUREMENT_META: dict[MeasurementType, MeasurementMeta] = {
    MeasurementType.weight: MeasurementMeta(label="Weight", unit="kg"),
    MeasurementType.height: MeasurementMeta(label="Height", unit="cm"),
    MeasurementType.chest: MeasurementMeta(label="Chest", unit="cm"),
    MeasurementType.waist: MeasurementMeta(label="Waist", unit="cm"),
    MeasurementType.hip: MeasurementMeta(label="Hip", unit="cm"),
    MeasurementType.arm: MeasurementMeta(label="Arm", unit="cm"),
    MeasurementType.thigh: MeasurementMeta(label="Thigh", unit="cm"),
    MeasurementType.neck: MeasurementMeta(label="Neck", unit="cm"),
    MeasurementType.shoulder: MeasurementMeta(label="Shoulder", unit="cm"),
}

ORDER: list[MeasurementType] = [
    MeasurementType.weight,
    MeasurementType.waist,
    MeasurementType.hip,
    MeasurementType.chest,
    MeasurementType.arm,
    MeasurementType.thigh,
    MeasurementType.shoulder,
    MeasurementType.neck,
    MeasurementType.height,
]


def parse_measurement_type(raw: object) -> MeasurementType | None:
    """Trim + lower-case `raw` and match it against the catalog. None if unknown."""
    if not isinstance(raw, str):
        return None
    try:
        return MeasurementType(raw.strip().lower())
    except ValueError:
        return None


def get_meta(measurement_type: MeasurementType) -> MeasurementMeta:
    return MEASUREMENT_META[measurement_type]


def default_unit(measurement_type: MeasurementType) -> str:
    return MEASUREMENT_META[measurement_type].unit


def list_types() -> list[MeasurementType]:
    return list(ORDER)
