"""Derived weight metrics — summary cards, chart series, body summaries.

Sign convention: a decreasing weight is the favorable direction, so any
delta <= 0 is reported with trend "down".
Missing data never raises; every card is independently gated.
"""

from __future__ import annotations

from app.progress import grouping
from app.progress.features import fixed, format_date, signed, to_number
from app.progress.measurement_types import ORDER, default_unit, get_meta
from app.progress.models import (
    BodyMeasurementSummary,
    ChartPoint,
    MeasurementGroups,
    MeasurementRecord,
    MeasurementType,
    MetricCard,
    ProfileSnapshot,
    Trend,
    WeightDeltas,
)

WEIGHT_UNIT = default_unit(MeasurementType.weight)


def _favorable(delta: float) -> Trend:
    return Trend.down if delta <= 0 else Trend.up


def weight_deltas(
    weight_series: list[MeasurementRecord],
    profile: ProfileSnapshot | None,
) -> WeightDeltas:
    """Pick latest/previous/first from a newest-first series and compute deltas once."""
    latest = weight_series[0] if weight_series else None
    previous = weight_series[1] if len(weight_series) > 1 else None
    first = weight_series[-1] if weight_series else None

    target_weight = to_number(profile.target_weight) if profile else None
    profile_weight = to_number(profile.weight) if profile else None
    reference = latest.value if latest is not None else profile_weight

    return WeightDeltas(
        latest=latest,
        previous=previous,
        first=first,
        unit=(latest.unit if latest and latest.unit else WEIGHT_UNIT),
        recent=latest.value - previous.value if latest and previous else None,
        total=latest.value - first.value if latest and first and first is not latest else None,
        target_weight=target_weight,
        profile_weight=profile_weight,
        target_diff=(
            reference - target_weight if target_weight is not None and reference is not None else None
        ),
    )


def _current_weight_card(d: WeightDeltas) -> MetricCard | None:
    if d.latest is not None:
        if d.recent is None:
            helper = "No previous measurement found"
        elif d.recent < 0:
            helper = "Weight went down since the previous measurement"
        elif d.recent > 0:
            helper = "Weight went up since the previous measurement"
        else:
            helper = "No change since the previous measurement"
        return MetricCard(
            key="weight",
            label="Current Weight",
            value=f"{fixed(d.latest.value)} {d.unit}",
            change=f"{signed(d.recent)} {d.unit}" if d.recent is not None else None,
            trend=_favorable(d.recent) if d.recent is not None else Trend.neutral,
            helper=helper,
        )
    if d.profile_weight is not None:
        return MetricCard(
            key="weight",
            label="Current Weight",
            value=f"{fixed(d.profile_weight)} {WEIGHT_UNIT}",
            trend=Trend.neutral,
            helper="Taken from your profile, no measurement recorded yet",
        )
    return None


def _target_gap_card(d: WeightDeltas) -> MetricCard | None:
    diff = d.target_diff
    if diff is None:
        return None
    if diff == 0:
        helper = "Target weight reached"
    elif diff > 0:
        helper = "You are above your target weight"
    else:
        helper = "You are below your target weight"
    return MetricCard(
        key="target-gap",
        label="Distance to Target",
        value=f"{signed(diff)} {d.unit}",
        trend=_favorable(diff),
        helper=helper,
    )


def _total_change_card(d: WeightDeltas, tz_name: str) -> MetricCard | None:
    if d.total is None or d.first is None:
        return None
    return MetricCard(
        key="total-progress",
        label="Total Change",
        value=f"{signed(d.total)} {d.unit}",
        trend=_favorable(d.total),
        helper=f"Total change since {format_date(d.first.recorded_at, tz_name)}",
    )


def metric_cards(deltas: WeightDeltas, tz_name: str = "UTC") -> list[MetricCard]:
    cards = [
        _current_weight_card(deltas),
        _target_gap_card(deltas),
        _total_change_card(deltas, tz_name),
    ]
    return [c for c in cards if c is not None]


def derive_metrics(
    weight_series: list[MeasurementRecord],
    profile: ProfileSnapshot | None,
    tz_name: str = "UTC",
) -> list[MetricCard]:
    """Summary cards for a newest-first weight series. May return []."""
    return metric_cards(weight_deltas(weight_series, profile), tz_name)


def weight_chart(
    weight_series: list[MeasurementRecord],
    target_weight: float | None,
    tz_name: str = "UTC",
) -> list[ChartPoint]:
    """Oldest-first chart points, weight rounded to one decimal."""
    return [
        ChartPoint(
            date=format_date(rec.recorded_at, tz_name),
            weight=round(rec.value, 1),
            target=target_weight,
        )
        for rec in reversed(weight_series)
    ]


def body_measurement_summary(groups: MeasurementGroups) -> list[BodyMeasurementSummary]:
    """Earliest → latest delta per non-weight type, in display order."""
    summaries: list[BodyMeasurementSummary] = []
    for mtype in ORDER:
        if mtype is MeasurementType.weight:
            continue
        records = grouping.series(groups, mtype)
        if not records:
            continue
        latest, earliest = records[0], records[-1]
        meta = get_meta(mtype)
        summaries.append(
            BodyMeasurementSummary(
                type=mtype,
                label=meta.label,
                unit=latest.unit or meta.unit,
                earliest=earliest,
                latest=latest,
                delta=latest.value - earliest.value,
            )
        )
    return summaries
