"""Report builder — the progress core.

Sorts and groups measurement records, derives cards, chart, badges,
monthly stats and messages, and returns a ProgressReport.
Recomputed from scratch on every call; missing data never raises.
"""

from __future__ import annotations

from app.progress import achievements, grouping, messages, metrics, monthly
from app.progress.models import (
    MeasurementRecord,
    MeasurementType,
    ProfileSnapshot,
    ProgressReport,
)


def build_report(
    records: list[MeasurementRecord],
    profile: ProfileSnapshot | None = None,
    tz_name: str = "UTC",
) -> ProgressReport:
    ordered = grouping.sort_desc(records)
    groups = grouping.group(ordered)
    weights = grouping.series(groups, MeasurementType.weight)

    deltas = metrics.weight_deltas(weights, profile)
    cards = metrics.metric_cards(deltas, tz_name)

    return ProgressReport(
        weight_unit=deltas.unit,
        latest_measurement=ordered[0] if ordered else None,
        metric_cards=cards,
        selected_metric=cards[0].key if cards else None,
        weight_chart=metrics.weight_chart(weights, deltas.target_weight, tz_name),
        achievements=achievements.evaluate_achievements(weights, deltas.target_weight, tz_name),
        body_measurements=metrics.body_measurement_summary(groups),
        monthly_stats=monthly.aggregate_monthly(weights, tz_name),
        messages=messages.compose_messages(deltas, tz_name),
    )
