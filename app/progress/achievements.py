"""Achievement badges derived from the weight series.

Rules are independent and all included when eligible. The list is never
empty: a "no-data" badge is added when no rule produced anything.
"""

from __future__ import annotations

from app.progress.features import clamp, fixed, format_date, percent
from app.progress.metrics import WEIGHT_UNIT
from app.progress.models import Achievement, MeasurementRecord

# Changes smaller than this are rounding noise, not a trend.
TREND_DEAD_ZONE = 0.1
# Progress at or above this counts as target reached.
TARGET_ACHIEVED_PCT = 99.0


def target_progress_pct(first: float, latest: float, target: float) -> float:
    """Share of the initial distance to target already covered, clamped to 0–100."""
    total_distance = abs(target - first)
    if total_distance == 0:
        return 100.0
    remaining = abs(target - latest)
    return clamp((total_distance - remaining) / total_distance * 100.0)


def target_reached(first: float, latest: float, target: float, progress_pct: float) -> bool:
    """Latest crossed the target in the direction of the initial gap, or progress >= 99 %."""
    initial_diff = target - first
    return (
        (initial_diff > 0 and latest >= target)
        or (initial_diff < 0 and latest <= target)
        or progress_pct >= TARGET_ACHIEVED_PCT
    )


def _latest_badge(latest: MeasurementRecord, tz_name: str) -> Achievement:
    day = format_date(latest.recorded_at, tz_name, long=True)
    return Achievement(
        id="latest-weight",
        title="Latest Measurement",
        description=f"You weighed {fixed(latest.value)} {latest.unit or WEIGHT_UNIT} on {day}.",
        icon="calendar",
        earned=True,
        date=day,
    )


def _trend_badge(first: MeasurementRecord, latest: MeasurementRecord, tz_name: str) -> Achievement | None:
    delta = first.value - latest.value
    if abs(delta) < TREND_DEAD_ZONE:
        return None
    unit = latest.unit or WEIGHT_UNIT
    is_loss = delta > 0
    amount = f"{fixed(abs(delta))} {unit}"
    since = format_date(first.recorded_at, tz_name)
    return Achievement(
        id="consistent-progress",
        title="Weight Loss Milestone" if is_loss else "Weight Gain Milestone",
        description=(
            f"You have {'lost' if is_loss else 'gained'} {'a total of' if is_loss else 'a net'} "
            f"{amount} since {since}. Keep it up!"
        ),
        icon="trending-up",
        earned=True,
        date=amount,
    )


def _target_badge(first: MeasurementRecord, latest: MeasurementRecord, target: float) -> Achievement:
    progress = target_progress_pct(first.value, latest.value, target)
    achieved = target_reached(first.value, latest.value, target, progress)
    return Achievement(
        id="target-progress",
        title="Target Weight Progress",
        description=(
            "You reached your target weight, congratulations! Ready for a new goal."
            if achieved
            else f"You are {percent(progress)}% of the way to your target."
        ),
        icon="target",
        earned=achieved,
        progress=None if achieved else percent(progress),
    )


def evaluate_achievements(
    weight_series: list[MeasurementRecord],
    target_weight: float | None,
    tz_name: str = "UTC",
) -> list[Achievement]:
    """Badges for a newest-first weight series. Never empty, never raises."""
    latest = weight_series[0] if weight_series else None
    first = weight_series[-1] if weight_series else None

    badges: list[Achievement] = []
    if latest is not None:
        badges.append(_latest_badge(latest, tz_name))

    if first is not None and latest is not None:
        trend = _trend_badge(first, latest, tz_name)
        if trend is not None:
            badges.append(trend)
        if target_weight is not None:
            badges.append(_target_badge(first, latest, target_weight))

    if not badges:
        badges.append(
            Achievement(
                id="no-data",
                title="No data yet",
                description="Your progress badges will show up here once you add your first measurement.",
                icon="trophy",
                earned=False,
            )
        )
    return badges
