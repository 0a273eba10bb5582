"""Motivational messages from the precomputed weight deltas."""

from __future__ import annotations

from app.progress.features import fixed, format_date
from app.progress.models import Message, Tone, WeightDeltas


def _recent_message(recent: float, unit: str) -> Message:
    if recent == 0:
        description = "No change since your last measurement. Keep your balance!"
    else:
        direction = "lost" if recent < 0 else "gained"
        description = f"You {direction} {fixed(abs(recent))} {unit} since your last measurement."
    return Message(
        id="recent-change",
        title="Great last measurement!" if recent < 0 else "Latest measurement updated",
        description=description,
        tone=Tone.success if recent < 0 else Tone.info,
    )


def _total_message(total: float, unit: str, since: str) -> Message:
    if total == 0:
        description = "Your weight is unchanged overall. Keep measuring regularly."
    else:
        direction = "lost a total of" if total < 0 else "gained a net"
        description = f"Since {since} you have {direction} {fixed(abs(total))} {unit}."
    return Message(
        id="total-progress",
        title="Overall progress looks great" if total < 0 else "Overall status",
        description=description,
        tone=Tone.success if total < 0 else Tone.info,
    )


def _target_message(diff: float, unit: str) -> Message:
    if diff == 0:
        description = "You are at your target weight. Time to set a new goal."
    else:
        description = f"{fixed(abs(diff))} {unit} left to your target weight."
    return Message(
        id="target-diff",
        title="Target reached" if diff <= 0 else "Closing in on your target",
        description=description,
        tone=Tone.success if diff <= 0 else Tone.warning,
    )


def compose_messages(deltas: WeightDeltas, tz_name: str = "UTC") -> list[Message]:
    """One message per available signal; a single fallback when none is available."""
    messages: list[Message] = []

    if deltas.recent is not None:
        messages.append(_recent_message(deltas.recent, deltas.unit))

    if deltas.total is not None and deltas.first is not None:
        since = format_date(deltas.first.recorded_at, tz_name)
        messages.append(_total_message(deltas.total, deltas.unit, since))

    if deltas.target_diff is not None and deltas.latest is not None:
        messages.append(_target_message(deltas.target_diff, deltas.unit))

    if not messages:
        messages.append(
            Message(
                id="awaiting-data",
                title="Add your first data point",
                description=(
                    "Your progress messages will appear here once you add measurements "
                    "and photos. Take the first step!"
                ),
                tone=Tone.info,
            )
        )
    return messages
