"""Progress contract — Pydantic v2 models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MeasurementType(str, Enum):
    weight = "weight"
    height = "height"
    chest = "chest"
    waist = "waist"
    hip = "hip"
    arm = "arm"
    thigh = "thigh"
    neck = "neck"
    shoulder = "shoulder"


class Trend(str, Enum):
    up = "up"
    down = "down"
    neutral = "neutral"


class Tone(str, Enum):
    success = "success"
    info = "info"
    warning = "warning"


class MeasurementRecord(BaseModel):
    """One timestamped body-metric sample, as returned by the platform API."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    user_id: str = Field(default="", alias="userId")
    type: MeasurementType
    value: float
    unit: str | None = None
    recorded_at: str = Field(alias="recordedAt")  # ISO-8601
    notes: str | None = None


MeasurementGroups = dict[MeasurementType, list[MeasurementRecord]]


class ProfileSnapshot(BaseModel):
    """Subset of the user profile the progress page reads. Values stay strings."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    target_weight: str | None = Field(default=None, alias="targetWeight")
    weight: str | None = None
    height: str | None = None
    goal: str | None = None
    name: str | None = None


class MetricCard(BaseModel):
    key: str
    label: str
    value: str
    change: str | None = None
    trend: Trend = Trend.neutral
    helper: str | None = None


class Achievement(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    earned: bool
    date: str | None = None
    progress: int | None = None  # 0–100, only while not earned


class MonthlyStat(BaseModel):
    key: str  # YYYY-MM
    label: str
    start: float
    end: float
    count: int
    change: float


class Message(BaseModel):
    id: str
    title: str
    description: str
    tone: Tone


class ChartPoint(BaseModel):
    date: str
    weight: float
    target: float | None = None


class BodyMeasurementSummary(BaseModel):
    type: MeasurementType
    label: str
    unit: str
    earliest: MeasurementRecord
    latest: MeasurementRecord
    delta: float


class ProgressPhoto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    data: str
    uploaded_at: str | None = Field(default=None, alias="uploadedAt")


class WeightDeltas(BaseModel):
    """Weight deltas computed once and shared by cards and messages."""

    latest: MeasurementRecord | None = None
    previous: MeasurementRecord | None = None
    first: MeasurementRecord | None = None
    unit: str = "kg"
    recent: float | None = None  # latest - previous
    total: float | None = None  # latest - first
    target_weight: float | None = None
    profile_weight: float | None = None
    target_diff: float | None = None  # (latest or profile weight) - target


class ProgressReport(BaseModel):
    """Everything the progress page renders — always constructible."""

    schema_version: str = "v1"
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    weight_unit: str = "kg"
    latest_measurement: MeasurementRecord | None = None
    metric_cards: list[MetricCard] = Field(default_factory=list)
    selected_metric: str | None = None
    weight_chart: list[ChartPoint] = Field(default_factory=list)
    achievements: list[Achievement] = Field(default_factory=list)
    body_measurements: list[BodyMeasurementSummary] = Field(default_factory=list)
    monthly_stats: list[MonthlyStat] = Field(default_factory=list)
    messages: list[Message] = Field(default_factory=list)
