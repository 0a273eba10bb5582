"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.progress.client import PlatformError
from app.progress.models import MeasurementRecord, MeasurementType, ProfileSnapshot, ProgressPhoto
from app.progress.normalizer import normalize
from app.progress.page import ProgressPage
from app.progress.router import get_page, resolve_tz


# ---------------------------------------------------------------------------
# Fake platform client (no real upstream needed)
# ---------------------------------------------------------------------------

class FakePlatformClient:
    """Minimal stand-in for PlatformClient used in controller and endpoint tests."""

    def __init__(
        self,
        measurements: list[MeasurementRecord] | None = None,
        profile: ProfileSnapshot | None = None,
        photos: list[ProgressPhoto] | None = None,
        measurements_error: PlatformError | None = None,
        photos_error: PlatformError | None = None,
    ):
        self.measurements = measurements or []
        self.profile = profile
        self.photos = photos or []
        self.measurements_error = measurements_error
        self.photos_error = photos_error
        self.created: list[dict[str, Any]] = []
        self.uploaded: list[tuple[bytes, str, str]] = []

    async def list_measurements(self, limit: int | None = None) -> list[MeasurementRecord]:
        if self.measurements_error is not None:
            raise self.measurements_error
        return list(self.measurements)

    async def get_profile(self) -> ProfileSnapshot | None:
        return self.profile

    async def list_photos(self) -> list[ProgressPhoto]:
        if self.photos_error is not None:
            raise self.photos_error
        return list(self.photos)

    async def create_measurement(self, payload: dict[str, Any]) -> MeasurementRecord | None:
        self.created.append(payload)
        return normalize(
            {
                "id": f"m-{len(self.created)}",
                "type": payload["type"],
                "value": payload["value"],
                "unit": "kg",
                "recordedAt": payload.get("recordedAt", "2024-04-01T08:00:00Z"),
            }
        )

    async def upload_photo(self, content: bytes, filename: str, content_type: str) -> list[ProgressPhoto]:
        self.uploaded.append((content, filename, content_type))
        self.photos = [ProgressPhoto(id="p-new", data="data:image/png;base64,AAAA"), *self.photos][:2]
        return list(self.photos)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_client():
    """Return a FakePlatformClient with no data (mutate attributes in tests if needed)."""
    return FakePlatformClient()


@pytest.fixture()
def override_page(fake_client):
    """Override the FastAPI dependency so no real platform API is needed."""
    async def _override(tz: str = Depends(resolve_tz)):
        yield ProgressPage(fake_client, tz_name=tz)

    app.dependency_overrides[get_page] = _override
    yield fake_client
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_page):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_record(
    value: float,
    recorded_at: str,
    mtype: str = "weight",
    record_id: str | None = None,
    unit: str | None = "kg",
) -> MeasurementRecord:
    """Helper to build a MeasurementRecord."""
    return MeasurementRecord(
        id=record_id or f"{mtype}-{recorded_at}",
        type=MeasurementType(mtype),
        value=value,
        unit=unit,
        recorded_at=recorded_at,
    )


def weight_series(*points: tuple[str, float]) -> list[MeasurementRecord]:
    """Weight records from (date, value) pairs, kept in the given order."""
    return [make_record(v, f"{d}T00:00:00.000Z") for d, v in points]
