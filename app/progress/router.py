"""Progress HTTP router — report, quick weight entry, photos."""

from __future__ import annotations

from typing import AsyncIterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from app.auth import forwarded_credentials, verify_api_key
from app.config import settings
from app.progress.client import PackageRequiredError, PlatformClient, PlatformError
from app.progress.measurement_types import get_meta, list_types
from app.progress.models import ProgressPhoto, ProgressReport
from app.progress.page import InputError, ProgressPage

router = APIRouter(prefix="/progress", tags=["progress"])


class WeightEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    value: str | float
    recorded_at: str | None = Field(default=None, alias="recordedAt")


class PhotoList(BaseModel):
    photos: list[ProgressPhoto] = Field(default_factory=list)
    error: str | None = None


def resolve_tz(
    tz: str | None = Query(default=None, description="Timezone (e.g. Europe/Istanbul)"),
) -> str:
    if not tz:
        return settings.default_tz
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=422, detail=f"Unknown timezone: {tz}")
    return tz


async def get_page(
    credentials: dict[str, str] = Depends(forwarded_credentials),
    tz: str = Depends(resolve_tz),
) -> AsyncIterator[ProgressPage]:
    async with PlatformClient(headers=credentials) as client:
        yield ProgressPage(client, tz_name=tz)


def _http_error(exc: PlatformError) -> HTTPException:
    if isinstance(exc, PackageRequiredError):
        return HTTPException(status_code=403, detail={"code": "package_required", "message": exc.message})
    return HTTPException(status_code=exc.status_code, detail=exc.message)


# ---------------------------------------------------------------------------
# /progress/report
# ---------------------------------------------------------------------------


@router.get("/report", response_model=ProgressReport)
async def get_report(
    page: ProgressPage = Depends(get_page),
    _: str = Depends(verify_api_key),
) -> ProgressReport:
    try:
        await page.load()
    except PlatformError as exc:
        raise _http_error(exc)
    return page.report()


@router.post("/weight", response_model=ProgressReport, status_code=201)
async def add_weight(
    entry: WeightEntry,
    page: ProgressPage = Depends(get_page),
    _: str = Depends(verify_api_key),
) -> ProgressReport:
    try:
        await page.load(include_photos=False)
        await page.submit_weight(str(entry.value), entry.recorded_at)
    except InputError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except PlatformError as exc:
        raise _http_error(exc)
    return page.report()


# ---------------------------------------------------------------------------
# /progress/photos
# ---------------------------------------------------------------------------


@router.get("/photos", response_model=PhotoList)
async def get_photos(
    page: ProgressPage = Depends(get_page),
    _: str = Depends(verify_api_key),
) -> PhotoList:
    try:
        photos = await page.refresh_photos()
    except PlatformError as exc:
        raise _http_error(exc)
    return PhotoList(photos=photos, error=page.photo_error)


@router.post("/photos", response_model=PhotoList, status_code=201)
async def upload_photo(
    photo: UploadFile = File(...),
    page: ProgressPage = Depends(get_page),
    _: str = Depends(verify_api_key),
) -> PhotoList:
    content = await photo.read()
    try:
        photos = await page.upload_photo(
            content,
            photo.filename or "photo",
            photo.content_type or "application/octet-stream",
        )
    except InputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except PlatformError as exc:
        raise _http_error(exc)
    return PhotoList(photos=photos)


# ---------------------------------------------------------------------------
# /progress/measurement-types
# ---------------------------------------------------------------------------


@router.get("/measurement-types")
async def measurement_types(
    _: str = Depends(verify_api_key),
) -> list[dict]:
    return [
        {"type": t.value, "label": get_meta(t).label, "unit": get_meta(t).unit}
        for t in list_types()
    ]
