"""Async client for the platform API — measurements, profile, progress photos."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config import settings
from app.progress import normalizer
from app.progress.models import MeasurementRecord, ProfileSnapshot, ProgressPhoto

logger = logging.getLogger(__name__)

MEASUREMENTS_PATH = "/api/measurements"
PROFILE_PATH = "/api/user/profile"
PHOTOS_PATH = "/api/client/progress-photos"


class PlatformError(Exception):
    """Non-2xx response or transport failure talking to the platform API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class PackageRequiredError(PlatformError):
    """403 — the user has no active package."""


def _raise_for_status(resp: httpx.Response, default: str) -> None:
    if resp.is_success:
        return
    message = resp.text.strip() or default
    if resp.status_code == 403:
        raise PackageRequiredError(403, message)
    raise PlatformError(resp.status_code, message)


def _json(resp: httpx.Response) -> Any:
    """Decoded body, or None when a 2xx response is empty or not JSON."""
    try:
        return resp.json()
    except ValueError:
        logger.warning("Platform returned a non-JSON body: %r", resp.text[:200])
        return None


class PlatformClient:
    """Thin wrapper over httpx.AsyncClient. Use as an async context manager.

    `headers` carries the caller's credentials (Authorization / Cookie)
    and is sent verbatim on every request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.platform_base_url,
            headers=headers or {},
            timeout=timeout if timeout is not None else settings.platform_timeout_s,
            transport=transport,
        )

    async def __aenter__(self) -> PlatformClient:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Platform request %s %s failed: %s", method, path, exc)
            raise PlatformError(502, "Platform API unreachable") from exc

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------

    async def list_measurements(self, limit: int | None = None) -> list[MeasurementRecord]:
        """Newest-first measurements; invalid rows are dropped."""
        resp = await self._request(
            "GET",
            MEASUREMENTS_PATH,
            params={"limit": limit or settings.measurement_fetch_limit},
            headers={"Cache-Control": "no-store"},
        )
        _raise_for_status(resp, "Could not load measurements")
        payload = _json(resp)
        if payload is None:
            raise PlatformError(502, "Platform API returned an invalid response")
        records = normalizer.normalize_many(payload)
        logger.debug("Loaded %d measurement(s)", len(records))
        return records

    async def create_measurement(self, payload: dict[str, Any]) -> MeasurementRecord | None:
        """POST a measurement. Returns the normalized echo, None if it is malformed."""
        resp = await self._request("POST", MEASUREMENTS_PATH, json=payload)
        _raise_for_status(resp, "Could not save measurement")
        created = normalizer.normalize(_json(resp))
        if created is None:
            logger.warning("Platform returned an unreadable measurement: %r", resp.text[:200])
        return created

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    async def get_profile(self) -> ProfileSnapshot | None:
        """Profile snapshot, or None when it cannot be loaded (never raises)."""
        try:
            resp = await self._request("GET", PROFILE_PATH, headers={"Cache-Control": "no-store"})
        except PlatformError as exc:
            logger.warning("Profile unavailable: %s", exc.message)
            return None
        if not resp.is_success:
            logger.warning("Profile unavailable: HTTP %d", resp.status_code)
            return None
        payload = _json(resp)
        if not isinstance(payload, dict):
            return None
        fields: dict[str, str] = {}
        for key, value in payload.items():
            if isinstance(value, str):
                fields[key] = value
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                fields[key] = str(value)
        return ProfileSnapshot.model_validate(fields)

    # ------------------------------------------------------------------
    # Progress photos
    # ------------------------------------------------------------------

    async def list_photos(self) -> list[ProgressPhoto]:
        """Stored progress photos; a 404 (no profile yet) reads as []."""
        resp = await self._request("GET", PHOTOS_PATH, headers={"Cache-Control": "no-store"})
        if resp.status_code == 404:
            return []
        _raise_for_status(resp, "Could not load photos")
        return normalizer.normalize_photos(_json(resp))

    async def upload_photo(self, content: bytes, filename: str, content_type: str) -> list[ProgressPhoto]:
        """Upload one photo as multipart field `photo`; returns the updated photo list."""
        resp = await self._request(
            "POST",
            PHOTOS_PATH,
            files={"photo": (filename, content, content_type)},
        )
        _raise_for_status(resp, "Could not upload photo")
        return normalizer.normalize_photos(_json(resp))
