"""Progress page controller — owns the measurement/profile/photo state."""

from __future__ import annotations

import asyncio
import logging

from app.config import settings
from app.progress import grouping, pipeline
from app.progress.client import PackageRequiredError, PlatformClient, PlatformError
from app.progress.features import parse_timestamp, to_iso, to_number
from app.progress.models import (
    MeasurementRecord,
    MeasurementType,
    ProfileSnapshot,
    ProgressPhoto,
    ProgressReport,
)

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """User input rejected before anything is sent upstream."""


def _is_image(header: bytes) -> bool:
    return (
        header[:3] == b"\xff\xd8\xff"  # JPEG
        or header[:4] == b"\x89PNG"
        or header[:4] == b"GIF8"
        or (header[:4] == b"RIFF" and header[8:12] == b"WEBP")
    )


class ProgressPage:
    """Explicit state for one user's progress view.

    Measurements are kept newest-first. The derivation core only ever sees
    a snapshot passed by value through `report()`.
    """

    def __init__(self, client: PlatformClient, tz_name: str | None = None):
        self.client = client
        self.tz_name = tz_name or settings.default_tz
        self.measurements: list[MeasurementRecord] = []
        self.profile: ProfileSnapshot | None = None
        self.photos: list[ProgressPhoto] = []
        self.photo_error: str | None = None

    async def load(self, include_photos: bool = True) -> None:
        """Fetch everything. Measurement errors propagate; profile and photos degrade.

        The report does not use photos, so callers that only need the
        report can skip them with `include_photos=False`.
        """
        measurements = await self.client.list_measurements()
        if include_photos:
            profile, _ = await asyncio.gather(
                self.client.get_profile(),
                self.refresh_photos(),
            )
        else:
            profile = await self.client.get_profile()
        self.measurements = grouping.sort_desc(measurements)
        self.profile = profile

    async def refresh_photos(self) -> list[ProgressPhoto]:
        """Reload photos. Failures other than 403 are kept in `photo_error`."""
        self.photo_error = None
        try:
            self.photos = await self.client.list_photos()
        except PackageRequiredError:
            raise
        except PlatformError as exc:
            logger.error("Progress photos unavailable: %s", exc.message)
            self.photo_error = exc.message
            self.photos = []
        return self.photos

    def report(self) -> ProgressReport:
        return pipeline.build_report(list(self.measurements), self.profile, self.tz_name)

    async def submit_weight(self, value_text: str, date_text: str | None = None) -> MeasurementRecord | None:
        """Validate and record a quick weight entry, then update local state.

        Accepts a comma as decimal separator. Raises InputError for a
        non-positive or unreadable value or date.
        """
        value = to_number(str(value_text).replace(",", "."))
        if value is None or value <= 0:
            raise InputError("Please enter a valid weight.")

        payload: dict[str, object] = {"type": MeasurementType.weight.value, "value": round(value, 2)}
        if date_text:
            recorded = parse_timestamp(date_text)
            if recorded is None:
                raise InputError("Please choose a valid date.")
            payload["recordedAt"] = to_iso(recorded)

        created = await self.client.create_measurement(payload)
        if created is None:
            return None

        self.measurements = grouping.sort_desc([created, *self.measurements])
        if self.profile is not None:
            self.profile = self.profile.model_copy(update={"weight": f"{created.value:.1f}"})
        logger.info("Recorded weight %.2f %s", created.value, created.unit or "kg")
        return created

    async def upload_photo(self, content: bytes, filename: str, content_type: str) -> list[ProgressPhoto]:
        """Check type, size and image signature locally, then upload."""
        if content_type not in settings.allowed_photo_types:
            raise InputError("Please choose an image file.")
        if not content:
            raise InputError("The file is empty.")
        if len(content) > settings.max_photo_bytes:
            limit_mb = settings.max_photo_bytes // (1024 * 1024)
            raise InputError(f"The file must not exceed {limit_mb}MB.")
        if not _is_image(content[:12]):
            raise InputError("The file content is not a supported image.")

        self.photos = await self.client.upload_photo(content, filename, content_type)
        self.photo_error = None
        return self.photos
