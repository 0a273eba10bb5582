"""Service API key check and caller-credential forwarding."""

from fastapi import HTTPException, Header

from app.config import settings


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> str:
    """Validate the service API key sent as X-API-Key.

    If PROGRESS_API_KEY is not set, passes through (no auth).
    If set, requires matching key or raises 401.
    """
    if settings.progress_api_key is None:
        return ""

    if x_api_key != settings.progress_api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")

    return x_api_key


async def forwarded_credentials(
    authorization: str | None = Header(default=None),
    cookie: str | None = Header(default=None),
) -> dict[str, str]:
    """Caller's Authorization / Cookie headers, passed through to the platform API."""
    headers: dict[str, str] = {}
    if authorization:
        headers["Authorization"] = authorization
    if cookie:
        headers["Cookie"] = cookie
    return headers
