"""Tests for the platform API client — httpx.MockTransport, no network."""

from __future__ import annotations

import json

import httpx
import pytest

from app.progress.client import PackageRequiredError, PlatformClient, PlatformError


def _client(handler, headers=None) -> PlatformClient:
    return PlatformClient(
        base_url="http://platform.test",
        headers=headers,
        transport=httpx.MockTransport(handler),
    )


class TestListMeasurements:
    @pytest.mark.asyncio
    async def test_normalizes_and_drops_invalid(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(
                200,
                json=[
                    {"id": "1", "type": "weight", "value": 80, "unit": "kg", "recordedAt": "2024-03-01T00:00:00Z"},
                    {"id": "2", "type": "weight", "value": "oops", "recordedAt": "2024-02-01T00:00:00Z"},
                ],
            )

        async with _client(handler) as client:
            records = await client.list_measurements(limit=50)
        assert [r.id for r in records] == ["1"]
        assert seen["url"] == "http://platform.test/api/measurements?limit=50"

    @pytest.mark.asyncio
    async def test_default_limit(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["limit"] = request.url.params["limit"]
            return httpx.Response(200, json=[])

        async with _client(handler) as client:
            await client.list_measurements()
        assert seen["limit"] == "120"

    @pytest.mark.asyncio
    async def test_403_is_package_required(self):
        async with _client(lambda r: httpx.Response(403, text="No active package")) as client:
            with pytest.raises(PackageRequiredError) as exc:
                await client.list_measurements()
        assert exc.value.status_code == 403
        assert exc.value.message == "No active package"

    @pytest.mark.asyncio
    async def test_500_uses_default_message(self):
        async with _client(lambda r: httpx.Response(500)) as client:
            with pytest.raises(PlatformError) as exc:
                await client.list_measurements()
        assert exc.value.status_code == 500
        assert exc.value.message == "Could not load measurements"

    @pytest.mark.asyncio
    async def test_transport_failure_is_502(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(PlatformError) as exc:
                await client.list_measurements()
        assert exc.value.status_code == 502

    @pytest.mark.asyncio
    async def test_non_json_body_is_502(self):
        async with _client(lambda r: httpx.Response(200, text="<html>login</html>")) as client:
            with pytest.raises(PlatformError) as exc:
                await client.list_measurements()
        assert exc.value.status_code == 502
        assert exc.value.message == "Platform API returned an invalid response"

    @pytest.mark.asyncio
    async def test_forwards_credentials(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("authorization")
            seen["cookie"] = request.headers.get("cookie")
            return httpx.Response(200, json=[])

        headers = {"Authorization": "Bearer abc", "Cookie": "session=1"}
        async with _client(handler, headers=headers) as client:
            await client.list_measurements()
        assert seen == {"auth": "Bearer abc", "cookie": "session=1"}


class TestCreateMeasurement:
    @pytest.mark.asyncio
    async def test_posts_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                201,
                json={"id": "9", "type": "weight", "value": 79.5, "unit": "kg", "recordedAt": "2024-04-01T00:00:00Z"},
            )

        async with _client(handler) as client:
            created = await client.create_measurement({"type": "weight", "value": 79.5})
        assert seen == {"method": "POST", "body": {"type": "weight", "value": 79.5}}
        assert created is not None
        assert created.id == "9"

    @pytest.mark.asyncio
    async def test_malformed_echo(self):
        async with _client(lambda r: httpx.Response(201, json=None)) as client:
            assert await client.create_measurement({"type": "weight", "value": 1}) is None

    @pytest.mark.asyncio
    async def test_non_json_echo(self):
        async with _client(lambda r: httpx.Response(201, text="created")) as client:
            assert await client.create_measurement({"type": "weight", "value": 1}) is None

    @pytest.mark.asyncio
    async def test_400(self):
        async with _client(lambda r: httpx.Response(400, text="Invalid value")) as client:
            with pytest.raises(PlatformError) as exc:
                await client.create_measurement({"type": "weight", "value": -1})
        assert exc.value.status_code == 400


class TestGetProfile:
    @pytest.mark.asyncio
    async def test_ok(self):
        payload = {"name": "Ada", "weight": "80", "targetWeight": 75, "ptFormData": {"x": 1}}
        async with _client(lambda r: httpx.Response(200, json=payload)) as client:
            profile = await client.get_profile()
        assert profile is not None
        assert profile.weight == "80"
        assert profile.target_weight == "75"

    @pytest.mark.asyncio
    async def test_error_is_none(self):
        async with _client(lambda r: httpx.Response(404, json={"error": "x"})) as client:
            assert await client.get_profile() is None

    @pytest.mark.asyncio
    async def test_transport_failure_is_none(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        async with _client(handler) as client:
            assert await client.get_profile() is None

    @pytest.mark.asyncio
    async def test_not_json_is_none(self):
        async with _client(lambda r: httpx.Response(200, text="<html>")) as client:
            assert await client.get_profile() is None


class TestPhotos:
    @pytest.mark.asyncio
    async def test_list(self):
        payload = {"photos": [{"id": "p1", "data": "data:image/png;base64,AA", "uploadedAt": "2024-01-01"}]}
        async with _client(lambda r: httpx.Response(200, json=payload)) as client:
            photos = await client.list_photos()
        assert [p.id for p in photos] == ["p1"]

    @pytest.mark.asyncio
    async def test_404_is_empty(self):
        async with _client(lambda r: httpx.Response(404)) as client:
            assert await client.list_photos() == []

    @pytest.mark.asyncio
    async def test_list_non_json_is_empty(self):
        async with _client(lambda r: httpx.Response(200, text="<html>")) as client:
            assert await client.list_photos() == []

    @pytest.mark.asyncio
    async def test_upload_non_json_is_empty(self):
        async with _client(lambda r: httpx.Response(201)) as client:
            assert await client.upload_photo(b"\x89PNG....", "me.png", "image/png") == []

    @pytest.mark.asyncio
    async def test_upload_multipart(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = request.content
            return httpx.Response(201, json={"photos": [{"id": "new", "data": "x"}]})

        async with _client(handler) as client:
            photos = await client.upload_photo(b"\x89PNG....", "me.png", "image/png")
        assert seen["content_type"].startswith("multipart/form-data")
        assert b'name="photo"' in seen["body"]
        assert [p.id for p in photos] == ["new"]
