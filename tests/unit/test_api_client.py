"""Tests for DriverPortalClient using httpx.MockTransport."""
import json
from datetime import date, time
from uuid import uuid4

import httpx
import pytest

from ridepilot.portal.api_client import DriverPortalClient, PortalRequestError

DRIVER_UUID = uuid4()

DRIVER_JSON = {"id": "D100", "name": "Dana Driver", "uuid": str(DRIVER_UUID), "phone": None}

PROJECT_JSON = {
    "id": str(uuid4()),
    "company_id": None,
    "company_name": "Unknown Company",
    "client_name": "Jane Client",
    "client_phone": "+31 6 8765 4321",
    "pickup_location": "Schiphol Airport",
    "dropoff_location": "Amsterdam Centraal",
    "date": "2024-06-01",
    "time": "09:30:00",
    "passengers": 1,
    "price": 50,
    "driver_fee": None,
    "status": "active",
    "description": "",
    "booking_id": "",
    "car_type_name": "Standard",
}


def make_client(handler) -> DriverPortalClient:
    return DriverPortalClient("http://portal.test", transport=httpx.MockTransport(handler))


class TestRequests:

    async def test_login_posts_camel_case_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "driver": DRIVER_JSON})

        async with make_client(handler) as client:
            driver = await client.login("D100", "1234")

        assert seen == {"path": "/api/driver/login", "body": {"driverId": "D100", "pin": "1234"}}
        assert driver.uuid == DRIVER_UUID

    async def test_token_is_path_encoded(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["raw_path"] = request.url.raw_path
            return httpx.Response(200, json={"success": True, "driver": DRIVER_JSON})

        async with make_client(handler) as client:
            await client.authenticate_token("a/b c")

        assert seen["raw_path"] == b"/api/driver/auth/a%2Fb%20c"

    async def test_fetch_projects_parses_contract(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == f"/api/driver/{DRIVER_UUID}/projects"
            return httpx.Response(200, json={"projects": [PROJECT_JSON]})

        async with make_client(handler) as client:
            projects = await client.fetch_projects(DRIVER_UUID)

        assert len(projects) == 1
        assert projects[0].date == date(2024, 6, 1)
        assert projects[0].time == time(9, 30)
        assert projects[0].driver_fee is None

    async def test_regenerate_token(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            return httpx.Response(200, json={"success": True, "newToken": "fresh"})

        async with make_client(handler) as client:
            assert await client.regenerate_token(DRIVER_UUID) == "fresh"


class TestErrors:

    async def test_error_body_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "Invalid PIN"})

        async with make_client(handler) as client:
            with pytest.raises(PortalRequestError) as exc_info:
                await client.login("D100", "0000")

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid PIN"

    async def test_non_json_error_uses_reason_phrase(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad gateway</html>")

        async with make_client(handler) as client:
            with pytest.raises(PortalRequestError) as exc_info:
                await client.fetch_projects(DRIVER_UUID)

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Bad Gateway"
