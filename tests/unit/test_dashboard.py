"""Tests for the dashboard state machine."""
import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import httpx
import pytest

from ridepilot.portal.api_client import DriverPortalClient, PortalRequestError
from ridepilot.portal.dashboard import DashboardController, DashboardStatus
from ridepilot.schemas.driver import DriverIdentity
from tests.fakes import make_driver_project

REFRESHED_AT = datetime(2024, 6, 1, 8, 0)


@pytest.fixture
def driver():
    return DriverIdentity(id="D100", name="Dana Driver", uuid=uuid4())


@pytest.fixture
def portal_client():
    client = MagicMock()
    client.fetch_projects = AsyncMock(return_value=[])
    return client


@pytest.fixture
def dashboard(portal_client, driver):
    return DashboardController(portal_client, driver, clock=lambda: REFRESHED_AT)


class TestRefresh:

    async def test_starts_loading(self, dashboard):
        assert dashboard.status is DashboardStatus.LOADING
        assert dashboard.projects == []

    async def test_success_sets_ready(self, dashboard, portal_client, driver):
        trip = make_driver_project()
        portal_client.fetch_projects = AsyncMock(return_value=[trip])

        assert await dashboard.refresh() is True

        portal_client.fetch_projects.assert_awaited_once_with(driver.uuid)
        assert dashboard.status is DashboardStatus.READY
        assert dashboard.projects == [trip]
        assert dashboard.error is None
        assert dashboard.last_refresh == REFRESHED_AT

    async def test_error_keeps_previous_list(self, dashboard, portal_client):
        trip = make_driver_project()
        portal_client.fetch_projects = AsyncMock(return_value=[trip])
        await dashboard.refresh()

        portal_client.fetch_projects = AsyncMock(
            side_effect=PortalRequestError(500, "Failed to load projects")
        )
        await dashboard.refresh()

        assert dashboard.status is DashboardStatus.ERROR
        assert dashboard.error == "Failed to load projects"
        assert dashboard.projects == [trip]

    async def test_transport_error_message(self, dashboard, portal_client):
        portal_client.fetch_projects = AsyncMock(side_effect=httpx.ConnectError("refused"))
        await dashboard.refresh()
        assert dashboard.error == "Failed to load trips"

    async def test_success_clears_error(self, dashboard, portal_client):
        portal_client.fetch_projects = AsyncMock(side_effect=PortalRequestError(500, "boom"))
        await dashboard.refresh()
        portal_client.fetch_projects = AsyncMock(return_value=[])
        await dashboard.refresh()
        assert dashboard.status is DashboardStatus.READY
        assert dashboard.error is None

    async def test_stale_response_is_dropped(self, dashboard, portal_client):
        loop = asyncio.get_running_loop()
        slow, fast = loop.create_future(), loop.create_future()
        pending = [slow, fast]

        async def fetch(driver_uuid):
            return await pending.pop(0)

        portal_client.fetch_projects = fetch
        old_trip, new_trip = make_driver_project(), make_driver_project()

        poll = asyncio.create_task(dashboard.refresh())
        await asyncio.sleep(0)
        manual = asyncio.create_task(dashboard.refresh())
        await asyncio.sleep(0)

        fast.set_result([new_trip])
        assert await manual is True
        slow.set_result([old_trip])
        assert await poll is False

        assert dashboard.projects == [new_trip]

    async def test_on_update_called_when_applied(self, portal_client, driver):
        updates = []
        dashboard = DashboardController(portal_client, driver, on_update=updates.append)
        await dashboard.refresh()
        assert updates == [dashboard]


class TestExpanded:

    async def test_toggle_is_per_card_and_does_not_fetch(self, dashboard, portal_client):
        first, second = uuid4(), uuid4()

        assert dashboard.toggle_expanded(first) is True
        assert dashboard.is_expanded(first)
        assert not dashboard.is_expanded(second)
        assert dashboard.toggle_expanded(first) is False
        assert not dashboard.is_expanded(first)

        portal_client.fetch_projects.assert_not_awaited()

    async def test_view_reflects_expanded_card(self, dashboard, portal_client):
        trip = make_driver_project()
        portal_client.fetch_projects = AsyncMock(return_value=[trip])
        await dashboard.refresh()
        dashboard.toggle_expanded(trip.id)

        view = dashboard.view(now=datetime(2024, 5, 30, 12, 0))
        card = view.groups[0].cards[0]
        assert card.expanded is True
        assert card.details is not None
        assert view.status == "ready"


class TestPolling:

    async def test_polls_until_stopped(self, portal_client, driver):
        dashboard = DashboardController(portal_client, driver, poll_interval=0.01)

        dashboard.start()
        assert dashboard.is_polling
        await asyncio.sleep(0.05)
        await dashboard.stop()

        assert not dashboard.is_polling
        assert portal_client.fetch_projects.await_count >= 2

    async def test_start_twice_keeps_one_task(self, portal_client, driver):
        dashboard = DashboardController(portal_client, driver, poll_interval=60)
        dashboard.start()
        task = dashboard._poll_task
        dashboard.start()
        assert dashboard._poll_task is task
        await dashboard.stop()


class TestMalformedResponses:

    @pytest.fixture
    def calls(self):
        return []

    @pytest.fixture
    def html_client(self, calls):
        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, text="<html>gateway</html>", headers={"Content-Type": "text/html"})

        return DriverPortalClient("http://portal.test", transport=httpx.MockTransport(handler))

    async def test_non_json_success_body_sets_error(self, html_client, driver):
        dashboard = DashboardController(html_client, driver)

        assert await dashboard.refresh() is True

        assert dashboard.status is DashboardStatus.ERROR
        assert dashboard.error == "Failed to load trips"
        await html_client.aclose()

    async def test_invalid_listing_body_sets_error(self, driver):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"projects": [{"id": "not-a-uuid"}]})

        async with DriverPortalClient("http://portal.test", transport=httpx.MockTransport(handler)) as client:
            dashboard = DashboardController(client, driver)
            await dashboard.refresh()

        assert dashboard.status is DashboardStatus.ERROR
        assert dashboard.error == "Failed to load trips"

    async def test_polling_survives_bad_bodies(self, html_client, calls, driver):
        dashboard = DashboardController(html_client, driver, poll_interval=0.01)

        dashboard.start()
        await asyncio.sleep(0.1)
        assert dashboard.is_polling
        await dashboard.stop()

        assert len(calls) >= 2
        assert dashboard.status is DashboardStatus.ERROR
        await html_client.aclose()

    async def test_polling_survives_unexpected_errors(self, portal_client, driver):
        portal_client.fetch_projects = AsyncMock(side_effect=RuntimeError("boom"))
        dashboard = DashboardController(portal_client, driver, poll_interval=0.01)

        dashboard.start()
        await asyncio.sleep(0.05)
        assert dashboard.is_polling
        await dashboard.stop()

        assert portal_client.fetch_projects.await_count >= 2
