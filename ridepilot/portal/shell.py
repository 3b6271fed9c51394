"""
Portal shell: decides which screen the driver sees.

loading -> (token check) -> login or dashboard. The authenticated driver is
kept in memory only; a reload needs the token link again.
"""
import logging
from enum import Enum
from typing import Callable, Optional
from urllib.parse import parse_qs, urlsplit

import httpx

from ridepilot.portal.api_client import DriverPortalClient, PortalRequestError
from ridepilot.portal.dashboard import DashboardController
from ridepilot.schemas.driver import DriverIdentity

logger = logging.getLogger(__name__)

LOGIN_ERROR = "Invalid Driver ID or PIN"


class Screen(str, Enum):
    LOADING = "loading"
    LOGIN = "login"
    DASHBOARD = "dashboard"


def token_from_url(url: str) -> Optional[str]:
    """The ``token`` query parameter of a dashboard link, if any."""
    values = parse_qs(urlsplit(url).query).get("token", [])
    return values[0] if values and values[0] else None


class PortalShell:
    """Screen state for one portal session."""

    def __init__(
        self,
        client: DriverPortalClient,
        dashboard_factory: Callable[..., DashboardController] = DashboardController,
        autostart: bool = True,
    ):
        self.client = client
        self.dashboard_factory = dashboard_factory
        self.autostart = autostart

        self.screen = Screen.LOADING
        self.driver: Optional[DriverIdentity] = None
        self.dashboard: Optional[DashboardController] = None
        self.login_error: Optional[str] = None
        self._token_checked = False

    async def resolve(self, token: Optional[str] = None) -> Screen:
        """Leave the loading screen, exchanging *token* first when given.

        The token is checked at most once per shell.
        """
        if self._token_checked:
            return self.screen
        self._token_checked = True

        if not token:
            self.screen = Screen.LOGIN
            return self.screen

        try:
            identity = await self.client.authenticate_token(token)
        except (PortalRequestError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Token authentication failed: {e}")
            self.screen = Screen.LOGIN
            return self.screen

        await self._enter_dashboard(identity)
        return self.screen

    async def login(self, driver_id: str, pin: str) -> bool:
        """Manual PIN login. Failures keep the login screen with a generic message."""
        try:
            identity = await self.client.login(driver_id, pin)
        except (PortalRequestError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Driver login failed: {e}")
            self.login_error = LOGIN_ERROR
            self.screen = Screen.LOGIN
            return False

        await self._enter_dashboard(identity)
        return True

    async def logout(self) -> None:
        if self.dashboard is not None:
            await self.dashboard.stop()
        self.dashboard = None
        self.driver = None
        self.screen = Screen.LOGIN

    async def _enter_dashboard(self, identity: DriverIdentity) -> None:
        if self.dashboard is not None:
            await self.dashboard.stop()
        self.driver = identity
        self.login_error = None
        self.dashboard = self.dashboard_factory(self.client, identity)
        self.screen = Screen.DASHBOARD
        if self.autostart:
            self.dashboard.start()
