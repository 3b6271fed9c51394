"""
HTTP client for the driver portal API.

Used by the portal shell and dashboard; mirrors the four driver endpoints.
"""
import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ridepilot.schemas.driver import DriverIdentity
from ridepilot.schemas.project import DriverProject, DriverProjectListResponse

logger = logging.getLogger(__name__)


class PortalRequestError(Exception):
    """Raised when the portal API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class DriverPortalClient:
    """
    Async client for the driver endpoints.

    Usage:
        async with DriverPortalClient("https://portal.example.com") as client:
            driver = await client.login("D100", "1234")
            trips = await client.fetch_projects(driver.uuid)

    Transport failures propagate as ``httpx.HTTPError``.
    """

    API_PREFIX = "/api/driver"

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "DriverPortalClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def login(self, driver_id: str, pin: str) -> DriverIdentity:
        data = await self._request(
            "POST",
            f"{self.API_PREFIX}/login",
            json={"driverId": driver_id, "pin": pin},
        )
        return DriverIdentity.model_validate(data["driver"])

    async def authenticate_token(self, token: str) -> DriverIdentity:
        data = await self._request(
            "GET", f"{self.API_PREFIX}/auth/{quote(token, safe='')}"
        )
        return DriverIdentity.model_validate(data["driver"])

    async def fetch_projects(self, driver_uuid) -> list[DriverProject]:
        data = await self._request("GET", f"{self.API_PREFIX}/{driver_uuid}/projects")
        return DriverProjectListResponse.model_validate(data).projects

    async def regenerate_token(self, driver_uuid) -> str:
        data = await self._request(
            "POST", f"{self.API_PREFIX}/regenerate-token/{driver_uuid}"
        )
        return data["newToken"]

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            message = self._error_message(response)
            logger.warning(f"{method} {path} failed with {response.status_code}: {message}")
            raise PortalRequestError(response.status_code, message)
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Server-provided ``error`` text, or the HTTP reason phrase."""
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return response.reason_phrase
