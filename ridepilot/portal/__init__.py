"""
Driver-side portal: API client, shell and dashboard state.
"""
from ridepilot.portal.api_client import DriverPortalClient, PortalRequestError
from ridepilot.portal.dashboard import DashboardController, DashboardStatus
from ridepilot.portal.shell import PortalShell, Screen, token_from_url

__all__ = [
    "DriverPortalClient",
    "PortalRequestError",
    "DashboardController",
    "DashboardStatus",
    "PortalShell",
    "Screen",
    "token_from_url",
]
