"""
Driver authentication schemas.

Field aliases keep the camelCase JSON contract used by the portal client.
"""
from typing import Optional
from uuid import UUID

from pydantic import Field

from ridepilot.schemas.base import BaseSchema


class DriverLoginRequest(BaseSchema):
    """PIN login body. Blank values are rejected by the login service."""
    driver_id: Optional[str] = Field(None, alias="driverId")
    pin: Optional[str] = None


class DriverIdentity(BaseSchema):
    """Public projection of a driver; never includes the PIN or token."""
    id: str = Field(..., description="Driver code (license)")
    name: str
    uuid: UUID = Field(..., description="Internal driver id")
    phone: Optional[str] = None


class DriverAuthResponse(BaseSchema):
    """Successful PIN or token login."""
    success: bool = True
    driver: DriverIdentity


class TokenRotationResponse(BaseSchema):
    """Result of regenerating a driver's magic-link token."""
    success: bool = True
    new_token: str = Field(..., alias="newToken")
