"""
Pydantic schemas for API request/response validation.
"""

from ridepilot.schemas.base import BaseSchema
from ridepilot.schemas.driver import (
    DriverLoginRequest,
    DriverIdentity,
    DriverAuthResponse,
    TokenRotationResponse,
)
from ridepilot.schemas.project import (
    DriverProject,
    DriverProjectListResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    # Driver
    "DriverLoginRequest",
    "DriverIdentity",
    "DriverAuthResponse",
    "TokenRotationResponse",
    # Project
    "DriverProject",
    "DriverProjectListResponse",
]
