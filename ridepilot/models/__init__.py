"""
SQLAlchemy ORM models for the driver portal.
"""

# Enums
from ridepilot.models.enums import ProjectStatus

# Base
from ridepilot.models.base import BaseModel, CreatedAtMixin, UUIDPrimaryKeyMixin

# Domain Models
from ridepilot.models.driver import Driver
from ridepilot.models.company import CarType, Company
from ridepilot.models.project import Project

__all__ = [
    # Enums
    "ProjectStatus",
    # Base
    "BaseModel",
    "CreatedAtMixin",
    "UUIDPrimaryKeyMixin",
    # Domain Models
    "Driver",
    "Company",
    "CarType",
    "Project",
]
