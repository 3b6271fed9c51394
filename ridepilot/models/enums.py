"""
Enum type definitions for the driver portal.

Values match the strings stored by the dispatch back-office.
"""
from enum import Enum


class ProjectStatus(str, Enum):
    """
    Lifecycle of a trip assignment.

    Only ACTIVE trips are listed to drivers; the others are managed
    entirely from the back-office.
    """
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
