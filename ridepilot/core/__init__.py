"""
Core package for the driver portal.
"""
from ridepilot.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
