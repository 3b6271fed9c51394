"""
Database module for the driver portal.
"""
from ridepilot.db.database import (
    Base,
    create_store_engine,
    create_session_maker,
    get_async_session,
)

__all__ = [
    "Base",
    "create_store_engine",
    "create_session_maker",
    "get_async_session",
]
