"""FastAPI dependencies for the driver routes."""
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ridepilot.db.database import get_async_session
from ridepilot.services.driver_store import DriverStore, SqlDriverStore


async def get_driver_store(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> DriverStore:
    """Dependency providing the data-store facade for one request.

    Usage:
        @router.get("/drivers/{code}")
        async def read_driver(
            code: str,
            store: Annotated[DriverStore, Depends(get_driver_store)],
        ):
            return await store.find_driver_by_code(code)

    Tests override this dependency with an in-memory store.
    """
    return SqlDriverStore(session)
