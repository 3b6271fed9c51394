"""
Data-store facade for the driver portal.

``DriverStore`` is the narrow query contract the driver routes depend on.
``SqlDriverStore`` implements it over an async SQLAlchemy session connected
with the elevated service credential, so row-level policies do not apply:
every identity check must happen in the services that call it.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import logging

from sqlalchemy import cast, func, select
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ridepilot.models import Driver, Project, ProjectStatus

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the hosted store rejects or fails a query."""
    pass


class DriverStore(ABC):
    """Queries the driver portal needs from the hosted store."""

    @abstractmethod
    async def find_driver_by_code(self, code: str) -> Optional[Driver]:
        """Return the driver whose ``license`` equals *code* exactly."""

    @abstractmethod
    async def find_driver_by_token(self, token: str) -> Optional[Driver]:
        """Return the *active* driver whose stored token equals *token*."""

    @abstractmethod
    async def find_active_projects(self, driver_id: str) -> Sequence[Project]:
        """Return the driver's active projects ordered by date, then time.

        Company and car type relations must be loaded.
        """

    @abstractmethod
    async def rotate_token(self, driver_id: str) -> Optional[str]:
        """Mint a new token for *driver_id*, invalidating the previous one.

        Returns:
            The new token, or None if the store produced none.
        """


class SqlDriverStore(DriverStore):
    """``DriverStore`` backed by PostgreSQL through SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_driver_by_code(self, code: str) -> Optional[Driver]:
        try:
            result = await self.session.execute(
                select(Driver).where(Driver.license == code)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreError(f"Driver lookup by code failed: {e}") from e

    async def find_driver_by_token(self, token: str) -> Optional[Driver]:
        try:
            result = await self.session.execute(
                select(Driver).where(
                    Driver.auth_token == token,
                    Driver.is_active.is_(True),
                )
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreError(f"Driver lookup by token failed: {e}") from e

    async def find_active_projects(self, driver_id: str) -> Sequence[Project]:
        query = (
            select(Project)
            .where(
                Project.driver_id == driver_id,
                Project.status == ProjectStatus.ACTIVE.value,
            )
            .order_by(Project.date.asc(), Project.time.asc())
        )
        try:
            result = await self.session.execute(query)
            return result.scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Project listing failed: {e}") from e

    async def rotate_token(self, driver_id: str) -> Optional[str]:
        # generate_driver_token(uuid) replaces drivers.auth_token and returns it
        query = select(
            func.generate_driver_token(cast(driver_id, PG_UUID(as_uuid=False)))
        )
        try:
            return await self.session.scalar(query)
        except SQLAlchemyError as e:
            raise StoreError(f"Token rotation failed: {e}") from e
