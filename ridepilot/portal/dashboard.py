"""
Driver dashboard state.

Keeps the trip list, per-card expand flags and the last refresh time, and
polls the listing endpoint every two minutes. Each fetch carries a
generation number; a response older than the last applied one is dropped,
so a slow poll cannot overwrite a newer manual refresh.
"""
import asyncio
import logging
from contextlib import suppress
from datetime import datetime
from enum import Enum
from typing import Callable, Optional
from uuid import UUID

import httpx

from ridepilot.portal.api_client import DriverPortalClient, PortalRequestError
from ridepilot.portal.presentation import DashboardView, build_dashboard_view
from ridepilot.schemas.driver import DriverIdentity
from ridepilot.schemas.project import DriverProject

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 120

LOAD_ERROR = "Failed to load your assigned trips"
TRANSPORT_ERROR = "Failed to load trips"


class DashboardStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DashboardController:
    """State machine behind the dashboard screen.

    ``loading`` lasts until the first response; afterwards the status is
    ``ready`` or ``error``. The last loaded list stays available in both.
    """

    def __init__(
        self,
        client: DriverPortalClient,
        driver: DriverIdentity,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
        on_update: Optional[Callable[["DashboardController"], None]] = None,
    ):
        self.client = client
        self.driver = driver
        self.poll_interval = poll_interval
        self.clock = clock
        self.on_update = on_update

        self.status = DashboardStatus.LOADING
        self.projects: list[DriverProject] = []
        self.error: Optional[str] = None
        self.last_refresh: Optional[datetime] = None

        self._expanded: set[UUID] = set()
        self._issued_generation = 0
        self._applied_generation = 0
        self._poll_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    async def refresh(self) -> bool:
        """Fetch the trip list once.

        Returns:
            True if this response was applied, False if a newer one already was.
        """
        self._issued_generation += 1
        generation = self._issued_generation

        try:
            projects = await self.client.fetch_projects(self.driver.uuid)
        except PortalRequestError as e:
            return self._apply(generation, error=e.message or LOAD_ERROR)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers undecodable bodies and pydantic ValidationError
            logger.warning(f"Trip refresh for driver {self.driver.id} failed: {e}")
            return self._apply(generation, error=TRANSPORT_ERROR)

        return self._apply(generation, projects=projects)

    def _apply(
        self,
        generation: int,
        projects: Optional[list[DriverProject]] = None,
        error: Optional[str] = None,
    ) -> bool:
        if generation <= self._applied_generation:
            logger.debug(f"Dropping stale trip response (generation {generation})")
            return False
        self._applied_generation = generation

        if error is not None:
            # Keep the previous list visible under the error banner
            self.error = error
            self.status = DashboardStatus.ERROR
        else:
            self.projects = projects or []
            self.error = None
            self.status = DashboardStatus.READY
            self.last_refresh = self.clock()

        if self.on_update is not None:
            self.on_update(self)
        return True

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------
    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def start(self) -> None:
        """Fetch now and then every ``poll_interval`` seconds."""
        if self.is_polling:
            return
        self._poll_task = asyncio.create_task(self._poll())

    async def stop(self) -> None:
        if self._poll_task is None:
            return
        self._poll_task.cancel()
        with suppress(asyncio.CancelledError):
            await self._poll_task
        self._poll_task = None

    async def _poll(self) -> None:
        while True:
            try:
                await self.refresh()
            except Exception:
                logger.exception(f"Trip poll for driver {self.driver.id} failed")
            await asyncio.sleep(self.poll_interval)

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------
    def is_expanded(self, project_id: UUID) -> bool:
        return project_id in self._expanded

    def toggle_expanded(self, project_id: UUID) -> bool:
        """Flip one card; returns its new state. Never triggers a fetch."""
        if project_id in self._expanded:
            self._expanded.discard(project_id)
            return False
        self._expanded.add(project_id)
        return True

    def view(self, now: Optional[datetime] = None) -> DashboardView:
        return build_dashboard_view(
            self.driver,
            self.projects,
            now or self.clock(),
            expanded=self._expanded,
            status=self.status.value,
            error=self.error,
            last_refresh=self.last_refresh,
        )
