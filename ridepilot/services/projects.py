"""
Trip listing for the driver dashboard.
"""
import logging
from typing import Optional

from ridepilot.core.errors import InvalidInput, UpstreamFailure
from ridepilot.models import Project
from ridepilot.schemas.project import DriverProject
from ridepilot.services.driver_store import DriverStore, StoreError

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown Company"
DEFAULT_CAR_TYPE = "Standard"


def to_driver_project(project: Project) -> DriverProject:
    """Flatten a project row and its lookups into the listing contract.

    ``driver_fee`` is passed through as-is; the dashboard decides which
    amount to display.
    """
    company = project.company
    car_type = project.car_type
    return DriverProject(
        id=project.id,
        company_id=project.company_id,
        company_name=(company.name if company else None) or UNKNOWN_COMPANY,
        client_name=project.client_name,
        client_phone=project.client_phone,
        pickup_location=project.pickup_location,
        dropoff_location=project.dropoff_location,
        date=project.date,
        time=project.time,
        passengers=project.passengers,
        price=float(project.price),
        driver_fee=float(project.driver_fee) if project.driver_fee is not None else None,
        status=project.status,
        description=project.description or "",
        booking_id=project.booking_id or "",
        car_type_name=(car_type.name if car_type else None) or DEFAULT_CAR_TYPE,
    )


async def list_driver_projects(store: DriverStore, driver_uuid: Optional[str]) -> list[DriverProject]:
    """Active trips assigned to *driver_uuid*, ordered by date then time.

    Raises:
        InvalidInput: driver uuid blank
        UpstreamFailure: store error
    """
    if not driver_uuid or not driver_uuid.strip():
        raise InvalidInput("Driver UUID is required")

    try:
        projects = await store.find_active_projects(driver_uuid.strip())
    except StoreError as e:
        logger.error(f"Error fetching driver projects: {e}")
        raise UpstreamFailure("Failed to load projects") from e

    return [to_driver_project(p) for p in projects]
