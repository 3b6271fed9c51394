"""
Trip listing schemas (flat projection of a project row).
"""
import datetime
from typing import Optional
from uuid import UUID

from ridepilot.schemas.base import BaseSchema


class DriverProject(BaseSchema):
    """One assigned trip as shown to the driver."""
    id: UUID
    company_id: Optional[UUID] = None
    company_name: str
    client_name: str
    client_phone: Optional[str] = None
    pickup_location: str
    dropoff_location: str
    date: datetime.date
    time: datetime.time
    passengers: int
    price: float
    driver_fee: Optional[float] = None
    status: str
    description: str = ""
    booking_id: str = ""
    car_type_name: str


class DriverProjectListResponse(BaseSchema):
    """Listing response, always an array (possibly empty)."""
    projects: list[DriverProject]
