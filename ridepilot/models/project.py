"""
Project (trip assignment) model for the driver portal.
"""
import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, Text, Time
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ridepilot.models.base import BaseModel
from ridepilot.models.enums import ProjectStatus

if TYPE_CHECKING:
    from ridepilot.models.company import CarType, Company


class Project(BaseModel):
    """
    A scheduled pickup-to-dropoff job.

    Only rows with ``status == 'active'`` are shown to the assigned driver.
    ``driver_fee`` is what the driver earns; when it is NULL the full
    ``price`` is shown instead.
    """
    __tablename__ = "projects"

    company_id: Mapped[Optional[UUID]] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
    )

    driver_id: Mapped[Optional[UUID]] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("drivers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    car_type_id: Mapped[Optional[UUID]] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("car_types.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Client
    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    client_phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    # Route
    pickup_location: Mapped[str] = mapped_column(Text, nullable=False)
    dropoff_location: Mapped[str] = mapped_column(Text, nullable=False)

    # Schedule
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    time: Mapped[datetime.time] = mapped_column(Time, nullable=False)

    passengers: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    # Pricing
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    driver_fee: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        default=ProjectStatus.ACTIVE.value,
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    booking_id: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Relationships
    company: Mapped[Optional["Company"]] = relationship("Company", lazy="selectin")
    car_type: Mapped[Optional["CarType"]] = relationship("CarType", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, booking_id={self.booking_id!r}, date={self.date})>"
