"""
Company and vehicle type lookups used to label trips.
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ridepilot.models.base import BaseModel


class Company(BaseModel):
    """Dispatching company that owns a trip."""
    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name={self.name!r})>"


class CarType(BaseModel):
    """Vehicle type requested for a trip (Sedan, Van, ...)."""
    __tablename__ = "car_types"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<CarType(id={self.id}, name={self.name!r})>"
