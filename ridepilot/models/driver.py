"""
Driver model for the driver portal.
"""
from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from ridepilot.models.base import BaseModel


class Driver(BaseModel):
    """
    Driver account as maintained by the dispatch back-office.

    Attributes:
        license: Driver code used as the login handle and public id
        name: Driver's display name
        phone: Contact phone number
        pin: Login PIN; when empty the default PIN applies
        auth_token: Magic-link token, replaced by ``generate_driver_token``
        is_active: Whether the driver may sign in with a token
    """
    __tablename__ = "drivers"

    license: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(30),
        nullable=True,
    )

    pin: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
    )

    auth_token: Mapped[Optional[str]] = mapped_column(
        String(128),
        nullable=True,
        unique=True,
    )

    is_active: Mapped[bool] = mapped_column(
        "active",
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Driver(id={self.id}, name={self.name!r}, license={self.license!r})>"
