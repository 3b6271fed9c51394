"""
Base model classes and mixins for the driver portal.

Tables are owned by the dispatch back-office; these mappings only describe
the columns the portal reads.
"""
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from ridepilot.db.database import Base


class CreatedAtMixin:
    """Mixin for the created_at timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.current_timestamp(),
        nullable=False,
    )


class UUIDPrimaryKeyMixin:
    """Mixin for UUID primary key."""

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )


class BaseModel(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """
    Abstract base model with UUID primary key and creation timestamp.

    Driver, Company, CarType and Project inherit from this class.
    """
    __abstract__ = True

