from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Current time as naive UTC, the storage convention for every timestamp column."""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """
    Audit columns shared by the mutable entities.
    Values are stamped by the repositories so created_at and updated_at can be
    written from the same clock reading.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, comment="Date and time of creation (UTC)."
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, comment="Date and time of last update (UTC)."
    )
