"""Shared columns for dealership models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func


def utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """Adds ``created_at`` and ``updated_at`` columns.

    Values are stamped in UTC by the application. SQLite's CURRENT_TIMESTAMP
    carries no zone, so the server default only covers rows inserted outside
    the ORM.
    """

    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
