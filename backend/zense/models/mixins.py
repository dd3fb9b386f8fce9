"""
Zense Backend - Shared Model Columns
=====================================

What:  Timestamp columns shared by every table.
Why python-side defaults: the values are assigned on the instance during the
flush, so services can read created_at/updated_at right after writing
without an extra round trip (async sessions cannot lazy-refresh).
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
