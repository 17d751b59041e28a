"""
Base model with common fields and utilities.
"""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    # Fetch server-generated timestamps on flush so async code never lazy-loads them
    __mapper_args__ = {"eager_defaults": True}

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def split_list(value: str | None) -> list[str]:
    """Decode a comma-delimited column into an ordered list."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def join_list(items: list[str] | None) -> str:
    """Encode an ordered list as a comma-delimited column."""
    return ",".join(item.strip() for item in (items or []) if item.strip())
