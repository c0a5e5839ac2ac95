"""Declarative base, naming convention and timestamp mixins for ORM models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, MetaData
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Deterministic constraint names so IntegrityErrors can be mapped to domain errors
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# JSONB on PostgreSQL, plain JSON elsewhere
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def _utc_now() -> datetime:
    """Current UTC time, evaluated per statement."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for the users, links and social_links models.

    Constraint names come from ``NAMING_CONVENTION`` so the migration and
    the models agree on them.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)



class CreatedAtMixin:
    """Mixin providing a created_at timestamp column set on insert."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,  # Evaluated at INSERT time
        nullable=False,
    )


class TimestampMixin(CreatedAtMixin):
    """Adds an updated_at column refreshed on every UPDATE."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,  # Evaluated at INSERT time
        onupdate=_utc_now,  # Evaluated at UPDATE time
        nullable=False,
    )
