"""
school_management.db.base

SQLAlchemy declarative base.

Responsibilities:
- Provide a shared DeclarativeBase for all ORM models.
- Provide the column set every school entity carries (UUID key + audit stamps).
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Uuid as SAUuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    # Naive UTC timestamps keep SQLite and Postgres round-trips identical.
    return datetime.utcnow()


class Base(DeclarativeBase):
    pass


class EntityMixin:
    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    created_on: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_on: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)


# --- Module Notes -----------------------------------------------------------
# All ORM models should inherit from `Base` so Alembic and metadata discovery work.
