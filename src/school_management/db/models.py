"""
school_management.db.models

Persistence schema for the school-management entities.

Responsibilities:
- Define one ORM model per managed entity:
  - Benefits: staff/student benefit programmes
  - GradingScale: score band to grade mapping
  - ResourceType: classification of school resources
  - Skill: skills tracked for students and staff
  - DocumentStatus: lifecycle states for uploaded documents
  - FeeWaiver: fee reductions, optionally tied to a benefit
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_management.db.base import Base, EntityMixin


class Benefits(EntityMixin, Base):
    __tablename__ = "benefits"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    benefit_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)

    fee_waivers: Mapped[list[FeeWaiver]] = relationship(
        back_populates="benefit", passive_deletes=True
    )


class GradingScale(EntityMixin, Base):
    __tablename__ = "grading_scale"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    grade: Mapped[str] = mapped_column(String(16), nullable=False)
    min_score: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    max_score: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    grade_point: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class ResourceType(EntityMixin, Base):
    __tablename__ = "resource_type"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)


class Skill(EntityMixin, Base):
    __tablename__ = "skill"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class DocumentStatus(EntityMixin, Base):
    __tablename__ = "document_status"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_final: Mapped[bool] = mapped_column(nullable=False, default=False)


class FeeWaiver(EntityMixin, Base):
    __tablename__ = "fee_waiver"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    waiver_percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    max_amount: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    valid_from: Mapped[date | None] = mapped_column(nullable=True)
    valid_to: Mapped[date | None] = mapped_column(nullable=True)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)
    benefit_id: Mapped[uuid.UUID | None] = mapped_column(
        SAUuid(as_uuid=True),
        ForeignKey("benefits.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    benefit: Mapped[Benefits | None] = relationship(back_populates="fee_waivers")


# --- Module Notes -----------------------------------------------------------
# Relationships declared here are what "include related" loads on reads
# (see `services.crud.include_related`). Collections pointing back at a parent
# (Benefits.fee_waivers) are excluded from eager loading.
