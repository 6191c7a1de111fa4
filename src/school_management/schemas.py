"""
school_management.schemas

Request/response models for the school-management entities.

Responsibilities:
- Define one input model (create/update/patch payload) per entity.
- Define one output model per entity, read straight from ORM rows.
- Expose camelCase JSON field names while keeping snake_case attributes.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SchemaBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EntityIn(SchemaBase):
    # Optional on create (server generates one); must match the route id on update.
    id: uuid.UUID | None = None


class AuditedOut(SchemaBase):
    id: uuid.UUID
    created_on: datetime
    updated_on: datetime


class CreatedResponse(BaseModel):
    id: uuid.UUID


class StatusResponse(BaseModel):
    status: bool


# Benefits


class BenefitsIn(EntityIn):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    benefit_type: str | None = Field(default=None, max_length=100)
    amount: Decimal | None = Field(default=None, ge=0)
    is_active: bool = True


class BenefitsOut(BenefitsIn, AuditedOut):
    id: uuid.UUID


# GradingScale


class GradingScaleIn(EntityIn):
    name: str = Field(min_length=1, max_length=255)
    grade: str = Field(min_length=1, max_length=16)
    min_score: Decimal | None = None
    max_score: Decimal | None = None
    grade_point: Decimal | None = Field(default=None, ge=0)
    description: str | None = None

    @model_validator(mode="after")
    def _check_score_band(self) -> GradingScaleIn:
        if (
            self.min_score is not None
            and self.max_score is not None
            and self.min_score > self.max_score
        ):
            raise ValueError("minScore must not exceed maxScore")
        return self


class GradingScaleOut(GradingScaleIn, AuditedOut):
    id: uuid.UUID


# ResourceType


class ResourceTypeIn(EntityIn):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    is_active: bool = True


class ResourceTypeOut(ResourceTypeIn, AuditedOut):
    id: uuid.UUID


# Skill


class SkillIn(EntityIn):
    name: str = Field(min_length=1, max_length=255)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = None


class SkillOut(SkillIn, AuditedOut):
    id: uuid.UUID


# DocumentStatus


class DocumentStatusIn(EntityIn):
    name: str = Field(min_length=1, max_length=255)
    code: str | None = Field(default=None, max_length=50)
    description: str | None = None
    is_final: bool = False


class DocumentStatusOut(DocumentStatusIn, AuditedOut):
    id: uuid.UUID


# FeeWaiver


class FeeWaiverIn(EntityIn):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    waiver_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    max_amount: Decimal | None = Field(default=None, ge=0)
    valid_from: date | None = None
    valid_to: date | None = None
    is_active: bool = True
    benefit_id: uuid.UUID | None = None

    @model_validator(mode="after")
    def _check_validity_window(self) -> FeeWaiverIn:
        if (
            self.valid_from is not None
            and self.valid_to is not None
            and self.valid_from > self.valid_to
        ):
            raise ValueError("validFrom must not be after validTo")
        return self


class FeeWaiverOut(FeeWaiverIn, AuditedOut):
    id: uuid.UUID
    benefit: BenefitsOut | None = None


# --- Module Notes -----------------------------------------------------------
# Input field names must match ORM attribute names: services copy
# `model_dump()` output straight onto rows.
