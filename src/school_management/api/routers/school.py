"""
school_management.api.routers.school

School-management entity routers.

Responsibilities:
- Mount one CRUD router per entity under `/api/{entity}`.
"""

from __future__ import annotations

from fastapi import APIRouter

from school_management.api.routers.crud import build_crud_router
from school_management.schemas import (
    BenefitsIn,
    BenefitsOut,
    DocumentStatusIn,
    DocumentStatusOut,
    FeeWaiverIn,
    FeeWaiverOut,
    GradingScaleIn,
    GradingScaleOut,
    ResourceTypeIn,
    ResourceTypeOut,
    SkillIn,
    SkillOut,
)
from school_management.services.school import (
    BenefitsService,
    DocumentStatusService,
    FeeWaiverService,
    GradingScaleService,
    ResourceTypeService,
    SkillService,
)

benefits_router = build_crud_router(
    service_cls=BenefitsService,
    schema_in=BenefitsIn,
    schema_out=BenefitsOut,
    path_prefix="/api/benefits",
)

grading_scale_router = build_crud_router(
    service_cls=GradingScaleService,
    schema_in=GradingScaleIn,
    schema_out=GradingScaleOut,
    path_prefix="/api/gradingscale",
)

resource_type_router = build_crud_router(
    service_cls=ResourceTypeService,
    schema_in=ResourceTypeIn,
    schema_out=ResourceTypeOut,
    path_prefix="/api/resourcetype",
)

skill_router = build_crud_router(
    service_cls=SkillService,
    schema_in=SkillIn,
    schema_out=SkillOut,
    path_prefix="/api/skill",
)

document_status_router = build_crud_router(
    service_cls=DocumentStatusService,
    schema_in=DocumentStatusIn,
    schema_out=DocumentStatusOut,
    path_prefix="/api/documentstatus",
)

fee_waiver_router = build_crud_router(
    service_cls=FeeWaiverService,
    schema_in=FeeWaiverIn,
    schema_out=FeeWaiverOut,
    path_prefix="/api/feewaiver",
)

router = APIRouter()
for _entity_router in (
    benefits_router,
    grading_scale_router,
    resource_type_router,
    skill_router,
    document_status_router,
    fee_waiver_router,
):
    router.include_router(_entity_router)
