"""
school_management.services.school

Per-entity services.

Responsibilities:
- Bind the generic `EntityService` to each school-management model.
- Declare the entity name used for entitlement checks and logging.
- Narrow free-text search to the columns that make sense for each entity.
"""

from __future__ import annotations

from school_management.db.models import (
    Benefits,
    DocumentStatus,
    FeeWaiver,
    GradingScale,
    ResourceType,
    Skill,
)
from school_management.schemas import (
    BenefitsIn,
    DocumentStatusIn,
    FeeWaiverIn,
    GradingScaleIn,
    ResourceTypeIn,
    SkillIn,
)
from school_management.services.crud import EntityService


class BenefitsService(EntityService[Benefits]):
    model = Benefits
    schema = BenefitsIn
    entity_name = "Benefits"
    search_fields = ("name", "description", "benefit_type")


class GradingScaleService(EntityService[GradingScale]):
    model = GradingScale
    schema = GradingScaleIn
    entity_name = "GradingScale"
    search_fields = ("name", "grade", "description")


class ResourceTypeService(EntityService[ResourceType]):
    model = ResourceType
    schema = ResourceTypeIn
    entity_name = "ResourceType"


class SkillService(EntityService[Skill]):
    model = Skill
    schema = SkillIn
    entity_name = "Skill"
    search_fields = ("name", "category", "description")


class DocumentStatusService(EntityService[DocumentStatus]):
    model = DocumentStatus
    schema = DocumentStatusIn
    entity_name = "DocumentStatus"
    search_fields = ("name", "code")


class FeeWaiverService(EntityService[FeeWaiver]):
    model = FeeWaiver
    schema = FeeWaiverIn
    entity_name = "FeeWaiver"
