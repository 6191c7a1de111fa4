"""
school_management.api.routers.crud

CRUD router factory shared by every school-management entity.

Responsibilities:
- Build the six standard endpoints (create, list, get, update, patch, delete).
- Guard each endpoint with the entity's entitlement for that operation.
- Validate query/body parameters the controller layer owns (paging, ids, patch presence).
- Delegate everything else to the entity's service.

Endpoints (for prefix `/api/skill`):
    POST   /api/skill               -> {"id": ...}
    GET    /api/skill               -> [...], X-Total-Count header
    GET    /api/skill/{id}          -> {...}
    PUT    /api/skill/{id}          -> {"status": true}
    PATCH  /api/skill/{id}          -> {"status": true}
    DELETE /api/skill/{id}          -> {"status": true}
"""

# No `from __future__ import annotations`: endpoint signatures below refer to
# per-call schema classes that FastAPI must resolve at runtime.

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_400_BAD_REQUEST

from school_management.api.deps import db_session, settings_dep
from school_management.auth.deps import require_entitlement
from school_management.auth.models import Entitlement
from school_management.filtering import parse_filters
from school_management.schemas import AuditedOut, CreatedResponse, EntityIn, StatusResponse
from school_management.services.crud import MAX_PAGE_VALUE, EntityService
from school_management.settings import Settings

_FILTERS_HELP = (
    'Filter criteria as JSON: [{"PropertyName": "Name", "Operator": "Equal", '
    '"Value": "FilterValue"}]'
)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=detail)


def build_crud_router(
    *,
    service_cls: type[EntityService[Any]],
    schema_in: type[EntityIn],
    schema_out: type[AuditedOut],
    path_prefix: str,
    tags: list[str] | None = None,
) -> APIRouter:
    entity = service_cls.entity_name
    slug = path_prefix.rstrip("/").rsplit("/", 1)[-1]
    router = APIRouter(prefix=path_prefix, tags=tags or [slug])

    def can(entitlement: Entitlement) -> list[Any]:
        return [Depends(require_entitlement(entity, entitlement))]

    @router.post(
        "",
        response_model=CreatedResponse,
        dependencies=can(Entitlement.create),
        operation_id=f"{slug}_create",
        summary=f"Adds a new {entity}",
    )
    async def create(
        body: schema_in,  # type: ignore[valid-type]
        session: AsyncSession = Depends(db_session),
    ) -> CreatedResponse:
        entity_id = await service_cls(session).create(body)
        return CreatedResponse(id=entity_id)

    @router.get(
        "",
        response_model=list[schema_out],  # type: ignore[valid-type]
        dependencies=can(Entitlement.read),
        operation_id=f"{slug}_list",
        summary=f"Retrieves a list of {entity} records based on specified filters",
    )
    async def list_(
        response: Response,
        filters: str | None = Query(default=None, description=_FILTERS_HELP),
        search_term: str | None = Query(default=None, alias="searchTerm"),
        page_number: int = Query(default=1, alias="pageNumber"),
        page_size: int | None = Query(default=None, alias="pageSize"),
        sort_field: str | None = Query(default=None, alias="sortField"),
        sort_order: str = Query(default="asc", alias="sortOrder"),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_dep),
    ) -> list[Any]:
        if page_size is None:
            page_size = settings.default_page_size
        if not 1 <= page_size <= MAX_PAGE_VALUE:
            raise _bad_request("Page size invalid.")
        if not 1 <= page_number <= MAX_PAGE_VALUE:
            raise _bad_request("Page number invalid.")
        criteria = parse_filters(filters)

        service = service_cls(session)
        items = await service.get(
            criteria, search_term, page_number, page_size, sort_field, sort_order
        )
        response.headers["X-Total-Count"] = str(await service.count(criteria, search_term))
        return [schema_out.model_validate(item) for item in items]

    @router.get(
        "/{entity_id}",
        response_model=schema_out,
        dependencies=can(Entitlement.read),
        operation_id=f"{slug}_get_by_id",
        summary=f"Retrieves a specific {entity} by its primary key",
    )
    async def get_by_id(
        entity_id: uuid.UUID,
        session: AsyncSession = Depends(db_session),
    ) -> Any:
        item = await service_cls(session).get_by_id(entity_id)
        return schema_out.model_validate(item)

    @router.put(
        "/{entity_id}",
        response_model=StatusResponse,
        dependencies=can(Entitlement.update),
        operation_id=f"{slug}_update",
        summary=f"Updates a specific {entity} by its primary key",
    )
    async def update(
        entity_id: uuid.UUID,
        body: schema_in,  # type: ignore[valid-type]
        session: AsyncSession = Depends(db_session),
    ) -> StatusResponse:
        if body.id != entity_id:
            raise _bad_request("Mismatched Id")
        status = await service_cls(session).update(entity_id, body)
        return StatusResponse(status=status)

    @router.patch(
        "/{entity_id}",
        response_model=StatusResponse,
        dependencies=can(Entitlement.update),
        operation_id=f"{slug}_patch",
        summary=f"Applies a JSON Patch document to a specific {entity}",
    )
    async def patch(
        entity_id: uuid.UUID,
        operations: list[dict[str, Any]] | None = Body(default=None),
        session: AsyncSession = Depends(db_session),
    ) -> StatusResponse:
        if not operations:
            raise _bad_request("Patch document is missing.")
        status = await service_cls(session).patch(entity_id, operations)
        return StatusResponse(status=status)

    @router.delete(
        "/{entity_id}",
        response_model=StatusResponse,
        dependencies=can(Entitlement.delete),
        operation_id=f"{slug}_delete",
        summary=f"Deletes a specific {entity} by its primary key",
    )
    async def delete(
        entity_id: uuid.UUID,
        session: AsyncSession = Depends(db_session),
    ) -> StatusResponse:
        status = await service_cls(session).delete(entity_id)
        return StatusResponse(status=status)

    return router


# --- Module Notes -----------------------------------------------------------
# Routers never catch service errors; `api.app` installs the handlers that turn
# `ApplicationError` subclasses into 400/404 responses.
