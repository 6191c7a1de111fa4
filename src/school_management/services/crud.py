"""
school_management.services.crud

Generic entity service (transaction + persistence owner).

Responsibilities:
- Implement Create / Get / GetById / Update / Patch / Delete for one ORM model.
- Compose filtering, free-text search, sorting and paging into one query.
- Load related rows eagerly on reads.
- Commit the request session on every successful write.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError
from sqlalchemy import Select, func, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import RelationshipDirection, selectinload

from school_management.db.base import Base
from school_management.errors import BadRequestError, NotFoundError
from school_management.filtering import FilterCriteria, apply_filters, apply_sort
from school_management.observability.logging import get_logger
from school_management.patching import apply_patch
from school_management.schemas import EntityIn

log = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

_NOT_FOUND = "No data found!"

# Paging values are 32-bit signed integers on the wire.
MAX_PAGE_VALUE = 2**31 - 1


def include_related(stmt: Select[Any], model: type[Any]) -> Select[Any]:
    # Eager-load parent references (many-to-one); child collections stay unloaded.
    for rel in sa_inspect(model).relationships:
        if rel.direction is RelationshipDirection.MANYTOONE:
            stmt = stmt.options(selectinload(getattr(model, rel.key)))
    return stmt


class EntityService(Generic[ModelT]):
    model: ClassVar[type[Any]]
    schema: ClassVar[type[EntityIn]]
    entity_name: ClassVar[str]
    # Empty means "every text column".
    search_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, entity_id: uuid.UUID) -> ModelT:
        stmt = include_related(select(self.model), self.model).where(self.model.id == entity_id)
        entity = (await self._session.execute(stmt)).scalar_one_or_none()
        if entity is None:
            raise NotFoundError(_NOT_FOUND)
        return entity

    async def get(
        self,
        filters: Sequence[FilterCriteria] | None = None,
        search_term: str | None = None,
        page_number: int = 1,
        page_size: int = 10,
        sort_field: str | None = None,
        sort_order: str = "asc",
    ) -> list[ModelT]:
        if not 1 <= page_size <= MAX_PAGE_VALUE:
            raise BadRequestError("Page size invalid!")
        if not 1 <= page_number <= MAX_PAGE_VALUE:
            raise BadRequestError("Page number invalid!")

        stmt = apply_filters(
            select(self.model), self.model, filters, search_term, self.search_fields
        )
        stmt = include_related(stmt, self.model)
        stmt = apply_sort(stmt, self.model, sort_field, sort_order)
        stmt = stmt.offset((page_number - 1) * page_size).limit(page_size)
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(
        self,
        filters: Sequence[FilterCriteria] | None = None,
        search_term: str | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(self.model)
        stmt = apply_filters(stmt, self.model, filters, search_term, self.search_fields)
        return int((await self._session.execute(stmt)).scalar_one())

    async def create(self, payload: EntityIn) -> uuid.UUID:
        values = payload.model_dump(exclude={"id"})
        entity = self.model(id=payload.id or uuid.uuid4(), **values)
        self._session.add(entity)
        await self._session.commit()
        log.info("entity_created", entity=self.entity_name, id=str(entity.id))
        return entity.id

    async def update(self, entity_id: uuid.UUID, payload: EntityIn) -> bool:
        entity = await self._session.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(_NOT_FOUND)
        self._assign(entity, payload.model_dump(exclude={"id"}))
        await self._session.commit()
        log.info("entity_updated", entity=self.entity_name, id=str(entity_id))
        return True

    async def patch(
        self, entity_id: uuid.UUID, operations: Sequence[Mapping[str, Any]] | None
    ) -> bool:
        if not operations:
            raise BadRequestError("Patch document is missing!")

        entity = await self._session.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(_NOT_FOUND)

        current = self.schema.model_validate(entity).model_dump(mode="json", by_alias=True)
        patched = apply_patch(current, operations)
        try:
            updated = self.schema.model_validate(patched)
        except ValidationError as e:
            raise BadRequestError(f"Patched {self.entity_name} is invalid: {e}") from e
        if updated.id != entity_id:
            raise BadRequestError("Patching the id is not allowed")

        changed = {
            self._field_for_alias(key)
            for key in set(current) | set(patched)
            if current.get(key) != patched.get(key)
        }
        values = updated.model_dump(exclude={"id"})
        self._assign(entity, {k: values[k] for k in values if k in changed})
        await self._session.commit()
        log.info(
            "entity_patched",
            entity=self.entity_name,
            id=str(entity_id),
            fields=sorted(changed),
        )
        return True

    async def delete(self, entity_id: uuid.UUID) -> bool:
        entity = await self._session.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(_NOT_FOUND)
        await self._session.delete(entity)
        await self._session.commit()
        log.info("entity_deleted", entity=self.entity_name, id=str(entity_id))
        return True

    def _assign(self, entity: ModelT, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            setattr(entity, key, value)

    def _field_for_alias(self, alias: str) -> str:
        for name, field in self.schema.model_fields.items():
            if (field.alias or name) == alias:
                return name
        return alias


# --- Module Notes -----------------------------------------------------------
# Services raise `errors.ApplicationError` subclasses; the API layer maps them
# to HTTP responses. Integrity violations propagate as SQLAlchemy errors.
