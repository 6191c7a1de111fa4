"""
school_management.filtering

Dynamic filtering, searching and sorting shared by every entity service.

Responsibilities:
- Parse the `filters` query parameter (a JSON array of FilterCriteria).
- Resolve property names against an ORM model's columns.
- Coerce raw filter values to the column's Python type.
- Build SQLAlchemy predicates for criteria and free-text search terms.
- Apply a validated ORDER BY for `sortField`/`sortOrder`.

Filter format:
    [{"PropertyName": "Name", "Operator": "Equal", "Value": "Math"}]
"""

from __future__ import annotations

import enum
import json
import uuid
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, ValidationError
from sqlalchemy import Select, and_, inspect as sa_inspect, or_
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from school_management.errors import BadRequestError


class FilterOperator(enum.StrEnum):
    equal = "Equal"
    not_equal = "NotEqual"
    greater_than = "GreaterThan"
    greater_than_or_equal = "GreaterThanOrEqual"
    less_than = "LessThan"
    less_than_or_equal = "LessThanOrEqual"
    contains = "Contains"
    starts_with = "StartsWith"
    ends_with = "EndsWith"
    in_ = "In"
    is_null = "IsNull"
    is_not_null = "IsNotNull"

    @classmethod
    def parse(cls, raw: str) -> FilterOperator:
        for member in cls:
            if member.value.lower() == raw.strip().lower():
                return member
        raise BadRequestError(f"Unsupported filter operator '{raw}'")


_STRING_OPERATORS = frozenset(
    {FilterOperator.contains, FilterOperator.starts_with, FilterOperator.ends_with}
)
_VALUELESS_OPERATORS = frozenset({FilterOperator.is_null, FilterOperator.is_not_null})
_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})


class FilterCriteria(BaseModel):
    property_name: str = Field(
        validation_alias=AliasChoices("PropertyName", "propertyName", "property_name"),
        min_length=1,
    )
    operator: str = Field(
        default=FilterOperator.equal.value,
        validation_alias=AliasChoices("Operator", "operator"),
    )
    value: Any = Field(default=None, validation_alias=AliasChoices("Value", "value"))


_criteria_list = TypeAdapter(list[FilterCriteria])


def parse_filters(raw: str | None) -> list[FilterCriteria]:
    if raw is None or not raw.strip():
        return []
    try:
        return _criteria_list.validate_json(raw)
    except ValidationError as e:
        raise BadRequestError(f"Invalid filters: {_first_error(e)}") from e


def _first_error(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return str(e)
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


def normalize_name(name: str) -> str:
    # `FeeWaiverId`, `feeWaiverId` and `fee_waiver_id` all normalize to the same key.
    return name.replace("_", "").lower()


def resolve_column(model: type[Any], name: str) -> InstrumentedAttribute[Any]:
    wanted = normalize_name(name)
    for attr in sa_inspect(model).column_attrs:
        if normalize_name(attr.key) == wanted:
            return getattr(model, attr.key)
    raise BadRequestError(f"Unknown property '{name}'")


def column_python_type(column: InstrumentedAttribute[Any]) -> type[Any]:
    try:
        return column.property.columns[0].type.python_type
    except NotImplementedError:
        return str


def string_columns(model: type[Any]) -> list[InstrumentedAttribute[Any]]:
    columns = [getattr(model, attr.key) for attr in sa_inspect(model).column_attrs]
    return [c for c in columns if column_python_type(c) is str]


def coerce_value(python_type: type[Any], raw: Any, *, property_name: str) -> Any:
    if raw is None:
        return None
    try:
        if python_type is bool:
            if isinstance(raw, bool):
                return raw
            text = str(raw).strip().lower()
            if text in _TRUE_VALUES:
                return True
            if text in _FALSE_VALUES:
                return False
            raise ValueError(raw)
        if python_type is int:
            if isinstance(raw, bool):
                raise ValueError(raw)
            return int(raw)
        if python_type is Decimal:
            return Decimal(str(raw))
        if python_type is float:
            return float(raw)
        if python_type is uuid.UUID:
            return uuid.UUID(str(raw))
        # datetime is a subclass of date; check it first.
        if python_type is datetime:
            return datetime.fromisoformat(str(raw))
        if python_type is date:
            return date.fromisoformat(str(raw))
    except (ValueError, TypeError, InvalidOperation) as e:
        raise BadRequestError(
            f"Invalid value '{raw}' for property '{property_name}'"
        ) from e
    return str(raw)


def _split_in_values(raw: Any) -> list[Any]:
    if isinstance(raw, list):
        return raw
    text = str(raw).strip()
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return parsed
    return [part.strip() for part in text.split(",") if part.strip()]


def build_predicate(model: type[Any], criteria: FilterCriteria) -> ColumnElement[bool]:
    column = resolve_column(model, criteria.property_name)
    op = FilterOperator.parse(criteria.operator)
    python_type = column_python_type(column)

    if op in _VALUELESS_OPERATORS:
        return column.is_(None) if op is FilterOperator.is_null else column.is_not(None)

    if op in _STRING_OPERATORS:
        if python_type is not str:
            raise BadRequestError(
                f"Operator '{op.value}' requires a text property; "
                f"'{criteria.property_name}' is not text"
            )
        if criteria.value is None:
            raise BadRequestError(f"Operator '{op.value}' requires a value")
        term = str(criteria.value)
        if op is FilterOperator.contains:
            return column.icontains(term, autoescape=True)
        if op is FilterOperator.starts_with:
            return column.istartswith(term, autoescape=True)
        return column.iendswith(term, autoescape=True)

    if op is FilterOperator.in_:
        if criteria.value is None:
            raise BadRequestError("Operator 'In' requires a value")
        values = [
            coerce_value(python_type, v, property_name=criteria.property_name)
            for v in _split_in_values(criteria.value)
        ]
        return column.in_(values)

    value = coerce_value(python_type, criteria.value, property_name=criteria.property_name)
    if op is FilterOperator.equal:
        return column.is_(None) if value is None else column == value
    if op is FilterOperator.not_equal:
        return column.is_not(None) if value is None else column != value

    if value is None:
        raise BadRequestError(f"Operator '{op.value}' requires a value")
    if op is FilterOperator.greater_than:
        return column > value
    if op is FilterOperator.greater_than_or_equal:
        return column >= value
    if op is FilterOperator.less_than:
        return column < value
    return column <= value


def build_search(
    model: type[Any], search_term: str, search_fields: Sequence[str] = ()
) -> ColumnElement[bool] | None:
    if search_fields:
        columns = [resolve_column(model, name) for name in search_fields]
    else:
        columns = string_columns(model)
    if not columns:
        return None
    return or_(*(c.icontains(search_term, autoescape=True) for c in columns))


def apply_filters(
    stmt: Select[Any],
    model: type[Any],
    filters: Sequence[FilterCriteria] | None = None,
    search_term: str | None = None,
    search_fields: Sequence[str] = (),
) -> Select[Any]:
    predicates = [build_predicate(model, c) for c in filters or ()]
    if search_term and search_term.strip():
        search = build_search(model, search_term.strip(), search_fields)
        if search is not None:
            predicates.append(search)
    if predicates:
        stmt = stmt.where(and_(*predicates))
    return stmt


def apply_sort(
    stmt: Select[Any],
    model: type[Any],
    sort_field: str | None,
    sort_order: str | None = "asc",
) -> Select[Any]:
    pk = sa_inspect(model).primary_key
    if not sort_field:
        # Stable paging without an explicit sort.
        return stmt.order_by(*pk)

    column = resolve_column(model, sort_field)
    order = (sort_order or "asc").strip().lower()
    if order == "asc":
        return stmt.order_by(column.asc(), *pk)
    if order == "desc":
        return stmt.order_by(column.desc(), *pk)
    raise BadRequestError("Invalid sort order. Use 'asc' or 'desc'")


# --- Module Notes -----------------------------------------------------------
# Everything here works on plain `Select` statements so services can compose
# filtering, eager loading, sorting and paging in any order they need.
