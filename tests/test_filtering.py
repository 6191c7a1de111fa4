"""
tests.test_filtering

Unit tests for the dynamic filtering/sorting engine (no database needed).
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select

from school_management.db.models import FeeWaiver, GradingScale, ResourceType, Skill
from school_management.errors import BadRequestError
from school_management.filtering import (
    FilterCriteria,
    apply_filters,
    apply_sort,
    build_predicate,
    coerce_value,
    parse_filters,
    resolve_column,
)


def _sql(stmt) -> str:
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


def test_parse_filters_accepts_pascal_and_camel_keys() -> None:
    criteria = parse_filters(
        '[{"PropertyName": "Name", "Operator": "Equal", "Value": "Chess"},'
        ' {"propertyName": "category", "operator": "Contains", "value": "Ma"}]'
    )
    assert [(c.property_name, c.operator, c.value) for c in criteria] == [
        ("Name", "Equal", "Chess"),
        ("category", "Contains", "Ma"),
    ]


def test_parse_filters_defaults_operator_to_equal() -> None:
    (criteria,) = parse_filters('[{"PropertyName": "Name", "Value": "Chess"}]')
    assert criteria.operator == "Equal"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_parse_filters_empty_means_no_criteria(raw: str | None) -> None:
    assert parse_filters(raw) == []


@pytest.mark.parametrize("raw", ["[", "{}", '[{"Value": 1}]', '[{"PropertyName": ""}]'])
def test_parse_filters_rejects_malformed_input(raw: str) -> None:
    with pytest.raises(BadRequestError):
        parse_filters(raw)


@pytest.mark.parametrize("name", ["IsActive", "isActive", "is_active", "ISACTIVE"])
def test_resolve_column_ignores_case_and_underscores(name: str) -> None:
    assert resolve_column(ResourceType, name) is ResourceType.is_active


def test_resolve_column_rejects_relationships_and_unknowns() -> None:
    with pytest.raises(BadRequestError):
        resolve_column(FeeWaiver, "Benefit")
    with pytest.raises(BadRequestError):
        resolve_column(Skill, "Colour")


def test_coerce_value_by_column_type() -> None:
    some_id = uuid.uuid4()
    assert coerce_value(uuid.UUID, str(some_id), property_name="id") == some_id
    assert coerce_value(Decimal, "12.5", property_name="amount") == Decimal("12.5")
    assert coerce_value(bool, "TRUE", property_name="isActive") is True
    assert coerce_value(bool, 0, property_name="isActive") is False
    assert coerce_value(date, "2026-09-01", property_name="validFrom") == date(2026, 9, 1)
    assert coerce_value(str, 42, property_name="name") == "42"
    assert coerce_value(int, None, property_name="x") is None


@pytest.mark.parametrize(
    ("python_type", "raw"),
    [(uuid.UUID, "nope"), (Decimal, "ten"), (bool, "maybe"), (date, "31/12/2026"), (int, True)],
)
def test_coerce_value_rejects_unparseable(python_type: type, raw: object) -> None:
    with pytest.raises(BadRequestError):
        coerce_value(python_type, raw, property_name="p")


def test_string_operators_require_text_columns() -> None:
    with pytest.raises(BadRequestError):
        build_predicate(
            GradingScale,
            FilterCriteria(PropertyName="MinScore", Operator="Contains", Value="9"),
        )


def test_comparison_operators_require_a_value() -> None:
    with pytest.raises(BadRequestError):
        build_predicate(
            GradingScale,
            FilterCriteria(PropertyName="MinScore", Operator="GreaterThan", Value=None),
        )


def test_equal_null_becomes_is_null() -> None:
    predicate = build_predicate(Skill, FilterCriteria(PropertyName="Category", Value=None))
    assert "IS NULL" in _sql(predicate)


def test_in_accepts_json_array_value() -> None:
    predicate = build_predicate(
        Skill, FilterCriteria(PropertyName="Name", Operator="In", Value='["Chess", "Go"]')
    )
    assert "IN ('Chess', 'Go')" in _sql(predicate)


def test_is_not_null_ignores_value() -> None:
    predicate = build_predicate(
        FeeWaiver, FilterCriteria(PropertyName="BenefitId", Operator="IsNotNull", Value="x")
    )
    assert "IS NOT NULL" in _sql(predicate)


def test_search_uses_all_text_columns_by_default() -> None:
    stmt = apply_filters(select(ResourceType), ResourceType, search_term="lab")
    sql = _sql(stmt)
    assert "resource_type.name" in sql
    assert "resource_type.description" in sql
    assert " OR " in sql


def test_blank_search_term_adds_no_predicate() -> None:
    stmt = apply_filters(select(Skill), Skill, search_term="  ")
    assert "WHERE" not in _sql(stmt)


def test_sort_defaults_to_primary_key() -> None:
    assert "ORDER BY skill.id" in _sql(apply_sort(select(Skill), Skill, None))


def test_sort_descending_keeps_primary_key_tiebreak() -> None:
    sql = _sql(apply_sort(select(Skill), Skill, "name", "Desc"))
    assert "ORDER BY skill.name DESC, skill.id" in sql


def test_sort_order_validated_only_with_sort_field() -> None:
    apply_sort(select(Skill), Skill, None, "sideways")
    with pytest.raises(BadRequestError, match="Invalid sort order"):
        apply_sort(select(Skill), Skill, "name", "sideways")
