"""
school_management.auth.models

Auth domain models.

Responsibilities:
- Define the entitlement vocabulary checked per entity and operation.
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field


class Entitlement(enum.StrEnum):
    create = "Create"
    read = "Read"
    update = "Update"
    delete = "Delete"

    @classmethod
    def parse(cls, raw: str) -> Entitlement | None:
        # Token claims are produced by other systems; accept any casing.
        for member in cls:
            if member.value.lower() == raw.strip().lower():
                return member
        return None


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.

    `entitlements` maps an entity name (e.g. "Skill") to the operations the
    caller may perform on it.
    """

    subject: str
    roles: frozenset[str]
    entitlements: Mapping[str, frozenset[Entitlement]] = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles

    def has_entitlement(self, entity: str, entitlement: Entitlement) -> bool:
        if self.is_admin:
            return True
        return entitlement in self.entitlements.get(entity, frozenset())
