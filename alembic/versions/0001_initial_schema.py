"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _entity_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_on", sa.DateTime(), nullable=False),
        sa.Column("updated_on", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "benefits",
        *_entity_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("benefit_type", sa.String(100), nullable=True),
        sa.Column("amount", sa.Numeric(18, 2), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_benefits_name", "benefits", ["name"])

    op.create_table(
        "grading_scale",
        *_entity_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("grade", sa.String(16), nullable=False),
        sa.Column("min_score", sa.Numeric(6, 2), nullable=True),
        sa.Column("max_score", sa.Numeric(6, 2), nullable=True),
        sa.Column("grade_point", sa.Numeric(4, 2), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_grading_scale_name", "grading_scale", ["name"])

    op.create_table(
        "resource_type",
        *_entity_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_resource_type_name", "resource_type", ["name"])

    op.create_table(
        "skill",
        *_entity_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_skill_name", "skill", ["name"])

    op.create_table(
        "document_status",
        *_entity_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_final", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_document_status_name", "document_status", ["name"])

    op.create_table(
        "fee_waiver",
        *_entity_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("waiver_percentage", sa.Numeric(5, 2), nullable=True),
        sa.Column("max_amount", sa.Numeric(18, 2), nullable=True),
        sa.Column("valid_from", sa.Date(), nullable=True),
        sa.Column("valid_to", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "benefit_id",
            sa.Uuid(),
            sa.ForeignKey("benefits.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("ix_fee_waiver_name", "fee_waiver", ["name"])
    op.create_index("ix_fee_waiver_benefit_id", "fee_waiver", ["benefit_id"])


def downgrade() -> None:
    op.drop_table("fee_waiver")
    op.drop_table("document_status")
    op.drop_table("skill")
    op.drop_table("resource_type")
    op.drop_table("grading_scale")
    op.drop_table("benefits")
