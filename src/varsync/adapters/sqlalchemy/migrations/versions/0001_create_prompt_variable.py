"""create prompt_variable table

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "prompt_variable",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("prompt_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("required", sa.Boolean(), nullable=False),
        sa.Column("default_value", sa.Text(), nullable=True),
        sa.Column("help", sa.Text(), nullable=True),
        sa.Column("pattern", sa.String(length=200), nullable=True),
        sa.Column("options", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_prompt_variable")),
        sa.UniqueConstraint(
            "prompt_id", "name", name=op.f("uq_prompt_variable_prompt_id_name")
        ),
    )
    op.create_index(
        "ix_prompt_variable_prompt_order",
        "prompt_variable",
        ["prompt_id", "order_index"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_prompt_variable_prompt_order", table_name="prompt_variable")
    op.drop_table("prompt_variable")
