"""Initial schema.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="normal"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.CheckConstraint(
            "role IN ('normal', 'vip', 'svip', 'admin')", name="ck_user_profiles_role"
        ),
    )
    op.create_index("user_profiles_role_idx", "user_profiles", ["role"])
    op.create_index("user_profiles_expires_at_idx", "user_profiles", ["expires_at"])

    op.create_table(
        "prompts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "tags",
            sa.JSON().with_variant(postgresql.ARRAY(sa.Text()), "postgresql"),
            nullable=False,
        ),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("category", sa.String(length=20), nullable=False, server_default="Other"),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.CheckConstraint(
            "category IN ('Coding', 'Writing', 'Art', 'Productivity', 'Other')",
            name="ck_prompts_category",
        ),
        sa.CheckConstraint("likes >= 0", name="ck_prompts_likes_non_negative"),
    )
    op.create_index("prompts_user_id_idx", "prompts", ["user_id"])
    op.create_index("prompts_category_idx", "prompts", ["category"])
    op.create_index("prompts_created_at_idx", "prompts", [sa.text("created_at DESC")])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("action_type", sa.String(length=50), nullable=False),
        sa.Column("resource_type", sa.String(length=50), nullable=False),
        sa.Column("resource_id", sa.Uuid(), nullable=True),
        sa.Column(
            "details",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_index("prompts_created_at_idx", table_name="prompts")
    op.drop_index("prompts_category_idx", table_name="prompts")
    op.drop_index("prompts_user_id_idx", table_name="prompts")
    op.drop_table("prompts")
    op.drop_index("user_profiles_expires_at_idx", table_name="user_profiles")
    op.drop_index("user_profiles_role_idx", table_name="user_profiles")
    op.drop_table("user_profiles")
    op.drop_table("users")
