"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00.000000

Creates the users table shared by help seekers, admins and super admins.
The super admin account is seeded by ``scripts/seed_data.py`` so that its
credentials come from the environment.
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users table and its indexes."""

    op.create_table(
        "users",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("url_id", sa.Integer, sa.Identity(start=1), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="help_seeker"),
        sa.Column("status", sa.String(20), nullable=True, server_default="pending"),
        sa.Column(
            "verified_by",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("view_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("linkedin_url", sa.String(500), nullable=True),
        sa.Column("campaign_url", sa.String(500), nullable=True),
        sa.Column("facebook_url", sa.String(500), nullable=True),
        sa.Column("telegram_url", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("url_id", name="uq_users_url_id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint("view_count >= 0", name="ck_users_view_count_non_negative"),
        sa.CheckConstraint(
            "role IN ('help_seeker', 'admin', 'super_admin')", name="ck_users_role"
        ),
        sa.CheckConstraint(
            "status IS NULL OR status IN ('pending', 'verified', 'flagged')",
            name="ck_users_status",
        ),
    )
    op.create_index("idx_users_status_role", "users", ["status", "role"])
    op.create_index("idx_users_card_order", "users", ["view_count", "created_at"])
    op.create_index("idx_users_verified_by", "users", ["verified_by"])


def downgrade() -> None:
    op.drop_table("users")
