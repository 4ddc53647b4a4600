"""Create profiles and job_postings tables.

Revision ID: 001_profiles_job_postings
Revises:
Create Date: 2026-10-19

- pgcrypto: UUID generation via gen_random_uuid()
- profiles: one row per identity subject, filled in by onboarding
- job_postings: employer listings
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_profiles_job_postings"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    # user_id is the identity provider's subject; users live outside this DB
    op.create_table(
        "profiles",
        sa.Column(
            "id",
            sa.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("industry", sa.String(50), nullable=True),
        sa.Column("user_type", sa.String(20), nullable=False),
        sa.Column(
            "onboarding_completed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
        sa.CheckConstraint(
            "user_type IN ('job_seeker', 'employer')",
            name="ck_profiles_user_type",
        ),
        sa.CheckConstraint(
            "industry IS NULL OR industry IN ('Technology', 'Healthcare', "
            "'Finance', 'Education', 'Marketing', 'Manufacturing', 'Other')",
            name="ck_profiles_industry",
        ),
    )

    op.create_table(
        "job_postings",
        sa.Column(
            "id",
            sa.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("employer_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("company", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column(
            "employment_type",
            sa.String(30),
            nullable=False,
            server_default="Full-time",
        ),
        sa.Column("salary", sa.String(100), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "requirements",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "tags",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('active', 'draft', 'closed')",
            name="ck_job_postings_status",
        ),
    )
    op.create_index("idx_job_postings_employer", "job_postings", ["employer_id"])
    op.create_index(
        "idx_job_postings_status_created", "job_postings", ["status", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("idx_job_postings_status_created", table_name="job_postings")
    op.drop_index("idx_job_postings_employer", table_name="job_postings")
    op.drop_table("job_postings")
    op.drop_table("profiles")
    # pgcrypto is left installed; other schemas may depend on it
