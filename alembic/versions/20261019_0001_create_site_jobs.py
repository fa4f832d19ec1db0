"""create site_jobs table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:30:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "site_jobs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("site_id", sa.String(length=64), nullable=False),
        sa.Column("concept_id", sa.String(length=120), nullable=False),
        sa.Column("job_id", sa.String(length=20), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=False),
        sa.Column("quantity", sa.Numeric(precision=14, scale=4), nullable=False),
        sa.Column("unit_price", sa.Numeric(precision=14, scale=4), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_site_jobs"),
        sa.UniqueConstraint("site_id", "job_id", name="uq_site_jobs_site_id_job_id"),
    )
    op.create_index("ix_site_jobs_site_id", "site_jobs", ["site_id"], unique=False)
    op.create_index(
        "ix_site_jobs_site_id_concept_id",
        "site_jobs",
        ["site_id", "concept_id"],
        unique=False,
    )
    op.create_index("ix_site_jobs_status", "site_jobs", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_site_jobs_status", table_name="site_jobs")
    op.drop_index("ix_site_jobs_site_id_concept_id", table_name="site_jobs")
    op.drop_index("ix_site_jobs_site_id", table_name="site_jobs")
    op.drop_table("site_jobs")
