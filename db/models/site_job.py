"""
db/models/site_job.py

Job catalog entries persisted per construction site.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Index, Numeric, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class SiteJobStatus:
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SiteJob(Base, TimestampMixin):
    __tablename__ = "site_jobs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    site_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Construction site the job belongs to",
    )
    concept_id: Mapped[str] = mapped_column(String(120), nullable=False)
    job_id: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Catalog code, e.g. CIM-001",
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    quantity: Mapped[float] = mapped_column(Numeric(14, 4, asdecimal=False), nullable=False)
    unit_price: Mapped[float] = mapped_column(Numeric(14, 4, asdecimal=False), nullable=False)
    category: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        comment="job_id prefix, e.g. CIM",
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=SiteJobStatus.PENDING,
    )

    __table_args__ = (
        UniqueConstraint("site_id", "job_id", name="uq_site_jobs_site_id_job_id"),
        Index("ix_site_jobs_site_id", "site_id"),
        Index("ix_site_jobs_site_id_concept_id", "site_id", "concept_id"),
        Index("ix_site_jobs_status", "status"),
    )
