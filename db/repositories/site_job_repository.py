"""
Repository for site job catalog lookups, inserts and statistics.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.job_catalog import JobRecord, SiteJobStatistics, StoredJob, summarize_jobs
from app.repositories.job_catalog_store import stored_job_from_record
from db.models.site_job import SiteJob
from db.repositories.errors import JobLookupError, JobPersistenceError


class SiteJobRepository:
    """
    SQLAlchemy-backed job catalog store.

    Writes are flushed but never committed; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_job(self, site_id: str, job_id: str) -> StoredJob | None:
        stmt = select(SiteJob).where(SiteJob.site_id == site_id, SiteJob.job_id == job_id)
        try:
            row = self._session.scalars(stmt).first()
        except SQLAlchemyError as exc:
            raise JobLookupError(f"Failed to look up job {job_id!r} for site {site_id!r}.") from exc
        return _to_stored_job(row) if row is not None else None

    def list_jobs(self, site_id: str) -> list[StoredJob]:
        stmt: Select[tuple[SiteJob]] = (
            select(SiteJob).where(SiteJob.site_id == site_id).order_by(SiteJob.job_id)
        )
        return self._fetch(stmt, site_id=site_id)

    def list_jobs_by_concept(self, site_id: str, concept_id: str) -> list[StoredJob]:
        stmt: Select[tuple[SiteJob]] = (
            select(SiteJob)
            .where(SiteJob.site_id == site_id, SiteJob.concept_id == concept_id)
            .order_by(SiteJob.job_id)
        )
        return self._fetch(stmt, site_id=site_id)

    def insert_jobs(self, site_id: str, records: Sequence[JobRecord]) -> int:
        if not records:
            return 0

        rows = []
        for record in records:
            job = stored_job_from_record(site_id, record)
            rows.append(
                SiteJob(
                    site_id=job.site_id,
                    concept_id=job.concept_id,
                    job_id=job.job_id,
                    description=job.description,
                    unit=job.unit,
                    quantity=job.quantity,
                    unit_price=job.unit_price,
                    category=job.category,
                    status=job.status,
                )
            )
        try:
            self._session.add_all(rows)
            self._session.flush()
        except SQLAlchemyError as exc:
            raise JobPersistenceError(f"Failed to insert jobs for site {site_id!r}.") from exc
        return len(rows)

    def update_status(self, job_uuid: uuid.UUID, status: str) -> bool:
        try:
            job = self._session.get(SiteJob, job_uuid)
            if job is None:
                return False
            job.status = status
            self._session.flush()
        except SQLAlchemyError as exc:
            raise JobPersistenceError(f"Failed to update status of job {job_uuid}.") from exc
        return True

    def delete_job(self, job_uuid: uuid.UUID) -> bool:
        try:
            job = self._session.get(SiteJob, job_uuid)
            if job is None:
                return False
            self._session.delete(job)
            self._session.flush()
        except SQLAlchemyError as exc:
            raise JobPersistenceError(f"Failed to delete job {job_uuid}.") from exc
        return True

    def get_statistics(self, site_id: str) -> SiteJobStatistics:
        return summarize_jobs(self.list_jobs(site_id))

    def _fetch(self, stmt: Select[tuple[SiteJob]], *, site_id: str) -> list[StoredJob]:
        try:
            rows = self._session.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise JobLookupError(f"Failed to list jobs for site {site_id!r}.") from exc
        return [_to_stored_job(row) for row in rows]


def _to_stored_job(row: SiteJob) -> StoredJob:
    return StoredJob(
        site_id=row.site_id,
        job_id=row.job_id,
        description=row.description,
        unit=row.unit,
        quantity=float(row.quantity),
        unit_price=float(row.unit_price),
        concept_id=row.concept_id,
        category=row.category,
        status=row.status,
        id=row.id,
    )
