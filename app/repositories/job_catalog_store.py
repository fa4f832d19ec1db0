"""
app/repositories/job_catalog_store.py

Store contract for persisted site job catalogs and an in-memory store.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import replace
from typing import Protocol

from app.domain.job_catalog import JobRecord, StoredJob
from app.domain.job_taxonomy import job_prefix


class JobCatalogStore(Protocol):
    """
    Read/insert operations the import pipeline needs from a catalog store.
    """

    def find_job(self, site_id: str, job_id: str) -> StoredJob | None:
        ...

    def list_jobs(self, site_id: str) -> list[StoredJob]:
        ...

    def insert_jobs(self, site_id: str, records: Sequence[JobRecord]) -> int:
        ...


def stored_job_from_record(site_id: str, record: JobRecord) -> StoredJob:
    """
    Build the persisted shape of an accepted record.

    The stored category is the bare job_id prefix, not the display name
    derived by the parser.
    """

    return StoredJob(
        site_id=site_id,
        job_id=record.job_id,
        description=record.description,
        unit=record.unit,
        quantity=record.quantity,
        unit_price=record.unit_price,
        concept_id=record.concept_id,
        category=job_prefix(record.job_id),
        status="pending",
    )


class InMemoryJobCatalogStore:
    """
    Catalog store backed by a per-instance list.

    Used by the CLI preview and by tests; create one instance per catalog.
    """

    def __init__(self, jobs: Sequence[StoredJob] | None = None) -> None:
        self._jobs: list[StoredJob] = []
        for job in jobs or ():
            self.add(job)

    def add(self, job: StoredJob) -> StoredJob:
        stored = job if job.id is not None else replace(job, id=uuid.uuid4())
        self._jobs.append(stored)
        return stored

    def find_job(self, site_id: str, job_id: str) -> StoredJob | None:
        for job in self._jobs:
            if job.site_id == site_id and job.job_id == job_id:
                return job
        return None

    def list_jobs(self, site_id: str) -> list[StoredJob]:
        jobs = [job for job in self._jobs if job.site_id == site_id]
        return sorted(jobs, key=lambda job: job.job_id)

    def list_jobs_by_concept(self, site_id: str, concept_id: str) -> list[StoredJob]:
        return [job for job in self.list_jobs(site_id) if job.concept_id == concept_id]

    def insert_jobs(self, site_id: str, records: Sequence[JobRecord]) -> int:
        for record in records:
            self.add(stored_job_from_record(site_id, record))
        return len(records)

    def update_status(self, job_uuid: uuid.UUID, status: str) -> bool:
        for index, job in enumerate(self._jobs):
            if job.id == job_uuid:
                self._jobs[index] = replace(job, status=status)
                return True
        return False

    def delete(self, job_uuid: uuid.UUID) -> bool:
        for index, job in enumerate(self._jobs):
            if job.id == job_uuid:
                del self._jobs[index]
                return True
        return False
