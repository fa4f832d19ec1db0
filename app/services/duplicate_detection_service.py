"""
app/services/duplicate_detection_service.py

Detects catalog rows that already exist for a site.

An exact job_id match within the site, or an earlier row of the same
batch, is a duplicate. Stored jobs whose
description is close to the candidate are reported as ``similar_records``
but never block an import.

NOTE: the fuzzy score compares each stored job's *description* with the
candidate's *job_id*, not with the candidate's description.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.domain.job_catalog import (
    BatchDuplicateResult,
    DuplicateCandidate,
    DuplicateCheckResult,
    JobRecord,
    StoredJob,
)
from app.matching.levenshtein import similarity
from app.repositories.job_catalog_store import JobCatalogStore, stored_job_from_record

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.8


class DuplicateDetectionService:
    """
    Checks candidate jobs against a site-scoped catalog store.
    """

    def __init__(
        self,
        store: JobCatalogStore,
        *,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ) -> None:
        self._store = store
        self._similarity_threshold = similarity_threshold

    def check_duplicate(self, site_id: str, job_id: str) -> DuplicateCheckResult:
        """
        Look up one job_id for a site.

        Store failures are logged and reported as "not a duplicate" so an
        unavailable catalog never blocks an import.
        """

        try:
            existing = self._store.find_job(site_id, job_id)
            site_jobs = self._store.list_jobs(site_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Duplicate lookup failed site_id=%r job_id=%r: %s",
                site_id,
                job_id,
                exc,
            )
            return DuplicateCheckResult(is_duplicate=False)

        similar_records = [
            job
            for job in site_jobs
            if job.job_id != job_id
            and similarity(job.description, job_id) > self._similarity_threshold
        ]
        return DuplicateCheckResult(
            is_duplicate=existing is not None,
            existing_record=existing,
            similar_records=similar_records,
        )

    def check_batch_duplicates(
        self,
        site_id: str,
        records: Sequence[JobRecord],
    ) -> BatchDuplicateResult:
        """
        Partition a batch into new and duplicate jobs.

        A job_id repeated within the batch is a duplicate of its first
        occurrence, which is reported as the existing record.
        """
        duplicates: list[DuplicateCandidate] = []
        new_records: list[DuplicateCandidate] = []
        seen: dict[str, StoredJob] = {}

        for record in records:
            if record.job_id in seen:
                check = DuplicateCheckResult(is_duplicate=True, existing_record=seen[record.job_id])
            else:
                check = self.check_duplicate(site_id, record.job_id)
                seen[record.job_id] = check.existing_record or stored_job_from_record(site_id, record)
            candidate = DuplicateCandidate(record=record, check=check)
            if check.is_duplicate:
                duplicates.append(candidate)
            else:
                new_records.append(candidate)

        summary_text = f"{len(new_records)} new jobs, {len(duplicates)} duplicates found."
        logger.info(
            "Duplicate check completed site_id=%r new=%s duplicates=%s",
            site_id,
            len(new_records),
            len(duplicates),
        )
        return BatchDuplicateResult(
            duplicates=duplicates,
            new_records=new_records,
            summary_text=summary_text,
        )
