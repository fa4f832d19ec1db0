"""
tests/test_duplicate_detection_service.py

Unit tests for DuplicateDetectionService against in-memory and failing stores.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from app.domain.job_catalog import JobRecord, RawJobInput, StoredJob
from app.parsers.job_catalog_parser import build_job_record
from app.repositories.job_catalog_store import InMemoryJobCatalogStore
from app.services.duplicate_detection_service import DuplicateDetectionService
from db.repositories.errors import JobLookupError


def _stored(job_id: str, description: str, site_id: str = "site1") -> StoredJob:
    return StoredJob(
        site_id=site_id,
        job_id=job_id,
        description=description,
        unit="M3",
        quantity=10.0,
        unit_price=5.0,
        concept_id="cimentacion-principal",
        category="CIM",
    )


def _record(job_id: str) -> JobRecord:
    return build_job_record(
        RawJobInput(
            job_id=job_id,
            description="EXCAVACIÓN POR MEDIOS MECÁNICOS",
            unit="M3",
            quantity="1",
            unit_price="2",
        )
    )


class _FailingStore:
    def find_job(self, site_id: str, job_id: str) -> StoredJob | None:
        raise JobLookupError("catalog unavailable")

    def list_jobs(self, site_id: str) -> list[StoredJob]:
        raise JobLookupError("catalog unavailable")

    def insert_jobs(self, site_id: str, records: Sequence[JobRecord]) -> int:
        raise AssertionError("not used")


@pytest.fixture()
def store() -> InMemoryJobCatalogStore:
    return InMemoryJobCatalogStore(
        [
            _stored("CIM-001", "EXCAVACIÓN POR MEDIOS MECÁNICOS"),
            _stored("EST-001", "CONCRETO PREMEZCLADO"),
            _stored("CIM-001", "OTRO SITIO", site_id="site2"),
        ]
    )


class TestCheckDuplicate:
    def test_exact_job_id_in_same_site_is_duplicate(self, store: InMemoryJobCatalogStore) -> None:
        result = DuplicateDetectionService(store).check_duplicate("site1", "CIM-001")

        assert result.is_duplicate is True
        assert result.existing_record is not None
        assert result.existing_record.description == "EXCAVACIÓN POR MEDIOS MECÁNICOS"

    def test_same_job_id_in_other_site_is_not_duplicate(self) -> None:
        store = InMemoryJobCatalogStore([_stored("CIM-001", "EXCAVACIÓN", site_id="site2")])

        result = DuplicateDetectionService(store).check_duplicate("site1", "CIM-001")

        assert result.is_duplicate is False
        assert result.existing_record is None
        assert result.similar_records == []

    def test_similarity_compares_stored_description_with_candidate_job_id(self) -> None:
        # Scores use the candidate's job_id, not its description.
        store = InMemoryJobCatalogStore(
            [
                _stored("ALB-010", "CIM-0012"),
                _stored("ALB-011", "EXCAVACIÓN POR MEDIOS MECÁNICOS"),
            ]
        )

        result = DuplicateDetectionService(store).check_duplicate("site1", "CIM-001")

        assert result.is_duplicate is False
        assert [job.job_id for job in result.similar_records] == ["ALB-010"]

    def test_exact_match_is_excluded_from_similar_records(self) -> None:
        store = InMemoryJobCatalogStore([_stored("CIM-001", "CIM-001")])

        result = DuplicateDetectionService(store).check_duplicate("site1", "CIM-001")

        assert result.is_duplicate is True
        assert result.similar_records == []

    def test_threshold_is_strictly_greater_than(self) -> None:
        # "CIM-00123" vs "CIM-001": distance 2 over length 9, similarity 0.777...
        store = InMemoryJobCatalogStore([_stored("ALB-010", "CIM-00123")])

        strict = DuplicateDetectionService(store).check_duplicate("site1", "CIM-001")
        relaxed = DuplicateDetectionService(store, similarity_threshold=0.7).check_duplicate(
            "site1", "CIM-001"
        )

        assert strict.similar_records == []
        assert len(relaxed.similar_records) == 1

    def test_store_failure_fails_open(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING"):
            result = DuplicateDetectionService(_FailingStore()).check_duplicate("site1", "CIM-001")

        assert result.is_duplicate is False
        assert result.existing_record is None
        assert result.similar_records == []
        assert "Duplicate lookup failed" in caplog.text


class TestCheckBatchDuplicates:
    def test_partitions_into_duplicates_and_new(self, store: InMemoryJobCatalogStore) -> None:
        records = [_record("CIM-001"), _record("CIM-002"), _record("EST-001")]

        result = DuplicateDetectionService(store).check_batch_duplicates("site1", records)

        assert [dup.record.job_id for dup in result.duplicates] == ["CIM-001", "EST-001"]
        assert [new.record.job_id for new in result.new_records] == ["CIM-002"]
        assert result.summary_text == "1 new jobs, 2 duplicates found."

    def test_repeated_job_id_within_batch_is_duplicate_of_first(self) -> None:
        records = [_record("CIM-001"), _record("CIM-001"), _record("CIM-002")]

        result = DuplicateDetectionService(InMemoryJobCatalogStore()).check_batch_duplicates("site1", records)

        assert [new.record.job_id for new in result.new_records] == ["CIM-001", "CIM-002"]
        assert [dup.record.job_id for dup in result.duplicates] == ["CIM-001"]
        existing = result.duplicates[0].check.existing_record
        assert existing is not None
        assert existing.job_id == "CIM-001"
        assert existing.category == "CIM"
        assert result.summary_text == "2 new jobs, 1 duplicates found."

    def test_repeat_of_stored_job_reports_stored_record(self, store: InMemoryJobCatalogStore) -> None:
        records = [_record("EST-001"), _record("EST-001")]

        result = DuplicateDetectionService(store).check_batch_duplicates("site1", records)

        assert result.new_records == []
        assert [dup.check.existing_record.description for dup in result.duplicates] == [  # type: ignore[union-attr]
            "CONCRETO PREMEZCLADO",
            "CONCRETO PREMEZCLADO",
        ]

    def test_store_failure_treats_every_record_as_new(self) -> None:
        records = [_record("CIM-001"), _record("CIM-002")]

        result = DuplicateDetectionService(_FailingStore()).check_batch_duplicates("site1", records)

        assert result.duplicates == []
        assert len(result.new_records) == 2

    def test_empty_batch(self, store: InMemoryJobCatalogStore) -> None:
        result = DuplicateDetectionService(store).check_batch_duplicates("site1", [])

        assert result.summary_text == "0 new jobs, 0 duplicates found."
