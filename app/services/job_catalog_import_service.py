"""
app/services/job_catalog_import_service.py

Service layer for job catalog upload orchestration.

A preview runs the parser against the site's persisted catalog and returns
the import report without writing anything. An import does the same and
then inserts the report's valid records in one transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_job_catalog_import_settings
from app.domain.job_catalog import ImportReport, SiteJobStatistics, summarize_jobs
from app.parsers.job_catalog_parser import Delimiter, JobCatalogParser, delimiter_for_filename
from app.repositories.job_catalog_store import JobCatalogStore
from app.services.duplicate_detection_service import DuplicateDetectionService
from app.validators.job_validator import JobBatchValidator
from db.repositories.errors import JobCatalogStoreError
from db.repositories.site_job_repository import SiteJobRepository

logger = logging.getLogger(__name__)

StoreFactory = Callable[[Session], JobCatalogStore]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CatalogFormatError(ValueError):
    """
    Raised when an uploaded catalog cannot be read as text.
    """


class CatalogPersistenceError(RuntimeError):
    """
    Raised when accepted jobs cannot be persisted.
    """


@dataclass(frozen=True)
class ImportResult:
    report: ImportReport
    inserted_count: int


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class JobCatalogImportService:
    """
    Coordinates catalog decoding, parsing, duplicate detection and persistence.
    """

    def __init__(
        self,
        *,
        similarity_threshold: float,
        log_validation_errors: bool,
        store_factory: StoreFactory | None = None,
    ) -> None:
        self._similarity_threshold = similarity_threshold
        self._log_validation_errors = log_validation_errors
        self._store_factory: StoreFactory = store_factory or SiteJobRepository

    def preview_import(
        self,
        *,
        content: bytes,
        file_name: str,
        site_id: str,
        db: Session,
        delimiter: Delimiter | None = None,
    ) -> ImportReport:
        """
        Parse and check one uploaded catalog without persisting anything.

        Args:
            content:    Raw upload bytes, UTF-8 with or without BOM.
            file_name:  Upload name; selects the delimiter when none is given.
            site_id:    Site whose catalog is used for duplicate detection.
            db:         Active SQLAlchemy session (caller owns lifecycle).
            delimiter:  Explicit delimiter override.
        """
        store = self._store_factory(db)
        return self._parse(
            content=content,
            file_name=file_name,
            site_id=site_id,
            store=store,
            delimiter=delimiter,
        )

    def import_catalog(
        self,
        *,
        content: bytes,
        file_name: str,
        site_id: str,
        db: Session,
        delimiter: Delimiter | None = None,
    ) -> ImportResult:
        """
        Parse one catalog and persist its valid, non-duplicate jobs.
        """
        store = self._store_factory(db)
        report = self._parse(
            content=content,
            file_name=file_name,
            site_id=site_id,
            store=store,
            delimiter=delimiter,
        )
        if not report.valid_records:
            logger.info("Job catalog import has no valid jobs site_id=%r", site_id)
            return ImportResult(report=report, inserted_count=0)

        try:
            inserted = store.insert_jobs(site_id, report.valid_records)
            db.commit()
        except (JobCatalogStoreError, SQLAlchemyError) as exc:
            db.rollback()
            raise CatalogPersistenceError("Failed to persist valid catalog jobs.") from exc

        logger.info(
            "Job catalog imported site_id=%r inserted=%s total_value=%.2f",
            site_id,
            inserted,
            report.total_value,
        )
        return ImportResult(report=report, inserted_count=inserted)

    def get_statistics(self, *, site_id: str, db: Session) -> SiteJobStatistics:
        store = self._store_factory(db)
        return summarize_jobs(store.list_jobs(site_id))

    def _parse(
        self,
        *,
        content: bytes,
        file_name: str,
        site_id: str,
        store: JobCatalogStore,
        delimiter: Delimiter | None,
    ) -> ImportReport:
        text = self._decode(content)
        resolved_delimiter = delimiter or delimiter_for_filename(file_name)
        parser = JobCatalogParser(
            DuplicateDetectionService(store, similarity_threshold=self._similarity_threshold),
            batch_validator=JobBatchValidator(log_validation_errors=self._log_validation_errors),
        )
        logger.info(
            "Parsing job catalog file=%r site_id=%r delimiter=%s",
            file_name,
            site_id,
            resolved_delimiter.value,
        )
        return parser.parse(text, site_id, resolved_delimiter)

    @staticmethod
    def _decode(content: bytes) -> str:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CatalogFormatError("Job catalog must be UTF-8 encoded.") from exc
        if not text.strip():
            raise CatalogFormatError("Job catalog is empty.")
        return text


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_job_catalog_import_service() -> JobCatalogImportService:
    """
    Build and cache the import service with env-driven settings.
    """
    settings = get_job_catalog_import_settings()
    return JobCatalogImportService(
        similarity_threshold=settings.similarity_threshold,
        log_validation_errors=settings.log_validation_errors,
    )
