"""
app/schemas/job_catalog.py

Response schemas for job catalog endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.domain.job_catalog import (
    DuplicateCandidate,
    ImportReport,
    InvalidJob,
    JobRecord,
    SiteJobStatistics,
    StoredJob,
)


class JobRecordResponse(BaseModel):
    """
    API response model for one parsed catalog job.
    """

    job_id: str
    description: str
    unit: str
    quantity: float
    unit_price: float
    total_price: float
    category: str
    concept_id: str
    line_number: int | None = None

    @classmethod
    def from_record(cls, record: JobRecord) -> JobRecordResponse:
        return cls(
            job_id=record.job_id,
            description=record.description,
            unit=record.unit,
            quantity=record.quantity,
            unit_price=record.unit_price,
            total_price=record.total_price,
            category=record.category,
            concept_id=record.concept_id,
            line_number=record.line_number,
        )


class StoredJobResponse(BaseModel):
    job_id: str
    description: str
    unit: str
    quantity: float
    unit_price: float
    concept_id: str
    category: str | None = None
    status: str

    @classmethod
    def from_stored(cls, job: StoredJob) -> StoredJobResponse:
        return cls(
            job_id=job.job_id,
            description=job.description,
            unit=job.unit,
            quantity=job.quantity,
            unit_price=job.unit_price,
            concept_id=job.concept_id,
            category=job.category,
            status=job.status,
        )


class InvalidJobResponse(BaseModel):
    """
    API response model for one rejected row.
    """

    row_index: int = Field(..., ge=1)
    job: JobRecordResponse
    errors: list[str]
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_invalid(cls, invalid: InvalidJob) -> InvalidJobResponse:
        return cls(
            row_index=invalid.row_index,
            job=JobRecordResponse.from_record(invalid.record),
            errors=list(invalid.errors),
            warnings=list(invalid.warnings),
        )


class DuplicateJobResponse(BaseModel):
    job: JobRecordResponse
    existing: StoredJobResponse | None = None
    similar: list[StoredJobResponse] = Field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: DuplicateCandidate) -> DuplicateJobResponse:
        existing = candidate.check.existing_record
        return cls(
            job=JobRecordResponse.from_record(candidate.record),
            existing=StoredJobResponse.from_stored(existing) if existing is not None else None,
            similar=[StoredJobResponse.from_stored(job) for job in candidate.check.similar_records],
        )


class SkippedRowResponse(BaseModel):
    line_number: int = Field(..., ge=1)
    field_count: int = Field(..., ge=0)
    reason: str


class ImportReportResponse(BaseModel):
    """
    API response model for a catalog import report.
    """

    site_id: str
    total_records: int = Field(..., ge=0)
    valid_count: int = Field(..., ge=0)
    invalid_count: int = Field(..., ge=0)
    duplicate_count: int = Field(..., ge=0)
    skipped_row_count: int = Field(..., ge=0)
    total_value: float
    validation_summary: str
    duplicate_summary: str
    valid_jobs: list[JobRecordResponse] = Field(default_factory=list)
    invalid_jobs: list[InvalidJobResponse] = Field(default_factory=list)
    duplicates: list[DuplicateJobResponse] = Field(default_factory=list)
    skipped_rows: list[SkippedRowResponse] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: ImportReport) -> ImportReportResponse:
        return cls(
            site_id=report.site_id,
            total_records=report.total_record_count,
            valid_count=report.valid_count,
            invalid_count=report.invalid_count,
            duplicate_count=report.duplicate_count,
            skipped_row_count=report.skipped_row_count,
            total_value=report.total_value,
            validation_summary=report.validation_summary_text,
            duplicate_summary=report.duplicate_summary_text,
            valid_jobs=[JobRecordResponse.from_record(record) for record in report.valid_records],
            invalid_jobs=[InvalidJobResponse.from_invalid(invalid) for invalid in report.invalid_records],
            duplicates=[DuplicateJobResponse.from_candidate(dup) for dup in report.duplicate_records],
            skipped_rows=[
                SkippedRowResponse(
                    line_number=row.line_number,
                    field_count=row.field_count,
                    reason=row.reason,
                )
                for row in report.skipped_rows
            ],
        )


class ImportResultResponse(BaseModel):
    report: ImportReportResponse
    inserted_count: int = Field(..., ge=0)


class SiteJobStatisticsResponse(BaseModel):
    """
    API response model for per-site job statistics.
    """

    site_id: str
    total_jobs: int = Field(..., ge=0)
    total_value: float
    jobs_by_category: dict[str, int] = Field(default_factory=dict)
    jobs_by_status: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_statistics(cls, site_id: str, statistics: SiteJobStatistics) -> SiteJobStatisticsResponse:
        return cls(
            site_id=site_id,
            total_jobs=statistics.total_jobs,
            total_value=statistics.total_value,
            jobs_by_category=dict(statistics.jobs_by_category),
            jobs_by_status=dict(statistics.jobs_by_status),
        )
