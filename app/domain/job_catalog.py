"""
app/domain/job_catalog.py

Domain models used by the job catalog import flow.

Rows move through two stages: ``RawJobInput`` keeps the text exactly as it
was tokenized, and ``JobRecord`` is the typed view built from it. The
validator only ever looks at the raw stage, so a quantity of ``"abc"``
is reported as invalid even though the typed stage already holds ``0.0``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawJobInput:
    """
    One tokenized catalog row before any type conversion.
    """

    job_id: Any
    description: Any
    unit: Any
    quantity: Any
    unit_price: Any
    line_number: int | None = None


@dataclass(frozen=True)
class JobRecord:
    """
    Typed job line item prepared for validation and duplicate detection.
    """

    job_id: str
    description: str
    unit: str
    quantity: float
    unit_price: float
    category: str
    concept_id: str
    raw: RawJobInput = field(compare=False, repr=False)

    @property
    def total_price(self) -> float:
        return self.quantity * self.unit_price

    @property
    def line_number(self) -> int | None:
        return self.raw.line_number


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of validating one raw row.
    """

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ValidJob:
    record: JobRecord
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class InvalidJob:
    """
    A rejected record annotated with its 1-based position in the batch.
    """

    row_index: int
    record: JobRecord
    errors: tuple[str, ...]
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class BatchValidationResult:
    valid_records: list[ValidJob]
    invalid_records: list[InvalidJob]
    total_warnings: int
    summary_text: str


@dataclass(frozen=True)
class StoredJob:
    """
    One job already persisted in a site's catalog.
    """

    site_id: str
    job_id: str
    description: str
    unit: str
    quantity: float
    unit_price: float
    concept_id: str
    category: str | None = None
    status: str = "pending"
    id: uuid.UUID | None = None

    @property
    def total_price(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class DuplicateCheckResult:
    """
    Duplicate status of one candidate job against a site's catalog.

    ``similar_records`` is advisory only. Its scores compare each stored
    job's description with the candidate's job_id (not its description);
    that comparison target is the established behaviour and is kept as is.
    """

    is_duplicate: bool
    existing_record: StoredJob | None = None
    similar_records: list[StoredJob] = field(default_factory=list)


@dataclass(frozen=True)
class DuplicateCandidate:
    record: JobRecord
    check: DuplicateCheckResult


@dataclass(frozen=True)
class BatchDuplicateResult:
    duplicates: list[DuplicateCandidate]
    new_records: list[DuplicateCandidate]
    summary_text: str


@dataclass(frozen=True)
class SkippedRow:
    """
    A content line dropped by the tokenizer before validation.
    """

    line_number: int
    field_count: int
    reason: str


@dataclass(frozen=True)
class ImportReport:
    """
    Consolidated, immutable result of one catalog import run.
    """

    site_id: str
    all_records: list[JobRecord]
    valid_records: list[JobRecord]
    invalid_records: list[InvalidJob]
    duplicate_records: list[DuplicateCandidate]
    total_record_count: int
    total_value: float
    validation_summary_text: str
    duplicate_summary_text: str
    skipped_rows: list[SkippedRow] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return len(self.valid_records)

    @property
    def invalid_count(self) -> int:
        return len(self.invalid_records)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicate_records)

    @property
    def skipped_row_count(self) -> int:
        return len(self.skipped_rows)


@dataclass(frozen=True)
class SiteJobStatistics:
    """
    Aggregate view over the jobs persisted for one site.
    """

    total_jobs: int
    total_value: float
    jobs_by_category: dict[str, int] = field(default_factory=dict)
    jobs_by_status: dict[str, int] = field(default_factory=dict)


def summarize_jobs(jobs: list[StoredJob]) -> SiteJobStatistics:
    """
    Count stored jobs per category and status and sum their value.
    """

    by_category: dict[str, int] = {}
    by_status: dict[str, int] = {}
    total_value = 0.0

    for job in jobs:
        total_value += job.total_price
        category = job.category or "Unknown"
        by_category[category] = by_category.get(category, 0) + 1
        status = job.status or "pending"
        by_status[status] = by_status.get(status, 0) + 1

    return SiteJobStatistics(
        total_jobs=len(jobs),
        total_value=total_value,
        jobs_by_category=by_category,
        jobs_by_status=by_status,
    )
