"""
app/domain package marker.
"""

from app.domain.job_catalog import (
    BatchDuplicateResult,
    BatchValidationResult,
    DuplicateCandidate,
    DuplicateCheckResult,
    ImportReport,
    InvalidJob,
    JobRecord,
    RawJobInput,
    SiteJobStatistics,
    SkippedRow,
    StoredJob,
    ValidationOutcome,
    ValidJob,
    summarize_jobs,
)

__all__ = [
    "BatchDuplicateResult",
    "BatchValidationResult",
    "DuplicateCandidate",
    "DuplicateCheckResult",
    "ImportReport",
    "InvalidJob",
    "JobRecord",
    "RawJobInput",
    "SiteJobStatistics",
    "SkippedRow",
    "StoredJob",
    "ValidationOutcome",
    "ValidJob",
    "summarize_jobs",
]
