"""
app/schemas package marker.
"""

from app.schemas.job_catalog import (
    DuplicateJobResponse,
    ImportReportResponse,
    ImportResultResponse,
    InvalidJobResponse,
    JobRecordResponse,
    SiteJobStatisticsResponse,
    SkippedRowResponse,
    StoredJobResponse,
)

__all__ = [
    "DuplicateJobResponse",
    "ImportReportResponse",
    "ImportResultResponse",
    "InvalidJobResponse",
    "JobRecordResponse",
    "SiteJobStatisticsResponse",
    "SkippedRowResponse",
    "StoredJobResponse",
]
