"""
app/services package marker.
"""

from app.services.duplicate_detection_service import DuplicateDetectionService
from app.services.job_catalog_import_service import (
    CatalogFormatError,
    CatalogPersistenceError,
    ImportResult,
    JobCatalogImportService,
    get_job_catalog_import_service,
)

__all__ = [
    "CatalogFormatError",
    "CatalogPersistenceError",
    "DuplicateDetectionService",
    "ImportResult",
    "JobCatalogImportService",
    "get_job_catalog_import_service",
]
