"""
app/repositories package marker.
"""

from app.repositories.job_catalog_store import (
    InMemoryJobCatalogStore,
    JobCatalogStore,
    stored_job_from_record,
)

__all__ = [
    "InMemoryJobCatalogStore",
    "JobCatalogStore",
    "stored_job_from_record",
]
