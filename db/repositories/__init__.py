"""
Repository layer exports.
"""

from db.repositories.errors import JobCatalogStoreError, JobLookupError, JobPersistenceError
from db.repositories.site_job_repository import SiteJobRepository

__all__ = [
    "SiteJobRepository",
    "JobCatalogStoreError",
    "JobLookupError",
    "JobPersistenceError",
]
