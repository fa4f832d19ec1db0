"""
Repository-layer exceptions for the job catalog store.
"""

from __future__ import annotations


class JobCatalogStoreError(Exception):
    """Base exception for job catalog store failures."""


class JobLookupError(JobCatalogStoreError):
    """Raised when reading jobs for a site fails."""


class JobPersistenceError(JobCatalogStoreError):
    """Raised when inserting or updating jobs fails."""
