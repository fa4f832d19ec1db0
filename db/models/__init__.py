"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.site_job import SiteJob, SiteJobStatus

__all__ = [
    "SiteJob",
    "SiteJobStatus",
]
