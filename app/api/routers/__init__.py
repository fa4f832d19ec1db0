"""
app/api/routers package marker.
"""

from app.api.routers.job_catalog import router as job_catalog_router

__all__ = [
    "job_catalog_router",
]
