"""
app/validators package marker.
"""

from app.validators.job_validator import JobBatchValidator, JobFieldValidator

__all__ = [
    "JobBatchValidator",
    "JobFieldValidator",
]
