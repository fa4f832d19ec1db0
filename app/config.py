"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class JobCatalogImportSettings:
    """
    Runtime settings for job catalog imports.
    """

    similarity_threshold: float = 0.8
    log_validation_errors: bool = True
    max_upload_bytes: int = 5 * 1024 * 1024


@lru_cache(maxsize=1)
def get_job_catalog_import_settings() -> JobCatalogImportSettings:
    """
    Return cached job catalog import settings from environment variables.
    """

    threshold = _get_float_env("JOB_CATALOG_SIMILARITY_THRESHOLD", 0.8)
    return JobCatalogImportSettings(
        similarity_threshold=min(1.0, max(0.0, threshold)),
        log_validation_errors=_get_bool_env("JOB_CATALOG_LOG_VALIDATION_ERRORS", True),
        max_upload_bytes=max(1, _get_int_env("JOB_CATALOG_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)),
    )
