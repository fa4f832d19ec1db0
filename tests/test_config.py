from __future__ import annotations

from collections.abc import Iterator

import pytest

from app.config import get_job_catalog_import_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_job_catalog_import_settings.cache_clear()
    yield
    get_job_catalog_import_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "JOB_CATALOG_SIMILARITY_THRESHOLD",
        "JOB_CATALOG_LOG_VALIDATION_ERRORS",
        "JOB_CATALOG_MAX_UPLOAD_BYTES",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_job_catalog_import_settings()

    assert settings.similarity_threshold == 0.8
    assert settings.log_validation_errors is True
    assert settings.max_upload_bytes == 5 * 1024 * 1024


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JOB_CATALOG_SIMILARITY_THRESHOLD", "0.65")
    monkeypatch.setenv("JOB_CATALOG_LOG_VALIDATION_ERRORS", "off")
    monkeypatch.setenv("JOB_CATALOG_MAX_UPLOAD_BYTES", "1024")

    settings = get_job_catalog_import_settings()

    assert settings.similarity_threshold == 0.65
    assert settings.log_validation_errors is False
    assert settings.max_upload_bytes == 1024


def test_invalid_values_fall_back_or_clamp(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JOB_CATALOG_SIMILARITY_THRESHOLD", "1.7")
    monkeypatch.setenv("JOB_CATALOG_MAX_UPLOAD_BYTES", "lots")

    settings = get_job_catalog_import_settings()

    assert settings.similarity_threshold == 1.0
    assert settings.max_upload_bytes == 5 * 1024 * 1024
