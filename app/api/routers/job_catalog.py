"""
app/api/routers/job_catalog.py

Job catalog upload, sample and statistics HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_catalog_upload
from app.config import JobCatalogImportSettings, get_job_catalog_import_settings
from app.parsers.job_catalog_parser import Delimiter, generate_sample_csv
from app.schemas.job_catalog import (
    ImportReportResponse,
    ImportResultResponse,
    SiteJobStatisticsResponse,
)
from app.services.job_catalog_import_service import (
    CatalogFormatError,
    CatalogPersistenceError,
    JobCatalogImportService,
    get_job_catalog_import_service,
)
from db.repositories.errors import JobCatalogStoreError
from db.session import get_db

router = APIRouter(tags=["job-catalog"])


def _read_upload(file: UploadFile, settings: JobCatalogImportSettings) -> bytes:
    try:
        content = file.file.read(settings.max_upload_bytes + 1)
    finally:
        file.file.close()

    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Job catalog exceeds configured size limit.",
        )
    return content


@router.post("/sites/{site_id}/job-catalog/preview", response_model=ImportReportResponse)
def preview_job_catalog(
    site_id: str,
    file: UploadFile = Depends(get_catalog_upload),
    delimiter: Delimiter | None = Query(default=None, description="Override the delimiter chosen from the file name"),
    db: Session = Depends(get_db),
    import_service: JobCatalogImportService = Depends(get_job_catalog_import_service),
    settings: JobCatalogImportSettings = Depends(get_job_catalog_import_settings),
) -> ImportReportResponse:
    """
    Parse and validate one catalog without persisting it.
    """

    content = _read_upload(file, settings)
    try:
        report = import_service.preview_import(
            content=content,
            file_name=file.filename or "catalog.csv",
            site_id=site_id,
            db=db,
            delimiter=delimiter,
        )
    except CatalogFormatError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return ImportReportResponse.from_report(report)


@router.post("/sites/{site_id}/job-catalog/import", response_model=ImportResultResponse)
def import_job_catalog(
    site_id: str,
    file: UploadFile = Depends(get_catalog_upload),
    delimiter: Delimiter | None = Query(default=None, description="Override the delimiter chosen from the file name"),
    db: Session = Depends(get_db),
    import_service: JobCatalogImportService = Depends(get_job_catalog_import_service),
    settings: JobCatalogImportSettings = Depends(get_job_catalog_import_settings),
) -> ImportResultResponse:
    """
    Parse one catalog and persist its valid, non-duplicate jobs.
    """

    content = _read_upload(file, settings)
    try:
        result = import_service.import_catalog(
            content=content,
            file_name=file.filename or "catalog.csv",
            site_id=site_id,
            db=db,
            delimiter=delimiter,
        )
    except CatalogFormatError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except CatalogPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to persist valid catalog jobs.",
        ) from exc

    return ImportResultResponse(
        report=ImportReportResponse.from_report(result.report),
        inserted_count=result.inserted_count,
    )


@router.get("/job-catalog/sample")
def download_sample_catalog() -> Response:
    """
    Return the sample catalog as a downloadable CSV file.
    """

    return Response(
        content=generate_sample_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="sample_jobs.csv"'},
    )


@router.get("/sites/{site_id}/jobs/statistics", response_model=SiteJobStatisticsResponse)
def get_site_job_statistics(
    site_id: str,
    db: Session = Depends(get_db),
    import_service: JobCatalogImportService = Depends(get_job_catalog_import_service),
) -> SiteJobStatisticsResponse:
    try:
        statistics = import_service.get_statistics(site_id=site_id, db=db)
    except JobCatalogStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Job catalog is unavailable.",
        ) from exc

    return SiteJobStatisticsResponse.from_statistics(site_id, statistics)
