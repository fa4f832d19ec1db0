"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from pathlib import PurePath

from fastapi import File, HTTPException, UploadFile, status

CATALOG_EXTENSIONS = {".csv", ".txt", ".tsv", ".xlsx"}
CATALOG_CONTENT_TYPES = {
    "text/csv",
    "text/plain",
    "text/tab-separated-values",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_catalog_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file looks like a delimited job catalog.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_catalog_filename = PurePath(filename).suffix in CATALOG_EXTENSIONS
    is_catalog_content_type = content_type in CATALOG_CONTENT_TYPES

    if not is_catalog_filename and not is_catalog_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV, TXT, TSV or XLSX job catalogs are allowed.",
        )

    return file
