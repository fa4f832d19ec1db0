"""
Preview a job catalog import from the CLI without touching the database.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from app.config import get_job_catalog_import_settings
from app.parsers.job_catalog_parser import Delimiter, JobCatalogParser, delimiter_for_filename
from app.repositories.job_catalog_store import InMemoryJobCatalogStore
from app.schemas.job_catalog import ImportReportResponse
from app.services.duplicate_detection_service import DuplicateDetectionService
from app.validators.job_validator import JobBatchValidator


def main() -> int:
    parser = argparse.ArgumentParser(description="Preview a job catalog import.")
    parser.add_argument("path", type=Path, help="Catalog file (.csv, .txt or tab separated).")
    parser.add_argument("--site-id", dest="site_id", required=True, help="Site to import into.")
    parser.add_argument(
        "--delimiter",
        dest="delimiter",
        choices=[delimiter.value for delimiter in Delimiter],
        default=None,
        help="Override the delimiter chosen from the file extension.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s [%(name)s] %(message)s")

    settings = get_job_catalog_import_settings()
    delimiter = Delimiter(args.delimiter) if args.delimiter else delimiter_for_filename(args.path.name)
    catalog_parser = JobCatalogParser(
        DuplicateDetectionService(
            InMemoryJobCatalogStore(),
            similarity_threshold=settings.similarity_threshold,
        ),
        batch_validator=JobBatchValidator(log_validation_errors=settings.log_validation_errors),
    )

    content = args.path.read_text(encoding="utf-8-sig")
    report = catalog_parser.parse(content, args.site_id, delimiter)

    payload = ImportReportResponse.from_report(report).model_dump(mode="json")
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0 if report.invalid_count == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
