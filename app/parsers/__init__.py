"""
app/parsers package marker.
"""

from app.parsers.job_catalog_parser import (
    SAMPLE_CSV,
    Delimiter,
    JobCatalogParser,
    TokenizedCatalog,
    build_job_record,
    delimiter_for_filename,
    generate_sample_csv,
    lenient_float,
)

__all__ = [
    "SAMPLE_CSV",
    "Delimiter",
    "JobCatalogParser",
    "TokenizedCatalog",
    "build_job_record",
    "delimiter_for_filename",
    "generate_sample_csv",
    "lenient_float",
]
