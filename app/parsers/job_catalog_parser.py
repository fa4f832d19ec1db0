"""
app/parsers/job_catalog_parser.py

Tokenizes delimited job catalogs and assembles the import report.

Numbers are read twice. The tokenizer keeps the cell text in
``RawJobInput`` and builds the typed ``JobRecord`` with a lenient reader
(longest numeric prefix, otherwise 0). The field validator later parses
the same text strictly, so ``"abc"`` becomes ``0.0`` on the record and an
error in the validation outcome.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import TYPE_CHECKING

from app.domain.job_catalog import ImportReport, JobRecord, RawJobInput, SkippedRow
from app.domain.job_taxonomy import category_for, concept_id_for
from app.validators.job_validator import JobBatchValidator

if TYPE_CHECKING:
    from app.services.duplicate_detection_service import DuplicateDetectionService

logger = logging.getLogger(__name__)

MIN_FIELDS_PER_ROW = 5
DEFAULT_UNIT = "PZA"

_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

SAMPLE_CSV = """job_id,description,unit,quantity,unit_price
CIM-001,EXCAVACIÓN POR MEDIOS MECÁNICOS EN MATERIAL TIPO B,M3,150.50,85.75
CIM-002,EXCAVACIÓN POR MEDIOS MANUALES EN MATERIAL TIPO B,M3,25.30,125.40
EST-001,CONCRETO PREMEZCLADO F'C=250 KG/CM2,M3,45.20,2850.00
ALB-001,MURO DE BLOCK 15-20-40 CM,M2,180.75,245.60"""


class Delimiter(str, enum.Enum):
    TAB = "tab"
    COMMA = "comma"

    @property
    def character(self) -> str:
        return "\t" if self is Delimiter.TAB else ","


def delimiter_for_filename(file_name: str) -> Delimiter:
    """
    Pick the delimiter from the upload name: .csv and .txt are comma
    separated, anything else (spreadsheet exports) is tab separated.
    """

    suffix = PurePath(file_name).suffix.lower()
    if suffix in {".csv", ".txt"}:
        return Delimiter.COMMA
    return Delimiter.TAB


def generate_sample_csv() -> str:
    return SAMPLE_CSV


def lenient_float(text: str) -> float:
    """
    Read the longest numeric prefix of ``text``; return 0.0 when there is none.
    """

    match = _NUMERIC_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(0))


@dataclass(frozen=True)
class TokenizedCatalog:
    records: list[JobRecord] = field(default_factory=list)
    skipped_rows: list[SkippedRow] = field(default_factory=list)


class JobCatalogParser:
    """
    Runs tokenize -> validate -> duplicate check for one catalog upload.
    """

    def __init__(
        self,
        duplicate_detector: DuplicateDetectionService,
        *,
        batch_validator: JobBatchValidator | None = None,
    ) -> None:
        self._duplicate_detector = duplicate_detector
        self._batch_validator = batch_validator or JobBatchValidator()

    def parse(
        self,
        content: str,
        site_id: str,
        delimiter: Delimiter | str = Delimiter.COMMA,
    ) -> ImportReport:
        tokenized = self.tokenize(content, delimiter)
        records = tokenized.records

        validation = self._batch_validator.validate_batch(records)
        duplicate_check = self._duplicate_detector.check_batch_duplicates(
            site_id,
            [valid.record for valid in validation.valid_records],
        )

        valid_records = [candidate.record for candidate in duplicate_check.new_records]
        total_value = sum((record.total_price for record in valid_records), 0.0)

        logger.info(
            "Job catalog parsed site_id=%r rows=%s valid=%s invalid=%s duplicates=%s skipped=%s",
            site_id,
            len(records),
            len(valid_records),
            len(validation.invalid_records),
            len(duplicate_check.duplicates),
            len(tokenized.skipped_rows),
        )

        return ImportReport(
            site_id=site_id,
            all_records=records,
            valid_records=valid_records,
            invalid_records=validation.invalid_records,
            duplicate_records=duplicate_check.duplicates,
            total_record_count=len(records),
            total_value=total_value,
            validation_summary_text=validation.summary_text,
            duplicate_summary_text=duplicate_check.summary_text,
            skipped_rows=tokenized.skipped_rows,
        )

    def parse_tab(self, content: str, site_id: str) -> ImportReport:
        return self.parse(content, site_id, Delimiter.TAB)

    def parse_csv(self, content: str, site_id: str) -> ImportReport:
        return self.parse(content, site_id, Delimiter.COMMA)

    def tokenize(self, content: str, delimiter: Delimiter | str) -> TokenizedCatalog:
        """
        Split catalog text into job records, skipping the header line.

        Lines with fewer than five fields are reported in ``skipped_rows``.
        """

        delimiter = Delimiter(delimiter)
        records: list[JobRecord] = []
        skipped_rows: list[SkippedRow] = []

        lines = content.split("\n")
        for line_number in range(1, len(lines)):
            line = lines[line_number].strip()
            if not line:
                continue

            parts = line.split(delimiter.character)
            if delimiter is Delimiter.COMMA:
                parts = [part.replace('"', "") for part in parts]

            if len(parts) < MIN_FIELDS_PER_ROW:
                logger.info(
                    "Skipping catalog line=%s: expected %s fields, found %s",
                    line_number,
                    MIN_FIELDS_PER_ROW,
                    len(parts),
                )
                skipped_rows.append(
                    SkippedRow(
                        line_number=line_number,
                        field_count=len(parts),
                        reason=f"Row skipped: insufficient fields ({len(parts)} of {MIN_FIELDS_PER_ROW}).",
                    )
                )
                continue

            raw = RawJobInput(
                job_id=parts[0].strip() or f"JOB-{line_number}",
                description=parts[1].strip(),
                unit=parts[2].strip() or DEFAULT_UNIT,
                quantity=parts[3].strip(),
                unit_price=parts[4].strip(),
                line_number=line_number,
            )
            records.append(build_job_record(raw))

        return TokenizedCatalog(records=records, skipped_rows=skipped_rows)


def build_job_record(raw: RawJobInput) -> JobRecord:
    """
    Build the typed record for a tokenized row using the lenient number reader.
    """

    job_id = str(raw.job_id)
    return JobRecord(
        job_id=job_id,
        description=str(raw.description),
        unit=str(raw.unit),
        quantity=lenient_float(str(raw.quantity)),
        unit_price=lenient_float(str(raw.unit_price)),
        category=category_for(job_id),
        concept_id=concept_id_for(job_id),
        raw=raw,
    )
