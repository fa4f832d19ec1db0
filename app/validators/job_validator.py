"""
app/validators/job_validator.py

Field-level and batch validation for job catalog rows.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from app.domain.job_catalog import (
    BatchValidationResult,
    InvalidJob,
    JobRecord,
    RawJobInput,
    ValidationOutcome,
    ValidJob,
)
from app.domain.job_taxonomy import VALID_CATEGORY_PREFIXES, VALID_UNITS, job_prefix

logger = logging.getLogger(__name__)

JOB_ID_PATTERN = re.compile(r"^[A-Z]{3}-\d{3}$")
# Plain decimal or exponent notation; no digit separators, no inf/nan.
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class StringRule:
    field: str
    min_length: int
    max_length: int
    pattern: re.Pattern[str] | None = None


@dataclass(frozen=True)
class NumberRule:
    field: str
    minimum: Decimal
    maximum: Decimal


STRING_RULES: tuple[StringRule, ...] = (
    StringRule(field="job_id", min_length=3, max_length=20, pattern=JOB_ID_PATTERN),
    StringRule(field="description", min_length=10, max_length=1000),
    StringRule(field="unit", min_length=1, max_length=20),
)

NUMBER_RULES: tuple[NumberRule, ...] = (
    NumberRule(field="quantity", minimum=Decimal("0.01"), maximum=Decimal("999999.99")),
    NumberRule(field="unit_price", minimum=Decimal("0.01"), maximum=Decimal("999999.99")),
)


class JobFieldValidator:
    """
    Validates one raw catalog row against the declared field rules.

    Every rule is evaluated; failures are collected rather than returned on
    the first error. Unknown units and job_id prefixes only produce warnings.
    """

    def validate(self, raw: RawJobInput) -> ValidationOutcome:
        errors: list[str] = []
        warnings: list[str] = []

        for string_rule in STRING_RULES:
            self._check_string(
                rule=string_rule,
                value=getattr(raw, string_rule.field),
                errors=errors,
            )
        for number_rule in NUMBER_RULES:
            self._check_number(
                rule=number_rule,
                value=getattr(raw, number_rule.field),
                errors=errors,
            )

        self._check_unit_whitelist(value=raw.unit, warnings=warnings)
        self._check_category_prefix(value=raw.job_id, warnings=warnings)

        return ValidationOutcome(errors=tuple(errors), warnings=tuple(warnings))

    def _check_string(
        self,
        *,
        rule: StringRule,
        value: Any,
        errors: list[str],
    ) -> None:
        if self._is_blank(value):
            errors.append(f"{rule.field} is required.")
            return
        if not isinstance(value, str):
            errors.append(f"{rule.field} must be a string.")
            return

        length = len(value)
        if length < rule.min_length:
            errors.append(f"{rule.field} must be at least {rule.min_length} characters long.")
        if length > rule.max_length:
            errors.append(f"{rule.field} must be at most {rule.max_length} characters long.")
        if rule.pattern is not None and not rule.pattern.match(value):
            errors.append(f"{rule.field} '{value}' does not match the format XXX-000.")

    def _check_number(
        self,
        *,
        rule: NumberRule,
        value: Any,
        errors: list[str],
    ) -> None:
        if self._is_blank(value):
            errors.append(f"{rule.field} is required.")
            return

        parsed = self._parse_decimal(value)
        if parsed is None:
            errors.append(f"{rule.field} must be a valid number, got '{value}'.")
            return

        if parsed < rule.minimum:
            errors.append(f"{rule.field} must be at least {rule.minimum}.")
        if parsed > rule.maximum:
            errors.append(f"{rule.field} must be at most {rule.maximum}.")

    def _check_unit_whitelist(self, *, value: Any, warnings: list[str]) -> None:
        if not isinstance(value, str) or self._is_blank(value):
            return
        if value.strip().upper() not in VALID_UNITS:
            allowed = ", ".join(VALID_UNITS)
            warnings.append(f"Unit '{value}' is not recognized. Valid units: {allowed}.")

    def _check_category_prefix(self, *, value: Any, warnings: list[str]) -> None:
        if not isinstance(value, str) or self._is_blank(value):
            return
        prefix = job_prefix(value)
        if prefix not in VALID_CATEGORY_PREFIXES:
            allowed = ", ".join(VALID_CATEGORY_PREFIXES)
            warnings.append(f"Category prefix '{prefix}' is not recognized. Valid prefixes: {allowed}.")

    @staticmethod
    def _parse_decimal(value: Any) -> Decimal | None:
        if isinstance(value, bool):
            return None
        text = str(value).strip()
        if NUMBER_PATTERN.fullmatch(text) is None:
            return None
        try:
            parsed = Decimal(text)
        except (InvalidOperation, ValueError):
            return None
        if not parsed.is_finite():
            return None
        return parsed

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and value.strip() == ""


class JobBatchValidator:
    """
    Applies the field validator to a batch, preserving input order.
    """

    def __init__(
        self,
        *,
        field_validator: JobFieldValidator | None = None,
        log_validation_errors: bool = True,
    ) -> None:
        self._field_validator = field_validator or JobFieldValidator()
        self._log_validation_errors = log_validation_errors

    def validate_batch(self, records: Sequence[JobRecord]) -> BatchValidationResult:
        valid_records: list[ValidJob] = []
        invalid_records: list[InvalidJob] = []
        total_warnings = 0

        for row_index, record in enumerate(records, start=1):
            outcome = self._field_validator.validate(record.raw)
            total_warnings += len(outcome.warnings)

            if outcome.is_valid:
                valid_records.append(ValidJob(record=record, warnings=outcome.warnings))
                continue

            invalid = InvalidJob(
                row_index=row_index,
                record=record,
                errors=outcome.errors,
                warnings=outcome.warnings,
            )
            invalid_records.append(invalid)
            if self._log_validation_errors:
                logger.warning(
                    "Job catalog validation failed row=%s job_id=%r errors=%s",
                    row_index,
                    record.job_id,
                    "; ".join(outcome.errors),
                )

        summary_text = (
            f"Validated {len(records)} jobs: {len(valid_records)} valid, "
            f"{len(invalid_records)} invalid, {total_warnings} warnings."
        )
        return BatchValidationResult(
            valid_records=valid_records,
            invalid_records=invalid_records,
            total_warnings=total_warnings,
            summary_text=summary_text,
        )
