from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from bank_name_dedupe.models import BankRecord, ValidationResult

logger = logging.getLogger(__name__)


class FixedLengthValidator:
    """Valid when MICR and IFSC have exactly the expected lengths after trimming."""

    def __init__(self, micr_length: int = 9, ifsc_length: int = 11) -> None:
        self._micr_pattern = re.compile(rf".{{{micr_length}}}")
        self._ifsc_pattern = re.compile(rf".{{{ifsc_length}}}")

    def is_valid(self, record: BankRecord) -> bool:
        return bool(self._micr_pattern.fullmatch(record.micr) and self._ifsc_pattern.fullmatch(record.ifsc))

    def validate(self, records: Iterable[BankRecord]) -> ValidationResult:
        result = ValidationResult(valid=[], invalid=[])
        for record in records:
            if self.is_valid(record):
                result.valid.append(record)
            else:
                result.invalid.append(record)

        logger.info(
            "Validated %d records: %d valid, %d invalid",
            result.total_records,
            result.correct_records,
            result.incorrect_records,
        )
        return result
