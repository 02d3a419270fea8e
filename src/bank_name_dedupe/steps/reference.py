from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from bank_name_dedupe.models import BankRecord, ComparisonBucket, ComparisonResult
from bank_name_dedupe.schema import MappingField

logger = logging.getLogger(__name__)


class SetReferenceComparator:
    """Membership lookups of IFSC and MICR codes against a reference mapping table."""

    def __init__(self, ifsc_codes: Iterable[str], micr_codes: Iterable[str]) -> None:
        self._ifsc_codes = frozenset(ifsc_codes)
        self._micr_codes = frozenset(micr_codes)

    @classmethod
    def from_mapping(
        cls,
        rows: Iterable[Sequence[object]],
        micr_length: int = 9,
        ifsc_length: int = 11,
    ) -> "SetReferenceComparator":
        ifsc_codes: set[str] = set()
        micr_codes: set[str] = set()
        row_count = 0
        for row in rows:
            row_count += 1
            ifsc = _field(row, MappingField.IFSC)
            micr = _field(row, MappingField.MICR)
            if len(ifsc) == ifsc_length:
                ifsc_codes.add(ifsc)
            if len(micr) == micr_length:
                micr_codes.add(micr)

        logger.info(
            "Loaded %d mapping rows: %d IFSC codes, %d MICR codes",
            row_count,
            len(ifsc_codes),
            len(micr_codes),
        )
        return cls(ifsc_codes=ifsc_codes, micr_codes=micr_codes)

    def classify(self, record: BankRecord) -> ComparisonBucket:
        ifsc_known = record.ifsc in self._ifsc_codes
        micr_known = record.micr in self._micr_codes
        if ifsc_known and micr_known:
            return ComparisonBucket.BOTH_MATCHED
        if micr_known:
            return ComparisonBucket.IFSC_MISSING_MICR_PRESENT
        if ifsc_known:
            return ComparisonBucket.MICR_MISSING_IFSC_PRESENT
        return ComparisonBucket.BOTH_UNMATCHED

    def compare(self, records: Sequence[BankRecord]) -> ComparisonResult:
        result = ComparisonResult(assignments=[(record, self.classify(record)) for record in records])
        logger.info("Compared %d records against reference: %s", len(records), result.counts())
        return result


def _field(row: Sequence[object], position: int) -> str:
    if len(row) <= position or row[position] is None:
        return ""
    return str(row[position]).strip()
