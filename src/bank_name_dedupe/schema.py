from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum


class InputField(IntEnum):
    """Positions of the comma-separated input record fields."""

    MICR = 0
    IFSC = 1
    BANK_NAME = 2
    MICR_LENGTH = 3
    IFSC_LENGTH = 4


class MappingField(IntEnum):
    """Positions of the identifiers in a reference mapping row."""

    IFSC = 1
    MICR = 2


class StageFile(StrEnum):
    INVALID_RECORDS = "invalid_records.csv"
    VALID_RECORDS = "valid_records.csv"
    IFSC_MATCHED = "ifsc_matched.csv"
    IFSC_UNMATCHED = "ifsc_unmatched.csv"
    MICR_MATCHED = "micr_matched.csv"
    MICR_UNMATCHED = "micr_unmatched.csv"
    IFSC_MISSING_MICR_PRESENT = "ifsc_missing_micr_present.csv"
    MICR_MISSING_IFSC_PRESENT = "micr_missing_ifsc_present.csv"
    BOTH_UNMATCHED = "ifsc_micr_both_unmatched.csv"
    BOTH_UNMATCHED_SORTED = "ifsc_micr_both_unmatched_sorted.csv"
    BANK_NAMES_CORRECTED = "bank_names_corrected.csv"
    ONLY_CORRECTED_NAMES = "only_corrected_bank_names.csv"
    EXACT_MATCHES_REPORT = "exact_matches_report.csv"
    MATCHED_RECORDS = "ifsc_matched_records.csv"


@dataclass(frozen=True)
class ReportTable:
    """Header and quoting layout of one emitted report."""

    file: StageFile
    columns: tuple[str, ...]
    quoted_columns: frozenset[str] = frozenset()

    def header(self) -> str:
        return ",".join(self.columns)


CORRECTED_DETAIL_TABLE = ReportTable(
    file=StageFile.BANK_NAMES_CORRECTED,
    columns=(
        "MICR",
        "IFSC",
        "OriginalBankName",
        "CorrectedBankName",
        "MatchScore",
        "MICR_Length",
        "IFSC_Length",
    ),
    quoted_columns=frozenset({"OriginalBankName", "CorrectedBankName"}),
)

CORRECTION_MAP_TABLE = ReportTable(
    file=StageFile.ONLY_CORRECTED_NAMES,
    columns=("OriginalBankName", "CorrectedBankName", "RecordCount"),
    quoted_columns=frozenset({"OriginalBankName", "CorrectedBankName"}),
)

GROUP_SUMMARY_TABLE = ReportTable(
    file=StageFile.EXACT_MATCHES_REPORT,
    columns=("BankName", "RecordCount", "UniqueIFSCCodes", "UniqueMICRCodes"),
    quoted_columns=frozenset({"BankName"}),
)

MATCHED_RECORDS_TABLE = ReportTable(
    file=StageFile.MATCHED_RECORDS,
    columns=("MICR", "IFSC", "OriginalBankName", "CorrectedBankName", "MICR_Length", "IFSC_Length"),
    quoted_columns=frozenset({"OriginalBankName", "CorrectedBankName"}),
)

# Files rotated into the backup directory before a full run.
ROTATED_FILES: tuple[StageFile, ...] = tuple(StageFile)
