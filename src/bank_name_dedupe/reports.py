"""Writers for stage files, correction reports and the run summary.

Bank-name columns are always double-quoted with embedded quotes doubled;
every other column is written bare. Stage files that pass records through
unchanged use :func:`csv.writer`.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from bank_name_dedupe.models import (
    BankRecord,
    ClusteringResult,
    ComparisonBucket,
    ComparisonResult,
    ValidationResult,
)
from bank_name_dedupe.schema import (
    CORRECTED_DETAIL_TABLE,
    CORRECTION_MAP_TABLE,
    GROUP_SUMMARY_TABLE,
    MATCHED_RECORDS_TABLE,
    ReportTable,
    StageFile,
)

logger = logging.getLogger(__name__)


def corrected_detail_rows(result: ClusteringResult) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for record in result.records:
        corrected = result.corrected_name(record)
        rows.append(
            {
                "MICR": record.micr,
                "IFSC": record.ifsc,
                "OriginalBankName": record.bank_name,
                "CorrectedBankName": corrected,
                "MatchScore": 100.0 if record.bank_name == corrected else result.match_score(record),
                "MICR_Length": record.micr_length,
                "IFSC_Length": record.ifsc_length,
            }
        )
    return rows


def correction_map_rows(result: ClusteringResult) -> list[dict[str, object]]:
    counts = result.name_counts()
    return [
        {"OriginalBankName": original, "CorrectedBankName": corrected, "RecordCount": counts[original]}
        for original, corrected in result.correction_map.items()
    ]


def group_summary_rows(result: ClusteringResult) -> list[dict[str, object]]:
    return [
        {
            "BankName": group.canonical_name,
            "RecordCount": group.record_count,
            "UniqueIFSCCodes": group.unique_ifsc_count,
            "UniqueMICRCodes": group.unique_micr_count,
        }
        for group in result.groups.values()
    ]


def matched_record_rows(result: ClusteringResult) -> list[dict[str, object]]:
    return [
        {column: row[column] for column in MATCHED_RECORDS_TABLE.columns}
        for row in corrected_detail_rows(result)
    ]


def write_report(path: Path, table: ReportTable, rows: Iterable[Mapping[str, object]]) -> int:
    count = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        handle.write(table.header() + "\n")
        for row in rows:
            handle.write(format_report_line(table, row) + "\n")
            count += 1
    return count


def format_report_line(table: ReportTable, row: Mapping[str, object]) -> str:
    cells: list[str] = []
    for column in table.columns:
        value = row.get(column, "")
        if column in table.quoted_columns:
            cells.append(quote_name(str(value)))
        elif isinstance(value, float):
            cells.append(format_score(value))
        else:
            cells.append(str(value))
    return ",".join(cells)


def quote_name(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def format_score(score: float) -> str:
    return f"{score:g}"


def write_records(path: Path, records: Iterable[BankRecord]) -> int:
    count = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        for record in records:
            writer.writerow(record.as_row())
            count += 1
    return count


def write_validation_files(output_dir: Path, result: ValidationResult) -> dict[str, Path]:
    paths = {
        "valid_records": output_dir / StageFile.VALID_RECORDS,
        "invalid_records": output_dir / StageFile.INVALID_RECORDS,
    }
    write_records(paths["valid_records"], result.valid)
    write_records(paths["invalid_records"], result.invalid)
    return paths


def write_comparison_files(
    output_dir: Path,
    comparison: ComparisonResult,
    sorted_records: Iterable[BankRecord],
) -> dict[str, Path]:
    outputs: dict[str, tuple[StageFile, Iterable[BankRecord]]] = {
        "ifsc_matched": (StageFile.IFSC_MATCHED, comparison.ifsc_matched),
        "ifsc_unmatched": (StageFile.IFSC_UNMATCHED, comparison.ifsc_unmatched),
        "micr_matched": (StageFile.MICR_MATCHED, comparison.micr_matched),
        "micr_unmatched": (StageFile.MICR_UNMATCHED, comparison.micr_unmatched),
        "ifsc_missing_micr_present": (
            StageFile.IFSC_MISSING_MICR_PRESENT,
            comparison.bucket(ComparisonBucket.IFSC_MISSING_MICR_PRESENT),
        ),
        "micr_missing_ifsc_present": (
            StageFile.MICR_MISSING_IFSC_PRESENT,
            comparison.bucket(ComparisonBucket.MICR_MISSING_IFSC_PRESENT),
        ),
        "both_unmatched": (StageFile.BOTH_UNMATCHED, comparison.bucket(ComparisonBucket.BOTH_UNMATCHED)),
        "both_unmatched_sorted": (StageFile.BOTH_UNMATCHED_SORTED, sorted_records),
    }
    paths: dict[str, Path] = {}
    for key, (stage_file, records) in outputs.items():
        paths[key] = output_dir / stage_file
        write_records(paths[key], records)
    return paths


def write_clustering_reports(output_dir: Path, result: ClusteringResult) -> dict[str, Path]:
    tables = {
        "bank_names_corrected": (CORRECTED_DETAIL_TABLE, corrected_detail_rows(result)),
        "only_corrected_names": (CORRECTION_MAP_TABLE, correction_map_rows(result)),
        "exact_matches_report": (GROUP_SUMMARY_TABLE, group_summary_rows(result)),
        "matched_records": (MATCHED_RECORDS_TABLE, matched_record_rows(result)),
    }
    paths: dict[str, Path] = {}
    for key, (table, rows) in tables.items():
        paths[key] = output_dir / table.file
        written = write_report(paths[key], table, rows)
        logger.info("Wrote %d rows to %s", written, paths[key])
    return paths


def build_clustering_summary(result: ClusteringResult) -> dict[str, object]:
    group_sizes = [group.record_count for group in result.groups.values()]
    return {
        "total_records": len(result.records),
        "original_unique_names": result.original_unique_names,
        "unique_groups": result.unique_groups,
        "corrections_made": result.corrections_made,
        "avg_group_size": round(sum(group_sizes) / len(group_sizes), 3) if group_sizes else 0.0,
        "max_group_size": max(group_sizes) if group_sizes else 0,
    }


def group_sample_payload(result: ClusteringResult, limit: int = 10) -> list[dict[str, Any]]:
    """Largest groups first, each with the distinct names folded into it."""
    ranked = sorted(result.groups.values(), key=lambda group: (-group.record_count, group.canonical_name))
    counts = result.name_counts()
    payload: list[dict[str, Any]] = []
    for group in ranked[:limit]:
        variants = [
            {
                "name": original,
                "records": counts[original],
                "score": result.correction_scores[original],
            }
            for original, canonical in result.correction_map.items()
            if canonical == group.canonical_name
        ]
        payload.append(
            {
                "canonical_name": group.canonical_name,
                "size": group.record_count,
                "unique_ifsc": group.unique_ifsc_count,
                "unique_micr": group.unique_micr_count,
                "variants": variants,
            }
        )
    return payload


def write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
