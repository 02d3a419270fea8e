from __future__ import annotations

import argparse
import csv
import json
import logging
from datetime import timedelta
from pathlib import Path

from bank_name_dedupe.backups import (
    BackupNotFoundError,
    backup_existing_files,
    backup_file_path,
    cleanup_old_backups,
    list_backups,
)
from bank_name_dedupe.config import PipelineSettings
from bank_name_dedupe.datasets import SyntheticBankDataset
from bank_name_dedupe.models import ClusteringResult, ComparisonBucket, ComparisonResult, ValidationResult
from bank_name_dedupe.readers import InputSourceError, read_mapping, read_records
from bank_name_dedupe.reports import (
    build_clustering_summary,
    group_sample_payload,
    write_clustering_reports,
    write_comparison_files,
    write_json,
    write_validation_files,
)
from bank_name_dedupe.runners import LocalBankPipeline
from bank_name_dedupe.schema import ROTATED_FILES, StageFile
from bank_name_dedupe.steps import (
    CompositeNameMatcher,
    FixedLengthValidator,
    GreedyNameClusterer,
    SetReferenceComparator,
    sort_by_ifsc,
)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return

    settings = _settings_from_args(args)
    settings.output_dir.mkdir(parents=True, exist_ok=True)

    try:
        if args.command == "validate":
            run_validate(settings, args.input)
        elif args.command == "compare":
            run_compare(settings, args.mapping)
        elif args.command == "fuzzy-match":
            run_fuzzy_match(settings, show_groups=args.show_groups)
        elif args.command == "process-all":
            run_process_all(settings, args.input, args.mapping, show_groups=args.show_groups)
        elif args.command == "backups":
            run_backups(
                settings,
                args.action,
                timestamp=getattr(args, "timestamp", None),
                filename=getattr(args, "filename", None),
            )
        elif args.command == "generate":
            run_generate(settings, size=args.size, branches=args.branches, seed=args.seed)
    except (InputSourceError, BackupNotFoundError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc


def run_validate(settings: PipelineSettings, input_path: Path) -> ValidationResult:
    records = read_records(input_path, delimiter=settings.input_delimiter)
    result = _validator(settings).validate(records)
    paths = write_validation_files(settings.output_dir, result)

    _print_pairs(
        {
            "total_records": result.total_records,
            "correct_records": result.correct_records,
            "incorrect_records": result.incorrect_records,
        }
    )
    _print_files(paths)
    return result


def run_compare(settings: PipelineSettings, mapping_path: Path) -> ComparisonResult:
    valid_path = settings.output_dir / StageFile.VALID_RECORDS
    if not valid_path.is_file():
        raise InputSourceError(f"No valid records at {valid_path}; run 'validate' first")

    records = read_records(valid_path)
    comparator = _comparator(settings, mapping_path)
    comparison = comparator.compare(records)
    sorted_records = sort_by_ifsc(comparison.bucket(ComparisonBucket.BOTH_UNMATCHED))
    paths = write_comparison_files(settings.output_dir, comparison, sorted_records)

    _print_pairs({**comparison.counts(), "sorted_records": len(sorted_records)})
    _print_files(paths)
    return comparison


def run_fuzzy_match(settings: PipelineSettings, show_groups: int = 0) -> ClusteringResult:
    sorted_path = settings.output_dir / StageFile.BOTH_UNMATCHED_SORTED
    if not sorted_path.is_file():
        raise InputSourceError(f"Sorted file not found at {sorted_path}; run 'compare' first")

    records = read_records(sorted_path)
    result = _clusterer(settings).cluster(records)
    paths = write_clustering_reports(settings.output_dir, result)
    summary = build_clustering_summary(result)
    summary_path = settings.output_dir / "summary.json"
    write_json(summary_path, {"fuzzy_matching": summary})

    _print_pairs(summary)
    _print_files({**paths, "summary": summary_path})
    _print_group_sample(result, show_groups)
    return result


def run_process_all(
    settings: PipelineSettings,
    input_path: Path,
    mapping_path: Path,
    show_groups: int = 0,
) -> None:
    outcome = backup_existing_files(
        source_dir=settings.output_dir,
        backup_dir=settings.resolved_backup_dir,
        filenames=ROTATED_FILES,
        retention=timedelta(days=settings.backup_retention_days),
        min_bytes=settings.backup_min_bytes,
    )

    records = read_records(input_path, delimiter=settings.input_delimiter)
    pipeline = LocalBankPipeline(
        validator=_validator(settings),
        comparator=_comparator(settings, mapping_path),
        clusterer=_clusterer(settings),
    )
    result = pipeline.run(records)

    paths = {
        **write_validation_files(settings.output_dir, result.validation),
        **write_comparison_files(settings.output_dir, result.comparison, result.sorted_records),
        **write_clustering_reports(settings.output_dir, result.clustering),
    }
    summary = {
        "filtering": {
            "total_records": result.validation.total_records,
            "correct_records": result.validation.correct_records,
            "incorrect_records": result.validation.incorrect_records,
        },
        "comparison": {**result.comparison.counts(), "sorted_records": len(result.sorted_records)},
        "fuzzy_matching": build_clustering_summary(result.clustering),
        "backup": {
            "files_backed_up": len(outcome.backed_up),
            "old_files_deleted": outcome.deleted_count,
        },
    }
    summary_path = settings.output_dir / "summary.json"
    write_json(summary_path, summary)

    for section, values in summary.items():
        print(f"[{section}]")
        _print_pairs(values)
    _print_files({**paths, "summary": summary_path})
    _print_group_sample(result.clustering, show_groups)


def run_backups(
    settings: PipelineSettings,
    action: str,
    timestamp: str | None = None,
    filename: str | None = None,
) -> None:
    backup_dir = settings.resolved_backup_dir
    if action == "show":
        path = backup_file_path(backup_dir, timestamp or "", filename or "")
        print(path.read_text(encoding="utf-8"), end="")
        return
    if action == "cleanup":
        deleted = cleanup_old_backups(backup_dir, retention=timedelta(days=settings.backup_retention_days))
        print(f"deleted_files={deleted}")
        return

    backups = list_backups(backup_dir)
    payload = [
        {
            "timestamp": backup.timestamp,
            "created_at": backup.created_at.isoformat(),
            "file_count": backup.file_count,
            "files": backup.files,
        }
        for backup in backups
    ]
    print(json.dumps(payload, indent=2))


def run_generate(settings: PipelineSettings, size: int, branches: int, seed: int) -> None:
    dataset = SyntheticBankDataset(seed=seed).generate(size=size, branches=branches)
    input_path = settings.output_dir / "synthetic_input.csv"
    mapping_path = settings.output_dir / "synthetic_mapping.txt"
    _write_rows(input_path, dataset.input_rows, delimiter=settings.input_delimiter)
    _write_rows(mapping_path, dataset.mapping_rows, delimiter=settings.mapping_delimiter)
    _print_pairs({"input_rows": len(dataset.input_rows), "mapping_rows": len(dataset.mapping_rows)})
    _print_files({"input": input_path, "mapping": mapping_path})


def _validator(settings: PipelineSettings) -> FixedLengthValidator:
    return FixedLengthValidator(micr_length=settings.micr_length, ifsc_length=settings.ifsc_length)


def _comparator(settings: PipelineSettings, mapping_path: Path) -> SetReferenceComparator:
    return SetReferenceComparator.from_mapping(
        read_mapping(mapping_path, delimiter=settings.mapping_delimiter),
        micr_length=settings.micr_length,
        ifsc_length=settings.ifsc_length,
    )


def _clusterer(settings: PipelineSettings) -> GreedyNameClusterer:
    matcher = CompositeNameMatcher(weights=settings.weights, thresholds=settings.thresholds)
    return GreedyNameClusterer(matcher=matcher, threshold=settings.cluster_threshold)


def _settings_from_args(args: argparse.Namespace) -> PipelineSettings:
    return PipelineSettings(
        output_dir=args.output_dir,
        backup_dir=args.backup_dir,
        cluster_threshold=getattr(args, "threshold", 70.0),
        backup_retention_days=args.retention_days,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bank-name-dedupe", description="Bank record validation and name clustering")
    parser.add_argument("--output-dir", type=Path, default=Path("data/output"))
    parser.add_argument("--backup-dir", type=Path, default=None)
    parser.add_argument("--retention-days", type=int, default=7)
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    subparsers = parser.add_subparsers(dest="command")

    validate_parser = subparsers.add_parser("validate", help="Split input records into valid and invalid rows")
    validate_parser.add_argument("input", type=Path)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Cross-reference valid records against a mapping table and sort the unmatched ones",
    )
    compare_parser.add_argument("--mapping", type=Path, required=True)

    fuzzy_parser = subparsers.add_parser("fuzzy-match", help="Cluster bank names of the sorted unmatched records")
    fuzzy_parser.add_argument("--threshold", type=float, default=70.0)
    fuzzy_parser.add_argument("--show-groups", type=int, default=0)

    process_parser = subparsers.add_parser("process-all", help="Back up previous outputs and run every stage")
    process_parser.add_argument("input", type=Path)
    process_parser.add_argument("--mapping", type=Path, required=True)
    process_parser.add_argument("--threshold", type=float, default=70.0)
    process_parser.add_argument("--show-groups", type=int, default=0)

    backups_parser = subparsers.add_parser("backups", help="List, prune or read backup sets")
    backup_actions = backups_parser.add_subparsers(dest="action", required=True)
    backup_actions.add_parser("list", help="Show backup sets, newest first")
    backup_actions.add_parser("cleanup", help="Delete backup sets past the retention window")
    show_parser = backup_actions.add_parser("show", help="Print one file from a backup set")
    show_parser.add_argument("timestamp")
    show_parser.add_argument("filename")

    generate_parser = subparsers.add_parser("generate", help="Write a synthetic input file and mapping table")
    generate_parser.add_argument("--size", type=int, default=2000)
    generate_parser.add_argument("--branches", type=int, default=200)
    generate_parser.add_argument("--seed", type=int, default=42)

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _write_rows(path: Path, rows: list[list[str]], delimiter: str) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, delimiter=delimiter, lineterminator="\n")
        writer.writerows(rows)


def _print_pairs(values: dict[str, object]) -> None:
    for key, value in values.items():
        print(f"{key}={value}")


def _print_files(paths: dict[str, Path]) -> None:
    print("---")
    for key, path in paths.items():
        print(f"{key}: {path}")


def _print_group_sample(result: ClusteringResult, limit: int) -> None:
    if limit <= 0:
        return
    print("---")
    print("sample_groups=")
    print(json.dumps(group_sample_payload(result, limit=limit), indent=2))


if __name__ == "__main__":
    main()
