import json
from pathlib import Path

import pytest

from bank_name_dedupe.cli import main
from bank_name_dedupe.datasets import SyntheticBankDataset
from bank_name_dedupe.models import BankRecord
from bank_name_dedupe.runners import LocalBankPipeline
from bank_name_dedupe.steps import FixedLengthValidator, GreedyNameClusterer, SetReferenceComparator


def test_pipeline_clusters_only_fully_unmatched_records() -> None:
    comparator = SetReferenceComparator.from_mapping([["HDFC BANK LTD", "HDFC0000001", "400240001"]])
    records = [
        BankRecord.from_fields(["400240001", "HDFC0000001", "HDFC BANK LTD", "9", "11"]),
        BankRecord.from_fields(["400240009", "ICIC0000009", "ICICI BANK LIMITED", "9", "11"]),
        BankRecord.from_fields(["400240008", "ICIC0000002", "ICICI BANK LTD", "9", "11"]),
        BankRecord.from_fields(["40024000", "ICIC0000003", "ICICI BANK", "8", "11"]),
        BankRecord.from_fields(["400240007", "ICIC0000004", "I.C.I.C.I. Bank Ltd", "9", "11"]),
    ]
    pipeline = LocalBankPipeline(
        validator=FixedLengthValidator(),
        comparator=comparator,
        clusterer=GreedyNameClusterer(),
    )

    result = pipeline.run(records)

    assert result.validation.incorrect_records == 1
    assert [record.ifsc for record in result.sorted_records] == ["ICIC0000002", "ICIC0000004", "ICIC0000009"]
    assert list(result.clustering.groups) == ["ICICI BANK LTD"]
    assert result.clustering.correction_map == {
        "ICICI BANK LTD": "ICICI BANK LTD",
        "I.C.I.C.I. Bank Ltd": "ICICI BANK LTD",
        "ICICI BANK LIMITED": "ICICI BANK LTD",
    }


def test_synthetic_dataset_is_deterministic() -> None:
    first = SyntheticBankDataset(seed=3).generate(size=50, branches=10)
    second = SyntheticBankDataset(seed=3).generate(size=50, branches=10)

    assert first == second
    assert len(first.input_rows) == 50
    assert all(len(row) == 5 for row in first.input_rows)


def test_cli_end_to_end(tmp_path: Path) -> None:
    out = tmp_path / "out"
    main(["--output-dir", str(out), "generate", "--size", "300", "--branches", "40", "--seed", "5"])
    main(
        [
            "--output-dir",
            str(out),
            "process-all",
            str(out / "synthetic_input.csv"),
            "--mapping",
            str(out / "synthetic_mapping.txt"),
            "--show-groups",
            "3",
        ]
    )

    summary = json.loads((out / "summary.json").read_text(encoding="utf-8"))
    assert summary["filtering"]["total_records"] == 300
    fuzzy = summary["fuzzy_matching"]
    assert fuzzy["total_records"] == summary["comparison"]["both_missing"]
    assert fuzzy["unique_groups"] <= fuzzy["original_unique_names"]
    for name in ("bank_names_corrected.csv", "only_corrected_bank_names.csv", "exact_matches_report.csv"):
        assert (out / name).is_file()

    main(["--output-dir", str(out), "process-all", str(out / "synthetic_input.csv"), "--mapping", str(out / "synthetic_mapping.txt")])
    assert list((out / "backups").iterdir())


def test_cli_stages_run_separately(tmp_path: Path) -> None:
    out = tmp_path / "out"
    main(["--output-dir", str(out), "generate", "--size", "120", "--branches", "20"])
    main(["--output-dir", str(out), "validate", str(out / "synthetic_input.csv")])
    main(["--output-dir", str(out), "compare", "--mapping", str(out / "synthetic_mapping.txt")])
    main(["--output-dir", str(out), "fuzzy-match", "--threshold", "75"])

    assert (out / "ifsc_micr_both_unmatched_sorted.csv").is_file()
    assert (out / "ifsc_matched_records.csv").is_file()


def test_cli_missing_input_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--output-dir", str(tmp_path), "validate", str(tmp_path / "absent.csv")])

    assert excinfo.value.code == 1


def test_cli_validate_keeps_rows_with_latin1_bytes(tmp_path: Path) -> None:
    path = tmp_path / "input.csv"
    path.write_bytes(b"400002001,SBIN0000001,SOCI\xc9T\xc9 BANK,9,11\n")

    main(["--output-dir", str(tmp_path / "out"), "validate", str(path)])

    valid = (tmp_path / "out" / "valid_records.csv").read_text(encoding="utf-8")
    assert valid.startswith("400002001,SBIN0000001,SOCI")


def test_cli_shows_one_backed_up_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    backup_dir = tmp_path / "out" / "backups"
    backup_dir.mkdir(parents=True)
    (backup_dir / "valid_records_2024-03-05T10-00-00.csv").write_text("400002001,SBIN0000001\n", encoding="utf-8")

    main(["--output-dir", str(tmp_path / "out"), "backups", "show", "2024-03-05T10-00-00", "valid_records.csv"])

    assert capsys.readouterr().out == "400002001,SBIN0000001\n"

    with pytest.raises(SystemExit) as excinfo:
        main(["--output-dir", str(tmp_path / "out"), "backups", "show", "2024-03-01T10-00-00", "valid_records.csv"])
    assert excinfo.value.code == 1
