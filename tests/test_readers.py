import json
from pathlib import Path

import pytest
from openpyxl import Workbook

from bank_name_dedupe.readers import (
    InputSourceError,
    UnsupportedFormatError,
    read_mapping,
    read_records,
    read_rows,
)
from bank_name_dedupe.steps import FixedLengthValidator


def test_reads_delimited_records_and_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "input.csv"
    path.write_text(
        "400002001,SBIN0000001,STATE BANK OF INDIA,9,11\n"
        "\n"
        '400002002,SBIN0000002,"BANK OF INDIA, MUMBAI",9,11\n'
        "400002003,SBIN0000003\n",
        encoding="utf-8",
    )

    records = read_records(path)

    assert len(records) == 3
    assert records[1].bank_name == "BANK OF INDIA, MUMBAI"
    assert records[2].bank_name == ""


@pytest.mark.parametrize("suffix", [".txt", ".dat", ".001"])
def test_text_suffixes_are_delimited(tmp_path: Path, suffix: str) -> None:
    path = tmp_path / f"input{suffix}"
    path.write_text("400002001,SBIN0000001,CANARA BANK,9,11\n", encoding="utf-8")

    assert read_rows(path) == [["400002001", "SBIN0000001", "CANARA BANK", "9", "11"]]


def test_mapping_uses_tilde_delimiter(tmp_path: Path) -> None:
    path = tmp_path / "mapping.txt"
    path.write_text("CANARA BANK~CNRB0000001~560015001\n~~\n", encoding="utf-8")

    assert read_mapping(path) == [["CANARA BANK", "CNRB0000001", "560015001"]]


def test_reads_first_worksheet(tmp_path: Path) -> None:
    path = tmp_path / "input.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append([400002001, "SBIN0000001", "STATE BANK OF INDIA", 9, 11])
    sheet.append([None, None, None])
    sheet.append([400002002, "SBIN0000002", None, 9, 11])
    workbook.save(path)

    records = read_records(path)

    assert [record.micr for record in records] == ["400002001", "400002002"]
    assert records[0].micr_length == "9"
    assert records[1].bank_name == ""


def test_reads_json_rows(tmp_path: Path) -> None:
    path = tmp_path / "input.json"
    path.write_text(
        json.dumps(
            [
                ["400002001", "SBIN0000001", "UCO BANK", "9", "11"],
                {"micr": "400002002", "ifsc": "SBIN0000002", "name": "UCO BANK"},
            ]
        ),
        encoding="utf-8",
    )

    records = read_records(path)

    assert [record.ifsc for record in records] == ["SBIN0000001", "SBIN0000002"]


def test_json_must_be_a_list(tmp_path: Path) -> None:
    path = tmp_path / "input.json"
    path.write_text('{"rows": []}', encoding="utf-8")

    with pytest.raises(InputSourceError):
        read_rows(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(InputSourceError):
        read_rows(tmp_path / "absent.csv")


def test_unsupported_extension_raises(tmp_path: Path) -> None:
    path = tmp_path / "input.pdf"
    path.write_text("x", encoding="utf-8")

    with pytest.raises(UnsupportedFormatError):
        read_rows(path)


def test_legacy_workbook_error_names_supported_formats(tmp_path: Path) -> None:
    path = tmp_path / "input.xls"
    path.write_bytes(b"\xd0\xcf\x11\xe0")

    with pytest.raises(UnsupportedFormatError, match=r"\.xlsx"):
        read_rows(path)


def test_byte_order_mark_is_not_part_of_first_field(tmp_path: Path) -> None:
    path = tmp_path / "input.csv"
    path.write_bytes(
        b"\xef\xbb\xbf400002001,SBIN0000001,STATE BANK OF INDIA,9,11\n"
        b"400002002,SBIN0000002,STATE BANK OF INDIA,9,11\n"
    )

    records = read_records(path)

    assert records[0].micr == "400002001"
    assert FixedLengthValidator().validate(records).correct_records == 2


def test_json_with_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "input.json"
    path.write_bytes(b'\xef\xbb\xbf[["400002001", "SBIN0000001", "UCO BANK"]]')

    assert read_rows(path) == [["400002001", "SBIN0000001", "UCO BANK"]]


def test_invalid_utf8_bytes_are_replaced(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "input.csv"
    path.write_bytes(
        b"400002001,SBIN0000001,SOCI\xc9T\xc9 GENERALE,9,11\n"
        b"400002002,SBIN0000002,CANARA BANK,9,11\n"
    )

    records = read_records(path)

    assert records[0].bank_name == "SOCI\ufffdT\ufffd GENERALE"
    assert records[1].bank_name == "CANARA BANK"
    assert "1 rows" in caplog.text
