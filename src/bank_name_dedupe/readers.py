"""Loading of bank record inputs and reference mapping tables.

Delimited text files go through :mod:`csv`, spreadsheets through openpyxl
(first worksheet only), and JSON files must hold a list of rows. Text inputs
may start with a UTF-8 byte order mark. Bytes that are not valid UTF-8 are
replaced with U+FFFD and reported as a warning.
"""

from __future__ import annotations

import csv
import json
import logging
import zipfile
from collections.abc import Iterator
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from bank_name_dedupe.models import BankRecord

logger = logging.getLogger(__name__)

DELIMITED_SUFFIXES = frozenset({".csv", ".txt", ".dat", ".001"})
SPREADSHEET_SUFFIXES = frozenset({".xlsx", ".xlsm"})
LEGACY_SPREADSHEET_SUFFIXES = frozenset({".xls"})
JSON_SUFFIXES = frozenset({".json"})

TEXT_ENCODING = "utf-8-sig"
TEXT_ERRORS = "replace"
_REPLACEMENT_CHAR = "\ufffd"


class InputSourceError(Exception):
    """Raised when an input file is absent or cannot be parsed."""


class UnsupportedFormatError(InputSourceError):
    """Raised for file extensions the readers do not handle."""


def read_rows(path: Path, delimiter: str = ",") -> list[list[str]]:
    """Return the non-blank rows of ``path`` as lists of strings."""
    if not path.is_file():
        raise InputSourceError(f"File does not exist: {path}")

    suffix = path.suffix.lower()
    if suffix in DELIMITED_SUFFIXES:
        rows = list(_delimited_rows(path, delimiter))
    elif suffix in SPREADSHEET_SUFFIXES:
        rows = list(_spreadsheet_rows(path))
    elif suffix in JSON_SUFFIXES:
        rows = _json_rows(path)
    elif suffix in LEGACY_SPREADSHEET_SUFFIXES:
        raise UnsupportedFormatError(
            f"Legacy Excel workbooks are not supported: {path.name}; save it as .xlsx or .csv instead"
        )
    else:
        raise UnsupportedFormatError(f"Unsupported file format: {path.suffix or path.name}")

    logger.info("Read %d rows from %s", len(rows), path)
    return rows


def read_records(path: Path, delimiter: str = ",") -> list[BankRecord]:
    return [BankRecord.from_fields(row) for row in read_rows(path, delimiter=delimiter)]


def read_mapping(path: Path, delimiter: str = "~") -> list[list[str]]:
    return read_rows(path, delimiter=delimiter)


def _delimited_rows(path: Path, delimiter: str) -> Iterator[list[str]]:
    replaced = 0
    with path.open("r", newline="", encoding=TEXT_ENCODING, errors=TEXT_ERRORS) as handle:
        for row in csv.reader(handle, delimiter=delimiter):
            if _is_blank(row):
                continue
            if any(_REPLACEMENT_CHAR in cell for cell in row):
                replaced += 1
            yield row
    if replaced:
        logger.warning("%d rows in %s contained bytes that are not valid UTF-8", replaced, path)


def _spreadsheet_rows(path: Path) -> Iterator[list[str]]:
    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, OSError) as exc:
        raise InputSourceError(f"Cannot open workbook {path}: {exc}") from exc
    try:
        sheet = workbook.worksheets[0]
        for values in sheet.iter_rows(values_only=True):
            row = ["" if value is None else str(value) for value in values]
            if _is_blank(row):
                continue
            yield row
    finally:
        workbook.close()


def _json_rows(path: Path) -> list[list[str]]:
    try:
        with path.open("r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS) as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise InputSourceError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(payload, list):
        raise InputSourceError(f"Expected a list of rows in {path}")

    rows: list[list[str]] = []
    for item in payload:
        values = item.values() if isinstance(item, dict) else item
        if isinstance(values, str) or not hasattr(values, "__iter__"):
            values = [values]
        row = ["" if value is None else str(value) for value in values]
        if not _is_blank(row):
            rows.append(row)
    return rows


def _is_blank(row: list[str]) -> bool:
    return not any(cell.strip() for cell in row)
