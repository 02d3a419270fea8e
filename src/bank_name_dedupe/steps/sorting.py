from __future__ import annotations

from collections.abc import Iterable

from bank_name_dedupe.models import BankRecord


def sort_by_ifsc(records: Iterable[BankRecord]) -> list[BankRecord]:
    # Stable: records sharing an IFSC keep input order.
    return sorted(records, key=lambda record: record.ifsc)
