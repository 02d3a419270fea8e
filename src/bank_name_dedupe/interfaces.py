from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from bank_name_dedupe.models import (
    BankRecord,
    ClusteringResult,
    ComparisonResult,
    MatchResult,
    ValidationResult,
)


class RecordValidator(Protocol):
    """Step 1: split raw records into format-valid and invalid rows."""

    def validate(self, records: Iterable[BankRecord]) -> ValidationResult:
        ...


class ReferenceComparator(Protocol):
    """Step 2: cross-reference valid records against the mapping table."""

    def compare(self, records: Sequence[BankRecord]) -> ComparisonResult:
        ...


class NameMatcher(Protocol):
    """Step 3a: score one pair of raw bank names."""

    def compare(self, left: str | None, right: str | None) -> MatchResult:
        ...


class NameClusterer(Protocol):
    """Step 3: group unmatched records by bank-name similarity."""

    def cluster(self, records: Iterable[BankRecord]) -> ClusteringResult:
        ...
