from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from bank_name_dedupe.schema import InputField


class MatchCategory(StrEnum):
    STRONG_MATCH = "STRONG_MATCH"
    POSSIBLE_MATCH = "POSSIBLE_MATCH"
    WEAK_MATCH = "WEAK_MATCH"
    NO_MATCH = "NO_MATCH"


@dataclass(frozen=True, slots=True)
class BankRecord:
    """One bank account row: MICR/IFSC identifiers plus a free-text bank name."""

    micr: str
    ifsc: str
    bank_name: str
    micr_length: str = ""
    ifsc_length: str = ""
    raw: tuple[str, ...] = field(default=(), compare=False, repr=False)

    @classmethod
    def from_fields(cls, fields: Sequence[object]) -> "BankRecord":
        values = [_cell(value) for value in fields]
        padded = values + [""] * (len(InputField) - len(values))
        return cls(
            micr=padded[InputField.MICR].strip(),
            ifsc=padded[InputField.IFSC].strip(),
            bank_name=padded[InputField.BANK_NAME].strip(),
            micr_length=padded[InputField.MICR_LENGTH].strip(),
            ifsc_length=padded[InputField.IFSC_LENGTH].strip(),
            raw=tuple(values),
        )

    def as_row(self) -> list[str]:
        if self.raw:
            return list(self.raw)
        return [self.micr, self.ifsc, self.bank_name, self.micr_length, self.ifsc_length]


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of one pairwise bank-name comparison."""

    scores: dict[str, float]
    final_score: float
    category: MatchCategory

    @classmethod
    def no_match(cls) -> "MatchResult":
        return cls(scores={}, final_score=0.0, category=MatchCategory.NO_MATCH)

    @classmethod
    def strong_match(cls, score: float = 100.0) -> "MatchResult":
        return cls(scores={}, final_score=score, category=MatchCategory.STRONG_MATCH)


@dataclass(slots=True)
class ClusterGroup:
    """Records whose bank names resolved to the same canonical name."""

    canonical_name: str
    members: list[BankRecord] = field(default_factory=list)

    @property
    def record_count(self) -> int:
        return len(self.members)

    @property
    def unique_ifsc_count(self) -> int:
        return len({member.ifsc for member in self.members})

    @property
    def unique_micr_count(self) -> int:
        return len({member.micr for member in self.members})


@dataclass(frozen=True, slots=True)
class ClusteringResult:
    records: tuple[BankRecord, ...]
    groups: dict[str, ClusterGroup]
    correction_map: dict[str, str]
    correction_scores: dict[str, float]

    @property
    def original_unique_names(self) -> int:
        return len(self.correction_map)

    @property
    def unique_groups(self) -> int:
        return len(self.groups)

    @property
    def corrections_made(self) -> int:
        return sum(1 for original, canonical in self.correction_map.items() if original != canonical)

    def corrected_name(self, record: BankRecord) -> str:
        return self.correction_map[record.bank_name]

    def match_score(self, record: BankRecord) -> float:
        return self.correction_scores[record.bank_name]

    def name_counts(self) -> Counter[str]:
        return Counter(record.bank_name for record in self.records)


@dataclass(slots=True)
class ValidationResult:
    valid: list[BankRecord]
    invalid: list[BankRecord]

    @property
    def total_records(self) -> int:
        return len(self.valid) + len(self.invalid)

    @property
    def correct_records(self) -> int:
        return len(self.valid)

    @property
    def incorrect_records(self) -> int:
        return len(self.invalid)


class ComparisonBucket(StrEnum):
    BOTH_MATCHED = "BOTH_MATCHED"
    IFSC_MISSING_MICR_PRESENT = "IFSC_MISSING_MICR_PRESENT"
    MICR_MISSING_IFSC_PRESENT = "MICR_MISSING_IFSC_PRESENT"
    BOTH_UNMATCHED = "BOTH_UNMATCHED"


@dataclass(slots=True)
class ComparisonResult:
    """Valid records, in input order, tagged with their reference-table bucket."""

    assignments: list[tuple[BankRecord, ComparisonBucket]] = field(default_factory=list)

    def bucket(self, bucket: ComparisonBucket) -> list[BankRecord]:
        return self._select(bucket)

    @property
    def ifsc_matched(self) -> list[BankRecord]:
        return self._select(ComparisonBucket.BOTH_MATCHED, ComparisonBucket.MICR_MISSING_IFSC_PRESENT)

    @property
    def ifsc_unmatched(self) -> list[BankRecord]:
        return self._select(ComparisonBucket.IFSC_MISSING_MICR_PRESENT, ComparisonBucket.BOTH_UNMATCHED)

    @property
    def micr_matched(self) -> list[BankRecord]:
        return self._select(ComparisonBucket.BOTH_MATCHED, ComparisonBucket.IFSC_MISSING_MICR_PRESENT)

    @property
    def micr_unmatched(self) -> list[BankRecord]:
        return self._select(ComparisonBucket.MICR_MISSING_IFSC_PRESENT, ComparisonBucket.BOTH_UNMATCHED)

    def counts(self) -> dict[str, int]:
        per_bucket = Counter(bucket for _, bucket in self.assignments)
        return {
            "ifsc_matched": per_bucket[ComparisonBucket.BOTH_MATCHED]
            + per_bucket[ComparisonBucket.MICR_MISSING_IFSC_PRESENT],
            "ifsc_unmatched": per_bucket[ComparisonBucket.IFSC_MISSING_MICR_PRESENT]
            + per_bucket[ComparisonBucket.BOTH_UNMATCHED],
            "micr_matched": per_bucket[ComparisonBucket.BOTH_MATCHED]
            + per_bucket[ComparisonBucket.IFSC_MISSING_MICR_PRESENT],
            "micr_unmatched": per_bucket[ComparisonBucket.MICR_MISSING_IFSC_PRESENT]
            + per_bucket[ComparisonBucket.BOTH_UNMATCHED],
            "ifsc_missing_micr_present": per_bucket[ComparisonBucket.IFSC_MISSING_MICR_PRESENT],
            "micr_missing_ifsc_present": per_bucket[ComparisonBucket.MICR_MISSING_IFSC_PRESENT],
            "both_missing": per_bucket[ComparisonBucket.BOTH_UNMATCHED],
        }

    def _select(self, *buckets: ComparisonBucket) -> list[BankRecord]:
        return [record for record, bucket in self.assignments if bucket in buckets]


@dataclass(slots=True)
class PipelineResult:
    validation: ValidationResult
    comparison: ComparisonResult
    sorted_records: list[BankRecord]
    clustering: ClusteringResult


def _cell(value: object) -> str:
    if value is None:
        return ""
    return str(value)
