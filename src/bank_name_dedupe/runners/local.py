from __future__ import annotations

from collections.abc import Iterable

from bank_name_dedupe.interfaces import NameClusterer, RecordValidator, ReferenceComparator
from bank_name_dedupe.models import BankRecord, ComparisonBucket, PipelineResult
from bank_name_dedupe.steps.sorting import sort_by_ifsc


class LocalBankPipeline:
    """Validate, cross-reference, sort and cluster bank records in memory."""

    def __init__(
        self,
        validator: RecordValidator,
        comparator: ReferenceComparator,
        clusterer: NameClusterer,
    ) -> None:
        self._validator = validator
        self._comparator = comparator
        self._clusterer = clusterer

    def run(self, records: Iterable[BankRecord]) -> PipelineResult:
        validation = self._validator.validate(records)
        comparison = self._comparator.compare(validation.valid)
        sorted_records = sort_by_ifsc(comparison.bucket(ComparisonBucket.BOTH_UNMATCHED))
        clustering = self._clusterer.cluster(sorted_records)
        return PipelineResult(
            validation=validation,
            comparison=comparison,
            sorted_records=sorted_records,
            clustering=clustering,
        )
