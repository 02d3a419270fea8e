from __future__ import annotations

import logging
from collections.abc import Iterable

from bank_name_dedupe.interfaces import NameMatcher
from bank_name_dedupe.models import BankRecord, ClusterGroup, ClusteringResult
from bank_name_dedupe.steps.matcher import CompositeNameMatcher

logger = logging.getLogger(__name__)


class GreedyNameClusterer:
    """Single-pass, single-link clustering of bank names in input order.

    Each distinct name is compared once against the canonical name of every
    group created so far and joins the best group scoring at least
    ``threshold``; otherwise it founds a new group and becomes its canonical
    name. Ties go to the earliest group. Later records bearing an
    already-seen name join that name's group without another search.
    """

    def __init__(self, matcher: NameMatcher | None = None, threshold: float = 70.0) -> None:
        self._matcher = matcher or CompositeNameMatcher()
        self._threshold = threshold

    def cluster(self, records: Iterable[BankRecord]) -> ClusteringResult:
        builder = _GroupBuilder()

        for record in records:
            name = record.bank_name
            if builder.has_name(name):
                builder.append(record)
                continue

            best_group: str | None = None
            best_score = 0.0
            for canonical in builder.canonical_names():
                score = self._matcher.compare(name, canonical).final_score
                if score > best_score and score >= self._threshold:
                    best_score = score
                    best_group = canonical

            if best_group is None:
                logger.debug("New group %r", name)
                builder.start_group(record)
            else:
                logger.debug("Assigned %r -> %r (score=%.2f)", name, best_group, best_score)
                builder.join_group(record, best_group, best_score)

        result = builder.build()
        logger.info(
            "Clustered %d records: %d distinct names into %d groups",
            len(result.records),
            result.original_unique_names,
            result.unique_groups,
        )
        return result


class _GroupBuilder:
    """Mutable state of one clustering pass; groups keep creation order."""

    def __init__(self) -> None:
        self._records: list[BankRecord] = []
        self._groups: dict[str, ClusterGroup] = {}
        self._correction_map: dict[str, str] = {}
        self._correction_scores: dict[str, float] = {}

    def has_name(self, name: str) -> bool:
        return name in self._correction_map

    def canonical_names(self) -> list[str]:
        return list(self._groups)

    def append(self, record: BankRecord) -> None:
        self._records.append(record)
        self._groups[self._correction_map[record.bank_name]].members.append(record)

    def start_group(self, record: BankRecord) -> None:
        name = record.bank_name
        self._records.append(record)
        self._groups[name] = ClusterGroup(canonical_name=name, members=[record])
        self._correction_map[name] = name
        self._correction_scores[name] = 100.0

    def join_group(self, record: BankRecord, canonical: str, score: float) -> None:
        self._records.append(record)
        self._groups[canonical].members.append(record)
        self._correction_map[record.bank_name] = canonical
        self._correction_scores[record.bank_name] = score

    def build(self) -> ClusteringResult:
        return ClusteringResult(
            records=tuple(self._records),
            groups=dict(self._groups),
            correction_map=dict(self._correction_map),
            correction_scores=dict(self._correction_scores),
        )
