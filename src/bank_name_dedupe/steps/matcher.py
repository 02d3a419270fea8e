from __future__ import annotations

import math

from bank_name_dedupe.config import CategoryThresholds, MatchWeights
from bank_name_dedupe.models import MatchCategory, MatchResult
from bank_name_dedupe.steps.normalize import normalize_name
from bank_name_dedupe.steps.similarity import (
    edit_ratio,
    jaro_winkler,
    phonetic_score,
    token_set_ratio,
    token_sort_ratio,
)

LEVENSHTEIN = "LEVENSHTEIN"
JARO_WINKLER = "JARO_WINKLER"
TOKEN_SORT = "TOKEN_SORT"
TOKEN_SET = "TOKEN_SET"
PHONETIC = "PHONETIC"


class CompositeNameMatcher:
    """Weighted blend of five string metrics over normalized bank names.

    Blank inputs never match. Names that normalize to the same string are a
    strong match at 100 without computing the metrics. Final scores are
    rounded half-up to two decimals before categorization.
    """

    def __init__(
        self,
        weights: MatchWeights | None = None,
        thresholds: CategoryThresholds | None = None,
    ) -> None:
        self._weights = weights or MatchWeights()
        self._thresholds = thresholds or CategoryThresholds()

    def compare(self, left: str | None, right: str | None) -> MatchResult:
        if not left or not right or not left.strip() or not right.strip():
            return MatchResult.no_match()

        left_name = normalize_name(left)
        right_name = normalize_name(right)
        if left_name == right_name:
            return MatchResult.strong_match(100.0)

        scores = {
            LEVENSHTEIN: edit_ratio(left_name, right_name),
            JARO_WINKLER: jaro_winkler(left_name, right_name),
            TOKEN_SORT: token_sort_ratio(left_name, right_name),
            TOKEN_SET: token_set_ratio(left_name, right_name),
            PHONETIC: phonetic_score(left_name, right_name),
        }
        weights = self._weights
        final_score = round_half_up(
            scores[LEVENSHTEIN] * weights.edit_ratio
            + scores[JARO_WINKLER] * weights.jaro_winkler
            + scores[TOKEN_SORT] * weights.token_sort
            + scores[TOKEN_SET] * weights.token_set
            + scores[PHONETIC] * weights.phonetic
        )
        return MatchResult(scores=scores, final_score=final_score, category=self.categorize(final_score))

    def categorize(self, score: float) -> MatchCategory:
        if score >= self._thresholds.strong:
            return MatchCategory.STRONG_MATCH
        if score >= self._thresholds.possible:
            return MatchCategory.POSSIBLE_MATCH
        if score >= self._thresholds.weak:
            return MatchCategory.WEAK_MATCH
        return MatchCategory.NO_MATCH


def round_half_up(value: float, digits: int = 2) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale
