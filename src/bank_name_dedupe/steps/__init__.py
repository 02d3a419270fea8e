from bank_name_dedupe.steps.clustering import GreedyNameClusterer
from bank_name_dedupe.steps.matcher import CompositeNameMatcher
from bank_name_dedupe.steps.normalize import normalize_name
from bank_name_dedupe.steps.reference import SetReferenceComparator
from bank_name_dedupe.steps.sorting import sort_by_ifsc
from bank_name_dedupe.steps.validation import FixedLengthValidator

__all__ = [
    "CompositeNameMatcher",
    "FixedLengthValidator",
    "GreedyNameClusterer",
    "SetReferenceComparator",
    "normalize_name",
    "sort_by_ifsc",
]
