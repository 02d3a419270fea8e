"""Bank record validation and fuzzy bank-name clustering."""

from bank_name_dedupe.models import BankRecord, ClusterGroup, ClusteringResult, MatchCategory, MatchResult

__all__ = ["BankRecord", "ClusterGroup", "ClusteringResult", "MatchCategory", "MatchResult"]
