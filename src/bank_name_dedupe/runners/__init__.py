from bank_name_dedupe.runners.local import LocalBankPipeline

__all__ = ["LocalBankPipeline"]
