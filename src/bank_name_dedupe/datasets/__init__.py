from bank_name_dedupe.datasets.profiles import BANK_CATALOGUE
from bank_name_dedupe.datasets.synthetic import SyntheticBankDataset, SyntheticDataset

__all__ = ["BANK_CATALOGUE", "SyntheticBankDataset", "SyntheticDataset"]
