from __future__ import annotations

import random
from dataclasses import dataclass

from bank_name_dedupe.datasets.profiles import BANK_CATALOGUE, CITY_CODES, SUFFIX_VARIANTS

_BRANCH_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ0123456789"


@dataclass(slots=True)
class SyntheticDataset:
    input_rows: list[list[str]]
    mapping_rows: list[list[str]]


@dataclass(frozen=True, slots=True)
class _Branch:
    bank_name: str
    ifsc: str
    micr: str


class SyntheticBankDataset:
    """Generate bank records with noisy bank names plus a reference mapping table.

    ``registered_rate`` of the branches are listed in the mapping table; the
    rest only appear in the input, which is what feeds the name clustering.
    """

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate(
        self,
        size: int,
        branches: int = 200,
        variant_rate: float = 0.35,
        invalid_rate: float = 0.05,
        registered_rate: float = 0.6,
    ) -> SyntheticDataset:
        if size <= 0:
            return SyntheticDataset(input_rows=[], mapping_rows=[])

        branch_pool = [self._branch(i) for i in range(max(1, branches))]
        registered = [branch for branch in branch_pool if self._rng.random() < registered_rate]
        mapping_rows = [[branch.bank_name, branch.ifsc, branch.micr] for branch in registered]

        input_rows: list[list[str]] = []
        for _ in range(size):
            branch = self._rng.choice(branch_pool)
            name = branch.bank_name
            if self._rng.random() < variant_rate:
                name = self._name_variant(name)
            micr, ifsc = branch.micr, branch.ifsc
            if self._rng.random() < invalid_rate:
                micr, ifsc = self._malformed_codes(micr, ifsc)
            input_rows.append([micr, ifsc, name, str(len(micr)), str(len(ifsc))])

        return SyntheticDataset(input_rows=input_rows, mapping_rows=mapping_rows)

    def _branch(self, idx: int) -> _Branch:
        bank_name, ifsc_prefix, micr_bank = self._rng.choice(BANK_CATALOGUE)
        branch_code = "".join(self._rng.choice(_BRANCH_ALPHABET) for _ in range(6))
        city = self._rng.choice(CITY_CODES)
        return _Branch(
            bank_name=bank_name,
            ifsc=f"{ifsc_prefix}0{branch_code}",
            micr=f"{city}{micr_bank}{idx % 1000:03d}",
        )

    def _name_variant(self, name: str) -> str:
        variant = self._rng.choice(["case", "spacing", "suffix", "typo", "punctuation"])

        if variant == "case":
            return self._rng.choice([name.lower(), name.title()])
        if variant == "spacing":
            words = name.split()
            at = self._rng.randrange(len(words))
            words[at] = f" {words[at]}"
            return " ".join(words)
        if variant == "suffix":
            words = name.split()
            if words[-1] in SUFFIX_VARIANTS:
                words[-1] = SUFFIX_VARIANTS[words[-1]]
            else:
                words.append("LTD")
            return " ".join(words)
        if variant == "typo" and len(name) > 6:
            at = self._rng.randrange(1, len(name) - 1)
            if name[at] != " ":
                return name[:at] + name[at + 1 :]
            return name
        return name.replace(" ", ". ", 1)

    def _malformed_codes(self, micr: str, ifsc: str) -> tuple[str, str]:
        if self._rng.random() < 0.5:
            return micr[:-1], ifsc
        return micr, ifsc + "X"
