from __future__ import annotations

import argparse
import csv
from pathlib import Path

from bank_name_dedupe.datasets import SyntheticBankDataset


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic bank records and a reference mapping table")
    parser.add_argument("--size", type=int, default=10000)
    parser.add_argument("--branches", type=int, default=500)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--variant-rate", type=float, default=0.35)
    parser.add_argument("--output", type=Path, default=Path("data/reference_bank_records.csv"))
    parser.add_argument("--mapping-output", type=Path, default=Path("data/reference_bank_mapping.txt"))
    args = parser.parse_args()

    dataset = SyntheticBankDataset(seed=args.seed).generate(
        size=args.size,
        branches=args.branches,
        variant_rate=args.variant_rate,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", newline="", encoding="utf-8") as handle:
        csv.writer(handle, lineterminator="\n").writerows(dataset.input_rows)

    args.mapping_output.parent.mkdir(parents=True, exist_ok=True)
    with args.mapping_output.open("w", newline="", encoding="utf-8") as handle:
        csv.writer(handle, delimiter="~", lineterminator="\n").writerows(dataset.mapping_rows)


if __name__ == "__main__":
    main()
