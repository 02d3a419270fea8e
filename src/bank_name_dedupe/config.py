from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class MatchWeights:
    """Blend of the five similarity metrics into one final score."""

    edit_ratio: float = 0.25
    jaro_winkler: float = 0.30
    token_sort: float = 0.20
    token_set: float = 0.15
    phonetic: float = 0.10


@dataclass(frozen=True)
class CategoryThresholds:
    """Inclusive lower bounds of each match band."""

    strong: float = 85.0
    possible: float = 70.0
    weak: float = 60.0


@dataclass(frozen=True)
class PipelineSettings:
    output_dir: Path = Path("data/output")
    backup_dir: Path | None = None
    cluster_threshold: float = 70.0
    micr_length: int = 9
    ifsc_length: int = 11
    input_delimiter: str = ","
    mapping_delimiter: str = "~"
    backup_retention_days: int = 7
    backup_min_bytes: int = 100
    weights: MatchWeights = field(default_factory=MatchWeights)
    thresholds: CategoryThresholds = field(default_factory=CategoryThresholds)

    @property
    def resolved_backup_dir(self) -> Path:
        return self.backup_dir if self.backup_dir is not None else self.output_dir / "backups"
