"""Result objects for trend sweeps."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from randpath.config import GeneratorConfig, TrendConfig

# Header written to trend CSV files, kept compatible with existing analysis scripts
CSV_COLUMNS = {"iterations": "Iterations", "mean_dist": "MeanDist"}


@dataclass(frozen=True)
class TrendRecord:
    """Distance to mean measured after a number of generated paths."""

    iterations: int
    mean_dist: float


@dataclass
class TrendResult:
    """Outcome of ``calculate_trend``.

    Attributes:
        records: One record per sweep point, in sweep order.
        generator: Configuration that produced the paths.
        trend: Sweep parameters.
    """

    records: List[TrendRecord] = field(default_factory=list)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    trend: TrendConfig = field(default_factory=TrendConfig)

    def to_dataframe(self) -> pd.DataFrame:
        """Records as a DataFrame with columns ``iterations`` and ``mean_dist``."""
        return pd.DataFrame(
            [asdict(r) for r in self.records], columns=["iterations", "mean_dist"]
        )

    def to_csv(self, path: Path) -> Path:
        """Write records as CSV with an ``Iterations,MeanDist`` header."""
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().rename(columns=CSV_COLUMNS).to_csv(path, index=False)
        return path

    def summary(self) -> Dict[str, Any]:
        """Small JSON-friendly summary of the sweep."""
        if not self.records:
            return {"points": 0}
        last = self.records[-1]
        return {
            "points": len(self.records),
            "method": self.generator.method.name.lower(),
            "final_iterations": last.iterations,
            "final_mean_dist": last.mean_dist,
            "min_mean_dist": min(r.mean_dist for r in self.records),
        }
