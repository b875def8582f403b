from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class TiltData:
    angles_deg: List[float]
    factors: List[float]

    def __len__(self) -> int:
        return len(self.factors)

    def apply(self, row: Sequence[float]) -> List[float]:
        """
        Scale one horizontal-plane row of candela values.

        Rows with exactly one factor per sample are scaled element-wise;
        any other row length gets the first factor applied uniformly.
        """
        if not self.angles_deg or len(self.angles_deg) != len(self.factors):
            return list(row)
        if len(row) == len(self.factors):
            return [v * f for v, f in zip(row, self.factors)]
        first = self.factors[0] if self.factors else 1.0
        return [v * first for v in row]
