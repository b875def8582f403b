from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

import numpy as np


def _frozen(values, empty_shape: Tuple[int, ...]) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.size == 0:
        arr = arr.reshape(empty_shape)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class PhotometricDistribution:
    """
    Angular intensity distribution of one luminaire.

    `candela` has shape [num_horizontal][num_vertical]; values already carry the
    file's candela multiplier and any TILT=INCLUDE factors. Arrays are
    read-only so a distribution can be shared between calculations.
    """

    vertical_angles: np.ndarray
    horizontal_angles: np.ndarray
    candela: np.ndarray
    metadata: Dict[str, str] = field(default_factory=dict)
    total_lumens: Optional[float] = None

    @classmethod
    def from_lists(
        cls,
        vertical_angles: Sequence[float],
        horizontal_angles: Sequence[float],
        candela: Sequence[Sequence[float]],
        metadata: Optional[Dict[str, str]] = None,
        total_lumens: Optional[float] = None,
    ) -> "PhotometricDistribution":
        return cls(
            vertical_angles=_frozen(vertical_angles, (0,)),
            horizontal_angles=_frozen(horizontal_angles, (0,)),
            candela=_frozen(candela, (len(horizontal_angles), len(vertical_angles))),
            metadata=dict(metadata or {}),
            total_lumens=total_lumens,
        )

    @property
    def num_vertical(self) -> int:
        return int(self.vertical_angles.shape[0])

    @property
    def num_horizontal(self) -> int:
        return int(self.horizontal_angles.shape[0])

    @property
    def max_candela(self) -> float:
        if self.candela.size == 0:
            return 0.0
        return float(np.max(self.candela))

    def plane(self, index: int) -> np.ndarray:
        return self.candela[index]
