from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PhotometryHeader:
    num_lamps: float
    lumens_per_lamp: float
    candela_multiplier: float
    num_vertical_angles: int
    num_horizontal_angles: int
    photometric_type: float              # 1=C, 2=B, 3=A (informational)
    units_type: float                    # 1 -> "meters", else "feet" (informational)
    width: float
    length: float
    height: float
    has_ballast_block: bool = False

    @property
    def total_lumens(self) -> float:
        return self.num_lamps * self.lumens_per_lamp

    @property
    def is_absolute(self) -> bool:
        # Absolute photometry files carry lumens_per_lamp = -1.
        return self.lumens_per_lamp <= 0
