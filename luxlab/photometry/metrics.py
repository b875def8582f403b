from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Sequence, Tuple

import numpy as np

from luxlab.models.distribution import PhotometricDistribution


Symmetry = Literal["FULL", "BILATERAL", "QUADRANT", "NONE", "UNKNOWN"]


@dataclass(frozen=True)
class DistributionMetrics:
    peak_candela: float
    peak_location: Tuple[float, float]  # (horizontal_deg, vertical_deg)
    candela_stats: Dict[str, float]     # min/max/mean/p95
    symmetry_inferred: Symmetry
    angle_ranges: Dict[str, float]      # vmin/vmax/hmin/hmax


def infer_symmetry(horizontal_deg: Sequence[float]) -> Symmetry:
    # conservative inference based on typical LM-63 practice
    if len(horizontal_deg) == 1:
        return "FULL"
    if len(horizontal_deg) == 0:
        return "UNKNOWN"
    hmin, hmax = float(horizontal_deg[0]), float(horizontal_deg[-1])
    if abs(hmin) < 1e-9 and abs(hmax - 90.0) < 1e-6:
        return "QUADRANT"
    if abs(hmin) < 1e-9 and abs(hmax - 180.0) < 1e-6:
        return "BILATERAL"
    if abs(hmin) < 1e-9 and hmax >= 270.0:
        return "NONE"
    return "UNKNOWN"


def compute_distribution_metrics(distribution: PhotometricDistribution) -> DistributionMetrics:
    cd = distribution.candela
    h = distribution.horizontal_angles
    v = distribution.vertical_angles
    if cd.size == 0:
        return DistributionMetrics(
            peak_candela=0.0,
            peak_location=(0.0, 0.0),
            candela_stats={"min": 0.0, "max": 0.0, "mean": 0.0, "p95": 0.0},
            symmetry_inferred=infer_symmetry(list(h)),
            angle_ranges={},
        )

    hi, vi = np.unravel_index(int(np.argmax(cd)), cd.shape)
    stats = {
        "min": float(np.min(cd)),
        "max": float(np.max(cd)),
        "mean": float(np.mean(cd)),
        "p95": float(np.percentile(cd, 95.0)),
    }
    angle_ranges = {
        "vmin": float(v[0]),
        "vmax": float(v[-1]),
        "hmin": float(h[0]),
        "hmax": float(h[-1]),
    }
    return DistributionMetrics(
        peak_candela=float(cd[hi, vi]),
        peak_location=(float(h[hi]), float(v[vi])),
        candela_stats=stats,
        symmetry_inferred=infer_symmetry(list(h)),
        angle_ranges=angle_ranges,
    )


def nearest_plane_index(horizontal_deg: Sequence[float], target_deg: float = 0.0) -> int:
    """Index of the C-plane closest to `target_deg` (first one on ties)."""
    best, best_diff = 0, float("inf")
    for idx, angle in enumerate(horizontal_deg):
        diff = abs(float(angle) - target_deg)
        if diff < best_diff:
            best, best_diff = idx, diff
    return best
