from luxlab.photometry.interp import interpolate_candela, interpolate_candela_array
from luxlab.photometry.metrics import (
    DistributionMetrics,
    compute_distribution_metrics,
    infer_symmetry,
    nearest_plane_index,
)

__all__ = [
    "interpolate_candela",
    "interpolate_candela_array",
    "DistributionMetrics",
    "compute_distribution_metrics",
    "infer_symmetry",
    "nearest_plane_index",
]
