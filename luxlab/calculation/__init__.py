"""
LuxLab calculation module: direct workplane illuminance from a regular
luminaire array, plus the informational room cavity ratio.
"""

from luxlab.calculation.illuminance import (
    IlluminanceGrid,
    calculate_rcr,
    compute_grid,
    point_illuminance,
)

__all__ = [
    "IlluminanceGrid",
    "calculate_rcr",
    "compute_grid",
    "point_illuminance",
]
