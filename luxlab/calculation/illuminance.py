"""
Illuminance grid engine.

Point-by-point direct illuminance on a horizontal workplane from a regular
array of identical luminaires hung at `mounting_height`:

    E = I(C, gamma) * cos(gamma) / d^2

where I comes from bilinear interpolation of the luminaire's candela table,
gamma is measured from nadir and d is the luminaire-to-point distance. Each
grid cell may be super-sampled on an s x s sub-grid; sub-samples are averaged
at full precision and only the cell value is rounded (2 decimals).

No inter-reflections: reflectances only feed the informational room cavity
ratio.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from luxlab.design.placement import LuminairePosition, luminaire_positions
from luxlab.models.distribution import PhotometricDistribution
from luxlab.photometry.interp import interpolate_candela, interpolate_candela_array
from luxlab.project.schema import LayoutSpec, RoomSpec

logger = logging.getLogger(__name__)

MIN_MOUNTING_GAP_M = 0.1


@dataclass(frozen=True)
class IlluminanceGrid:
    """Workplane illuminance, [row][col] in lux; row 0 is the smallest y."""
    grid: np.ndarray
    average: float
    minimum: float
    maximum: float
    uniformity: float  # Emin / Eavg
    positions: Tuple[LuminairePosition, ...] = field(default_factory=tuple)
    room_length: float = 0.0
    room_width: float = 0.0

    @property
    def resolution(self) -> int:
        return int(self.grid.shape[0])

    def cell_centers(self) -> Tuple[np.ndarray, np.ndarray]:
        """(x, y) arrays of cell-centre coordinates, same shape as `grid`."""
        res = self.resolution
        xs = (np.arange(res) + 0.5) / max(res, 1) * self.room_length
        ys = (np.arange(res) + 0.5) / max(res, 1) * self.room_width
        x, y = np.meshgrid(xs, ys)
        return x, y

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.tolist(),
            "average": self.average,
            "min": self.minimum,
            "max": self.maximum,
            "uniformity": self.uniformity,
            "positions": [list(p) for p in self.positions],
        }


def calculate_rcr(room: RoomSpec) -> float:
    """Room cavity ratio, informational only."""
    cavity = room.height - room.workplane_height
    if cavity <= 0:
        return 0.0
    rcr = 5.0 * cavity * (room.length + room.width) / (room.length * room.width)
    return round(rcr, 2)


def point_illuminance(
    x: float,
    y: float,
    dz: float,
    positions: Sequence[LuminairePosition],
    distribution: PhotometricDistribution,
) -> float:
    """
    Direct illuminance (lux) at workplane point (x, y) from all `positions`.

    `dz` is the vertical gap between the luminaire plane and the workplane.
    """
    total = 0.0
    for lum in positions:
        dx = x - lum.x
        dy = y - lum.y
        distance = math.sqrt(dx * dx + dy * dy + dz * dz)
        if distance == 0.0:
            continue
        horizontal_distance = math.sqrt(dx * dx + dy * dy)
        gamma_deg = math.degrees(math.atan2(horizontal_distance, dz))  # 0 = nadir
        c_deg = math.degrees(math.atan2(dy, dx)) % 360.0
        candela = interpolate_candela(distribution, c_deg, gamma_deg)
        total += candela * (dz / distance) / (distance * distance)
    return total


def _contribution(
    x: np.ndarray,
    y: np.ndarray,
    lum: LuminairePosition,
    dz: float,
    distribution: PhotometricDistribution,
) -> np.ndarray:
    dx = x - lum.x
    dy = y - lum.y
    horizontal_distance = np.hypot(dx, dy)
    distance = np.sqrt(horizontal_distance * horizontal_distance + dz * dz)
    gamma_deg = np.degrees(np.arctan2(horizontal_distance, dz))
    c_deg = np.mod(np.degrees(np.arctan2(dy, dx)), 360.0)
    candela = interpolate_candela_array(distribution, c_deg, gamma_deg)
    d2 = distance * distance
    out = np.zeros_like(distance)
    np.divide(candela * dz, distance * d2, out=out, where=distance > 0.0)
    return out


def _sample_coordinates(extent: float, res: int, samples: int) -> np.ndarray:
    """Shape (res, samples): sub-sample coordinates per cell along one axis."""
    cell = extent / res
    centers = (np.arange(res) + 0.5) / res * extent
    offsets = ((np.arange(samples) + 0.5) / samples - 0.5) * cell
    return np.clip(centers[:, None] + offsets[None, :], 0.0, extent)


def compute_grid(
    room: RoomSpec,
    layout: LayoutSpec,
    distribution: PhotometricDistribution,
    grid_resolution: int = 18,
    samples_per_point: int = 1,
) -> IlluminanceGrid:
    """
    Illuminance over a `grid_resolution` x `grid_resolution` workplane grid.

    Every call recomputes from scratch; the result is immutable.
    """
    positions = luminaire_positions(room, layout)
    dz = max(room.mounting_height - room.workplane_height, MIN_MOUNTING_GAP_M)
    res = max(1, int(grid_resolution))
    samples = max(1, int(math.floor(samples_per_point)))

    xs = _sample_coordinates(room.length, res, samples)  # [col][sx]
    ys = _sample_coordinates(room.width, res, samples)   # [row][sy]
    # axes: row, col, sy, sx
    x, y = np.broadcast_arrays(xs[None, :, None, :], ys[:, None, :, None])

    total = np.zeros(x.shape, dtype=float)
    for lum in positions:
        total += _contribution(x, y, lum, dz, distribution)

    values = np.round(total.mean(axis=(2, 3)), 2)
    values.setflags(write=False)
    count = values.size
    minimum = float(np.min(values))
    maximum = float(np.max(values))
    # float summation can drift just past the rounded cell bounds
    average = min(max(float(np.sum(values)) / count, minimum), maximum)
    uniformity = minimum / average if average > 0 else 0.0

    logger.debug(
        "Computed %dx%d grid (%d sample(s)/axis) for %d luminaire(s): avg=%.2f min=%.2f max=%.2f",
        res,
        res,
        samples,
        len(positions),
        average,
        minimum,
        maximum,
    )
    return IlluminanceGrid(
        grid=values,
        average=average,
        minimum=minimum,
        maximum=maximum,
        uniformity=uniformity,
        positions=tuple(positions),
        room_length=float(room.length),
        room_width=float(room.width),
    )
