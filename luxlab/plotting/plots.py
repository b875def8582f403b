from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from luxlab.models.distribution import PhotometricDistribution
from luxlab.photometry.metrics import nearest_plane_index


@dataclass(frozen=True)
class PlotPaths:
    intensity_png: Path
    polar_png: Path


def _spread_planes(horizontal_deg: Sequence[float], limit: int = 4) -> List[int]:
    """At most `limit` plane indices, always including the first and last."""
    n = len(horizontal_deg)
    if n <= limit:
        return list(range(n))
    return sorted({int(round(i)) for i in np.linspace(0, n - 1, limit)})


def _save(fig, outpath: Path) -> Path:
    fig.tight_layout()
    fig.savefig(outpath, dpi=200)
    plt.close(fig)
    return outpath


def mirrored_polar_curve(distribution: PhotometricDistribution, plane_deg: float = 0.0) -> List[Tuple[float, float]]:
    """
    (angle_deg, candela) pairs of the C-plane nearest `plane_deg`, mirrored
    across nadir so a single half-plane reads as a full beam.
    """
    if distribution.num_horizontal == 0:
        return []
    row = distribution.plane(nearest_plane_index(list(distribution.horizontal_angles), plane_deg))
    points: List[Tuple[float, float]] = []
    for idx, angle in enumerate(distribution.vertical_angles):
        val = float(row[idx]) if idx < len(row) else 0.0
        points.append((float(angle), val))
        if angle != 0 and angle != 180:
            points.append((360.0 - float(angle), val))
    return sorted(points, key=lambda p: p[0])


def plot_intensity_curves(
    distribution: PhotometricDistribution,
    outpath: Path,
    plane_indices: Optional[Iterable[int]] = None,
) -> Path:
    """Candela against gamma for a handful of C-planes."""
    gammas = list(distribution.vertical_angles)
    planes = list(distribution.horizontal_angles)
    if not gammas or not planes:
        raise ValueError("Intensity curves need at least one vertical and one horizontal angle")

    fig, ax = plt.subplots()
    for idx in plane_indices if plane_indices is not None else _spread_planes(planes):
        if 0 <= idx < len(planes):
            ax.plot(gammas, list(distribution.plane(idx)), label=f"C={planes[idx]:g}°")

    ax.set_xlabel("Gamma (deg from nadir)")
    ax.set_ylabel("Intensity (cd)")
    ax.set_title("Luminous intensity by C-plane")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")
    return _save(fig, outpath)


def plot_polar(distribution: PhotometricDistribution, outpath: Path, plane_deg: float = 0.0) -> Path:
    """Polar intensity plot of the C-plane nearest `plane_deg`, 0° = nadir at the bottom."""
    curve = mirrored_polar_curve(distribution, plane_deg)
    if not curve:
        raise ValueError("Polar plot needs at least one C-plane")
    plane = float(distribution.horizontal_angles[nearest_plane_index(list(distribution.horizontal_angles), plane_deg)])

    theta = [math.radians(a) for a, _ in curve]
    r = [cd for _, cd in curve]

    fig, ax = plt.subplots(subplot_kw={"projection": "polar"})
    ax.set_theta_zero_location("S")
    ax.plot(theta, r, label=f"C={plane:g}°")
    ax.fill(theta, r, alpha=0.15)
    ax.set_rlim(0, max(max(r), 1.0))
    ax.set_title(f"Polar intensity · peak {max(r):.0f} cd")
    ax.legend(loc="lower left", bbox_to_anchor=(0.9, 0.9))
    return _save(fig, outpath)


def save_default_plots(distribution: PhotometricDistribution, outdir: Path, stem: str = "luxlab_view") -> PlotPaths:
    """Intensity curves and polar plot as `<stem>_intensity.png` / `<stem>_polar.png`."""
    outdir.mkdir(parents=True, exist_ok=True)
    paths = PlotPaths(intensity_png=outdir / f"{stem}_intensity.png", polar_png=outdir / f"{stem}_polar.png")
    plot_intensity_curves(distribution, paths.intensity_png)
    plot_polar(distribution, paths.polar_png)
    return paths
