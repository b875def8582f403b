from __future__ import annotations

from pathlib import Path
from typing import Dict

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from luxlab.calculation.illuminance import IlluminanceGrid

_FIGSIZE = (6.4, 4.2)


def _finish(fig, ax, grid: IlluminanceGrid, path: Path) -> Path:
    ax.set_xlabel("Length x (m)")
    ax.set_ylabel("Width y (m)")
    ax.set_xlim(0.0, grid.room_length)
    ax.set_ylim(0.0, grid.room_width)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path


def write_grid_heatmap_and_isolux(out_dir: Path, grid: IlluminanceGrid) -> Dict[str, Path]:
    """
    Heatmap of the workplane grid with luminaire markers, plus isolux
    contours when the grid is at least 2x2 and not flat.
    """
    written: Dict[str, Path] = {}
    if grid.resolution <= 0:
        return written

    values = grid.grid
    fig, ax = plt.subplots(figsize=_FIGSIZE)
    mesh = ax.imshow(
        values,
        origin="lower",
        extent=(0.0, grid.room_length, 0.0, grid.room_width),
        aspect="equal",
        cmap="inferno",
    )
    if grid.positions:
        ax.scatter(
            [p.x for p in grid.positions],
            [p.y for p in grid.positions],
            marker="x",
            color="cyan",
            s=30,
            label="Luminaires",
        )
        ax.legend(loc="upper right", fontsize=7)
    ax.set_title(f"Workplane illuminance: Eavg {grid.average:.0f} lux, U0 {grid.uniformity:.2f}")
    fig.colorbar(mesh, ax=ax).set_label("Illuminance (lux)")
    written["heatmap"] = _finish(fig, ax, grid, out_dir / "grid_heatmap.png")

    if grid.resolution >= 2 and grid.maximum - grid.minimum > 1e-9:
        x, y = grid.cell_centers()
        fig, ax = plt.subplots(figsize=_FIGSIZE)
        lines = ax.contour(x, y, values, levels=np.linspace(grid.minimum, grid.maximum, 10), linewidths=1.0)
        ax.clabel(lines, inline=True, fontsize=8, fmt="%.0f")
        ax.set_title("Isolux lines (lux)")
        written["isolux"] = _finish(fig, ax, grid, out_dir / "grid_isolux.png")

    return written
