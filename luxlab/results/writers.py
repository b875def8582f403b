from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import numpy as np

from luxlab.calculation.illuminance import IlluminanceGrid


def write_result_json(out_dir: Path, result: Dict[str, Any]) -> Path:
    out_path = out_dir / "result.json"
    out_path.write_text(json.dumps(result, indent=2, sort_keys=True), encoding="utf-8")
    return out_path


def write_grid_csv(out_dir: Path, grid: IlluminanceGrid) -> Path:
    """One row per cell centre: x, y, illuminance (row-major, row 0 = smallest y)."""
    out_path = out_dir / "grid.csv"
    x, y = grid.cell_centers()
    data = np.column_stack([x.reshape(-1), y.reshape(-1), grid.grid.reshape(-1)])
    np.savetxt(out_path, data, delimiter=",", header="x,y,illuminance", comments="", fmt="%.4f")
    return out_path
