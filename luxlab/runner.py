from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional

from luxlab.calculation.illuminance import IlluminanceGrid, calculate_rcr, compute_grid
from luxlab.database.library import LuminaireEntry, LuminaireLibrary
from luxlab.design.placement import apply_centering
from luxlab.project.schema import LayoutSpec, Project, ProjectError, validate_project
from luxlab.results.grid_viz import write_grid_heatmap_and_isolux
from luxlab.results.writers import write_grid_csv, write_result_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    project: Project
    luminaire: LuminaireEntry
    layout: LayoutSpec  # as used, offsets resolved
    grid: IlluminanceGrid
    rcr: float
    artifacts: Dict[str, Path] = field(default_factory=dict)

    def summary(self) -> Dict[str, object]:
        return {
            "project": self.project.name,
            "luminaire": self.luminaire.to_dict(),
            "luminaire_count": len(self.grid.positions),
            "grid_resolution": self.grid.resolution,
            "samples_per_point": int(self.project.calc.samples_per_point),
            "rcr": self.rcr,
            "result": self.grid.to_dict(),
        }


def resolve_luminaire(project: Project, library: Optional[LuminaireLibrary] = None) -> LuminaireEntry:
    ref = project.luminaire
    lib = library if library is not None else LuminaireLibrary.demo()
    if ref.demo:
        try:
            return lib.get(ref.demo)
        except KeyError:
            raise ProjectError(f"Unknown demo luminaire '{ref.demo}' (known: {', '.join(lib.ids())})") from None
    if ref.path:
        p = Path(ref.path).expanduser()
        if not p.is_absolute() and project.root_dir:
            p = Path(project.root_dir) / p
        if not p.is_file():
            raise ProjectError(f"Luminaire file not found: {p}")
        return lib.add_ies_file(p)
    raise ProjectError("Project does not reference a luminaire")


def run_project(
    project: Project,
    out_dir: Optional[Path] = None,
    library: Optional[LuminaireLibrary] = None,
    plots: bool = True,
) -> RunResult:
    """
    Compute the workplane grid for `project`; write artifacts when `out_dir` is given.

    ParseError from a bad luminaire file propagates unchanged.
    """
    validate_project(project)
    luminaire = resolve_luminaire(project, library)
    layout = apply_centering(project.room, project.layout)

    grid = compute_grid(
        project.room,
        layout,
        luminaire.photometry,
        grid_resolution=project.calc.grid_resolution,
        samples_per_point=project.calc.samples_per_point,
    )
    rcr = calculate_rcr(project.room)
    result = RunResult(project=project, luminaire=luminaire, layout=layout, grid=grid, rcr=rcr)
    logger.info(
        "%s: %d x %s, Eavg=%.1f lux, U0=%.2f",
        project.name,
        len(grid.positions),
        luminaire.name,
        grid.average,
        grid.uniformity,
    )

    if out_dir is None:
        return result

    out = Path(out_dir).expanduser().resolve()
    out.mkdir(parents=True, exist_ok=True)
    artifacts: Dict[str, Path] = {
        "result_json": write_result_json(out, result.summary()),
        "grid_csv": write_grid_csv(out, grid),
    }
    if plots:
        artifacts.update(write_grid_heatmap_and_isolux(out, grid))
    return replace(result, artifacts=artifacts)
