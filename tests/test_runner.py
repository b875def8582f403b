from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from luxlab.database.library import LuminaireLibrary, demo_ies_path
from luxlab.parser.errors import ParseError
from luxlab.project.io import load_project, save_project
from luxlab.project.presets import default_project
from luxlab.project.schema import LuminaireRef, ProjectError
from luxlab.runner import resolve_luminaire, run_project


def test_run_without_output_dir():
    project = default_project()
    project.calc.grid_resolution = 6
    result = run_project(project)
    assert result.artifacts == {}
    assert result.grid.resolution == 6
    assert len(result.grid.positions) == 6
    assert result.luminaire.id == "wide-batwing"
    assert result.rcr == 4.58
    assert result.grid.minimum <= result.grid.average <= result.grid.maximum
    assert 0.0 < result.grid.uniformity <= 1.0


def test_centered_layout_is_resolved():
    project = default_project()
    project.layout.offset_x = 0.0
    project.layout.offset_y = 0.0
    project.calc.grid_resolution = 4
    result = run_project(project)
    assert result.layout.offset_x == 1.5
    xs = sorted({p.x for p in result.grid.positions})
    assert xs == pytest.approx([1.5, 3.0, 4.5])


def test_artifacts_written(tmp_path: Path):
    project = default_project(demo="narrow-beam")
    project.calc.grid_resolution = 5
    result = run_project(project, out_dir=tmp_path, plots=False)
    assert set(result.artifacts) == {"result_json", "grid_csv"}

    data = json.loads((tmp_path / "result.json").read_text(encoding="utf-8"))
    assert data["project"] == project.name
    assert data["luminaire"]["id"] == "narrow-beam"
    assert data["luminaire_count"] == 6
    assert data["grid_resolution"] == 5
    assert len(data["result"]["grid"]) == 5
    assert data["result"]["average"] == pytest.approx(result.grid.average)

    rows = (tmp_path / "grid.csv").read_text(encoding="utf-8").strip().splitlines()
    assert rows[0] == "x,y,illuminance"
    assert len(rows) == 1 + 25


def test_plots_written(tmp_path: Path):
    project = default_project()
    project.calc.grid_resolution = 8
    result = run_project(project, out_dir=tmp_path)
    assert result.artifacts["heatmap"].exists()
    assert result.artifacts["isolux"].exists()


def test_relative_luminaire_path(tmp_path: Path):
    shutil.copy(demo_ies_path("symmetric-soft"), tmp_path / "soft.ies")
    project = default_project()
    project.luminaire = LuminaireRef(path="soft.ies")
    project.calc.grid_resolution = 3
    loaded = load_project(save_project(project, tmp_path / "p.json"))
    result = run_project(loaded)
    assert result.luminaire.id == "upload-soft"
    assert result.luminaire.lumens == 3000


def test_unknown_demo_and_missing_file():
    lib = LuminaireLibrary.demo()
    project = default_project(demo="does-not-exist")
    with pytest.raises(ProjectError, match="Unknown demo luminaire 'does-not-exist'"):
        resolve_luminaire(project, lib)
    project.luminaire = LuminaireRef(path="/nonexistent/x.ies")
    with pytest.raises(ProjectError, match="Luminaire file not found"):
        resolve_luminaire(project, lib)


def test_bad_luminaire_file_raises_parse_error(tmp_path: Path):
    bad = tmp_path / "bad.ies"
    bad.write_text("IESNA:LM-63-2002\n[TEST] no tilt\n1 2 3\n", encoding="utf-8")
    project = default_project()
    project.luminaire = LuminaireRef(path=str(bad))
    with pytest.raises(ParseError, match="Missing TILT specification"):
        run_project(project)


def test_invalid_project_rejected_before_work():
    project = default_project()
    project.room.length = 0.0
    with pytest.raises(ProjectError, match="room.length"):
        run_project(project)
