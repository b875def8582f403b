from __future__ import annotations

import json
from pathlib import Path

import pytest

from luxlab.project.io import load_project, project_from_dict, save_project
from luxlab.project.presets import default_project, reflectance_preset
from luxlab.project.schema import LuminaireRef, ProjectError, validate_project


def _minimal() -> dict:
    return {
        "name": "Office",
        "room": {"length": 8, "width": 5, "height": 3, "mounting_height": 2.8},
        "layout": {"rows": 2, "columns": 4, "row_spacing": 2.5, "column_spacing": 2.0},
        "luminaire": {"demo": "narrow-beam"},
    }


def test_round_trip(tmp_path: Path):
    p = default_project(name="Round trip", demo="symmetric-soft")
    out = save_project(p, tmp_path / "nested" / "p.json")
    loaded = load_project(out)
    assert loaded.name == "Round trip"
    assert loaded.room == p.room
    assert loaded.layout == p.layout
    assert loaded.calc == p.calc
    assert loaded.luminaire == LuminaireRef(demo="symmetric-soft")
    assert loaded.root_dir == str(out.parent)
    assert "root_dir" not in json.loads(out.read_text(encoding="utf-8"))


def test_defaults_fill_optional_fields():
    p = project_from_dict(_minimal())
    assert p.room.workplane_height == 0.8
    assert p.room.reflectances.ceiling == 0.8
    assert p.layout.offset_x is None
    assert p.layout.centered is False
    assert p.calc.grid_resolution == 28
    assert p.calc.samples_per_point == 1


def test_missing_section_is_reported():
    d = _minimal()
    del d["room"]
    with pytest.raises(ProjectError, match="Missing 'room' in project"):
        project_from_dict(d)


def test_missing_room_field_is_reported():
    d = _minimal()
    del d["room"]["mounting_height"]
    with pytest.raises(ProjectError, match="Missing 'mounting_height' in room"):
        project_from_dict(d)


@pytest.mark.parametrize(
    "patch,match",
    [
        ({"room": {"length": -1, "width": 5, "height": 3, "mounting_height": 2.8}}, "room.length"),
        ({"layout": {"rows": 0, "columns": 1}}, "layout.rows"),
        ({"calc": {"grid_resolution": 0}}, "grid_resolution"),
        ({"luminaire": {"demo": "a", "path": "b.ies"}}, "exactly one"),
        ({"luminaire": {}}, "exactly one"),
        ({"calc": {"unknown_key": 1}}, "Invalid project data"),
        ({"room": {"length": "long", "width": 5, "height": 3, "mounting_height": 2.8}}, "Invalid project data"),
    ],
)
def test_invalid_values_raise_project_error(patch, match):
    d = _minimal()
    d.update(patch)
    with pytest.raises(ProjectError, match=match):
        project_from_dict(d)


def test_reflectance_out_of_range():
    d = _minimal()
    d["room"]["reflectances"] = {"ceiling": 1.5}
    with pytest.raises(ProjectError, match="reflectances.ceiling"):
        project_from_dict(d)


def test_bad_json(tmp_path: Path):
    p = tmp_path / "broken.json"
    p.write_text("{ not json", encoding="utf-8")
    with pytest.raises(ProjectError, match="broken.json: not valid JSON"):
        load_project(p)


def test_top_level_must_be_object(tmp_path: Path):
    p = tmp_path / "list.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ProjectError, match="must be an object"):
        load_project(p)


def test_default_project_is_valid():
    p = default_project()
    validate_project(p)
    assert p.layout.centered is True
    assert p.luminaire.demo == "wide-batwing"


def test_reflectance_presets():
    assert reflectance_preset("DARK").walls == 0.3
    a = reflectance_preset("light")
    a.ceiling = 0.1
    assert reflectance_preset("light").ceiling == 0.8
    with pytest.raises(ValueError):
        reflectance_preset("glossy")



@pytest.mark.parametrize("section", ["room", "layout"])
def test_section_must_be_object(section):
    d = _minimal()
    d[section] = [1, 2, 3]
    with pytest.raises(ProjectError, match=f"'{section}' in project must be an object"):
        project_from_dict(d)


def test_reflectances_must_be_object():
    d = _minimal()
    d["room"]["reflectances"] = [0.8, 0.5, 0.2]
    with pytest.raises(ProjectError, match="'reflectances' in room must be an object"):
        project_from_dict(d)
