from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from luxlab.project.schema import (
    CalcSettings,
    LayoutSpec,
    LuminaireRef,
    Project,
    ProjectError,
    Reflectances,
    RoomSpec,
    validate_project,
)


def _require(d: Dict[str, Any], key: str, where: str) -> Any:
    if key not in d:
        raise ProjectError(f"Missing '{key}' in {where}")
    return d[key]


def _section(d: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = _require(d, key, where)
    if not isinstance(value, dict):
        raise ProjectError(f"'{key}' in {where} must be an object")
    return value


def _optional_float(v: Any) -> float | None:
    return None if v is None else float(v)


def _room_from_dict(d: Dict[str, Any]) -> RoomSpec:
    refl = d.get("reflectances") or {}
    if not isinstance(refl, dict):
        raise ProjectError("'reflectances' in room must be an object")
    return RoomSpec(
        length=float(_require(d, "length", "room")),
        width=float(_require(d, "width", "room")),
        height=float(_require(d, "height", "room")),
        mounting_height=float(_require(d, "mounting_height", "room")),
        workplane_height=float(d.get("workplane_height", 0.8)),
        reflectances=Reflectances(**{k: float(v) for k, v in refl.items()}),
    )


def _layout_from_dict(d: Dict[str, Any]) -> LayoutSpec:
    return LayoutSpec(
        rows=int(_require(d, "rows", "layout")),
        columns=int(_require(d, "columns", "layout")),
        row_spacing=float(d.get("row_spacing", 0.0)),
        column_spacing=float(d.get("column_spacing", 0.0)),
        offset_x=_optional_float(d.get("offset_x")),
        offset_y=_optional_float(d.get("offset_y")),
        centered=bool(d.get("centered", False)),
    )


def project_from_dict(d: Dict[str, Any]) -> Project:
    if not isinstance(d, dict):
        raise ProjectError("Project data must be an object")
    try:
        project = Project(
            name=str(d.get("name", "LuxLab project")),
            room=_room_from_dict(_section(d, "room", "project")),
            layout=_layout_from_dict(_section(d, "layout", "project")),
            calc=CalcSettings(**(d.get("calc") or {})),
            luminaire=LuminaireRef(**(d.get("luminaire") or {})),
        )
    except ProjectError:
        raise
    except (TypeError, ValueError) as e:
        raise ProjectError(f"Invalid project data: {e}") from e
    validate_project(project)
    return project


def save_project(project: Project, path: Path) -> Path:
    path = Path(path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(project.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
    return path


def load_project(path: Path) -> Project:
    path = Path(path).expanduser().resolve()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ProjectError(f"{path.name}: not valid JSON ({e.msg}, line {e.lineno})") from e
    if not isinstance(data, dict):
        raise ProjectError(f"{path.name}: top-level JSON value must be an object")
    project = project_from_dict(data)
    project.root_dir = str(path.parent)
    return project
