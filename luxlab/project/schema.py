from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


class ProjectError(ValueError):
    pass


@dataclass
class Reflectances:
    ceiling: float = 0.8
    walls: float = 0.5
    floor: float = 0.2


@dataclass
class RoomSpec:
    """Rectangular room in meters; x runs along `length`, y along `width`."""
    length: float
    width: float
    height: float
    mounting_height: float
    workplane_height: float
    reflectances: Reflectances = field(default_factory=Reflectances)


@dataclass
class LayoutSpec:
    rows: int                          # along width (y)
    columns: int                       # along length (x)
    row_spacing: float
    column_spacing: float
    offset_x: Optional[float] = None   # None -> centre the array
    offset_y: Optional[float] = None
    centered: bool = False


@dataclass
class CalcSettings:
    grid_resolution: int = 28
    samples_per_point: int = 1


@dataclass
class LuminaireRef:
    demo: Optional[str] = None
    path: Optional[str] = None


@dataclass
class Project:
    name: str
    room: RoomSpec
    layout: LayoutSpec
    calc: CalcSettings = field(default_factory=CalcSettings)
    luminaire: LuminaireRef = field(default_factory=LuminaireRef)
    root_dir: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d.pop("root_dir", None)
        return d


def validate_room(room: RoomSpec) -> None:
    for name in ("length", "width", "height", "mounting_height"):
        if not float(getattr(room, name)) > 0.0:
            raise ProjectError(f"room.{name} must be > 0")
    if float(room.workplane_height) < 0.0:
        raise ProjectError("room.workplane_height must be >= 0")
    for name in ("ceiling", "walls", "floor"):
        r = float(getattr(room.reflectances, name))
        if not 0.0 <= r <= 1.0:
            raise ProjectError(f"room.reflectances.{name} must be within [0, 1]")


def validate_layout(layout: LayoutSpec) -> None:
    if int(layout.rows) < 1 or int(layout.columns) < 1:
        raise ProjectError("layout.rows and layout.columns must be >= 1")
    if float(layout.row_spacing) < 0.0 or float(layout.column_spacing) < 0.0:
        raise ProjectError("layout spacing must be >= 0")


def validate_project(project: Project) -> None:
    validate_room(project.room)
    validate_layout(project.layout)
    if int(project.calc.grid_resolution) < 1:
        raise ProjectError("calc.grid_resolution must be >= 1")
    if int(project.calc.samples_per_point) < 1:
        raise ProjectError("calc.samples_per_point must be >= 1")
    lum = project.luminaire
    if bool(lum.demo) == bool(lum.path):
        raise ProjectError("luminaire must name exactly one of 'demo' or 'path'")
