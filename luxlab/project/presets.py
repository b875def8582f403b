from __future__ import annotations

from typing import Dict

from luxlab.design.placement import default_layout
from luxlab.project.schema import CalcSettings, LuminaireRef, Project, Reflectances, RoomSpec


REFLECTANCE_PRESETS: Dict[str, Reflectances] = {
    "light": Reflectances(ceiling=0.8, walls=0.5, floor=0.2),
    "medium": Reflectances(ceiling=0.7, walls=0.5, floor=0.3),
    "dark": Reflectances(ceiling=0.5, walls=0.3, floor=0.1),
}


def reflectance_preset(name: str) -> Reflectances:
    try:
        p = REFLECTANCE_PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown reflectance preset: {name}") from None
    return Reflectances(ceiling=p.ceiling, walls=p.walls, floor=p.floor)


def default_room() -> RoomSpec:
    return RoomSpec(
        length=6.0,
        width=4.0,
        height=3.0,
        mounting_height=2.7,
        workplane_height=0.8,
        reflectances=reflectance_preset("light"),
    )


def default_project(name: str = "LuxLab project", demo: str = "wide-batwing") -> Project:
    room = default_room()
    layout = default_layout(room)
    layout.centered = True
    return Project(
        name=name,
        room=room,
        layout=layout,
        calc=CalcSettings(grid_resolution=28, samples_per_point=1),
        luminaire=LuminaireRef(demo=demo),
    )
