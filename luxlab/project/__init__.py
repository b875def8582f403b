from luxlab.project.schema import (
    CalcSettings,
    LayoutSpec,
    LuminaireRef,
    Project,
    ProjectError,
    Reflectances,
    RoomSpec,
)

__all__ = [
    "CalcSettings",
    "LayoutSpec",
    "LuminaireRef",
    "Project",
    "ProjectError",
    "Reflectances",
    "RoomSpec",
]
