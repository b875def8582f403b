from __future__ import annotations

import math
from dataclasses import replace
from typing import List, NamedTuple, Optional, Tuple

from luxlab.project.schema import LayoutSpec, RoomSpec


class LuminairePosition(NamedTuple):
    x: float  # along room length
    y: float  # along room width


def _finite(v: Optional[float]) -> bool:
    return v is not None and math.isfinite(float(v))


def _centered_origin(room: RoomSpec, layout: LayoutSpec) -> Tuple[float, float]:
    total_length = (layout.columns - 1) * layout.column_spacing
    total_width = (layout.rows - 1) * layout.row_spacing
    return (room.length - total_length) / 2.0, (room.width - total_width) / 2.0


def luminaire_positions(room: RoomSpec, layout: LayoutSpec) -> List[LuminairePosition]:
    """
    Ceiling positions of a rows x columns array, row-major.

    Offsets that are None or not finite fall back to centring the array in the
    room. The `centered` flag is not read here; callers wanting that mode
    recompute offsets with `centered_offsets` first.
    """
    cx, cy = _centered_origin(room, layout)
    origin_x = float(layout.offset_x) if _finite(layout.offset_x) else cx
    origin_y = float(layout.offset_y) if _finite(layout.offset_y) else cy

    out: List[LuminairePosition] = []
    for r in range(int(layout.rows)):
        for c in range(int(layout.columns)):
            out.append(
                LuminairePosition(
                    x=origin_x + c * layout.column_spacing,
                    y=origin_y + r * layout.row_spacing,
                )
            )
    return out


def centered_offsets(room: RoomSpec, layout: LayoutSpec) -> Tuple[float, float]:
    cx, cy = _centered_origin(room, layout)
    return round(cx, 2), round(cy, 2)


def apply_centering(room: RoomSpec, layout: LayoutSpec) -> LayoutSpec:
    """Copy of `layout` with offsets recomputed when it is in centred mode."""
    if not layout.centered:
        return layout
    ox, oy = centered_offsets(room, layout)
    return LayoutSpec(
        rows=layout.rows,
        columns=layout.columns,
        row_spacing=layout.row_spacing,
        column_spacing=layout.column_spacing,
        offset_x=ox,
        offset_y=oy,
        centered=True,
    )


def default_layout(room: RoomSpec, rows: int = 2, columns: int = 3) -> LayoutSpec:
    row_spacing = round(room.width / (max(rows, 0) + 1), 2)
    column_spacing = round(room.length / (max(columns, 0) + 1), 2)
    layout = LayoutSpec(
        rows=rows,
        columns=columns,
        row_spacing=row_spacing,
        column_spacing=column_spacing,
    )
    layout.offset_x, layout.offset_y = centered_offsets(room, layout)
    return layout


SPACING_CRITERION = 1.3


def suggested_spacing(room: RoomSpec, layout: LayoutSpec) -> Tuple[float, float]:
    """
    (row_spacing, column_spacing) from the spacing-to-mounting-height rule of
    thumb, capped so the array still fits the room.
    """
    gap = max(room.mounting_height - room.workplane_height, 1.0)
    spacing = round(gap * SPACING_CRITERION, 2)
    row_spacing = min(spacing, room.width / max(int(layout.rows), 1))
    column_spacing = min(spacing, room.length / max(int(layout.columns), 1))
    return row_spacing, column_spacing


def apply_suggested_spacing(room: RoomSpec, layout: LayoutSpec) -> LayoutSpec:
    row_spacing, column_spacing = suggested_spacing(room, layout)
    return replace(layout, row_spacing=round(row_spacing, 2), column_spacing=round(column_spacing, 2))
