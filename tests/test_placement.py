import math

import pytest

from luxlab.design.placement import (
    LuminairePosition,
    apply_centering,
    apply_suggested_spacing,
    centered_offsets,
    default_layout,
    luminaire_positions,
    suggested_spacing,
)
from luxlab.project.schema import LayoutSpec, RoomSpec


@pytest.fixture
def room():
    return RoomSpec(length=6.0, width=4.0, height=3.0, mounting_height=2.7, workplane_height=0.8)


def test_explicit_offsets_row_major(room):
    layout = LayoutSpec(rows=2, columns=2, row_spacing=2.0, column_spacing=3.0, offset_x=1.0, offset_y=0.5)
    assert luminaire_positions(room, layout) == [
        LuminairePosition(1.0, 0.5),
        LuminairePosition(4.0, 0.5),
        LuminairePosition(1.0, 2.5),
        LuminairePosition(4.0, 2.5),
    ]


def test_missing_offsets_center_the_array(room):
    layout = LayoutSpec(rows=2, columns=3, row_spacing=1.0, column_spacing=2.0)
    pos = luminaire_positions(room, layout)
    assert len(pos) == 6
    assert pos[0] == LuminairePosition(1.0, 1.5)
    assert pos[-1] == LuminairePosition(5.0, 2.5)


@pytest.mark.parametrize("bad", [math.nan, math.inf, None])
def test_non_finite_offset_falls_back_to_centre(room, bad):
    layout = LayoutSpec(rows=1, columns=1, row_spacing=0.0, column_spacing=0.0, offset_x=bad, offset_y=0.25)
    assert luminaire_positions(room, layout) == [LuminairePosition(3.0, 0.25)]


def test_centered_flag_is_not_read_by_positions(room):
    layout = LayoutSpec(rows=1, columns=1, row_spacing=0.0, column_spacing=0.0, offset_x=0.5, offset_y=0.5, centered=True)
    assert luminaire_positions(room, layout) == [LuminairePosition(0.5, 0.5)]
    centred = apply_centering(room, layout)
    assert (centred.offset_x, centred.offset_y) == (3.0, 2.0)
    assert luminaire_positions(room, centred) == [LuminairePosition(3.0, 2.0)]


def test_apply_centering_leaves_manual_layout_alone(room):
    layout = LayoutSpec(rows=1, columns=2, row_spacing=0.0, column_spacing=1.0, offset_x=0.5, offset_y=0.5)
    assert apply_centering(room, layout) is layout


def test_centered_offsets_are_rounded(room):
    layout = LayoutSpec(rows=1, columns=4, row_spacing=0.0, column_spacing=1.1111)
    ox, oy = centered_offsets(room, layout)
    assert ox == round((6.0 - 3 * 1.1111) / 2.0, 2)
    assert oy == 2.0


def test_default_layout_spreads_luminaires(room):
    layout = default_layout(room)
    assert (layout.rows, layout.columns) == (2, 3)
    assert layout.column_spacing == 1.5
    assert layout.row_spacing == 1.33
    assert layout.offset_x == pytest.approx(1.5)
    assert layout.offset_y == pytest.approx(1.335, abs=0.01)
    pos = luminaire_positions(room, layout)
    assert all(0.0 < p.x < room.length and 0.0 < p.y < room.width for p in pos)


def test_empty_layout_has_no_positions(room):
    layout = LayoutSpec(rows=0, columns=3, row_spacing=1.0, column_spacing=1.0)
    assert luminaire_positions(room, layout) == []


def test_suggested_spacing_capped_by_room(room):
    layout = default_layout(room)
    # 1.3 x 1.9 m gap = 2.47 m, but 2 rows / 3 columns only leave 2.0 m each
    assert suggested_spacing(room, layout) == (2.0, 2.0)


def test_suggested_spacing_uncapped_in_large_room():
    big = RoomSpec(length=20.0, width=20.0, height=3.5, mounting_height=3.0, workplane_height=0.8)
    layout = LayoutSpec(rows=2, columns=2, row_spacing=1.0, column_spacing=1.0)
    assert suggested_spacing(big, layout) == (2.86, 2.86)


def test_suggested_spacing_gap_floor():
    low = RoomSpec(length=20.0, width=20.0, height=2.0, mounting_height=1.2, workplane_height=0.8)
    layout = LayoutSpec(rows=1, columns=1, row_spacing=0.0, column_spacing=0.0)
    assert suggested_spacing(low, layout) == (1.3, 1.3)


def test_apply_suggested_spacing_rounds_and_copies(room):
    layout = LayoutSpec(rows=3, columns=7, row_spacing=0.5, column_spacing=0.5, offset_x=0.2, offset_y=0.3)
    updated = apply_suggested_spacing(room, layout)
    assert updated.row_spacing == round(4.0 / 3, 2)
    assert updated.column_spacing == round(6.0 / 7, 2)
    assert (updated.offset_x, updated.offset_y) == (0.2, 0.3)
    assert layout.row_spacing == 0.5
