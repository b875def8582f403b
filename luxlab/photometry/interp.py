from __future__ import annotations

from typing import Tuple

import numpy as np

from luxlab.models.distribution import PhotometricDistribution


def _find_bracket(val: float, arr: np.ndarray) -> Tuple[int, int]:
    """Indices (lo, hi) of the table entries around `val`, clamped at both ends."""
    n = len(arr)
    if val <= arr[0]:
        return 0, 0
    if val >= arr[-1]:
        return n - 1, n - 1
    for i in range(n - 1):
        if arr[i] <= val <= arr[i + 1]:
            return i, i + 1
    return n - 1, n - 1


def _fraction(val: float, lo: float, hi: float) -> float:
    span = (hi - lo) or 1.0
    return min(1.0, max(0.0, (val - lo) / span))


def interpolate_candela(
    distribution: PhotometricDistribution,
    horizontal_deg: float,
    vertical_deg: float,
) -> float:
    """
    Bilinear candela lookup at (C-plane, gamma) angles in degrees.

    Queries outside the tabulated range take the edge value; there is no
    wrap-around between the last and first horizontal plane.
    """
    h_angles = distribution.horizontal_angles
    v_angles = distribution.vertical_angles
    cd = distribution.candela
    if len(h_angles) == 0 or len(v_angles) == 0:
        return 0.0

    h = float(horizontal_deg) % 360.0
    v = float(vertical_deg)
    h_lo, h_hi = _find_bracket(h, h_angles)
    v_lo, v_hi = _find_bracket(v, v_angles)

    h_t = _fraction(h, float(h_angles[h_lo]), float(h_angles[h_hi]))
    v_t = _fraction(v, float(v_angles[v_lo]), float(v_angles[v_hi]))

    q11 = float(cd[h_lo][v_lo])
    q12 = float(cd[h_lo][v_hi])
    q21 = float(cd[h_hi][v_lo])
    q22 = float(cd[h_hi][v_hi])

    q1 = q11 + (q21 - q11) * h_t
    q2 = q12 + (q22 - q12) * h_t
    return q1 + (q2 - q1) * v_t


def _bracket_array(vals: np.ndarray, arr: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    n = len(arr)
    # side="left" picks the first bracketing pair when the table repeats an angle.
    lo = np.clip(np.searchsorted(arr, vals, side="left") - 1, 0, max(n - 2, 0))
    hi = np.minimum(lo + 1, n - 1)
    below = vals <= arr[0]
    above = vals >= arr[-1]
    lo = np.where(below, 0, np.where(above, n - 1, lo))
    hi = np.where(below, 0, np.where(above, n - 1, hi))
    span = arr[hi] - arr[lo]
    span = np.where(span == 0, 1.0, span)
    t = np.clip((vals - arr[lo]) / span, 0.0, 1.0)
    return lo, hi, t


def interpolate_candela_array(
    distribution: PhotometricDistribution,
    horizontal_deg: np.ndarray,
    vertical_deg: np.ndarray,
) -> np.ndarray:
    """Vectorized form of `interpolate_candela` over same-shaped angle arrays."""
    h_angles = np.asarray(distribution.horizontal_angles, dtype=float)
    v_angles = np.asarray(distribution.vertical_angles, dtype=float)
    h = np.mod(np.asarray(horizontal_deg, dtype=float), 360.0)
    v = np.asarray(vertical_deg, dtype=float)
    if h_angles.size == 0 or v_angles.size == 0:
        return np.zeros(np.broadcast(h, v).shape, dtype=float)

    cd = np.asarray(distribution.candela, dtype=float)
    h_lo, h_hi, h_t = _bracket_array(h, h_angles)
    v_lo, v_hi, v_t = _bracket_array(v, v_angles)

    q11 = cd[h_lo, v_lo]
    q12 = cd[h_lo, v_hi]
    q21 = cd[h_hi, v_lo]
    q22 = cd[h_hi, v_hi]
    q1 = q11 + (q21 - q11) * h_t
    q2 = q12 + (q22 - q12) * h_t
    return q1 + (q2 - q1) * v_t
