"""Helpers for sampling functions on axis grids."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from griddiff.utils.types import FloatArray

__all__ = [
    "sample_along_axis",
]


def sample_along_axis(
    function: Callable[[float, float, float], float],
    point: Sequence[float],
    axis: int,
    grid: FloatArray,
) -> FloatArray:
    """Samples a function of three coordinates along a single axis.

    The coordinate ``axis`` runs over ``grid`` while the two other
    coordinates are held at their values in ``point``.

    Args:
        function: A function ``f(q1, q2, q3)`` returning a scalar.
        point: The three fixed coordinates.
        axis: Index of the coordinate to vary (0, 1 or 2).
        grid: Abscissas along ``axis``.

    Returns:
        The function values, aligned index-for-index with ``grid``.

    Raises:
        IndexError: If ``axis`` is not 0, 1 or 2.
    """
    if axis not in (0, 1, 2):
        raise IndexError(f"axis {axis} out of bounds for three coordinates.")

    coords = [float(q) for q in point]
    values = np.empty(len(grid), dtype=np.float64)
    for j, q in enumerate(grid):
        coords[axis] = float(q)
        values[j] = function(*coords)
    return values
