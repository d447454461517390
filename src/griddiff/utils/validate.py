"""Validation utilities for GridDiff."""

from __future__ import annotations

import numpy as np

from griddiff.exceptions import EvaluationError, GridConfigurationError
from griddiff.utils.types import ArrayLike1D, FloatArray

__all__ = [
    "as_grid",
    "has_repeated_abscissas",
    "validate_axis_values",
]


def as_grid(
    values: ArrayLike1D,
    *,
    name: str = "grid",
    min_points: int = 2,
) -> FloatArray:
    """Converts grid abscissas into a private, one-dimensional float array.

    Pairwise distinctness is not checked here; see
    :func:`has_repeated_abscissas`.

    Args:
        values: 1D array-like of abscissas.
        name: Name used in error messages, e.g. ``"q1 grid"``.
        min_points: Minimum number of abscissas required.

    Returns:
        A new float64 array holding the abscissas in the given order.

    Raises:
        GridConfigurationError: If ``values`` is not 1D or holds fewer than
            ``min_points`` entries.
    """
    grid = np.array(values, dtype=np.float64)
    if grid.ndim != 1:
        raise GridConfigurationError(f"{name} must be 1D; got shape {grid.shape}.")
    if grid.size < min_points:
        raise GridConfigurationError(
            f"{name} size {grid.size} < {min_points}."
        )
    return grid


def has_repeated_abscissas(grid: FloatArray) -> bool:
    """Returns True if any two abscissas of ``grid`` are equal."""
    return bool(np.unique(grid).size != grid.size)


def validate_axis_values(values: ArrayLike1D, expected_size: int) -> FloatArray:
    """Checks that sampled function values match the grid they belong to.

    Args:
        values: Function values sampled on one axis grid.
        expected_size: Number of abscissas of that grid.

    Returns:
        ``values`` as a float64 array.

    Raises:
        EvaluationError: If ``values`` is not 1D, or holds too few or too many
            entries.
    """
    vals = np.asarray(values, dtype=np.float64)
    if vals.ndim != 1:
        raise EvaluationError(f"values must be 1D; got shape {vals.shape}.")
    if vals.size < expected_size:
        raise EvaluationError(
            f"too few values at grid points given: {vals.size} < {expected_size}."
        )
    if vals.size > expected_size:
        raise EvaluationError(
            f"too many values at grid points given: {vals.size} > {expected_size}."
        )
    return vals
