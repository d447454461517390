"""Provides the DifferentialOperator class.

A :class:`DifferentialOperator` holds an evaluation point in some orthogonal
coordinates ``(q1, q2, q3)`` of R^3, one grid of abscissas per coordinate
axis and, for each axis, the Fornberg weights of all derivatives up to a
maximum order. Each axis is treated as an independent one-dimensional
problem: the samples along axis ``i`` vary only the ``i``-th coordinate, so
only pure partial derivatives are available.

The weights depend only on the differences between the evaluation point and
the grid. One operator built on a local stencil can therefore be reused at
every node of a uniformly spaced mesh, as long as the samples passed in are
taken at the translated grid points.

Typical usage example:

>>> import numpy as np
>>> from griddiff.diffop import DifferentialOperator
>>> offsets = np.array([-0.1, 0.0, 0.1])
>>> op = DifferentialOperator.from_offsets((1.0, 2.0, 3.0), offsets, offsets, offsets, 2)
>>> f = lambda x, y, z: x**2 * y
>>> fx, fy, fz = op.sample(f)
>>> round(op.eval_axis(0, 1, fx), 10)
4.0
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import NamedTuple

import numpy as np

from griddiff.derivatives.fornberg import (
    coefficient_row,
    evaluate_row,
    fornberg_weights,
)
from griddiff.exceptions import EvaluationError, GridConfigurationError
from griddiff.logger import griddiff_logger
from griddiff.utils.sandbox import sample_along_axis
from griddiff.utils.types import ArrayLike1D, FloatArray
from griddiff.utils.validate import (
    as_grid,
    has_repeated_abscissas,
    validate_axis_values,
)

__all__ = [
    "Point3",
    "as_point",
    "DifferentialOperator",
]

#: Number of coordinate axes.
NUM_AXES = 3


class Point3(NamedTuple):
    """A point given by three coordinates of an orthogonal system."""

    q1: float
    q2: float
    q3: float


def as_point(point: Point3 | ArrayLike1D) -> Point3:
    """Converts three coordinates into a :class:`Point3`.

    Raises:
        GridConfigurationError: If ``point`` does not hold exactly three values.
    """
    coords = np.asarray(point, dtype=np.float64).reshape(-1)
    if coords.size != NUM_AXES:
        raise GridConfigurationError(
            f"point must have {NUM_AXES} coordinates; got {coords.size}."
        )
    return Point3(*(float(q) for q in coords))


class DifferentialOperator:
    """Per-axis derivatives of a sampled function at a fixed point.

    Attributes are exposed through read-only properties; the stored arrays
    are flagged non-writeable, so an operator can be shared between threads.
    """

    def __init__(
        self,
        point: Point3 | ArrayLike1D,
        q1_grid: ArrayLike1D,
        q2_grid: ArrayLike1D,
        q3_grid: ArrayLike1D,
        max_order: int,
    ) -> None:
        """Builds the coefficient tables of all three axes.

        Args:
            point: The evaluation point ``(q1, q2, q3)``.
            q1_grid: Abscissas along the first axis.
            q2_grid: Abscissas along the second axis.
            q3_grid: Abscissas along the third axis.
            max_order: The highest derivative order that will be requested.

        Raises:
            GridConfigurationError: If ``max_order`` is negative, if a grid is
                not 1D, holds fewer than 2 points, or holds fewer than
                ``max_order + 1`` points.
        """
        max_order = operator.index(max_order)
        if max_order < 0:
            raise GridConfigurationError(
                f"max_order must be non-negative; got {max_order}."
            )

        point = as_point(point)
        grids = []
        for axis, values in enumerate((q1_grid, q2_grid, q3_grid), start=1):
            grid = as_grid(values, name=f"q{axis} grid")
            if grid.size <= max_order:
                raise GridConfigurationError(
                    f"q{axis} grid size {grid.size} cannot support derivatives "
                    f"of order {max_order}."
                )
            if has_repeated_abscissas(grid):
                griddiff_logger.warning(
                    "q%d grid contains repeated abscissas; its coefficients "
                    "will not be finite.",
                    axis,
                )
            grids.append(grid)

        tables = [
            fornberg_weights(q0, grid, max_order + 1)
            for q0, grid in zip(point, grids)
        ]
        griddiff_logger.debug(
            "Built coefficient tables of shapes %s at %s.",
            [t.shape for t in tables],
            point,
        )

        self._point = point
        self._grids = _freeze(grids)
        self._tables = _freeze(tables)
        self._max_order = max_order

    @classmethod
    def from_offsets(
        cls,
        point: Point3 | ArrayLike1D,
        q1_offsets: ArrayLike1D,
        q2_offsets: ArrayLike1D,
        q3_offsets: ArrayLike1D,
        max_order: int,
    ) -> DifferentialOperator:
        """Builds an operator from grid offsets relative to ``point``.

        Args:
            point: The evaluation point ``(q1, q2, q3)``.
            q1_offsets: Offsets from ``point.q1`` along the first axis.
            q2_offsets: Offsets from ``point.q2`` along the second axis.
            q3_offsets: Offsets from ``point.q3`` along the third axis.
            max_order: The highest derivative order that will be requested.

        Returns:
            The operator with grids ``point[i] + offsets_i``.
        """
        point = as_point(point)
        grids = [
            q0 + np.asarray(offsets, dtype=np.float64)
            for q0, offsets in zip(point, (q1_offsets, q2_offsets, q3_offsets))
        ]
        return cls(point, *grids, max_order)

    @property
    def point(self) -> Point3:
        """The evaluation point."""
        return self._point

    @property
    def max_order(self) -> int:
        """The highest derivative order available on every axis."""
        return self._max_order

    @property
    def grids(self) -> tuple[FloatArray, FloatArray, FloatArray]:
        """The read-only abscissas of the three axes."""
        return self._grids

    @property
    def tables(self) -> tuple[FloatArray, FloatArray, FloatArray]:
        """The read-only coefficient tables of the three axes."""
        return self._tables

    def grid(self, axis: int) -> FloatArray:
        """Returns the abscissas of one axis."""
        return self._grids[_check_axis(axis)]

    def table(self, axis: int) -> FloatArray:
        """Returns the coefficient table of one axis."""
        return self._tables[_check_axis(axis)]

    def eval_axis(self, axis: int, order: int, values: ArrayLike1D) -> float:
        """Evaluates a pure partial derivative along one axis.

        Args:
            axis: Index of the coordinate (0, 1 or 2).
            order: The derivative order. Must not exceed :attr:`max_order`.
            values: Function values at the abscissas of ``axis``, in grid
                order. Misordered values are not detected.

        Returns:
            The ``order``-th partial derivative with respect to the
            ``axis``-th coordinate at :attr:`point`.

        Raises:
            EvaluationError: If ``axis`` is invalid, ``order`` is negative or
                higher than :attr:`max_order`, or the number of values differs
                from the number of abscissas.
        """
        axis = _check_axis(axis)
        try:
            order = operator.index(order)
        except TypeError:
            raise EvaluationError(f"order must be an integer; got {order!r}.") from None
        if order < 0:
            raise EvaluationError(f"order must be non-negative; got {order}.")
        if order > self._max_order:
            raise EvaluationError(
                f"given order {order} higher than max {self._max_order}."
            )

        vals = validate_axis_values(values, self._grids[axis].size)
        return evaluate_row(coefficient_row(self._tables[axis], order), vals)

    def sample_axis(
        self,
        function: Callable[[float, float, float], float],
        axis: int,
    ) -> FloatArray:
        """Samples ``function(q1, q2, q3)`` on the grid of one axis.

        The other two coordinates are held at :attr:`point`.
        """
        axis = _check_axis(axis)
        return sample_along_axis(function, self._point, axis, self._grids[axis])

    def sample(
        self,
        function: Callable[[float, float, float], float],
    ) -> tuple[FloatArray, FloatArray, FloatArray]:
        """Samples ``function(q1, q2, q3)`` on all three axis grids."""
        return tuple(self.sample_axis(function, axis) for axis in range(NUM_AXES))

    def copy(self) -> DifferentialOperator:
        """Returns an independent copy without recomputing the tables."""
        new = object.__new__(type(self))
        new._point = self._point
        new._grids = _freeze([np.array(g) for g in self._grids])
        new._tables = _freeze([np.array(t) for t in self._tables])
        new._max_order = self._max_order
        return new

    def __copy__(self) -> DifferentialOperator:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> DifferentialOperator:
        return self.copy()

    def __repr__(self) -> str:
        sizes = ", ".join(str(g.size) for g in self._grids)
        return (
            f"{type(self).__name__}(point={tuple(self._point)}, "
            f"grid_sizes=({sizes}), max_order={self._max_order})"
        )


def _check_axis(axis: int) -> int:
    """Returns ``axis`` if it names one of the three coordinates."""
    try:
        index = operator.index(axis)
    except TypeError:
        raise EvaluationError(f"axis must be an integer; got {axis!r}.") from None
    if index not in range(NUM_AXES):
        raise EvaluationError(f"axis must be 0, 1 or 2; got {axis!r}.")
    return index


def _freeze(arrays: list[FloatArray]) -> tuple[FloatArray, ...]:
    """Flags arrays read-only and packs them into a tuple."""
    for arr in arrays:
        arr.setflags(write=False)
    return tuple(arrays)
