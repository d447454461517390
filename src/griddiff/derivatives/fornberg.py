"""Implementation of Fornberg's algorithm for finite-difference weights.

The algorithm was published by Fornberg in:
Bengt Fornberg, *Generation of Finite Difference Formulas on Arbitrarily
Spaced Grids*, Mathematics of Computation, vol. 51, No. 184, pp. 699–706,
October 1988, and revisited in *Calculation of Weights in Finite Difference
Formulas*, SIAM Review, vol. 40, No. 3, pp. 685–691, September 1998.

Given an evaluation point ``x0`` and ``n`` distinct abscissas, the weights
``c[k, i]`` satisfy ``sum_i c[k, i] * f(points[i]) ~ f^(k)(x0)`` for every
derivative order ``k`` up to the requested maximum, exactly so for
polynomials of degree below ``n``. Only differences between ``x0`` and the
grid enter the recurrence, so the table is invariant under a common
translation of the point and the grid.

Examples:
=========

Central-difference weights on a three point grid::
>>> import numpy as np
>>> from griddiff.derivatives.fornberg import fornberg_weights
>>> w = fornberg_weights(0.0, np.array([-0.1, 0.0, 0.1]), 3)
>>> np.allclose(w[1], [-5.0, 0.0, 5.0])
True
>>> np.allclose(w[2], [100.0, -200.0, 100.0])
True

Differentiating a callable on an irregular set of offsets::
>>> import numpy as np
>>> from griddiff.derivatives.fornberg import FornbergDerivative
>>> x0 = np.pi/4
>>> grid = np.array([-0.03, -0.025, -0.01, 0, 0.012])
>>> fornberg = FornbergDerivative(np.sin, x0)
>>> bool(np.isclose(
...     fornberg.differentiate(grid=grid, order=1),
...     np.cos(x0),
...     rtol=1e-7,
...     atol=0.0,
... ))
True
"""

from __future__ import annotations

import enum
import operator
from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from griddiff.exceptions import CoefficientSizeError, MissingInputError
from griddiff.utils.types import ArrayLike1D, FloatArray

__all__ = [
    "FornbergStatus",
    "FornbergDerivative",
    "fornberg_weights",
    "try_fornberg_weights",
    "coefficient_row",
    "coefficient",
    "evaluate_row",
]


class FornbergStatus(enum.IntEnum):
    """Outcome of :func:`try_fornberg_weights`."""

    SUCCESS = 0
    NULL_POINTS = 1
    NULL_COEFFS = 2
    SIZE_ERROR = 3


def fornberg_weights(
    x0: float,
    points: ArrayLike1D,
    num_orders: int,
    *,
    out: FloatArray | None = None,
) -> FloatArray:
    """Computes finite-difference weights for all orders below ``num_orders``.

    Args:
        x0: the point at which the derivatives are approximated. It may
            coincide with one of the grid points.
        points: the grid abscissas. Must be one-dimensional and hold at
            least ``num_orders`` values. The values must be pairwise
            distinct; repeated values are not rejected but yield
            non-finite weights.
        num_orders: the number of derivative orders to compute, i.e. the
            highest derivative order plus one.
        out: optional array of shape ``(num_orders, len(points))`` that
            receives the weights. It is overwritten in place.

    Returns:
        The weight table of shape ``(num_orders, len(points))``. Row ``k``
        holds the weights of the ``k``-th derivative; row ``0`` holds the
        Lagrange interpolation weights.

    Raises:
        MissingInputError: if ``x0`` or ``points`` is ``None``, or ``out`` is
            not a NumPy array of dtype float64.
        CoefficientSizeError: if ``points`` is not one-dimensional, if
            ``num_orders < 1``, if there are fewer points than
            ``num_orders`` or if ``out`` has the wrong shape.
    """
    if points is None:
        raise MissingInputError("points must not be None.")
    if x0 is None:
        raise MissingInputError("x0 must not be None.")

    grid = np.asarray(points, dtype=np.float64)
    if grid.ndim != 1:
        raise CoefficientSizeError(
            f"points must be one-dimensional; got shape {grid.shape}."
        )

    num_orders = operator.index(num_orders)
    if num_orders < 1:
        raise CoefficientSizeError(
            f"num_orders must be at least 1 (the function itself); got {num_orders}."
        )
    if grid.size < num_orders:
        raise CoefficientSizeError(
            f"{grid.size} points cannot resolve derivatives up to order "
            f"{num_orders - 1}; at least {num_orders} points are required."
        )

    if out is None:
        weights = np.zeros((num_orders, grid.size), dtype=np.float64)
    else:
        if not isinstance(out, np.ndarray):
            raise MissingInputError(
                f"out must be a NumPy array; got {type(out).__name__}."
            )
        if out.dtype != np.float64:
            raise MissingInputError(
                f"out must be a float64 array; got dtype {out.dtype}."
            )
        if out.shape != (num_orders, grid.size):
            raise CoefficientSizeError(
                f"out must have shape {(num_orders, grid.size)}; got {out.shape}."
            )
        weights = out
        weights[...] = 0.0

    # Repeated abscissas divide by zero and leave inf/nan entries in the table.
    with np.errstate(divide="ignore", invalid="ignore"):
        _fill_weights(weights, float(x0), grid)

    return weights


def _fill_weights(
    weights: FloatArray,
    x0: float,
    grid: FloatArray,
) -> None:
    """Runs the incremental-points recurrence on a zeroed weight table.

    Points are added one at a time. The column of a new point is derived
    from the column of its predecessor before that column is refined, and
    every refinement runs from the highest order down so that
    ``weights[k-1]`` still holds the previous iteration's values.

    Args:
        weights: zero-initialised table of shape ``(num_orders, n)``,
            filled in place.
        x0: the evaluation point.
        grid: the grid abscissas.
    """
    max_order = weights.shape[0] - 1
    weights[0, 0] = 1.0

    a = 1.0
    dx = grid[0] - x0

    for i in range(1, grid.size):
        mn = min(i, max_order)
        dx_prev = dx
        dx = grid[i] - x0

        spacing = grid[i] - grid[:i]
        b = np.prod(spacing)

        orders = np.arange(1, mn + 1)
        weights[1:mn + 1, i] = a * (
            orders * weights[:mn, i-1] - dx_prev * weights[1:mn + 1, i-1]
        ) / b
        weights[0, i] = -a * dx_prev * weights[0, i-1] / b

        for k in range(mn, 0, -1):
            weights[k, :i] = (dx * weights[k, :i] - k * weights[k-1, :i]) / spacing
        weights[0, :i] = dx * weights[0, :i] / spacing

        a = b


def try_fornberg_weights(
    x0: float,
    points: ArrayLike1D | None,
    num_orders: int,
    *,
    out: FloatArray | None = None,
) -> tuple[FornbergStatus, FloatArray | None]:
    """Computes the weight table and reports failures as a status code.

    This is the non-raising counterpart of :func:`fornberg_weights`.

    Args:
        x0: the evaluation point.
        points: the grid abscissas.
        num_orders: the highest derivative order plus one.
        out: optional output buffer, see :func:`fornberg_weights`.

    Returns:
        A ``(status, table)`` pair. ``table`` is ``None`` unless ``status``
        is :attr:`FornbergStatus.SUCCESS`.
    """
    if points is None or x0 is None:
        return FornbergStatus.NULL_POINTS, None
    if out is not None and (
        not isinstance(out, np.ndarray) or out.dtype != np.float64
    ):
        return FornbergStatus.NULL_COEFFS, None

    try:
        table = fornberg_weights(x0, points, num_orders, out=out)
    except CoefficientSizeError:
        return FornbergStatus.SIZE_ERROR, None

    return FornbergStatus.SUCCESS, table


def coefficient_row(table: FloatArray, order: int) -> FloatArray:
    """Returns the weights of the ``order``-th derivative as a view."""
    return table[order]


def coefficient(table: FloatArray, index: int, order: int) -> float:
    """Returns the weight of grid point ``index`` for the ``order``-th derivative."""
    return float(table[order, index])


def evaluate_row(row: FloatArray, values: ArrayLike1D) -> float:
    """Applies a row of weights to function values sampled on the grid.

    Args:
        row: weights for one derivative order.
        values: function values, aligned index-for-index with the grid the
            weights were built on.

    Returns:
        The weighted sum ``sum_i row[i] * values[i]``.

    Raises:
        CoefficientSizeError: if ``row`` and ``values`` differ in length.
    """
    vals = np.asarray(values, dtype=np.float64)
    if vals.shape != row.shape:
        raise CoefficientSizeError(
            f"expected {row.size} function values; got shape {vals.shape}."
        )
    return float(np.dot(row, vals))


class FornbergDerivative:
    """Supplies the Fornberg derivative of a callable.

    The function is sampled on a set of offsets around the evaluation points
    and the samples are combined with the weights of
    :func:`fornberg_weights`.

    Attributes:
        function: the function to be differentiated. Must accept a NumPy
            array and act elementwise.
        x0: the evaluation points, flattened.
        original_shape: the shape of the ``x0`` passed in.
    """

    def __init__(
        self,
        function: Callable,
        x0: float | NDArray[np.floating],
    ) -> None:
        """Initialises the class.

        Args:
            function: the function to be differentiated. Must accept a NumPy
                array and act elementwise.
            x0: the evaluation points for the derivative. A float or a
                structure castable to a NumPy array; the derivative is
                vectorised over the array.
        """
        self.function = function

        temp_array = np.asarray(x0, dtype=np.float64)
        self.original_shape = temp_array.shape
        self.x0 = np.ravel(temp_array)

    def differentiate(
        self,
        *,
        grid: NDArray[np.float64],
        order: int = 1,
    ) -> float | NDArray[np.float64]:
        """Constructs the derivative of a given order at the evaluation points.

        Args:
            grid: offsets relative to the evaluation points.

                * A 1D array is added to every evaluation point.

                * An ND array of shape ``(n, *x0.shape)`` provides separate
                  offsets for each evaluation point.

            order: the order of the derivative. ``order == 0`` returns the
                Lagrange interpolation of the function at ``x0``.

        Returns:
            The derivative of :data:`FornbergDerivative.function` evaluated at
            :data:`FornbergDerivative.x0`, in the shape of the original ``x0``.

        Raises:
            ValueError: if ``order`` is smaller than ``0``.
            CoefficientSizeError: if the grid has fewer than ``order + 1``
                offsets.
        """
        if order < 0:
            raise ValueError(
                "the derivative order must be at least 0 "
                f"(the function itself), but is {order}."
            )

        offsets = np.asarray(grid, dtype=np.float64)
        if offsets.ndim == 1:
            offsets = np.broadcast_to(offsets[:, np.newaxis], (offsets.size, self.x0.size))
        else:
            offsets = offsets.reshape(offsets.shape[0], -1)

        points = self.x0 + offsets
        values = np.asarray(self.function(points), dtype=np.float64)

        derivatives = np.empty(self.x0.size, dtype=np.float64)
        for m, x in enumerate(self.x0):
            weights = fornberg_weights(x, points[:, m], order + 1)
            derivatives[m] = evaluate_row(coefficient_row(weights, order), values[:, m])

        if self.original_shape == ():
            return float(derivatives[0])
        return derivatives.reshape(self.original_shape)

    def get_weights(
        self,
        grid: ArrayLike1D,
        order: int = 1,
    ) -> FloatArray:
        """Returns the weights for all derivatives up to ``order``.

        Args:
            grid: absolute grid points around the (single) evaluation point.
            order: the highest derivative order.

        Returns:
            The weight table of shape ``(order + 1, len(grid))``.

        Raises:
            ValueError: if more than one evaluation point was given.
        """
        if self.x0.size != 1:
            raise ValueError(
                f"get_weights needs a single evaluation point; got {self.x0.size}."
            )
        return fornberg_weights(self.x0[0], grid, order + 1)
