"""Common machinery of the coordinate-system operators."""

from __future__ import annotations

import abc
from collections.abc import Callable

import numpy as np

from griddiff.diffop import DifferentialOperator, Point3
from griddiff.exceptions import GridConfigurationError
from griddiff.logger import griddiff_logger
from griddiff.utils.types import ArrayLike1D

__all__ = [
    "CoordinateOperator",
    "reciprocal",
]


def reciprocal(value: float, name: str) -> np.float64:
    """Returns ``1/value`` for a metric factor, following IEEE semantics.

    A zero ``value`` gives ``inf`` instead of raising, and a warning is
    logged since the evaluation point sits on a coordinate singularity.

    Args:
        value: The coordinate or trigonometric factor to invert.
        name: Label used in the log message, e.g. ``"rho"``.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        inv = np.float64(1.0) / np.float64(value)
    if not np.isfinite(inv):
        griddiff_logger.warning(
            "%s = %r is a coordinate singularity; the result is not finite.",
            name,
            value,
        )
    return inv


class CoordinateOperator(abc.ABC):
    """A differential operator in one orthogonal coordinate system.

    Subclasses fix :attr:`max_order` and the formula combining the per-axis
    derivatives. The per-axis work is delegated to a
    :class:`~griddiff.diffop.DifferentialOperator`.
    """

    #: Highest derivative order the formula needs.
    max_order: int = 1

    def __init__(
        self,
        point: Point3 | ArrayLike1D,
        q1_grid: ArrayLike1D,
        q2_grid: ArrayLike1D,
        q3_grid: ArrayLike1D,
    ) -> None:
        """Initialise with the evaluation point and the three axis grids.

        Args:
            point: Evaluation point in the coordinates of the operator.
            q1_grid: Abscissas along the first coordinate.
            q2_grid: Abscissas along the second coordinate.
            q3_grid: Abscissas along the third coordinate.

        Raises:
            GridConfigurationError: If a grid is too small for
                :attr:`max_order`.
        """
        self._diffop = DifferentialOperator(
            point, q1_grid, q2_grid, q3_grid, self.max_order
        )

    @classmethod
    def from_offsets(
        cls,
        point: Point3 | ArrayLike1D,
        q1_offsets: ArrayLike1D,
        q2_offsets: ArrayLike1D,
        q3_offsets: ArrayLike1D,
    ):
        """Builds the operator from grid offsets relative to ``point``."""
        return cls.from_diffop(
            DifferentialOperator.from_offsets(
                point, q1_offsets, q2_offsets, q3_offsets, cls.max_order
            )
        )

    @classmethod
    def from_diffop(cls, diffop: DifferentialOperator):
        """Wraps an existing per-axis operator.

        Raises:
            GridConfigurationError: If ``diffop`` was built for a lower
                maximum order than the formula needs.
        """
        if diffop.max_order < cls.max_order:
            raise GridConfigurationError(
                f"{cls.__name__} needs max_order >= {cls.max_order}; "
                f"got {diffop.max_order}."
            )
        obj = cls.__new__(cls)
        obj._diffop = diffop
        return obj

    @property
    def diffop(self) -> DifferentialOperator:
        """The underlying per-axis operator."""
        return self._diffop

    @property
    def point(self) -> Point3:
        """The evaluation point."""
        return self._diffop.point

    def eval(self, q1_values: ArrayLike1D, q2_values: ArrayLike1D, q3_values: ArrayLike1D):
        """Applies the operator to function values sampled on the axis grids.

        Args:
            q1_values: Values on the first axis grid, in grid order.
            q2_values: Values on the second axis grid, in grid order.
            q3_values: Values on the third axis grid, in grid order.

        Raises:
            EvaluationError: If a sequence does not match its grid size.
        """
        return self._apply(self._diffop, q1_values, q2_values, q3_values)

    __call__ = eval

    def eval_function(self, function: Callable[[float, float, float], float]):
        """Samples ``function(q1, q2, q3)`` on the axis grids and applies the operator."""
        return self.eval(*self._diffop.sample(function))

    @abc.abstractmethod
    def _apply(self, diffop, q1_values, q2_values, q3_values):
        """Combines the per-axis derivatives of ``diffop`` into the result."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._diffop!r})"
