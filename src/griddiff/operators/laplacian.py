"""Laplacians of sampled scalar functions in orthogonal coordinates.

The Laplacians combine first and second pure partial derivatives with the
metric factors of the coordinate system. Mixed partials never appear in
these orthogonal systems, so the per-axis grids suffice.
"""

from __future__ import annotations

import numpy as np

from griddiff.diffop import DifferentialOperator
from griddiff.operators.base import CoordinateOperator, reciprocal
from griddiff.utils.types import ArrayLike1D

__all__ = [
    "cartesian_laplacian",
    "cylindrical_laplacian",
    "spherical_laplacian",
    "CartesianLaplacian",
    "CylindricalLaplacian",
    "SphericalLaplacian",
]


def cartesian_laplacian(
    diffop: DifferentialOperator,
    x_values: ArrayLike1D,
    y_values: ArrayLike1D,
    z_values: ArrayLike1D,
) -> float:
    """Returns ``d2f/dx2 + d2f/dy2 + d2f/dz2``."""
    return (
        diffop.eval_axis(0, 2, x_values)
        + diffop.eval_axis(1, 2, y_values)
        + diffop.eval_axis(2, 2, z_values)
    )


def cylindrical_laplacian(
    diffop: DifferentialOperator,
    rho_values: ArrayLike1D,
    phi_values: ArrayLike1D,
    z_values: ArrayLike1D,
) -> float:
    """Returns the Laplacian in cylindrical coordinates ``(rho, phi, z)``.

    ``(1/rho) df/drho + (1/rho^2) d2f/dphi2 + d2f/drho2 + d2f/dz2``
    """
    inv_rho = reciprocal(diffop.point.q1, "rho")
    with np.errstate(invalid="ignore", over="ignore"):
        lap = (
            diffop.eval_axis(0, 1, rho_values) * inv_rho
            + diffop.eval_axis(1, 2, phi_values) * inv_rho**2
            + diffop.eval_axis(0, 2, rho_values)
            + diffop.eval_axis(2, 2, z_values)
        )
    return float(lap)


def spherical_laplacian(
    diffop: DifferentialOperator,
    r_values: ArrayLike1D,
    theta_values: ArrayLike1D,
    phi_values: ArrayLike1D,
) -> float:
    """Returns the Laplacian in spherical coordinates ``(r, theta, phi)``.

    ``1/(r^2 sin^2(theta)) d2f/dphi2 + 1/(r^2 tan(theta)) df/dtheta
    + (1/r^2) d2f/dtheta2 + (2/r) df/dr + d2f/dr2``

    ``theta`` is the polar angle. The result is not finite at ``r == 0`` or
    ``theta`` in ``{0, pi}``.
    """
    r, theta, _ = diffop.point
    inv_r = reciprocal(r, "r")
    inv_sin = reciprocal(np.sin(theta), "sin(theta)")
    inv_tan = reciprocal(np.tan(theta), "tan(theta)")
    with np.errstate(invalid="ignore", over="ignore"):
        inv_r2 = inv_r**2
        lap = (
            diffop.eval_axis(2, 2, phi_values) * inv_r2 * inv_sin**2
            + diffop.eval_axis(1, 1, theta_values) * inv_r2 * inv_tan
            + diffop.eval_axis(1, 2, theta_values) * inv_r2
            + diffop.eval_axis(0, 1, r_values) * 2.0 * inv_r
            + diffop.eval_axis(0, 2, r_values)
        )
    return float(lap)


class CartesianLaplacian(CoordinateOperator):
    """Laplacian in Cartesian coordinates ``(x, y, z)``."""

    max_order = 2
    _apply = staticmethod(cartesian_laplacian)


class CylindricalLaplacian(CoordinateOperator):
    """Laplacian in cylindrical coordinates ``(rho, phi, z)``."""

    max_order = 2
    _apply = staticmethod(cylindrical_laplacian)


class SphericalLaplacian(CoordinateOperator):
    """Laplacian in spherical coordinates ``(r, theta, phi)``."""

    max_order = 2
    _apply = staticmethod(spherical_laplacian)
