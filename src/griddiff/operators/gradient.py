"""Gradients of sampled scalar functions in orthogonal coordinates.

Each gradient needs first derivatives only. The components are returned in
the order of the coordinates, e.g. ``(f_r, f_theta, f_phi)`` in spherical
coordinates, already multiplied by their scale factors.

Typical usage example:

>>> import numpy as np
>>> from griddiff.operators.gradient import CartesianGradient
>>> offsets = np.array([-0.1, 0.0, 0.1])
>>> grad = CartesianGradient.from_offsets((1.0, 2.0, 3.0), offsets, offsets, offsets)
>>> np.allclose(grad.eval_function(lambda x, y, z: x * y + z), [2.0, 1.0, 1.0])
True
"""

from __future__ import annotations

import numpy as np

from griddiff.diffop import DifferentialOperator
from griddiff.operators.base import CoordinateOperator, reciprocal
from griddiff.utils.types import ArrayLike1D, FloatArray

__all__ = [
    "cartesian_gradient",
    "cylindrical_gradient",
    "spherical_gradient",
    "CartesianGradient",
    "CylindricalGradient",
    "SphericalGradient",
]


def cartesian_gradient(
    diffop: DifferentialOperator,
    x_values: ArrayLike1D,
    y_values: ArrayLike1D,
    z_values: ArrayLike1D,
) -> FloatArray:
    """Returns ``(df/dx, df/dy, df/dz)``."""
    return np.array([
        diffop.eval_axis(0, 1, x_values),
        diffop.eval_axis(1, 1, y_values),
        diffop.eval_axis(2, 1, z_values),
    ])


def cylindrical_gradient(
    diffop: DifferentialOperator,
    rho_values: ArrayLike1D,
    phi_values: ArrayLike1D,
    z_values: ArrayLike1D,
) -> FloatArray:
    """Returns ``(df/drho, (1/rho) df/dphi, df/dz)``.

    The point is ``(rho, phi, z)``. At ``rho == 0`` the azimuthal component
    is ``inf`` or ``nan``.
    """
    inv_rho = reciprocal(diffop.point.q1, "rho")
    with np.errstate(invalid="ignore"):
        return np.array([
            diffop.eval_axis(0, 1, rho_values),
            diffop.eval_axis(1, 1, phi_values) * inv_rho,
            diffop.eval_axis(2, 1, z_values),
        ])


def spherical_gradient(
    diffop: DifferentialOperator,
    r_values: ArrayLike1D,
    theta_values: ArrayLike1D,
    phi_values: ArrayLike1D,
) -> FloatArray:
    """Returns ``(df/dr, (1/r) df/dtheta, 1/(r sin(theta)) df/dphi)``.

    The point is ``(r, theta, phi)`` with ``theta`` the polar angle. The
    result is not finite at ``r == 0`` or ``sin(theta) == 0``.
    """
    r, theta, _ = diffop.point
    inv_r = reciprocal(r, "r")
    inv_sin = reciprocal(np.sin(theta), "sin(theta)")
    with np.errstate(invalid="ignore"):
        return np.array([
            diffop.eval_axis(0, 1, r_values),
            diffop.eval_axis(1, 1, theta_values) * inv_r,
            diffop.eval_axis(2, 1, phi_values) * inv_r * inv_sin,
        ])


class CartesianGradient(CoordinateOperator):
    """Gradient in Cartesian coordinates ``(x, y, z)``."""

    max_order = 1
    _apply = staticmethod(cartesian_gradient)


class CylindricalGradient(CoordinateOperator):
    """Gradient in cylindrical coordinates ``(rho, phi, z)``."""

    max_order = 1
    _apply = staticmethod(cylindrical_gradient)


class SphericalGradient(CoordinateOperator):
    """Gradient in spherical coordinates ``(r, theta, phi)``."""

    max_order = 1
    _apply = staticmethod(spherical_gradient)
