"""Gradient and Laplacian operators in Cartesian, cylindrical and spherical coordinates."""

from .base import CoordinateOperator
from .gradient import (
    CartesianGradient,
    CylindricalGradient,
    SphericalGradient,
    cartesian_gradient,
    cylindrical_gradient,
    spherical_gradient,
)
from .laplacian import (
    CartesianLaplacian,
    CylindricalLaplacian,
    SphericalLaplacian,
    cartesian_laplacian,
    cylindrical_laplacian,
    spherical_laplacian,
)

__all__ = [
    "CoordinateOperator",
    "CartesianGradient",
    "CylindricalGradient",
    "SphericalGradient",
    "CartesianLaplacian",
    "CylindricalLaplacian",
    "SphericalLaplacian",
    "cartesian_gradient",
    "cylindrical_gradient",
    "spherical_gradient",
    "cartesian_laplacian",
    "cylindrical_laplacian",
    "spherical_laplacian",
]
