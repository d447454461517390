"""Provides all griddiff operators."""

from importlib.metadata import PackageNotFoundError, version

from griddiff.derivatives.fornberg import (
    FornbergDerivative,
    FornbergStatus,
    fornberg_weights,
    try_fornberg_weights,
)
from griddiff.diffop import DifferentialOperator, Point3
from griddiff.exceptions import (
    CoefficientSizeError,
    EvaluationError,
    GridConfigurationError,
    GridDiffError,
    MissingInputError,
)
from griddiff.operators import (
    CartesianGradient,
    CartesianLaplacian,
    CylindricalGradient,
    CylindricalLaplacian,
    SphericalGradient,
    SphericalLaplacian,
)

try:
    __version__ = version("griddiff")
except PackageNotFoundError:
    pass

__all__ = [
    "Point3",
    "DifferentialOperator",
    "FornbergDerivative",
    "FornbergStatus",
    "fornberg_weights",
    "try_fornberg_weights",
    "CartesianGradient",
    "CylindricalGradient",
    "SphericalGradient",
    "CartesianLaplacian",
    "CylindricalLaplacian",
    "SphericalLaplacian",
    "GridDiffError",
    "CoefficientSizeError",
    "MissingInputError",
    "GridConfigurationError",
    "EvaluationError",
]
