"""Utility functions for GridDiff package."""

from .sandbox import sample_along_axis
from .validate import as_grid, validate_axis_values

__all__ = [
    "as_grid",
    "sample_along_axis",
    "validate_axis_values",
]
