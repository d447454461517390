"""Finite-difference weight generation.

This module provides Fornberg's algorithm for the weights of derivatives of
arbitrary order on arbitrarily spaced one-dimensional grids.
"""

from .fornberg import (
    FornbergDerivative,
    FornbergStatus,
    coefficient,
    coefficient_row,
    evaluate_row,
    fornberg_weights,
    try_fornberg_weights,
)

__all__ = [
    "FornbergDerivative",
    "FornbergStatus",
    "coefficient",
    "coefficient_row",
    "evaluate_row",
    "fornberg_weights",
    "try_fornberg_weights",
]
