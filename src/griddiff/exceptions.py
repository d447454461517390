"""Exceptions raised by GridDiff.

All errors derive from :class:`GridDiffError`, which is a ``ValueError`` so
callers that only care about bad input can catch the builtin.
"""


class GridDiffError(ValueError):
    """Base exception for GridDiff."""

    pass


class CoefficientSizeError(GridDiffError):
    """The grid is too small for the requested number of derivative orders."""

    pass


class MissingInputError(GridDiffError, TypeError):
    """A required grid or output buffer was not supplied."""

    pass


class GridConfigurationError(GridDiffError):
    """A differential operator was configured with unusable grids or order."""

    pass


class EvaluationError(GridDiffError):
    """A derivative was requested with an unsupported order or sample count."""

    pass
