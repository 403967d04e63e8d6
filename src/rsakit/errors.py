"""Error taxonomy for rsakit.

All errors derive from ``ValueError`` so that callers written against
plain ``ValueError`` keep working.
"""


class RSAError(ValueError):
    """Base class for failures of similarity or triangle computations."""


class DimensionMismatchError(RSAError):
    """Inputs have incompatible shapes (no features, too few items, unequal matrices)."""


class DegenerateVectorError(RSAError):
    """An item vector has zero variance or zero magnitude.

    Parameters
    ----------
    message : str
        Human-readable description.
    indices : sequence of int, optional
        Row indices of the offending items.
    """

    def __init__(self, message, indices=None):
        super().__init__(message)
        self.indices = tuple(int(i) for i in indices) if indices is not None else ()


class ZeroVarianceError(RSAError):
    """A lower-triangle vector is constant, so its correlation is undefined."""


class InsufficientDataError(RSAError):
    """Too few item pairs (or an unusable method) for a triangle correlation."""
