"""Exceptions raised by noise evaluation."""


class NoiseError(ValueError):
    """Base class for noiseforge errors."""


class InvalidDimension(NoiseError):
    """Raised when a query or table is requested for fewer than one axis."""

    def __init__(self, dim):
        super().__init__(f"noise dimension must be at least 1, got {dim}")
        self.dim = dim


class DimensionMismatch(NoiseError):
    """Raised when a buffer built for one dimension meets a query of another."""

    def __init__(self, expected, actual, what="vector"):
        super().__init__(
            f"{what} has {actual} components, expected {expected}"
        )
        self.expected = expected
        self.actual = actual


def check_dimension(dim):
    """Fail fast on dimensions below one."""
    if dim < 1:
        raise InvalidDimension(dim)
    return dim
