"""Interpolation kernels for lattice noise and falloff presets for simplex noise."""

import enum


def linear_step(a, b, weight):
    """Plain linear interpolation, clamped to the end points."""
    if weight <= 0.0:
        return a
    if weight >= 1.0:
        return b
    return a + (b - a) * weight


def smooth_step(a, b, weight):
    """Cubic Hermite step: 3w^2 - 2w^3."""
    if weight <= 0.0:
        return a
    if weight >= 1.0:
        return b
    return (b - a) * (3.0 - weight * 2.0) * weight * weight + a


def smoother_step(a, b, weight):
    """Perlin's quintic step: 6w^5 - 15w^4 + 10w^3."""
    if weight <= 0.0:
        return a
    if weight >= 1.0:
        return b
    return (b - a) * weight * weight * weight * (weight * (weight * 6.0 - 15.0) + 10.0) + a


class Interpolation(enum.Enum):
    """Kernel used to blend lattice corner values.

    Higher-order kernels have zero first derivative (smoothstep) or zero
    first and second derivatives (smootherstep) at the cell boundaries,
    which is what keeps value and Perlin noise smooth across cells.
    """

    LINEAR = "linear"
    SMOOTHSTEP = "smoothstep"
    SMOOTHERSTEP = "smootherstep"

    @classmethod
    def parse(cls, value):
        """Accept an Interpolation or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            names = ", ".join(member.value for member in cls)
            raise ValueError(
                f"unknown interpolation {value!r} (expected one of: {names})"
            ) from None

    @property
    def kernel(self):
        return _KERNELS[self]

    def interpolate(self, a, b, weight):
        return _KERNELS[self](a, b, weight)


_KERNELS = {
    Interpolation.LINEAR: linear_step,
    Interpolation.SMOOTHSTEP: smooth_step,
    Interpolation.SMOOTHERSTEP: smoother_step,
}


class SimplexRadius(enum.Enum):
    """Squared falloff radius of a simplex corner.

    CONTINUOUS (0.5) keeps every contribution inside its own simplex, so the
    summed field has no seams. TRADITIONAL (0.6) is the constant from Perlin's
    reference implementation: slightly wider blobs, sharper features, and a
    tiny discontinuity where a corner's sphere crosses into a simplex that
    does not use it.
    """

    CONTINUOUS = 0.5
    TRADITIONAL = 0.6

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            names = ", ".join(member.name.lower() for member in cls)
            raise ValueError(
                f"unknown simplex radius {value!r} (expected one of: {names})"
            ) from None

    @property
    def r_squared(self):
        return self.value


def falloff(dist_squared, r_squared):
    """Compact-support weight max(0, r^2 - d^2)^4."""
    if dist_squared >= r_squared:
        return 0.0
    mult = r_squared - dist_squared
    mult *= mult
    return mult * mult
