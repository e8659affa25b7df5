"""NoiseForge - Deterministic, seedable procedural noise in any dimension."""

from .base import Noise
from .bounds import DEFAULT_BOUNDS, BoundsCalculator
from .config import DEFAULT_SEED, NoiseConfig
from .errors import DimensionMismatch, InvalidDimension, NoiseError
from .interpolation import Interpolation, SimplexRadius
from .lattice import PerlinNoise, ValueNoise
from .render import sample_grid, to_image
from .simplex import SimplexNoise
from .transform import (
    DimensionalModulator,
    OctaveNoise,
    TransformationModule,
    TransformedNoise,
    UniformNoise,
)

__version__ = "0.1.0"
__all__ = [
    "create",
    "generate",
    "BoundsCalculator",
    "DEFAULT_BOUNDS",
    "DimensionMismatch",
    "DimensionalModulator",
    "Interpolation",
    "InvalidDimension",
    "Noise",
    "NoiseConfig",
    "NoiseError",
    "OctaveNoise",
    "PerlinNoise",
    "SimplexNoise",
    "SimplexRadius",
    "TransformationModule",
    "TransformedNoise",
    "UniformNoise",
    "ValueNoise",
    "sample_grid",
    "to_image",
]

NOISE_TYPES = {
    "value": ValueNoise,
    "perlin": PerlinNoise,
    "simplex": SimplexNoise,
}


def create(kind, seed=DEFAULT_SEED, period=None, **kwargs):
    """Build a noise by name.

    Args:
        kind: One of "value", "perlin" or "simplex".
        seed: Integer seed.
        period: Period applied to every axis, or None for aperiodic noise.
        **kwargs: Additional NoiseConfig fields (interpolation, radius,
            periods).

    Returns:
        A ValueNoise, PerlinNoise or SimplexNoise.
    """
    try:
        cls = NOISE_TYPES[kind]
    except KeyError:
        raise ValueError(
            f"unknown noise type {kind!r} (expected one of: {', '.join(NOISE_TYPES)})"
        ) from None
    return cls(seed=seed, default_period=period, **kwargs)


def generate(kind, size=256, seed=DEFAULT_SEED, scale=32.0, octaves=1, **kwargs):
    """Render a square grayscale noise image.

    Args:
        kind: One of "value", "perlin" or "simplex".
        size: Image width and height in pixels.
        seed: Integer seed. Octave ``i`` uses ``seed + i``.
        scale: Pixels per noise unit (larger = smoother).
        octaves: Number of octaves; more than one sums an OctaveNoise and
            rescales it back into [-1, 1].
        **kwargs: Passed to ``create`` (period, interpolation, radius).

    Returns:
        PIL Image in L mode.
    """
    if octaves == 1:
        noise = create(kind, seed=seed, **kwargs)
        values = sample_grid(noise, size, size, scale=scale)
    else:
        noise = OctaveNoise(lambda i: create(kind, seed=seed + i, **kwargs), octaves=octaves)
        values = sample_grid(noise, size, size, scale=scale) / noise.unadjusted_maximum()
    return to_image(values)
