"""The noise contract and its argument dispatch."""

from typing import Protocol

import numpy as np

from .bounds import DEFAULT_BOUNDS
from .config import DEFAULT_SEED, NoiseConfig
from .errors import InvalidDimension
from .gradients import GradientTable
from .hashing import CoordinateHasher


class Noise(Protocol):
    """Anything that can be sampled like a noise field."""

    def get(self, *coords):
        ...

    def get32(self, *coords):
        ...


def is_vector(arg):
    return np.ndim(arg) > 0


def resolve_config(config, options):
    """Merge an optional NoiseConfig with keyword overrides."""
    if config is None:
        return NoiseConfig(**options)
    if options:
        return config.with_options(**options)
    return config


class SampleDispatch:
    """Routes ``get`` calls to the fixed-arity or N-dimensional evaluator.

    Holds no state. Subclasses provide ``get1`` .. ``get4`` and ``get_nd``.
    """

    __slots__ = ()

    def get(self, *coords):
        """Sample the field.

        ``get(x)``, ``get(x, y)``, ``get(x, y, z)`` and ``get(x, y, z, w)``
        use the unrolled evaluators. ``get(coords)`` with a list, tuple or
        array always takes the N-dimensional path, as do more than four
        scalar arguments.
        """
        n = len(coords)
        if n == 1:
            if is_vector(coords[0]):
                return self.get_nd(coords[0])
            return self.get1(float(coords[0]))
        if n == 2:
            return self.get2(float(coords[0]), float(coords[1]))
        if n == 3:
            return self.get3(float(coords[0]), float(coords[1]), float(coords[2]))
        if n == 4:
            return self.get4(float(coords[0]), float(coords[1]),
                             float(coords[2]), float(coords[3]))
        if n == 0:
            raise InvalidDimension(0)
        return self.get_nd(coords)

    def get32(self, *coords):
        """Single-precision variant of ``get``.

        Coordinates are rounded to float32 before evaluation and the result
        is returned as ``numpy.float32``.
        """
        if len(coords) == 1 and is_vector(coords[0]):
            pos = np.asarray(coords[0], dtype=np.float32).tolist()
            return np.float32(self.get_nd(pos))
        return np.float32(self.get(*(float(np.float32(c)) for c in coords)))


class SeededConstructors:
    """``aperiodic`` / ``periodic`` factories for config-driven noises."""

    __slots__ = ()

    @classmethod
    def aperiodic(cls, seed=DEFAULT_SEED, bounds=None, **options):
        return cls(NoiseConfig.aperiodic(seed, **options), bounds=bounds)

    @classmethod
    def periodic(cls, default_period, *periods, seed=DEFAULT_SEED, bounds=None, **options):
        config = NoiseConfig.periodic(default_period, *periods, seed=seed, **options)
        return cls(config, bounds=bounds)


def build_components(config, options, bounds=None):
    """Resolve the collaborators a seeded noise evaluates with.

    Returns:
        (config, hasher, table, bounds) where ``bounds`` falls back to the
        process-wide shared BoundsCalculator.
    """
    config = resolve_config(config, options)
    hasher = CoordinateHasher.from_config(config)
    return config, hasher, GradientTable(hasher), bounds if bounds is not None else DEFAULT_BOUNDS
