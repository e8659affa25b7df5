"""Composition helpers layered over any noise.

Every class here follows the same sampling contract as the base noises
(``get``, ``get32`` and the fixed-arity evaluators), so they nest freely:
an OctaveNoise of SimplexNoise can feed a UniformNoise inside a
TransformedNoise.
"""

import logging
import math
import threading
from dataclasses import dataclass, field, replace

from .base import SampleDispatch
from .config import (
    DEFAULT_FREQUENCY,
    DEFAULT_LACUNARITY,
    DEFAULT_OCTAVES,
    DEFAULT_PERSISTENCE,
)

logger = logging.getLogger(__name__)

_SQRT_2 = math.sqrt(2.0)


@dataclass(frozen=True)
class DimensionalModulator:
    """Maps one coordinate axis as ``frequency * (x - offset)``."""

    offset: float = 0.0
    frequency: float = 1.0

    def apply(self, x):
        return self.frequency * (x - self.offset)

    def compose(self, before):
        """Modulator equal to applying ``before`` first, then this one.

        f1 * (f2 * (x - p2) - p1) == f1 * f2 * (x - (p2 + p1 / f2))
        """
        return DimensionalModulator(
            offset=before.offset + self.offset / before.frequency,
            frequency=self.frequency * before.frequency,
        )


IDENTITY = DimensionalModulator()


@dataclass
class TransformationModule:
    """Amplitude and per-axis modulation applied to one source noise.

    Evaluates ``amplitude * noise(m0(x0), m1(x1), ...)`` where ``mi`` is the
    modulator set for axis ``i``, falling back to ``default``.
    """

    amplitude: float = 1.0
    default: DimensionalModulator = IDENTITY
    modulators: list = field(default_factory=list)

    def modulator(self, axis):
        """Modulator in effect for ``axis`` (0-based)."""
        if 0 <= axis < len(self.modulators):
            mod = self.modulators[axis]
            if mod is not None:
                return mod
        return self.default

    def set_modulator(self, axis, modulator):
        """Set (or with None, clear) the modulator for one axis."""
        if axis < 0:
            raise IndexError(f"axis must be >= 0, got {axis}")
        if axis >= len(self.modulators):
            self.modulators.extend([None] * (axis + 1 - len(self.modulators)))
        self.modulators[axis] = modulator

    def simplify(self):
        """Drop trailing axes that only defer to the default."""
        while self.modulators and self.modulators[-1] is None:
            self.modulators.pop()

    def compose(self, wrapper):
        """Module equal to passing coordinates through ``wrapper`` first.

        Amplitudes multiply. Axes set on either module get their own
        composed modulator; every other axis uses the composed defaults.
        """
        count = max(len(self.modulators), len(wrapper.modulators))
        return replace(
            self,
            amplitude=self.amplitude * wrapper.amplitude,
            default=self.default.compose(wrapper.default),
            modulators=[self.modulator(i).compose(wrapper.modulator(i)) for i in range(count)],
        )

    def map(self, coords):
        return [self.modulator(i).apply(c) for i, c in enumerate(coords)]

    def sample(self, noise, coords, vector=False):
        mapped = self.map(coords)
        if vector:
            return self.amplitude * noise.get(mapped)
        return self.amplitude * noise.get(*mapped)


class TransformedNoise(SampleDispatch):
    """Sum of several source noises, each under its own TransformationModule.

    Sources are summed in the order they were added.
    """

    def __init__(self, sources=None):
        self._modules = {}
        for noise, module in (sources or {}).items():
            self.replace_transformation(noise, module)

    def __len__(self):
        return len(self._modules)

    def __contains__(self, noise):
        return noise in self._modules

    def sources(self):
        return list(self._modules)

    def get_or_add_transformation(self, noise):
        """Module for ``noise``, creating an identity module if absent."""
        module = self._modules.get(noise)
        if module is None:
            module = self._modules[noise] = TransformationModule()
        return module

    def remove_transformation(self, noise):
        self._modules.pop(noise, None)

    def replace_transformation(self, noise, module):
        self._modules[noise] = module

    def compose_all(self, wrapper):
        """Compose ``wrapper`` into every source's module."""
        for noise, module in self._modules.items():
            self._modules[noise] = module.compose(wrapper)

    def scale_all(self, factor):
        for module in self._modules.values():
            module.amplitude *= factor

    def _sum(self, coords, vector=False):
        total = 0.0
        for noise, module in self._modules.items():
            total += module.sample(noise, coords, vector)
        return total

    def get1(self, x):
        return self._sum((x,))

    def get2(self, x, y):
        return self._sum((x, y))

    def get3(self, x, y, z):
        return self._sum((x, y, z))

    def get4(self, x, y, z, w):
        return self._sum((x, y, z, w))

    def get_nd(self, coords):
        return self._sum(list(coords), vector=True)


class UniformNoise(SampleDispatch):
    """Remaps a roughly normal source onto a roughly uniform (-1, 1).

    A source whose samples have standard deviation ``sd`` is passed through
    ``erf(v / (sd * sqrt(2)))``, the CDF of that normal distribution
    rescaled to (-1, 1).
    """

    def __init__(self, source, standard_deviation):
        if not standard_deviation > 0:
            raise ValueError(f"standard_deviation must be positive, got {standard_deviation}")
        self.source = source
        self.standard_deviation = float(standard_deviation)
        self._scale = self.standard_deviation * _SQRT_2

    def uniform(self, value):
        return math.erf(value / self._scale)

    def get1(self, x):
        return self.uniform(self.source.get(x))

    def get2(self, x, y):
        return self.uniform(self.source.get(x, y))

    def get3(self, x, y, z):
        return self.uniform(self.source.get(x, y, z))

    def get4(self, x, y, z, w):
        return self.uniform(self.source.get(x, y, z, w))

    def get_nd(self, coords):
        return self.uniform(self.source.get(list(coords)))


class OctaveNoise(SampleDispatch):
    """Fractal sum of octaves.

    Octave ``i`` is sampled at ``coords * frequency * lacunarity**i`` and
    weighted by ``persistence**i``. The source for each octave comes from
    ``factory(i)``, called once per octave the first time it is needed.

    Args:
        factory: Callable taking the octave index and returning a noise.
        octaves: Number of octaves summed (>= 1).
        persistence: Amplitude ratio between consecutive octaves.
        lacunarity: Frequency ratio between consecutive octaves.
        frequency: Frequency of the first octave.
    """

    def __init__(self, factory, octaves=DEFAULT_OCTAVES, persistence=DEFAULT_PERSISTENCE,
                 lacunarity=DEFAULT_LACUNARITY, frequency=DEFAULT_FREQUENCY):
        self._factory = factory
        self._noises = []
        self._lock = threading.Lock()
        self.octaves = octaves
        self.persistence = float(persistence)
        self.lacunarity = float(lacunarity)
        self.frequency = float(frequency)

    @property
    def octaves(self):
        return self._octaves

    @octaves.setter
    def octaves(self, value):
        value = int(value)
        if value < 1:
            raise ValueError(f"octaves must be >= 1, got {value}")
        self._octaves = value

    def layers(self):
        """The noises for the current octave count, building missing ones."""
        count = self._octaves
        if len(self._noises) < count:
            with self._lock:
                while len(self._noises) < count:
                    index = len(self._noises)
                    self._noises.append(self._factory(index))
                    logger.debug("Created octave %d", index)
        return self._noises[:count]

    def unadjusted_maximum(self):
        """Largest possible sum when every octave returns magnitude 1."""
        total = 0.0
        weight = 1.0
        for _ in range(self._octaves):
            total += weight
            weight *= abs(self.persistence)
        return total

    def _sum(self, coords, vector=False):
        pos = [c * self.frequency for c in coords]
        total = 0.0
        weight = 1.0
        for noise in self.layers():
            total += weight * (noise.get(pos) if vector else noise.get(*pos))
            weight *= self.persistence
            pos = [c * self.lacunarity for c in pos]
        return total

    def get1(self, x):
        return self._sum((x,))

    def get2(self, x, y):
        return self._sum((x, y))

    def get3(self, x, y, z):
        return self._sum((x, y, z))

    def get4(self, x, y, z, w):
        return self._sum((x, y, z, w))

    def get_nd(self, coords):
        return self._sum(list(coords), vector=True)
