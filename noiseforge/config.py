"""Default settings and the per-instance noise configuration."""

from dataclasses import dataclass, field, replace

from .interpolation import Interpolation, SimplexRadius

# --- Seeding ---
DEFAULT_SEED = 0

# --- Kernels ---
DEFAULT_INTERPOLATION = Interpolation.SMOOTHSTEP
DEFAULT_RADIUS = SimplexRadius.TRADITIONAL

# --- Octave summation ---
DEFAULT_OCTAVES = 6
DEFAULT_PERSISTENCE = 0.35
DEFAULT_LACUNARITY = 2.0
DEFAULT_FREQUENCY = 1.0

# A period of None (or anything <= 0) leaves an axis aperiodic.
APERIODIC = None


def _normalize_period(period):
    if period is None:
        return None
    period = int(period)
    return period if period > 0 else None


@dataclass(frozen=True)
class NoiseConfig:
    """Immutable configuration shared by every noise variant.

    Lattice noises read ``interpolation``; simplex noise reads ``radius``.
    Periods past the end of ``periods`` fall back to ``default_period``.
    """

    seed: int = DEFAULT_SEED
    default_period: object = APERIODIC
    periods: tuple = field(default_factory=tuple)
    interpolation: Interpolation = DEFAULT_INTERPOLATION
    radius: SimplexRadius = DEFAULT_RADIUS

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "seed", int(self.seed))
        object.__setattr__(self, "default_period", _normalize_period(self.default_period))
        object.__setattr__(self, "periods", tuple(_normalize_period(p) for p in self.periods))
        object.__setattr__(self, "interpolation", Interpolation.parse(self.interpolation))
        object.__setattr__(self, "radius", SimplexRadius.parse(self.radius))

    def period(self, axis):
        """Period of ``axis`` (0-based), or None when aperiodic."""
        if axis < len(self.periods):
            return self.periods[axis]
        return self.default_period

    @property
    def is_periodic(self):
        return self.default_period is not None or any(p is not None for p in self.periods)

    def with_options(self, **changes):
        return replace(self, **changes)

    @classmethod
    def aperiodic(cls, seed=DEFAULT_SEED, **options):
        return cls(seed=seed, **options)

    @classmethod
    def periodic(cls, default_period, *periods, seed=DEFAULT_SEED, **options):
        return cls(seed=seed, default_period=default_period, periods=periods, **options)
