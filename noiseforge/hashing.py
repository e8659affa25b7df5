"""Seeded hashing of integer lattice coordinates.

Every noise variant resolves its per-corner randomness through a
CoordinateHasher. The hash is a pure function of (seed, periods, corner):

    salt     = M * (M * seed + 17) + 17
    axis key = ((coord mod period) + salt) ^ >>32, * M
    fold     = (acc ^ axis key) * M, ^ >>29      (acc starts at salt)

All arithmetic is modulo 2^64. The multiply between folds makes the hash
depend on coordinate order, so (1, 2) and (2, 1) land in different table
slots even when both axes share a period.
"""

MASK64 = (1 << 64) - 1

# Knuth-style odd 64-bit multiplier.
HASH_MULTIPLIER = -7084644459119787965 & MASK64

# splitmix64 constants, used to expand a folded key into a word stream.
_GOLDEN_GAMMA = 0x9E3779B97F4A7C15
_MIX_1 = 0xBF58476D1CE4E5B9
_MIX_2 = 0x94D049BB133111EB


def scramble_seed(seed):
    """Spread a user seed over all 64 bits."""
    seed &= MASK64
    seed = (HASH_MULTIPLIER * seed + 17) & MASK64
    return (HASH_MULTIPLIER * seed + 17) & MASK64


def _combine(acc, key):
    acc = ((acc ^ key) * HASH_MULTIPLIER) & MASK64
    return acc ^ (acc >> 29)


def table_index(key, log_size):
    """Reduce a 64-bit key to ``[0, 2**log_size)`` using its high bits."""
    shift = 64 - log_size
    key ^= key >> shift
    return ((key * HASH_MULTIPLIER) & MASK64) >> shift


def _splitmix(state):
    state = (state + _GOLDEN_GAMMA) & MASK64
    z = state
    z = ((z ^ (z >> 30)) * _MIX_1) & MASK64
    z = ((z ^ (z >> 27)) * _MIX_2) & MASK64
    return state, z ^ (z >> 31)


class CoordinateHasher:
    """Hashes lattice corners for one (seed, periods) configuration.

    Args:
        seed: Any integer; only its low 64 bits matter.
        default_period: Period applied to axes without an explicit one.
            None (or <= 0) leaves those axes aperiodic.
        periods: Explicit per-axis periods, axis 0 first.
    """

    __slots__ = ("seed", "salt", "default_period", "periods",
                 "_p0", "_p1", "_p2", "_p3")

    def __init__(self, seed=0, default_period=None, periods=()):
        self.seed = seed
        self.salt = scramble_seed(seed)
        self.default_period = default_period if default_period and default_period > 0 else None
        self.periods = tuple(p if p and p > 0 else None for p in periods)
        # first four axes are hit on every specialized query
        self._p0 = self.period(0)
        self._p1 = self.period(1)
        self._p2 = self.period(2)
        self._p3 = self.period(3)

    @classmethod
    def from_config(cls, config):
        return cls(config.seed, config.default_period, config.periods)

    def period(self, axis):
        if axis < len(self.periods):
            return self.periods[axis]
        return self.default_period

    def axis_key(self, coord, period):
        """Mix one (already floored) coordinate with the seed."""
        if period is not None:
            coord %= period
        key = (coord + self.salt) & MASK64
        key ^= key >> 32
        return (key * HASH_MULTIPLIER) & MASK64

    def key1(self, i):
        return _combine(self.salt, self.axis_key(i, self._p0))

    def key2(self, i, j):
        acc = _combine(self.salt, self.axis_key(i, self._p0))
        return _combine(acc, self.axis_key(j, self._p1))

    def key3(self, i, j, k):
        acc = _combine(self.salt, self.axis_key(i, self._p0))
        acc = _combine(acc, self.axis_key(j, self._p1))
        return _combine(acc, self.axis_key(k, self._p2))

    def key4(self, i, j, k, l):
        acc = _combine(self.salt, self.axis_key(i, self._p0))
        acc = _combine(acc, self.axis_key(j, self._p1))
        acc = _combine(acc, self.axis_key(k, self._p2))
        return _combine(acc, self.axis_key(l, self._p3))

    def key(self, corner):
        """Hash key of an arbitrary-length corner."""
        fold = self.fold()
        for coord in corner:
            fold.fold(coord)
        return fold.key

    def fold(self):
        """Start an incremental hash over a corner, axis 0 first."""
        return HashFold(self)


class HashFold:
    """Incremental hashing state for one lattice corner.

    Coordinates are folded in one at a time, so N-dimensional callers never
    need to build the corner as a separate sequence. After the last axis the
    state can be read as a table index or expanded into a stream of 64-bit
    words for gradient synthesis.
    """

    __slots__ = ("_hasher", "_state", "_axis")

    def __init__(self, hasher):
        self._hasher = hasher
        self._state = hasher.salt
        self._axis = 0

    def fold(self, coord):
        hasher = self._hasher
        key = hasher.axis_key(coord, hasher.period(self._axis))
        self._state = _combine(self._state, key)
        self._axis += 1
        return self

    @property
    def axes(self):
        """Number of coordinates folded so far."""
        return self._axis

    @property
    def key(self):
        return self._state

    def index(self, log_size):
        return table_index(self._state, log_size)

    def stream(self):
        """Yield an endless sequence of well-mixed 64-bit words."""
        state = self._state
        while True:
            state, word = _splitmix(state)
            yield word
