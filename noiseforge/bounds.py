"""Normalization bounds that scale raw noise into roughly [-1, 1].

Perlin noise built from unit gradients peaks at sqrt(D)/2, value noise never
leaves the range of its table, and simplex noise peaks somewhere along a
simplex edge. For one to four dimensions the simplex peaks were computed
offline; above that they are derived on first use by maximizing the summed
falloff of the two corners of an edge.
"""

import logging
import math
import threading

import numpy as np

from .errors import check_dimension
from .interpolation import SimplexRadius

logger = logging.getLogger(__name__)

# sqrt(N) / 2
PERLIN_BOUNDS = {
    1: 0.5,
    2: 0.707106781186547524400844,
    3: 0.866025403784438646763723,
    4: 1.0,
}

VALUE_BOUND = 1.0

SIMPLEX_BOUNDS = {
    SimplexRadius.CONTINUOUS: {
        1: 0.013983312811550396,
        2: 0.010080204702811454,
        3: 0.009289062925455909,
        4: 0.009210831906368878,
    },
    SimplexRadius.TRADITIONAL: {
        1: 0.03599643079336411,
        2: 0.028902867534156943,
        3: 0.025077363499228966,
        4: 0.02289733608959788,
    },
}

# |imag| below this (relative to |root|) counts as a real root
_IMAGINARY_TOLERANCE = 1e-9


def _one_side(hx, r_squared):
    hx2 = hx * hx
    if r_squared <= hx2:
        return 0.0
    diff = r_squared - hx2
    diff *= diff
    return hx * diff * diff


def edge_profile(x, h, r_squared):
    """Summed falloff of both corners of a simplex edge at position ``x``.

    ``x`` runs from 0 at one corner to 1 at the other along the edge, whose
    length is ``h``. Positions outside (0, 1) score 0.
    """
    if x <= 0.0 or x >= 1.0:
        return 0.0
    hx = h * x
    return _one_side(hx, r_squared) + _one_side(h - hx, r_squared)


def edge_cubic(dim, r_squared):
    """Coefficients (highest power first) of the edge-profile derivative.

    The profile is symmetric about the midpoint, so its derivative is
    (x - 1/2) times a cubic in u = (x - 1/2)^2. Those are the coefficients
    of that cubic.
    """
    h2 = dim / (1.0 + dim)
    h = math.sqrt(h2)
    h3 = h * h2
    h5 = h2 * h3
    h7 = h2 * h5
    h9 = h2 * h7
    r2 = r_squared
    r4 = r2 * r2
    r6 = r2 * r4
    a = 72 * h9
    b = 126 * h9 - 168 * h7 * r2
    c = 63 * h9 / 2 - 140 * h7 * r2 + 120 * h5 * r4
    d = 9 * h9 / 8 - 21 * h7 * r2 / 2 + 30 * h5 * r4 - 24 * h3 * r6
    return a, b, c, d


def edge_candidates(coefficients):
    """Map the real, non-negative cubic roots back to edge positions."""
    candidates = []
    for root in np.roots(coefficients):
        if abs(root.imag) > _IMAGINARY_TOLERANCE * max(1.0, abs(root)):
            continue
        u = float(root.real)
        # a negative u would need an imaginary offset from the midpoint
        if u < 0.0:
            continue
        candidates.append(0.5 + math.sqrt(u))
    return candidates


def derive_simplex_bound(dim, r_squared):
    """Largest edge-profile value for ``dim`` dimensions.

    For dim >= 5 the third corner of any face is always farther than the
    falloff radius from the edge, so the two-corner profile is the worst
    case. The midpoint is always a candidate, which keeps the bound positive
    even when the cubic has no usable root.
    """
    check_dimension(dim)
    h = math.sqrt(dim / (1.0 + dim))
    best = edge_profile(0.5, h, r_squared)
    for x in edge_candidates(edge_cubic(dim, r_squared)):
        best = max(best, edge_profile(x, h, r_squared))
    return best


class BoundsCalculator:
    """Memoized normalization bounds.

    Each key is computed at most once. Computing one key holds only that
    key's lock, so a slow derivation for one dimension never blocks lookups
    or derivations for another.
    """

    def __init__(self):
        self._cache = {}
        self._key_locks = {}
        self._lock = threading.Lock()

    def perlin(self, dim):
        check_dimension(dim)
        bound = PERLIN_BOUNDS.get(dim)
        if bound is not None:
            return bound
        return self._memoized(("perlin", dim), lambda: math.sqrt(dim) / 2)

    def value(self, dim):
        check_dimension(dim)
        return VALUE_BOUND

    def simplex(self, dim, radius=SimplexRadius.TRADITIONAL):
        check_dimension(dim)
        radius = SimplexRadius.parse(radius)
        bound = SIMPLEX_BOUNDS[radius].get(dim)
        if bound is not None:
            return bound
        return self._memoized(
            ("simplex", dim, radius),
            lambda: derive_simplex_bound(dim, radius.r_squared),
        )

    def cached_keys(self):
        with self._lock:
            return sorted(self._cache, key=repr)

    def _memoized(self, key, compute):
        try:
            return self._cache[key]
        except KeyError:
            pass

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            # another thread may have finished while we waited
            if key in self._cache:
                return self._cache[key]
            value = compute()
            logger.debug("Derived normalization bound %r = %.17g", key, value)
            with self._lock:
                self._cache[key] = value
        return value


DEFAULT_BOUNDS = BoundsCalculator()
