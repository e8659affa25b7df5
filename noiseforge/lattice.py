"""Hypercube-lattice noises: value noise and Perlin gradient noise.

A query is answered from the 2^D corners of the unit cell around it. Each
corner supplies either a table value (value noise) or the dot product of its
gradient with the corner-to-point displacement (Perlin noise), and the
corner results are blended axis by axis with the configured interpolation
kernel.

The 1D to 4D evaluators are unrolled. ``get_nd`` enumerates corners as bit
vectors (highest bit = axis 0) and reduces them in place; for D <= 4 it
performs the same arithmetic in the same order as the unrolled code.
"""

import math

from .base import SampleDispatch, SeededConstructors, build_components
from .errors import DimensionMismatch, check_dimension
from .gradients import dot
from .interpolation import Interpolation

floor = math.floor


def reduce_corners(values, weights, interpolate):
    """Collapse 2^D corner values to one by interpolating along each axis.

    Corner ``j`` and ``j + half`` differ only in the axis being reduced, so
    every pass halves the live part of ``values``. Works in place.
    """
    dim = len(weights)
    if len(values) != 1 << dim:
        raise DimensionMismatch(1 << dim, len(values), "corner buffer")
    half = len(values) >> 1
    axis = 0
    while half:
        weight = weights[axis]
        for j in range(half):
            values[j] = interpolate(values[j], values[j + half], weight)
        half >>= 1
        axis += 1
    return values[0]


class _LatticeNoise(SampleDispatch, SeededConstructors):
    """Configuration handling shared by ValueNoise and PerlinNoise."""

    def __init__(self, config=None, bounds=None, **options):
        self._config, self._hasher, self._table, self._bounds = build_components(
            config, options, bounds)
        self._interpolate = self._config.interpolation.kernel

    @property
    def config(self):
        return self._config

    @property
    def seed(self):
        return self._config.seed

    @property
    def interpolation(self):
        return self._config.interpolation

    @interpolation.setter
    def interpolation(self, value):
        self._config = self._config.with_options(interpolation=Interpolation.parse(value))
        self._interpolate = self._config.interpolation.kernel

    def interpolate(self, a, b, weight):
        return self._interpolate(a, b, weight)

    def __repr__(self):
        return f"{type(self).__name__}({self._config!r})"


class ValueNoise(_LatticeNoise):
    """Interpolated pseudo-random lattice values in [-1, 1]."""

    def bound(self, dim):
        return self._bounds.value(dim)

    def get1(self, x):
        x0 = floor(x)
        value = self._table.value1
        return self._interpolate(value(x0), value(x0 + 1), x - x0) / self._bounds.value(1)

    def get2(self, x, y):
        x0 = floor(x)
        y0 = floor(y)
        x1 = x0 + 1
        y1 = y0 + 1
        value = self._table.value2
        wx = x - x0
        wy = y - y0
        interp = self._interpolate

        ix0 = interp(value(x0, y0), value(x1, y0), wx)
        ix1 = interp(value(x0, y1), value(x1, y1), wx)
        return interp(ix0, ix1, wy) / self._bounds.value(2)

    def get3(self, x, y, z):
        x0 = floor(x)
        y0 = floor(y)
        z0 = floor(z)
        x1 = x0 + 1
        y1 = y0 + 1
        z1 = z0 + 1
        value = self._table.value3
        wx = x - x0
        wy = y - y0
        wz = z - z0
        interp = self._interpolate

        ix00 = interp(value(x0, y0, z0), value(x1, y0, z0), wx)
        ix01 = interp(value(x0, y0, z1), value(x1, y0, z1), wx)
        ix10 = interp(value(x0, y1, z0), value(x1, y1, z0), wx)
        ix11 = interp(value(x0, y1, z1), value(x1, y1, z1), wx)
        ixy0 = interp(ix00, ix10, wy)
        ixy1 = interp(ix01, ix11, wy)
        return interp(ixy0, ixy1, wz) / self._bounds.value(3)

    def get4(self, x, y, z, w):
        x0 = floor(x)
        y0 = floor(y)
        z0 = floor(z)
        w0 = floor(w)
        x1 = x0 + 1
        y1 = y0 + 1
        z1 = z0 + 1
        w1 = w0 + 1
        value = self._table.value4
        wx = x - x0
        wy = y - y0
        wz = z - z0
        ww = w - w0
        interp = self._interpolate

        # x varies
        ix000 = interp(value(x0, y0, z0, w0), value(x1, y0, z0, w0), wx)
        ix001 = interp(value(x0, y0, z0, w1), value(x1, y0, z0, w1), wx)
        ix010 = interp(value(x0, y0, z1, w0), value(x1, y0, z1, w0), wx)
        ix011 = interp(value(x0, y0, z1, w1), value(x1, y0, z1, w1), wx)
        ix100 = interp(value(x0, y1, z0, w0), value(x1, y1, z0, w0), wx)
        ix101 = interp(value(x0, y1, z0, w1), value(x1, y1, z0, w1), wx)
        ix110 = interp(value(x0, y1, z1, w0), value(x1, y1, z1, w0), wx)
        ix111 = interp(value(x0, y1, z1, w1), value(x1, y1, z1, w1), wx)
        # y varies
        ixy00 = interp(ix000, ix100, wy)
        ixy01 = interp(ix001, ix101, wy)
        ixy10 = interp(ix010, ix110, wy)
        ixy11 = interp(ix011, ix111, wy)
        # z varies
        ixyz0 = interp(ixy00, ixy10, wz)
        ixyz1 = interp(ixy01, ixy11, wz)
        return interp(ixyz0, ixyz1, ww) / self._bounds.value(4)

    def get_nd(self, coords):
        pos = [float(c) for c in coords]
        dim = check_dimension(len(pos))
        lower = [floor(p) for p in pos]
        weights = [p - lo for p, lo in zip(pos, lower)]

        hasher = self._hasher
        table = self._table
        values = [0.0] * (1 << dim)
        top = dim - 1
        for i in range(len(values)):
            fold = hasher.fold()
            for axis in range(dim):
                fold.fold(lower[axis] + ((i >> (top - axis)) & 1))
            values[i] = table.value_from_fold(fold)

        return reduce_corners(values, weights, self._interpolate) / self._bounds.value(dim)


class PerlinNoise(_LatticeNoise):
    """Classic gradient noise on the integer lattice, normalized by sqrt(D)/2."""

    def bound(self, dim):
        return self._bounds.perlin(dim)

    def get1(self, x):
        x0 = floor(x)
        x1 = x0 + 1
        dx0 = x - x0
        dx1 = x - x1
        grad = self._table.gradient1

        dp0 = grad(x0) * dx0
        dp1 = grad(x1) * dx1
        return self._interpolate(dp0, dp1, dx0) / self._bounds.perlin(1)

    def get2(self, x, y):
        x0 = floor(x)
        y0 = floor(y)
        x1 = x0 + 1
        y1 = y0 + 1
        dx0 = x - x0
        dx1 = x - x1
        dy0 = y - y0
        dy1 = y - y1
        grad = self._table.gradient2

        g00 = grad(x0, y0)
        g01 = grad(x0, y1)
        g10 = grad(x1, y0)
        g11 = grad(x1, y1)

        dp00 = g00[0] * dx0 + g00[1] * dy0
        dp01 = g01[0] * dx0 + g01[1] * dy1
        dp10 = g10[0] * dx1 + g10[1] * dy0
        dp11 = g11[0] * dx1 + g11[1] * dy1

        interp = self._interpolate
        ix0 = interp(dp00, dp10, dx0)  # y = 0, x varies
        ix1 = interp(dp01, dp11, dx0)  # y = 1, x varies
        return interp(ix0, ix1, dy0) / self._bounds.perlin(2)

    def get3(self, x, y, z):
        x0 = floor(x)
        y0 = floor(y)
        z0 = floor(z)
        x1 = x0 + 1
        y1 = y0 + 1
        z1 = z0 + 1
        dx0 = x - x0
        dx1 = x - x1
        dy0 = y - y0
        dy1 = y - y1
        dz0 = z - z0
        dz1 = z - z1
        grad = self._table.gradient3

        g000 = grad(x0, y0, z0)
        g001 = grad(x0, y0, z1)
        g010 = grad(x0, y1, z0)
        g011 = grad(x0, y1, z1)
        g100 = grad(x1, y0, z0)
        g101 = grad(x1, y0, z1)
        g110 = grad(x1, y1, z0)
        g111 = grad(x1, y1, z1)

        dp000 = g000[0] * dx0 + g000[1] * dy0 + g000[2] * dz0
        dp001 = g001[0] * dx0 + g001[1] * dy0 + g001[2] * dz1
        dp010 = g010[0] * dx0 + g010[1] * dy1 + g010[2] * dz0
        dp011 = g011[0] * dx0 + g011[1] * dy1 + g011[2] * dz1
        dp100 = g100[0] * dx1 + g100[1] * dy0 + g100[2] * dz0
        dp101 = g101[0] * dx1 + g101[1] * dy0 + g101[2] * dz1
        dp110 = g110[0] * dx1 + g110[1] * dy1 + g110[2] * dz0
        dp111 = g111[0] * dx1 + g111[1] * dy1 + g111[2] * dz1

        interp = self._interpolate
        ix00 = interp(dp000, dp100, dx0)
        ix01 = interp(dp001, dp101, dx0)
        ix10 = interp(dp010, dp110, dx0)
        ix11 = interp(dp011, dp111, dx0)
        ixy0 = interp(ix00, ix10, dy0)
        ixy1 = interp(ix01, ix11, dy0)
        return interp(ixy0, ixy1, dz0) / self._bounds.perlin(3)

    def get4(self, x, y, z, w):
        x0 = floor(x)
        y0 = floor(y)
        z0 = floor(z)
        w0 = floor(w)
        x1 = x0 + 1
        y1 = y0 + 1
        z1 = z0 + 1
        w1 = w0 + 1
        dx0 = x - x0
        dx1 = x - x1
        dy0 = y - y0
        dy1 = y - y1
        dz0 = z - z0
        dz1 = z - z1
        dw0 = w - w0
        dw1 = w - w1
        grad = self._table.gradient4

        g0000 = grad(x0, y0, z0, w0)
        g0001 = grad(x0, y0, z0, w1)
        g0010 = grad(x0, y0, z1, w0)
        g0011 = grad(x0, y0, z1, w1)
        g0100 = grad(x0, y1, z0, w0)
        g0101 = grad(x0, y1, z0, w1)
        g0110 = grad(x0, y1, z1, w0)
        g0111 = grad(x0, y1, z1, w1)
        g1000 = grad(x1, y0, z0, w0)
        g1001 = grad(x1, y0, z0, w1)
        g1010 = grad(x1, y0, z1, w0)
        g1011 = grad(x1, y0, z1, w1)
        g1100 = grad(x1, y1, z0, w0)
        g1101 = grad(x1, y1, z0, w1)
        g1110 = grad(x1, y1, z1, w0)
        g1111 = grad(x1, y1, z1, w1)

        dp0000 = g0000[0] * dx0 + g0000[1] * dy0 + g0000[2] * dz0 + g0000[3] * dw0
        dp0001 = g0001[0] * dx0 + g0001[1] * dy0 + g0001[2] * dz0 + g0001[3] * dw1
        dp0010 = g0010[0] * dx0 + g0010[1] * dy0 + g0010[2] * dz1 + g0010[3] * dw0
        dp0011 = g0011[0] * dx0 + g0011[1] * dy0 + g0011[2] * dz1 + g0011[3] * dw1
        dp0100 = g0100[0] * dx0 + g0100[1] * dy1 + g0100[2] * dz0 + g0100[3] * dw0
        dp0101 = g0101[0] * dx0 + g0101[1] * dy1 + g0101[2] * dz0 + g0101[3] * dw1
        dp0110 = g0110[0] * dx0 + g0110[1] * dy1 + g0110[2] * dz1 + g0110[3] * dw0
        dp0111 = g0111[0] * dx0 + g0111[1] * dy1 + g0111[2] * dz1 + g0111[3] * dw1
        dp1000 = g1000[0] * dx1 + g1000[1] * dy0 + g1000[2] * dz0 + g1000[3] * dw0
        dp1001 = g1001[0] * dx1 + g1001[1] * dy0 + g1001[2] * dz0 + g1001[3] * dw1
        dp1010 = g1010[0] * dx1 + g1010[1] * dy0 + g1010[2] * dz1 + g1010[3] * dw0
        dp1011 = g1011[0] * dx1 + g1011[1] * dy0 + g1011[2] * dz1 + g1011[3] * dw1
        dp1100 = g1100[0] * dx1 + g1100[1] * dy1 + g1100[2] * dz0 + g1100[3] * dw0
        dp1101 = g1101[0] * dx1 + g1101[1] * dy1 + g1101[2] * dz0 + g1101[3] * dw1
        dp1110 = g1110[0] * dx1 + g1110[1] * dy1 + g1110[2] * dz1 + g1110[3] * dw0
        dp1111 = g1111[0] * dx1 + g1111[1] * dy1 + g1111[2] * dz1 + g1111[3] * dw1

        interp = self._interpolate
        # x varies
        ix000 = interp(dp0000, dp1000, dx0)
        ix001 = interp(dp0001, dp1001, dx0)
        ix010 = interp(dp0010, dp1010, dx0)
        ix011 = interp(dp0011, dp1011, dx0)
        ix100 = interp(dp0100, dp1100, dx0)
        ix101 = interp(dp0101, dp1101, dx0)
        ix110 = interp(dp0110, dp1110, dx0)
        ix111 = interp(dp0111, dp1111, dx0)
        # y varies
        ixy00 = interp(ix000, ix100, dy0)
        ixy01 = interp(ix001, ix101, dy0)
        ixy10 = interp(ix010, ix110, dy0)
        ixy11 = interp(ix011, ix111, dy0)
        # z varies
        ixyz0 = interp(ixy00, ixy10, dz0)
        ixyz1 = interp(ixy01, ixy11, dz0)
        return interp(ixyz0, ixyz1, dw0) / self._bounds.perlin(4)

    def get_nd(self, coords):
        pos = [float(c) for c in coords]
        dim = check_dimension(len(pos))
        lower = [floor(p) for p in pos]
        near = [p - lo for p, lo in zip(pos, lower)]
        far = [p - (lo + 1) for p, lo in zip(pos, lower)]

        hasher = self._hasher
        table = self._table
        values = [0.0] * (1 << dim)
        disp = [0.0] * dim
        top = dim - 1
        for i in range(len(values)):
            fold = hasher.fold()
            for axis in range(dim):
                bit = (i >> (top - axis)) & 1
                fold.fold(lower[axis] + bit)
                disp[axis] = far[axis] if bit else near[axis]
            values[i] = dot(table.gradient_from_fold(fold), disp)

        # the near-corner displacement doubles as the interpolation weight
        return reduce_corners(values, near, self._interpolate) / self._bounds.perlin(dim)
