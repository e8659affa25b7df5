"""Simplex gradient noise in any number of dimensions.

Space is skewed so the simplex lattice lines up with the integer grid. The
cell holding the skewed point is split into D! simplices (Schläfli
orthoschemes); the one containing the point is found by ranking the axes
by descending fractional coordinate. Only its D + 1 corners contribute,
each weighted by the compact falloff max(0, r^2 - d^2)^4.

Ranking ties go to the lower axis index. The comparison trees in the 2D to
4D evaluators follow the same rule as the max-selection in ``get_nd``, so
every path picks the same simplex for the same point.
"""

import math
from typing import NamedTuple

from .base import SampleDispatch, SeededConstructors, build_components
from .errors import check_dimension
from .gradients import dot
from .interpolation import SimplexRadius, falloff

floor = math.floor


def skew_factor(dim):
    """F = (sqrt(D + 1) - 1) / D"""
    return (math.sqrt(dim + 1) - 1) / dim


def unskew_factor(dim):
    """G = (1 - 1 / sqrt(D + 1)) / D"""
    return (1 - 1 / math.sqrt(dim + 1)) / dim


_F1, _G1 = skew_factor(1), unskew_factor(1)
_F2, _G2 = skew_factor(2), unskew_factor(2)
_F3, _G3 = skew_factor(3), unskew_factor(3)
_F4, _G4 = skew_factor(4), unskew_factor(4)


class CornerContribution(NamedTuple):
    """One simplex corner's share of a sample, before normalization."""

    corner: tuple
    dist_squared: float
    value: float


def rank_axes(fractions):
    """Axis indices ordered by descending fractional part, ties by index."""
    remaining = list(range(len(fractions)))
    order = []
    while remaining:
        best = -1.0  # fractions lie in [0, 1)
        best_axis = -1
        for axis in remaining:
            if best < fractions[axis]:
                best = fractions[axis]
                best_axis = axis
        remaining.remove(best_axis)
        order.append(best_axis)
    return order


def simplex_corners(base, fractions):
    """The D + 1 skewed-lattice corners of the simplex holding a point.

    Corner ``i`` is ``base`` plus one along the ``i`` highest-ranked axes.
    """
    corner = list(base)
    corners = [tuple(corner)]
    for axis in rank_axes(fractions):
        corner[axis] += 1
        corners.append(tuple(corner))
    return corners


class SimplexNoise(SampleDispatch, SeededConstructors):
    """Simplex noise normalized per dimension and falloff radius.

    Periods, when configured, wrap the skewed lattice coordinates.
    """

    def __init__(self, config=None, bounds=None, **options):
        self._config, self._hasher, self._table, self._bounds = build_components(
            config, options, bounds)
        self._r2 = self._config.radius.r_squared

    @property
    def config(self):
        return self._config

    @property
    def seed(self):
        return self._config.seed

    @property
    def radius(self):
        return self._config.radius

    @radius.setter
    def radius(self, value):
        self._config = self._config.with_options(radius=SimplexRadius.parse(value))
        self._r2 = self._config.radius.r_squared

    def bound(self, dim):
        return self._bounds.simplex(dim, self._config.radius)

    def __repr__(self):
        return f"{type(self).__name__}({self._config!r})"

    # --- fixed arity -----------------------------------------------------

    def get1(self, x):
        xs = x + _F1 * x
        i0 = floor(xs)
        i1 = i0 + 1
        grad = self._table.gradient1
        r2 = self._r2

        d0 = x - (i0 - _G1 * i0)
        d1 = x - (i1 - _G1 * i1)
        n0 = falloff(d0 * d0, r2) * (grad(i0) * d0)
        n1 = falloff(d1 * d1, r2) * (grad(i1) * d1)
        return (n0 + n1) / self._bounds.simplex(1, self._config.radius)

    def _contribution2(self, x, y, i, j):
        sub = _G2 * (i + j)
        dx = x - (i - sub)
        dy = y - (j - sub)
        weight = falloff(dx * dx + dy * dy, self._r2)
        if weight == 0.0:
            return 0.0
        g = self._table.gradient2(i, j)
        return weight * (g[0] * dx + g[1] * dy)

    def get2(self, x, y):
        addend = _F2 * (x + y)
        xs = x + addend
        ys = y + addend
        i = floor(xs)
        j = floor(ys)
        xf = xs - i
        yf = ys - j

        # middle corner of the triangle
        if xf >= yf:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        n0 = self._contribution2(x, y, i, j)
        n1 = self._contribution2(x, y, i + i1, j + j1)
        n2 = self._contribution2(x, y, i + 1, j + 1)
        return (n0 + n1 + n2) / self._bounds.simplex(2, self._config.radius)

    def _contribution3(self, x, y, z, i, j, k):
        sub = _G3 * (i + j + k)
        dx = x - (i - sub)
        dy = y - (j - sub)
        dz = z - (k - sub)
        weight = falloff(dx * dx + dy * dy + dz * dz, self._r2)
        if weight == 0.0:
            return 0.0
        g = self._table.gradient3(i, j, k)
        return weight * (g[0] * dx + g[1] * dy + g[2] * dz)

    def get3(self, x, y, z):
        addend = _F3 * (x + y + z)
        xs = x + addend
        ys = y + addend
        zs = z + addend
        i = floor(xs)
        j = floor(ys)
        k = floor(zs)
        xf = xs - i
        yf = ys - j
        zf = zs - k

        # (i1, j1, k1) and (i2, j2, k2) are the second and third corners
        if xf >= yf:
            if yf >= zf:  # x y z
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 1, 0
            elif xf >= zf:  # x z y
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 0, 1
            else:  # z x y
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 1, 0, 1
        else:
            if zf > yf:  # z y x
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 0, 1, 1
            elif zf > xf:  # y z x
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 0, 1, 1
            else:  # y x z
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 1, 1, 0

        n0 = self._contribution3(x, y, z, i, j, k)
        n1 = self._contribution3(x, y, z, i + i1, j + j1, k + k1)
        n2 = self._contribution3(x, y, z, i + i2, j + j2, k + k2)
        n3 = self._contribution3(x, y, z, i + 1, j + 1, k + 1)
        return (n0 + n1 + n2 + n3) / self._bounds.simplex(3, self._config.radius)

    def _contribution4(self, x, y, z, w, i, j, k, l):
        sub = _G4 * (i + j + k + l)
        dx = x - (i - sub)
        dy = y - (j - sub)
        dz = z - (k - sub)
        dw = w - (l - sub)
        weight = falloff(dx * dx + dy * dy + dz * dz + dw * dw, self._r2)
        if weight == 0.0:
            return 0.0
        g = self._table.gradient4(i, j, k, l)
        return weight * (g[0] * dx + g[1] * dy + g[2] * dz + g[3] * dw)

    def get4(self, x, y, z, w):
        addend = _F4 * (x + y + z + w)
        xs = x + addend
        ys = y + addend
        zs = z + addend
        ws = w + addend
        i = floor(xs)
        j = floor(ys)
        k = floor(zs)
        l = floor(ws)
        xf = xs - i
        yf = ys - j
        zf = zs - k
        wf = ws - l

        # rank = number of axes ranked below this one; 3 is stepped first
        rx = ry = rz = rw = 0
        if xf >= yf:
            rx += 1
        else:
            ry += 1
        if xf >= zf:
            rx += 1
        else:
            rz += 1
        if xf >= wf:
            rx += 1
        else:
            rw += 1
        if yf >= zf:
            ry += 1
        else:
            rz += 1
        if yf >= wf:
            ry += 1
        else:
            rw += 1
        if zf >= wf:
            rz += 1
        else:
            rw += 1

        n0 = self._contribution4(x, y, z, w, i, j, k, l)
        n1 = self._contribution4(x, y, z, w, i + (rx >= 3), j + (ry >= 3),
                                 k + (rz >= 3), l + (rw >= 3))
        n2 = self._contribution4(x, y, z, w, i + (rx >= 2), j + (ry >= 2),
                                 k + (rz >= 2), l + (rw >= 2))
        n3 = self._contribution4(x, y, z, w, i + (rx >= 1), j + (ry >= 1),
                                 k + (rz >= 1), l + (rw >= 1))
        n4 = self._contribution4(x, y, z, w, i + 1, j + 1, k + 1, l + 1)
        return (n0 + n1 + n2 + n3 + n4) / self._bounds.simplex(4, self._config.radius)

    # --- any dimension ---------------------------------------------------

    def contributions(self, coords):
        """Per-corner breakdown of a sample, in simplex traversal order.

        Values are raw (not divided by the normalization bound). Corners
        outside the falloff radius report a value of exactly 0.0.
        """
        pos = [float(c) for c in coords]
        dim = check_dimension(len(pos))
        skew = skew_factor(dim)
        unskew = unskew_factor(dim)

        addend = 0.0
        for p in pos:
            addend += p
        addend *= skew
        skewed = [p + addend for p in pos]
        base = [floor(s) for s in skewed]
        fractions = [s - b for s, b in zip(skewed, base)]

        result = []
        disp = [0.0] * dim
        for corner in simplex_corners(base, fractions):
            sub = unskew * sum(corner)
            dist_squared = 0.0
            for axis in range(dim):
                d = pos[axis] - (corner[axis] - sub)
                disp[axis] = d
                dist_squared += d * d
            weight = falloff(dist_squared, self._r2)
            if weight == 0.0:
                value = 0.0
            else:
                value = weight * dot(self._table.gradient(corner), disp)
            result.append(CornerContribution(corner, dist_squared, value))
        return result

    def get_nd(self, coords):
        parts = self.contributions(coords)
        noise = 0.0
        for part in parts:
            noise += part.value
        return noise / self._bounds.simplex(len(parts) - 1, self._config.radius)
