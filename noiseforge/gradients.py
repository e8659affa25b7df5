"""Gradient and value tables indexed by hashed lattice corners."""

import functools
import logging
import math

import numpy as np

from .errors import DimensionMismatch, check_dimension
from .hashing import table_index

logger = logging.getLogger(__name__)

LOG_GRADIENT_1D_SIZE = 1
LOG_GRADIENT_2D_SIZE = 8
LOG_GRADIENT_3D_SIZE = 11
LOG_GRADIENT_4D_SIZE = 16
LOG_VALUE_TABLE_SIZE = 8

# converts a 64-bit word into an angle in [0, 2pi)
_WORD_TO_ANGLE = 2.0 * math.pi / float(1 << 64)

_GRADIENTS_1D = (1.0, -1.0)


def _build_2d():
    # 256 directions, offset half a step so none is axis-aligned
    i = np.arange(1 << LOG_GRADIENT_2D_SIZE)
    angle = np.pi * (2 * i + 1) / 256
    return np.stack([np.cos(angle), np.sin(angle)], axis=-1)


def _build_3d():
    # i sweeps the azimuth over [0, pi), j the second angle over [0, 2pi)
    i, j = np.meshgrid(np.arange(32), np.arange(64), indexing="ij")
    t = np.pi / 64
    a1 = t * (2 * i + 1)
    a2 = t * (2 * j + 1)
    s2 = np.sin(a2)
    grads = np.stack([np.cos(a1) * s2, np.sin(a1) * s2, np.cos(a2)], axis=-1)
    return grads.reshape(-1, 3)


def _build_4d():
    i, j, k = np.meshgrid(np.arange(32), np.arange(32), np.arange(64), indexing="ij")
    t = np.pi / 64
    a1 = t * (2 * i + 1)
    a2 = t * (2 * j + 1)
    a3 = t * (2 * k + 1)
    s3 = np.sin(a3)
    c3 = np.cos(a3)
    grads = np.stack([np.cos(a1) * c3, np.sin(a1) * c3,
                      np.cos(a2) * s3, np.sin(a2) * s3], axis=-1)
    return grads.reshape(-1, 4)


def _build_values():
    # evenly spaced over [-1, 1], both ends included
    size = 1 << LOG_VALUE_TABLE_SIZE
    return np.linspace(-1.0, 1.0, size)


_BUILDERS = {
    2: _build_2d,
    3: _build_3d,
    4: _build_4d,
}


@functools.lru_cache(maxsize=None)
def gradient_array(dim):
    """Precomputed unit gradients for ``dim`` in 2..4 as an (n, dim) array."""
    grads = _BUILDERS[dim]()
    grads.setflags(write=False)
    logger.debug("Built %dD gradient table with %d entries", dim, len(grads))
    return grads


@functools.lru_cache(maxsize=None)
def _gradient_tuples(dim):
    # scalar evaluation indexes plain tuples; numpy scalars are slow here
    return tuple(tuple(g) for g in gradient_array(dim).tolist())


@functools.lru_cache(maxsize=None)
def value_array():
    values = _build_values()
    values.setflags(write=False)
    return values


@functools.lru_cache(maxsize=None)
def _value_tuple():
    return tuple(value_array().tolist())


def synthesize_gradient(dim, words):
    """Build an N-dimensional gradient from a stream of hash words.

    Starts from [1, 0, ..., 0]; for each further axis j draws an angle a and
    scales every earlier component by sin(a) before setting component j to
    cos(a). The components are hyperspherical coordinates of the direction,
    so the result needs no separate normalization pass.
    """
    check_dimension(dim)
    grad = [0.0] * dim
    grad[0] = 1.0
    for j in range(1, dim):
        angle = next(words) * _WORD_TO_ANGLE
        sin = math.sin(angle)
        for k in range(j):
            grad[k] *= sin
        grad[j] = math.cos(angle)
    return grad


def dot(grad, disp):
    """Dot product of a gradient with a displacement of the same length."""
    if len(grad) != len(disp):
        raise DimensionMismatch(len(disp), len(grad), "gradient")
    total = 0.0
    for g, d in zip(grad, disp):
        total += g * d
    return total


class GradientTable:
    """Resolves hashed lattice corners into gradients or scalar values.

    The specialized lookups (``gradient2`` etc.) and the generic ``gradient``
    resolve identical vectors for the same corner, so fixed-arity and
    N-dimensional noise paths see the same field.
    """

    __slots__ = ("hasher",)

    def __init__(self, hasher):
        self.hasher = hasher

    # --- gradients -------------------------------------------------------

    def gradient1(self, i):
        return _GRADIENTS_1D[table_index(self.hasher.key1(i), LOG_GRADIENT_1D_SIZE)]

    def gradient2(self, i, j):
        table = _gradient_tuples(2)
        return table[table_index(self.hasher.key2(i, j), LOG_GRADIENT_2D_SIZE)]

    def gradient3(self, i, j, k):
        table = _gradient_tuples(3)
        return table[table_index(self.hasher.key3(i, j, k), LOG_GRADIENT_3D_SIZE)]

    def gradient4(self, i, j, k, l):
        table = _gradient_tuples(4)
        return table[table_index(self.hasher.key4(i, j, k, l), LOG_GRADIENT_4D_SIZE)]

    def gradient(self, corner):
        """Gradient for a corner of any dimension, as a sequence of floats."""
        check_dimension(len(corner))
        fold = self.hasher.fold()
        for coord in corner:
            fold.fold(coord)
        return self.gradient_from_fold(fold)

    def gradient_from_fold(self, fold):
        """Gradient for a corner already folded into ``fold``."""
        dim = check_dimension(fold.axes)
        if dim == 1:
            return (_GRADIENTS_1D[fold.index(LOG_GRADIENT_1D_SIZE)],)
        if dim == 2:
            return _gradient_tuples(2)[fold.index(LOG_GRADIENT_2D_SIZE)]
        if dim == 3:
            return _gradient_tuples(3)[fold.index(LOG_GRADIENT_3D_SIZE)]
        if dim == 4:
            return _gradient_tuples(4)[fold.index(LOG_GRADIENT_4D_SIZE)]
        return synthesize_gradient(dim, fold.stream())

    # --- values ----------------------------------------------------------

    def value1(self, i):
        return _value_tuple()[table_index(self.hasher.key1(i), LOG_VALUE_TABLE_SIZE)]

    def value2(self, i, j):
        return _value_tuple()[table_index(self.hasher.key2(i, j), LOG_VALUE_TABLE_SIZE)]

    def value3(self, i, j, k):
        return _value_tuple()[table_index(self.hasher.key3(i, j, k), LOG_VALUE_TABLE_SIZE)]

    def value4(self, i, j, k, l):
        return _value_tuple()[table_index(self.hasher.key4(i, j, k, l), LOG_VALUE_TABLE_SIZE)]

    def value(self, corner):
        """Pseudo-random value in [-1, 1] for a corner of any dimension."""
        check_dimension(len(corner))
        return _value_tuple()[table_index(self.hasher.key(corner), LOG_VALUE_TABLE_SIZE)]

    def value_from_fold(self, fold):
        check_dimension(fold.axes)
        return _value_tuple()[fold.index(LOG_VALUE_TABLE_SIZE)]
