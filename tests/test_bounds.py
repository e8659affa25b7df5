"""Tests for normalization bounds and the cubic-based derivation."""

import math
import threading

import pytest


def test_perlin_bounds():
    from noiseforge.bounds import BoundsCalculator
    calc = BoundsCalculator()
    for dim in range(1, 10):
        assert calc.perlin(dim) == pytest.approx(math.sqrt(dim) / 2)
    assert calc.perlin(4) == 1.0


def test_value_bound():
    from noiseforge.bounds import BoundsCalculator
    calc = BoundsCalculator()
    assert calc.value(1) == 1.0
    assert calc.value(7) == 1.0


def test_simplex_literals():
    from noiseforge.bounds import BoundsCalculator
    from noiseforge.interpolation import SimplexRadius
    calc = BoundsCalculator()
    assert calc.simplex(2, SimplexRadius.CONTINUOUS) == 0.010080204702811454
    assert calc.simplex(4, SimplexRadius.TRADITIONAL) == 0.02289733608959788
    assert calc.simplex(3) == 0.025077363499228966
    assert calc.simplex(1, "continuous") == 0.013983312811550396
    # literals never touch the cache
    assert calc.cached_keys() == []


@pytest.mark.parametrize("dim", [0, -1])
def test_invalid_dimension(dim):
    from noiseforge.bounds import BoundsCalculator
    from noiseforge.errors import InvalidDimension
    calc = BoundsCalculator()
    with pytest.raises(InvalidDimension):
        calc.perlin(dim)
    with pytest.raises(InvalidDimension):
        calc.value(dim)
    with pytest.raises(InvalidDimension):
        calc.simplex(dim)


@pytest.mark.parametrize("radius", ["continuous", "traditional"])
@pytest.mark.parametrize("dim", [5, 6, 8, 16, 64])
def test_derived_bounds_are_positive(dim, radius):
    from noiseforge.bounds import BoundsCalculator, edge_profile
    from noiseforge.interpolation import SimplexRadius
    calc = BoundsCalculator()
    bound = calc.simplex(dim, radius)
    r2 = SimplexRadius.parse(radius).r_squared
    h = math.sqrt(dim / (1.0 + dim))
    assert math.isfinite(bound)
    assert bound > 0.0
    assert bound >= edge_profile(0.5, h, r2)


@pytest.mark.parametrize("dim", [5, 7, 10])
def test_derived_bound_is_edge_maximum(dim):
    from noiseforge.bounds import derive_simplex_bound, edge_profile
    r2 = 0.6
    h = math.sqrt(dim / (1.0 + dim))
    bound = derive_simplex_bound(dim, r2)
    # a fine scan of the edge never beats the analytic maximum
    scanned = max(edge_profile(i / 10000, h, r2) for i in range(1, 10000))
    assert scanned <= bound * (1 + 1e-9)
    assert scanned == pytest.approx(bound, rel=1e-6)


def test_edge_profile_outside_edge_is_zero():
    from noiseforge.bounds import edge_profile
    assert edge_profile(0.0, 0.9, 0.6) == 0.0
    assert edge_profile(1.0, 0.9, 0.6) == 0.0
    assert edge_profile(-0.3, 0.9, 0.6) == 0.0
    assert edge_profile(1.2, 0.9, 0.6) == 0.0


def test_edge_candidates_skip_complex_and_negative_roots():
    from noiseforge.bounds import edge_candidates
    # u (u^2 + 1): one real root at zero
    assert edge_candidates((1.0, 0.0, 1.0, 0.0)) == [0.5]
    # (u + 1)(u + 2)(u + 3): all negative
    assert edge_candidates((1.0, 6.0, 11.0, 6.0)) == []
    # (u - 0.25)(u - 1)(u + 4)
    found = sorted(edge_candidates((1.0, 2.75, -4.75, 1.0)))
    assert found == pytest.approx([1.0, 1.5])


def test_derived_bounds_are_memoized():
    from noiseforge.bounds import BoundsCalculator
    from noiseforge.interpolation import SimplexRadius
    calc = BoundsCalculator()
    first = calc.simplex(6)
    assert calc.simplex(6) == first
    assert ("simplex", 6, SimplexRadius.TRADITIONAL) in calc.cached_keys()
    assert ("simplex", 6, SimplexRadius.CONTINUOUS) not in calc.cached_keys()


def test_concurrent_derivation_runs_once(monkeypatch):
    import noiseforge.bounds as bounds
    calls = []
    derive = bounds.derive_simplex_bound

    def counting(dim, r_squared):
        calls.append(dim)
        return derive(dim, r_squared)

    monkeypatch.setattr(bounds, "derive_simplex_bound", counting)
    calc = bounds.BoundsCalculator()
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(calc.simplex(9))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert len(set(results)) == 1
    assert calls == [9]


def test_instances_do_not_share_cache():
    from noiseforge.bounds import BoundsCalculator
    a = BoundsCalculator()
    b = BoundsCalculator()
    a.simplex(5)
    assert a.cached_keys()
    assert b.cached_keys() == []


@pytest.mark.parametrize("kind", ["value", "perlin", "simplex"])
@pytest.mark.parametrize("dim", [1, 2, 3, 4, 5, 6])
def test_normalized_noise_stays_in_range(kind, dim):
    import numpy as np
    from noiseforge import create
    noise = create(kind, seed=dim * 31 + 7)
    rng = np.random.RandomState(dim)
    points = rng.uniform(-1000.0, 1000.0, size=(10000, dim)).tolist()
    eps = 1e-9
    if dim <= 4:
        values = [noise.get(*p) for p in points]
    else:
        values = [noise.get(p) for p in points]
    assert max(abs(v) for v in values) <= 1.0 + eps
