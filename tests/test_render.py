"""Tests for grid sampling, image rendering and the CLI."""

import numpy as np
import pytest
from PIL import Image


def test_sample_grid_shape_and_values():
    from noiseforge import PerlinNoise, sample_grid
    noise = PerlinNoise(seed=42)
    grid = sample_grid(noise, 12, 8, scale=4.0, offset=(1.0, -2.0))
    assert grid.shape == (8, 12)
    assert grid.dtype == np.float64
    assert grid[0, 0] == noise.get(1.0, -2.0)
    assert grid[3, 5] == noise.get(1.0 + 5 / 4.0, -2.0 + 3 / 4.0)
    assert np.all(np.abs(grid) <= 1.0)


def test_sample_grid_is_reproducible():
    from noiseforge import SimplexNoise, sample_grid
    a = sample_grid(SimplexNoise(seed=7), 16, 16)
    b = sample_grid(SimplexNoise(seed=7), 16, 16)
    c = sample_grid(SimplexNoise(seed=8), 16, 16)
    np.testing.assert_array_equal(a, b)
    assert not np.array_equal(a, c)


@pytest.mark.parametrize("width,height,scale", [(0, 4, 1.0), (4, -1, 1.0), (4, 4, 0.0)])
def test_sample_grid_rejects_bad_arguments(width, height, scale):
    from noiseforge import ValueNoise, sample_grid
    with pytest.raises(ValueError):
        sample_grid(ValueNoise(), width, height, scale=scale)


def test_to_image_maps_range_to_gray():
    from noiseforge import to_image
    values = np.array([[-1.0, 0.0, 1.0], [-5.0, 0.5, 5.0]])
    img = to_image(values)
    assert img.mode == "L"
    assert img.size == (3, 2)
    pixels = np.array(img)
    np.testing.assert_array_equal(pixels, [[0, 128, 255], [0, 191, 255]])


def test_to_image_validates_input():
    from noiseforge import to_image
    with pytest.raises(ValueError):
        to_image(np.zeros(5))
    with pytest.raises(ValueError):
        to_image(np.zeros((2, 2)), low=1.0, high=1.0)


def test_generate_basic():
    from noiseforge import generate
    img = generate("perlin", size=24, seed=1, scale=8.0)
    assert img.mode == "L"
    assert img.size == (24, 24)


@pytest.mark.parametrize("kind", ["value", "perlin", "simplex"])
def test_generate_reproducibility(kind):
    from noiseforge import generate
    img1 = generate(kind, size=16, seed=99, octaves=3)
    img2 = generate(kind, size=16, seed=99, octaves=3)
    np.testing.assert_array_equal(np.array(img1), np.array(img2))


def test_generate_rejects_unknown_kind():
    from noiseforge import generate
    with pytest.raises(ValueError, match="unknown noise type"):
        generate("worley", size=8)


def test_cli_writes_png(tmp_path):
    from noiseforge.__main__ import main
    output = tmp_path / "out" / "noise.png"
    code = main(["simplex", "--seed", "5", "--size", "20", "--radius", "continuous",
                 "--output", str(output)])
    assert code == 0
    assert output.exists()
    with Image.open(output) as img:
        assert img.size == (20, 20)
        assert img.mode == "L"


def test_cli_periodic_lattice_noise_tiles(tmp_path):
    from noiseforge.__main__ import main
    output = tmp_path / "tile.png"
    # 32 px at 8 px per unit is exactly one period of 4
    main(["value", "--size", "32", "--scale", "8", "--period", "4",
          "--interpolation", "linear", "--output", str(output)])
    with Image.open(output) as img:
        assert img.size == (32, 32)


@pytest.mark.parametrize("argv", [
    ["perlin", "--size", "0"],
    ["perlin", "--octaves", "0"],
    ["perlin", "--interpolation", "cosine"],
    ["cellular"],
])
def test_cli_rejects_bad_arguments(argv):
    from noiseforge.__main__ import main
    with pytest.raises(SystemExit):
        main(argv)


def test_sample_grid_calls_get_once_per_pixel():
    from noiseforge import sample_grid

    class Recorder:
        def __init__(self):
            self.calls = []

        def get(self, x, y):
            self.calls.append((x, y))
            return 0.0

    noise = Recorder()
    sample_grid(noise, 5, 3, scale=2.0)
    assert len(noise.calls) == 15
    assert noise.calls[0] == (0.0, 0.0)
    assert noise.calls[-1] == (2.0, 1.0)


def test_cli_period_help_mentions_skewed_simplex():
    from noiseforge.__main__ import build_parser
    text = " ".join(build_parser().format_help().split())
    assert "simplex wraps its skewed lattice" in text
