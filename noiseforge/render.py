"""Sample noise over a regular 2D grid and turn it into images."""

import numpy as np
from PIL import Image


def grid_coordinates(width, height, scale=32.0, offset=(0.0, 0.0)):
    """Noise-space coordinates of every pixel in a grid.

    Args:
        width: Number of columns.
        height: Number of rows.
        scale: Pixels per noise unit (larger = smoother).
        offset: (x, y) noise-space position of the top-left pixel.

    Returns:
        Two (height, width) arrays ``(xs, ys)``.
    """
    if width < 1 or height < 1:
        raise ValueError(f"grid size must be positive, got {width}x{height}")
    if not scale > 0:
        raise ValueError(f"scale must be positive, got {scale}")

    x_coords = offset[0] + np.arange(width) / scale
    y_coords = offset[1] + np.arange(height) / scale
    ys, xs = np.meshgrid(y_coords, x_coords, indexing="ij")
    return xs, ys


def sample_grid(noise, width, height, scale=32.0, offset=(0.0, 0.0)):
    """Evaluate ``noise.get(x, y)`` at every grid point.

    Noises are sampled one point at a time, so this makes one scalar
    ``get`` call per pixel rather than a vectorized pass.

    Returns:
        Array of shape (height, width), dtype float64.
    """
    xs, ys = grid_coordinates(width, height, scale=scale, offset=offset)
    result = np.empty((height, width), dtype=np.float64)
    get = noise.get
    for index, (x, y) in enumerate(zip(xs.ravel().tolist(), ys.ravel().tolist())):
        result.flat[index] = get(x, y)
    return result


def to_image(values, low=-1.0, high=1.0):
    """Map a 2D array of noise values to a grayscale image.

    Values are clipped to [low, high], then scaled so ``low`` is black and
    ``high`` is white.

    Returns:
        PIL Image in L mode.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.ndim != 2:
        raise ValueError(f"expected a 2D array, got shape {values.shape}")
    if not high > low:
        raise ValueError(f"high must exceed low, got [{low}, {high}]")

    scaled = (np.clip(values, low, high) - low) / (high - low)
    return Image.fromarray(np.round(scaled * 255).astype(np.uint8))
