# island_tiler/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides functions for sampling 2D Perlin noise. It is designed
to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - p: A pre-shuffled NumPy permutation table (int array, length 512).
    - seed, scale: The generation seed offsets the sampling coordinates, the
      scale spaces neighbouring cells apart: (seed + x*scale, seed + y*scale).
    - octaves, persistence, lacunarity: Standard fractal noise parameters.
- Outputs:
    - `perlin_noise_2d`: raw noise values (typically in the range [-1, 1]).
    - `sample` / `sample_grid`: values normalized to [0, 1].
- Side Effects: None.
- Invariants: Identical inputs give identical outputs. `sample_grid` returns
  an array of shape (width, height) indexed [x, y], matching `sample` per cell.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS

# Pre-defined gradient vectors for performance.
_GRADIENT_VECTORS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]])


def build_permutation_table(seed: int = DEFAULTS.PERMUTATION_TABLE_SEED) -> np.ndarray:
    """Shuffles 0..255 deterministically and doubles it to avoid index wrapping."""
    p = np.arange(256, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()


@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h % 4]
    return g[0] * x + g[1] * y

@njit
def _perlin_point(p, x, y):
    """Single-octave Perlin noise at one coordinate."""
    xi = int(np.floor(x))
    yi = int(np.floor(y))

    xf = x - xi
    yf = y - yi

    u = _fade(xf)
    v = _fade(yf)

    px0 = xi % 256
    px1 = (px0 + 1) % 256
    py0 = yi % 256
    py1 = (py0 + 1) % 256

    g00 = _gradient(p[p[px0] + py0], xf, yf)
    g01 = _gradient(p[p[px0] + py1], xf, yf - 1)
    g10 = _gradient(p[p[px1] + py0], xf - 1, yf)
    g11 = _gradient(p[p[px1] + py1], xf - 1, yf - 1)

    x1 = _lerp(g00, g10, u)
    x2 = _lerp(g01, g11, u)
    return _lerp(x1, x2, v)

@njit
def _fractal_point(p, x, y, octaves, persistence, lacunarity):
    """Sums octaves and divides by the total amplitude to stay within [-1, 1]."""
    noise_val = 0.0
    amplitude = 1.0
    frequency = 1.0
    total_amplitude = 0.0

    for _ in range(octaves):
        noise_val += _perlin_point(p, x * frequency, y * frequency) * amplitude
        total_amplitude += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return noise_val / total_amplitude

@njit
def _normalized_point(p, x, y, octaves, persistence, lacunarity):
    value = (_fractal_point(p, x, y, octaves, persistence, lacunarity) + 1.0) / 2.0
    return min(1.0, max(0.0, value))

@njit
def perlin_noise_2d(p, x, y, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Generate raw 2D Perlin noise for 2D coordinate arrays.
    This function is JIT-compiled with Numba for maximum performance.
    """
    rows, cols = x.shape
    total_noise = np.zeros((rows, cols))

    for i in range(rows):
        for j in range(cols):
            total_noise[i, j] = _fractal_point(p, x[i, j], y[i, j], octaves, persistence, lacunarity)

    return total_noise

@njit
def _normalized_grid(p, x, y, octaves, persistence, lacunarity):
    rows, cols = x.shape
    out = np.zeros((rows, cols))
    for i in range(rows):
        for j in range(cols):
            out[i, j] = _normalized_point(p, x[i, j], y[i, j], octaves, persistence, lacunarity)
    return out


def sample(p: np.ndarray, seed: float, x: int, y: int, scale: float,
           octaves: int = 1, persistence: float = 0.5, lacunarity: float = 2.0) -> float:
    """Samples the noise field for grid cell (x, y). Returns a value in [0, 1]."""
    return float(_normalized_point(
        p, seed + x * scale, seed + y * scale,
        octaves, persistence, lacunarity
    ))


def sample_grid(p: np.ndarray, seed: float, width: int, height: int, scale: float,
                octaves: int = 1, persistence: float = 0.5, lacunarity: float = 2.0) -> np.ndarray:
    """Samples the noise field for every cell of a (width, height) grid."""
    xs = seed + np.arange(width, dtype=np.float64) * scale
    ys = seed + np.arange(height, dtype=np.float64) * scale
    x_grid, y_grid = np.meshgrid(xs, ys, indexing='ij')
    return _normalized_grid(p, x_grid, y_grid, octaves, persistence, lacunarity)
