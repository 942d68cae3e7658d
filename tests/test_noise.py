# ==============================================================================
# File: tests/test_noise.py
# Purpose: Unit tests for the Perlin noise sampler.
# ==============================================================================
import unittest
import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from island_tiler import noise


class TestNoise(unittest.TestCase):

    def setUp(self):
        self.p = noise.build_permutation_table()

    def test_permutation_table_layout(self):
        self.assertEqual(self.p.shape, (512,))
        np.testing.assert_array_equal(np.sort(self.p[:256]), np.arange(256))
        np.testing.assert_array_equal(self.p[:256], self.p[256:])

    def test_permutation_table_is_deterministic(self):
        np.testing.assert_array_equal(self.p, noise.build_permutation_table())

    def test_sample_is_deterministic(self):
        a = noise.sample(self.p, 123.456, 3, 7, 0.05)
        b = noise.sample(self.p, 123.456, 3, 7, 0.05)
        self.assertEqual(a, b)

    def test_lattice_points_sample_to_half(self):
        # Perlin noise is zero on integer coordinates.
        self.assertEqual(noise.sample(self.p, 3.0, 0, 0, 0.5), 0.5)
        self.assertEqual(noise.sample(self.p, 3.0, 2, 4, 0.5), 0.5)

    def test_values_stay_in_unit_range(self):
        for seed in (-2147000.5, -12.25, 0.0, 77.7, 2147000.5):
            grid = noise.sample_grid(self.p, seed, 32, 32, 0.37)
            self.assertGreaterEqual(grid.min(), 0.0)
            self.assertLessEqual(grid.max(), 1.0)

    def test_sampling_is_continuous(self):
        grid = noise.sample_grid(self.p, 5.3, 16, 16, 1e-6)
        self.assertLess(np.abs(np.diff(grid, axis=0)).max(), 1e-3)
        self.assertLess(np.abs(np.diff(grid, axis=1)).max(), 1e-3)

    def test_grid_matches_point_samples(self):
        seed, scale = 41.3, 0.21
        grid = noise.sample_grid(self.p, seed, 6, 4, scale)
        self.assertEqual(grid.shape, (6, 4))
        for x in range(6):
            for y in range(4):
                self.assertAlmostEqual(grid[x, y], noise.sample(self.p, seed, x, y, scale), places=12)

    def test_grid_is_not_constant(self):
        grid = noise.sample_grid(self.p, 0.5, 16, 16, 0.3)
        self.assertGreater(grid.max() - grid.min(), 0.05)

    def test_octaves_stay_in_unit_range(self):
        grid = noise.sample_grid(self.p, 9.1, 16, 16, 0.2, octaves=4, persistence=0.5, lacunarity=2.0)
        self.assertGreaterEqual(grid.min(), 0.0)
        self.assertLessEqual(grid.max(), 1.0)

    def test_raw_perlin_shape(self):
        x, y = np.meshgrid(np.linspace(0.1, 3.3, 5), np.linspace(0.2, 2.9, 7), indexing='ij')
        raw = noise.perlin_noise_2d(self.p, x, y)
        self.assertEqual(raw.shape, (5, 7))
        self.assertLessEqual(np.abs(raw).max(), 1.0)


if __name__ == '__main__':
    unittest.main()
