# ==============================================================================
# File: tests/test_border_fade.py
# Purpose: Unit tests for the border fade field and its cache.
# ==============================================================================
import unittest
import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from island_tiler import config as DEFAULTS
from island_tiler.border_fade import BorderFadeCache, build_border_fade
from island_tiler.errors import ConfigurationError


def reference_fade(width, height, offset):
    """Cell-by-cell formula, y half-range taken from the width."""
    field = np.zeros((width, height))
    for x in range(width):
        for y in range(height):
            if x < width // 2:
                field[x, y] = 1.0 / (x + 1) - offset
            else:
                field[x, y] = 1.0 / (width - x) - offset
            if y < width // 2:
                field[x, y] += 1.0 / (y + 1) - offset
            else:
                field[x, y] += 1.0 / (height - y) - offset
    return field


class TestBorderFade(unittest.TestCase):

    def test_odd_width_is_rejected(self):
        with self.assertRaises(ConfigurationError):
            build_border_fade(15, 16, -0.02)

    def test_odd_height_is_rejected(self):
        with self.assertRaises(ConfigurationError):
            build_border_fade(16, 15, -0.02)

    def test_non_positive_dimensions_are_rejected(self):
        with self.assertRaises(ConfigurationError):
            build_border_fade(0, 16, -0.02)

    def test_known_values(self):
        fade = build_border_fade(16, 16, -0.02)
        self.assertEqual(fade.shape, (16, 16))
        self.assertAlmostEqual(fade[0, 0], 2.04)
        self.assertAlmostEqual(fade[8, 8], 0.29)
        self.assertAlmostEqual(fade[15, 0], 2.04)

    def test_mirror_symmetry(self):
        fade = build_border_fade(16, 16, -0.02)
        np.testing.assert_array_equal(fade, fade[::-1, :])
        np.testing.assert_array_equal(fade, fade[:, ::-1])

    def test_center_band_is_minimum(self):
        fade = build_border_fade(16, 16, -0.02)
        self.assertEqual(fade.min(), fade[8, 8])
        self.assertEqual(fade.max(), fade[0, 0])

    def test_matches_reference_formula(self):
        for width, height in ((6, 10), (10, 6), (16, 16)):
            np.testing.assert_allclose(
                build_border_fade(width, height, -0.3), reference_fade(width, height, -0.3)
            )

    def test_y_range_follows_width_by_default(self):
        compat = build_border_fade(4, 8, 0.0)
        corrected = build_border_fade(4, 8, 0.0, y_range_from_height=True)
        self.assertAlmostEqual(compat[0, 2], 1.0 + 1.0 / 6.0)
        self.assertAlmostEqual(corrected[0, 2], 1.0 + 1.0 / 3.0)

    def test_square_grids_ignore_y_range_mode(self):
        np.testing.assert_array_equal(
            build_border_fade(8, 8, -0.1),
            build_border_fade(8, 8, -0.1, y_range_from_height=True),
        )

    def test_field_is_read_only(self):
        fade = build_border_fade(4, 4, 0.0)
        with self.assertRaises(ValueError):
            fade[0, 0] = 1.0


class TestBorderFadeCache(unittest.TestCase):

    def test_reuses_fields(self):
        cache = BorderFadeCache()
        first = cache.get(16, 16, -0.02)
        self.assertIs(cache.get(16, 16, -0.02), first)
        self.assertEqual(len(cache), 1)

    def test_keys_on_every_input(self):
        cache = BorderFadeCache(max_entries=4)
        cache.get(16, 16, -0.02)
        cache.get(16, 16, -0.5)
        cache.get(8, 16, -0.02)
        cache.get(8, 16, -0.02, y_range_from_height=True)
        self.assertEqual(len(cache), 4)
        cache.clear()
        self.assertEqual(len(cache), 0)

    def test_size_stays_bounded(self):
        cache = BorderFadeCache(max_entries=3)
        for i in range(500):
            cache.get(16, 16, -i / 1000)
        self.assertEqual(len(cache), 3)

    def test_least_recently_used_is_evicted(self):
        cache = BorderFadeCache(max_entries=2)
        first = cache.get(16, 16, -0.1)
        second = cache.get(16, 16, -0.2)
        self.assertIs(cache.get(16, 16, -0.1), first)
        cache.get(16, 16, -0.3)
        self.assertIs(cache.get(16, 16, -0.1), first)
        self.assertIsNot(cache.get(16, 16, -0.2), second)

    def test_default_size(self):
        self.assertEqual(BorderFadeCache().max_entries, DEFAULTS.BORDER_FADE_CACHE_SIZE)
        with self.assertRaises(ValueError):
            BorderFadeCache(max_entries=0)

    def test_invalid_dimensions_are_not_cached(self):
        cache = BorderFadeCache()
        with self.assertRaises(ConfigurationError):
            cache.get(15, 16, -0.02)
        self.assertEqual(len(cache), 0)


if __name__ == '__main__':
    unittest.main()
