# island_tiler/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the island
tiler. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC ISLAND.
Instead, pass a configuration dictionary to IslandConfig.from_dict().
================================================================================
"""

# --- Grid Dimensions ---
# Both dimensions must be even; the border fade is undefined otherwise.
DEFAULT_GRID_WIDTH = 16
DEFAULT_GRID_HEIGHT = 16

# --- Noise Generation ---
DEFAULT_SEED = 0.0
DEFAULT_SCALE = 0.005
# Fixed seed for the Perlin permutation table. The generation seed does not
# reshuffle the table; it moves the sampling coordinates instead.
PERMUTATION_TABLE_SEED = 1337

# Fractal layering. A single octave reproduces plain Perlin noise.
NOISE_OCTAVES = 1
NOISE_PERSISTENCE = 0.5
NOISE_LACUNARITY = 2.0

# --- Classification ---
DEFAULT_MAGNITUDE = 0.75
DEFAULT_CUTOFF = 0.4
DEFAULT_BORDER_FADE_OFFSET = -0.02

# The y half-range of the border fade is taken from the grid WIDTH for
# compatibility. Set to True to use the height instead on non-square grids.
BORDER_FADE_Y_RANGE_FROM_HEIGHT = False

# --- Parameter Ranges (inclusive) ---
MAGNITUDE_RANGE = (0.0, 1.0)
CUTOFF_RANGE = (0.0, 1.0)
SCALE_RANGE = (0.0, 1.0)
BORDER_FADE_OFFSET_RANGE = (-1.0, 0.0)

# --- Seed Supply ---
# New seeds are drawn uniformly from [SEED_MIN, SEED_MAX).
SEED_MIN = -2147483.0
SEED_MAX = 2147483.0

# --- Border Fade Cache ---
# Fields kept per generator; the least recently used beyond this are evicted.
BORDER_FADE_CACHE_SIZE = 4

# --- Tiles ---
# Number of authored tile slots. Slot 25 holds the solid ground tile.
TILE_SLOT_COUNT = 47
TILE_PIXEL_SIZE = 32

# Placeholder tileset colours (RGBA).
COLOR_GROUND = (86, 152, 64, 255)
COLOR_BOUNDARY = (38, 92, 168, 255)
COLOR_OVERLAY = (240, 226, 160, 96)
COLOR_GRID_LINE = (20, 20, 30, 255)

# --- Runtime ---
# Seconds between regenerations when driven on a fixed step.
FIXED_TIMESTEP_S = 0.02
# Upper bound on steps reported for a single frame, so a stalled frame
# does not trigger a burst of regenerations.
MAX_STEPS_PER_FRAME = 5
