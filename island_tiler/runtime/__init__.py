# island_tiler/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# Everything here depends on Pygame; the core package does not.

from .renderer import TileMapRenderer
from .ticker import FixedStepTicker

__all__ = ["TileMapRenderer", "FixedStepTicker"]
