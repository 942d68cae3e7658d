# island_tiler/border_fade.py

"""
================================================================================
BORDER FADE FIELD
================================================================================
This module builds the per-cell bias that is added to the noise before
classification. The bias is large at the grid edges and smallest along the
centre lines, so edge cells are pushed out of the ground classification and
every generated map takes an island silhouette.

Data Contract:
---------------
- Inputs: grid width and height (both even), the border fade offset.
- Outputs: a read-only float64 array of shape (width, height), indexed [x, y].
- Side Effects: None. `BorderFadeCache` keeps a bounded number of
  recently used fields in memory.
- Invariants: The field depends only on its inputs, never on the seed, so it
  is built once per grid configuration and shared across generations.
================================================================================
"""
import logging
from collections import OrderedDict

import numpy as np

from . import config as DEFAULTS
from .settings import validate_dimensions


def _axis_fade(length: int, half_range: int, offset: float) -> np.ndarray:
    """1/(i+1) - offset below the half range, 1/(length-i) - offset above it."""
    index = np.arange(length, dtype=np.float64)
    near = 1.0 / (index + 1.0)
    far = 1.0 / (length - index)
    return np.where(index < half_range, near, far) - offset


def build_border_fade(width: int, height: int, offset: float,
                      y_range_from_height: bool = False) -> np.ndarray:
    """
    Builds the border fade field.

    The y half-range is computed from the grid width unless
    `y_range_from_height` is set. The two only differ on non-square grids.

    Raises:
        ConfigurationError: if either dimension is odd or not positive.
    """
    validate_dimensions(width, height)

    range_x = width // 2
    range_y = (height if y_range_from_height else width) // 2

    x_fade = _axis_fade(width, range_x, offset)
    y_fade = _axis_fade(height, range_y, offset)

    border_fade = x_fade[:, np.newaxis] + y_fade[np.newaxis, :]
    border_fade.flags.writeable = False
    return border_fade


class BorderFadeCache:
    """
    Keeps the most recently used border fade fields, keyed on
    (width, height, offset, y-range mode). The least recently used field is
    dropped once `max_entries` is exceeded.
    """

    def __init__(self, logger: logging.Logger = None,
                 max_entries: int = DEFAULTS.BORDER_FADE_CACHE_SIZE):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.logger = logger or logging.getLogger(__name__)
        self.max_entries = max_entries
        self._fields = OrderedDict()

    def get(self, width: int, height: int, offset: float,
            y_range_from_height: bool = False) -> np.ndarray:
        key = (width, height, float(offset), bool(y_range_from_height))
        field = self._fields.get(key)
        if field is not None:
            self._fields.move_to_end(key)
            return field

        self.logger.debug(f"Building border fade for {width}x{height} (offset {offset}).")
        field = build_border_fade(width, height, offset, y_range_from_height)
        self._fields[key] = field
        if len(self._fields) > self.max_entries:
            self._fields.popitem(last=False)
        return field

    def clear(self):
        self._fields.clear()

    def __len__(self):
        return len(self._fields)
