# island_tiler/generator.py

"""
================================================================================
CORE ISLAND GENERATOR
================================================================================
This module contains the generation pipeline: noise and border fade are
combined into a ground map, and every boundary cell of that map is given a
tile variant through the neighbour bitmask autotiler.

Data Contract:
---------------
- Inputs:
    - config (IslandConfig): validated generation parameters.
    - logger: A configured Python logging object for runtime messages
      (IslandGenerator only; `generate` is silent).
- Outputs:
    - TileMapResult: ground map, neighbour masks, variant indices and overlay
      flags, all NumPy arrays of shape (width, height) indexed [x, y].
- Side Effects: IslandGenerator logs messages and caches border fade fields.
- Invariants: Given the same configuration, the output is deterministic.
================================================================================
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np

from . import autotile
from . import config as DEFAULTS
from . import noise
from .border_fade import BorderFadeCache, build_border_fade
from .errors import ConfigurationError
from .settings import IslandConfig

# The permutation table never depends on the generation seed, so all
# generators share one.
_DEFAULT_PERMUTATION_TABLE = noise.build_permutation_table()


class CellKind(enum.Enum):
    GROUND = "ground"
    BOUNDARY = "boundary"
    UNMATCHED = "unmatched"


class CellAssignment(NamedTuple):
    kind: CellKind
    variant: Optional[int]
    overlay: bool
    mask: int


@dataclass(frozen=True, eq=False)
class TileMapResult:
    """The outcome of one generation cycle."""
    config: IslandConfig
    ground_map: np.ndarray
    mask_map: np.ndarray
    variant_map: np.ndarray
    overlay_map: np.ndarray

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def cell(self, x: int, y: int) -> CellAssignment:
        """Describes what the renderer should draw at (x, y)."""
        mask = int(self.mask_map[x, y])
        if self.ground_map[x, y]:
            return CellAssignment(CellKind.GROUND, autotile.GROUND_TILE_INDEX, False, mask)
        variant = int(self.variant_map[x, y])
        overlay = bool(self.overlay_map[x, y])
        if variant == autotile.UNMATCHED:
            return CellAssignment(CellKind.UNMATCHED, None, overlay, mask)
        return CellAssignment(CellKind.BOUNDARY, variant, overlay, mask)

    def counts(self) -> dict:
        """Number of ground, boundary and unmatched cells."""
        ground = int(np.count_nonzero(self.ground_map))
        unmatched = int(np.count_nonzero(self.variant_map == autotile.UNMATCHED))
        return {
            'ground': ground,
            'boundary': self.ground_map.size - ground - unmatched,
            'unmatched': unmatched,
        }


def build_ground_map(noise_values: np.ndarray, border_fade: np.ndarray,
                     magnitude: float, cutoff: float) -> np.ndarray:
    """
    Classifies every cell. A cell is ground when
    noise * magnitude + border_fade < cutoff.
    """
    value = noise_values * magnitude + border_fade
    return value < cutoff


def assign_tiles(ground_map: np.ndarray):
    """
    Encodes and resolves every cell of a finished ground map.
    Returns (mask_map, variant_map, overlay_map).
    """
    mask_map = autotile.encode_neighbor_masks(ground_map)
    variant_map = autotile.resolve_variants(mask_map)
    variant_map = np.where(ground_map, autotile.GROUND_TILE_INDEX, variant_map).astype(np.int16)
    overlay_map = (mask_map != 0) & ~ground_map
    return mask_map, variant_map, overlay_map


def generate(config: IslandConfig, border_fade: np.ndarray = None,
             permutation_table: np.ndarray = None) -> TileMapResult:
    """
    Runs the full pipeline for one configuration.

    Args:
        config (IslandConfig): The generation parameters.
        border_fade (np.ndarray, optional): A pre-built border fade field for
            this configuration. Built on the fly when omitted.
        permutation_table (np.ndarray, optional): The noise permutation table.

    Raises:
        ConfigurationError: if `border_fade` is not shaped (width, height).
    """
    if border_fade is None:
        border_fade = build_border_fade(
            config.width, config.height, config.border_fade_offset,
            config.border_fade_y_range_from_height
        )
    elif np.shape(border_fade) != (config.width, config.height):
        raise ConfigurationError(
            f"border_fade has shape {np.shape(border_fade)}, "
            f"expected ({config.width}, {config.height})."
        )
    if permutation_table is None:
        permutation_table = _DEFAULT_PERMUTATION_TABLE

    noise_values = noise.sample_grid(
        permutation_table, config.seed, config.width, config.height, config.scale,
        octaves=config.noise_octaves,
        persistence=config.noise_persistence,
        lacunarity=config.noise_lacunarity,
    )
    ground_map = build_ground_map(noise_values, border_fade, config.magnitude, config.cutoff)
    mask_map, variant_map, overlay_map = assign_tiles(ground_map)
    for array in (ground_map, mask_map, variant_map, overlay_map):
        array.flags.writeable = False

    return TileMapResult(config, ground_map, mask_map, variant_map, overlay_map)


def draw_seed(rng: np.random.Generator) -> float:
    """Draws a fresh generation seed."""
    return float(rng.uniform(DEFAULTS.SEED_MIN, DEFAULTS.SEED_MAX))


class IslandGenerator:
    """
    Holds a configuration plus the state that outlives a single generation:
    the border fade cache and the seed source. Generation itself is delegated
    to the pure `generate` function.
    """
    def __init__(self, config: IslandConfig, logger: logging.Logger,
                 rng: np.random.Generator = None, permutation_table: np.ndarray = None):
        """
        Initializes the island generator.

        Args:
            config (IslandConfig): The starting generation parameters.
            logger (logging.Logger): The logger instance for all output.
            rng (np.random.Generator, optional): Source of new seeds.
            permutation_table (np.ndarray, optional): A pre-computed noise
                permutation table. If None, the shared default is used.
        """
        self.logger = logger
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()
        self.permutation_table = (
            permutation_table if permutation_table is not None else _DEFAULT_PERMUTATION_TABLE
        )
        self.border_fade_cache = BorderFadeCache(logger)

        self.logger.info(
            f"IslandGenerator initialized: {config.width}x{config.height} grid, seed {config.seed}."
        )

    @property
    def border_fade(self) -> np.ndarray:
        cfg = self.config
        return self.border_fade_cache.get(
            cfg.width, cfg.height, cfg.border_fade_offset, cfg.border_fade_y_range_from_height
        )

    def update_config(self, **changes):
        """Replaces generation parameters. Invalid values raise and leave the config untouched."""
        try:
            self.config = self.config.with_changes(**changes)
        except ConfigurationError as e:
            self.logger.error(f"Configuration update {changes} rejected: {e}")
            raise
        self.logger.debug(f"Configuration updated: {changes}")

    def reseed(self) -> float:
        """Draws a new seed. Regeneration is a separate call."""
        seed = draw_seed(self.rng)
        self.config = self.config.with_changes(seed=seed)
        self.logger.info(f"New seed: {seed}")
        return seed

    def generate(self) -> TileMapResult:
        result = generate(self.config, border_fade=self.border_fade,
                          permutation_table=self.permutation_table)
        counts = result.counts()
        self.logger.debug(
            f"Generated island (seed {self.config.seed}): {counts['ground']} ground, "
            f"{counts['boundary']} boundary, {counts['unmatched']} unmatched."
        )
        return result
