# island_tiler/__init__.py

from .autotile import GROUND_TILE_INDEX, TILE_RULES, UNMATCHED, resolve_variant
from .errors import ConfigurationError, IslandTilerError
from .generator import IslandGenerator, TileMapResult, draw_seed, generate
from .settings import IslandConfig, load_config

__all__ = [
    "GROUND_TILE_INDEX",
    "TILE_RULES",
    "UNMATCHED",
    "resolve_variant",
    "ConfigurationError",
    "IslandTilerError",
    "IslandGenerator",
    "TileMapResult",
    "draw_seed",
    "generate",
    "IslandConfig",
    "load_config",
]
