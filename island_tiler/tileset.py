# island_tiler/tileset.py

"""
================================================================================
PLACEHOLDER TILESET
================================================================================
This module draws a stand-in tile image for every autotile rule, so islands
can be previewed and exported without any artist assets. Each boundary tile
paints the neighbour regions its rule requires to be ground (edges as
bands, corners as squares) in the ground colour over the boundary colour.

It is designed to be a pure utility with no dependencies on Pygame; the
runtime renderer converts these images into surfaces.
================================================================================
"""
from typing import List, Sequence

from PIL import Image, ImageDraw

from . import autotile
from . import config as DEFAULTS
from .errors import ConfigurationError
from .generator import TileMapResult
from .layout import build_draw_list

# Bit value -> region name, following the 0b_DCBA_4321 layout.
_EDGE_BITS = {0b0001_0000: "top", 0b0010_0000: "right", 0b0100_0000: "bottom", 0b1000_0000: "left"}
_CORNER_BITS = {0b0000_0001: "top_right", 0b0000_0010: "bottom_right",
                0b0000_0100: "bottom_left", 0b0000_1000: "top_left"}


def validate_tile_count(count: int) -> None:
    """A tileset needs a slot for every rule, including the ground slot."""
    if count < DEFAULTS.TILE_SLOT_COUNT:
        raise ConfigurationError(
            f"A tileset needs at least {DEFAULTS.TILE_SLOT_COUNT} tiles "
            f"(slot {autotile.GROUND_TILE_INDEX} is solid ground), got {count}."
        )


def _region_box(region: str, size: int) -> tuple:
    """Inclusive pixel box of a region in image space (y down)."""
    band = max(1, size // 3)
    last = size - 1
    return {
        "top": (0, 0, last, band - 1),
        "right": (size - band, 0, last, last),
        "bottom": (0, size - band, last, last),
        "left": (0, 0, band - 1, last),
        "top_right": (size - band, 0, last, band - 1),
        "bottom_right": (size - band, size - band, last, last),
        "bottom_left": (0, size - band, band - 1, last),
        "top_left": (0, 0, band - 1, band - 1),
    }[region]


def create_rule_tile(rule: autotile.TileRule, size: int = DEFAULTS.TILE_PIXEL_SIZE) -> Image.Image:
    """Draws the placeholder tile for one rule."""
    img = Image.new('RGBA', (size, size), DEFAULTS.COLOR_BOUNDARY)
    draw = ImageDraw.Draw(img)
    for bits in (_EDGE_BITS, _CORNER_BITS):
        for bit, region in bits.items():
            if rule.required_pattern & bit:
                draw.rectangle(_region_box(region, size), fill=DEFAULTS.COLOR_GROUND)
    return img


def create_ground_tile(size: int = DEFAULTS.TILE_PIXEL_SIZE) -> Image.Image:
    return Image.new('RGBA', (size, size), DEFAULTS.COLOR_GROUND)


def create_overlay_tile(size: int = DEFAULTS.TILE_PIXEL_SIZE) -> Image.Image:
    """The translucent boundary overlay, outlined so cell edges stay visible."""
    img = Image.new('RGBA', (size, size), DEFAULTS.COLOR_OVERLAY)
    ImageDraw.Draw(img).rectangle((0, 0, size - 1, size - 1), outline=DEFAULTS.COLOR_GRID_LINE)
    return img


def create_placeholder_tileset(size: int = DEFAULTS.TILE_PIXEL_SIZE,
                               rules: Sequence[autotile.TileRule] = autotile.TILE_RULES) -> List[Image.Image]:
    """One image per rule slot; the ground slot holds the solid ground tile."""
    tiles = []
    for index, rule in enumerate(rules):
        if index == autotile.GROUND_TILE_INDEX:
            tiles.append(create_ground_tile(size))
        else:
            tiles.append(create_rule_tile(rule, size))
    validate_tile_count(len(tiles))
    return tiles


def compose_island_image(result: TileMapResult, tiles: Sequence[Image.Image],
                         overlay_tile: Image.Image) -> Image.Image:
    """
    Renders a whole island into one RGBA image. Row 0 of the image is the
    top of the grid (highest y). Unmatched cells stay transparent.
    """
    validate_tile_count(len(tiles))
    size = overlay_tile.size[0]
    img = Image.new('RGBA', (result.width * size, result.height * size), (0, 0, 0, 0))

    for command in build_draw_list(result):
        dest = (command.cell_x * size, (result.height - 1 - command.cell_y) * size)
        if command.tile_index is not None:
            img.paste(tiles[command.tile_index], dest)
        if command.overlay:
            img.alpha_composite(overlay_tile, dest=dest)
    return img
