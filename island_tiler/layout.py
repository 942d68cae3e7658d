# island_tiler/layout.py

"""
================================================================================
TILE PLACEMENT
================================================================================
Converts a generation result into an ordered list of draw commands in the
renderer's placement coordinates. Shared by the Pygame renderer and the
Pillow image composer, and free of any rendering dependency itself.
================================================================================
"""
from typing import List, NamedTuple, Optional

from .generator import CellKind, TileMapResult


class DrawCommand(NamedTuple):
    cell_x: int
    cell_y: int
    place_x: int
    place_y: int
    tile_index: Optional[int]  # None: draw no shaped tile
    overlay: bool


def placement_offset(width: int, height: int) -> int:
    """Square grids are centred on the placement origin; others start at it."""
    return width // 2 if width == height else 0


def to_placement(x: int, y: int, offset: int) -> tuple:
    return x - offset, y - offset


def build_draw_list(result: TileMapResult) -> List[DrawCommand]:
    """
    Lists what to draw for every cell, column by column.
    Unmatched cells without an overlay produce no command.
    """
    offset = placement_offset(result.width, result.height)
    commands = []
    for x in range(result.width):
        for y in range(result.height):
            cell = result.cell(x, y)
            if cell.kind is CellKind.UNMATCHED and not cell.overlay:
                continue
            place_x, place_y = to_placement(x, y, offset)
            commands.append(DrawCommand(x, y, place_x, place_y, cell.variant, cell.overlay))
    return commands
