# island_tiler/runtime/renderer.py

"""
================================================================================
TILE MAP RENDERER
================================================================================
This module draws a generation result with Pygame. It owns the tile surfaces
(the placeholder tileset unless others are supplied) and blits the shaped
boundary tiles, the solid ground tile and the boundary overlay for every cell.

Placement coordinates grow upward, as in the generator; the renderer flips
them into screen space around a pixel origin.
================================================================================
"""
import logging
from typing import Sequence

import pygame
from PIL import Image

from .. import config as DEFAULTS
from ..generator import TileMapResult
from ..layout import build_draw_list, placement_offset
from ..tileset import create_overlay_tile, create_placeholder_tileset, validate_tile_count


def image_to_surface(img: Image.Image) -> pygame.Surface:
    """Converts a Pillow RGBA image to a Pygame surface."""
    surface = pygame.image.frombytes(img.tobytes(), img.size, 'RGBA')
    if pygame.display.get_surface() is not None:
        surface = surface.convert_alpha()
    return surface


class TileMapRenderer:
    """Draws TileMapResults onto Pygame surfaces."""

    def __init__(self, logger: logging.Logger = None, tile_size: int = DEFAULTS.TILE_PIXEL_SIZE,
                 tiles: Sequence[pygame.Surface] = None, overlay_tile: pygame.Surface = None):
        """
        Args:
            logger (logging.Logger, optional): The logger instance for all output.
            tile_size (int): Edge length of one tile in pixels.
            tiles (Sequence[pygame.Surface], optional): At least 47 tile surfaces,
                slot 25 being solid ground. Placeholders are drawn when omitted.
            overlay_tile (pygame.Surface, optional): The boundary overlay surface.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.tile_size = tile_size

        if tiles is None:
            tiles = [image_to_surface(img) for img in create_placeholder_tileset(tile_size)]
            self.logger.debug(f"Created {len(tiles)} placeholder tiles ({tile_size}px).")
        validate_tile_count(len(tiles))
        self.tiles = list(tiles)

        if overlay_tile is None:
            overlay_tile = image_to_surface(create_overlay_tile(tile_size))
        self.overlay_tile = overlay_tile

    def centered_origin(self, screen_rect: pygame.Rect, result: TileMapResult) -> tuple:
        """Pixel position of placement (0, 0) that centres the grid in screen_rect."""
        offset = placement_offset(result.width, result.height)
        size = self.tile_size
        origin_x = screen_rect.centerx - (result.width * size) // 2 + offset * size
        origin_y = screen_rect.centery - (result.height * size) // 2 + (result.height - offset) * size
        return origin_x, origin_y

    def placement_to_screen(self, place_x: int, place_y: int, origin: tuple) -> tuple:
        """Top-left pixel of a placement cell; y is flipped."""
        return (origin[0] + place_x * self.tile_size,
                origin[1] - (place_y + 1) * self.tile_size)

    def draw(self, screen: pygame.Surface, result: TileMapResult, origin: tuple = None) -> int:
        """
        Renders every cell of the result.

        Returns:
            int: The number of tiles blitted (overlays included).
        """
        if origin is None:
            origin = self.centered_origin(screen.get_rect(), result)

        blits = 0
        for command in build_draw_list(result):
            pos = self.placement_to_screen(command.place_x, command.place_y, origin)
            if command.tile_index is not None:
                screen.blit(self.tiles[command.tile_index], pos)
                blits += 1
            if command.overlay:
                screen.blit(self.overlay_tile, pos)
                blits += 1
        return blits
