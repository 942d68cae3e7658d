# island_tiler/autotile.py

"""
================================================================================
NEIGHBOR BITMASK AUTOTILING
================================================================================
This module turns a ground map into tile variant indices. For every boundary
cell the 8 surrounding cells are packed into one byte, and that byte is
matched against an ordered table of 47 (required_mask, required_pattern)
rules.

Bit layout of a neighbour mask (y grows upward):

        4 A 1
        D   B          0b_DCBA_4321
        3 C 2

A bit is set when that neighbour is ground. Neighbours with an index of 0 or
outside the grid never count as ground.

It is designed to be a pure, stateless utility with no dependencies on
Pygame, so the renderer, the preview app and the baker share it.
================================================================================
"""
from typing import NamedTuple, Optional, Sequence

import numpy as np
from numba import njit

# --- Tile Index Constants ---
GROUND_TILE_INDEX = 25  # Solid ground tile; excluded from matching.
ISOLATED_TILE_INDEX = 24
UNMATCHED = -1

# Bit contributed by each position of the 3x3 neighbourhood, visited with x
# outer and y inner starting at (x-1, y-1). Position 4 is the cell itself.
NEIGHBOR_BITS = np.array([
    0b0000_0100,  # 0: (-1, -1) corner 3
    0b1000_0000,  # 1: (-1,  0) edge D
    0b0000_1000,  # 2: (-1, +1) corner 4
    0b0100_0000,  # 3: ( 0, -1) edge C
    0b0000_0000,  # 4: centre
    0b0001_0000,  # 5: ( 0, +1) edge A
    0b0000_0010,  # 6: (+1, -1) corner 2
    0b0010_0000,  # 7: (+1,  0) edge B
    0b0000_0001,  # 8: (+1, +1) corner 1
], dtype=np.uint8)


class TileRule(NamedTuple):
    """A mask matches when (mask & required_mask) == required_pattern."""
    required_mask: int
    required_pattern: int

    def matches(self, mask: int) -> bool:
        return (mask & self.required_mask) == self.required_pattern


# Order matters: resolution returns the first matching rule.
TILE_RULES = (
    TileRule(0b1111_0010, 0b1001_0010),  # 0
    TileRule(0b1111_0100, 0b0011_0100),  # 1
    TileRule(0b1111_0000, 0b0101_0000),  # 2
    TileRule(0b1111_0110, 0b0001_0110),  # 3
    TileRule(0b1111_1001, 0b0100_1001),  # 4
    TileRule(0b1111_0000, 0b0111_0000),  # 5
    TileRule(0b1111_0000, 0b1110_0000),  # 6
    TileRule(0b1111_0010, 0b1001_0000),  # 7
    TileRule(0b1111_0100, 0b0011_0000),  # 8

    TileRule(0b1111_0001, 0b1100_0001),  # 9
    TileRule(0b1111_1000, 0b0110_1000),  # 10
    TileRule(0b1111_0000, 0b1010_0000),  # 11
    TileRule(0b1111_0011, 0b1000_0011),  # 12
    TileRule(0b1111_1100, 0b0010_1100),  # 13
    TileRule(0b1111_0000, 0b1011_0000),  # 14
    TileRule(0b1111_0000, 0b1101_0000),  # 15
    TileRule(0b1111_0001, 0b1100_0000),  # 16
    TileRule(0b1111_1000, 0b0110_0000),  # 17

    TileRule(0b1111_1111, 0b0000_0010),  # 18
    TileRule(0b1111_1111, 0b0000_0100),  # 19
    TileRule(0b1111_1111, 0b0000_0110),  # 20
    TileRule(0b1111_1111, 0b0000_1001),  # 21
    TileRule(0b1111_0011, 0b1000_0000),  # 22
    TileRule(0b1111_1100, 0b0010_0000),  # 23
    TileRule(0b1111_1111, 0b0000_1111),  # 24 isolated
    TileRule(0b0000_0000, 0b0000_0000),  # 25 solid ground, never matched
    TileRule(0b1111_1111, 0b0000_0001),  # 26
    TileRule(0b1111_1111, 0b0000_1000),  # 27
    TileRule(0b1111_1111, 0b0000_0011),  # 28
    TileRule(0b1111_1111, 0b0000_1100),  # 29
    TileRule(0b1111_0110, 0b0001_0000),  # 30
    TileRule(0b1111_1001, 0b0100_0000),  # 31
    TileRule(0b1111_0000, 0b1111_0000),  # 32

    TileRule(0b1111_1111, 0b0000_1101),  # 33
    TileRule(0b1111_1111, 0b0000_1011),  # 34
    TileRule(0b1111_0011, 0b1000_0001),  # 35
    TileRule(0b1111_1100, 0b0010_1000),  # 36
    TileRule(0b1111_0110, 0b0001_0100),  # 37
    TileRule(0b1111_0110, 0b0001_0010),  # 38
    TileRule(0b1111_1111, 0b0000_0101),  # 39

    TileRule(0b1111_1111, 0b0000_1110),  # 40
    TileRule(0b1111_1111, 0b0000_0111),  # 41
    TileRule(0b1111_0011, 0b1000_0010),  # 42
    TileRule(0b1111_1100, 0b0010_0100),  # 43
    TileRule(0b1111_1001, 0b0100_1000),  # 44
    TileRule(0b1111_1001, 0b0100_0001),  # 45
    TileRule(0b1111_1111, 0b0000_1010),  # 46
)


# --- Neighbor Bitmask Encoder ---
def encode_neighbor_mask(ground_map: np.ndarray, x: int, y: int) -> int:
    """Packs the ground state of the 8 neighbours of (x, y) into one byte."""
    width, height = ground_map.shape
    mask = 0
    position = 0
    for i in range(x - 1, x + 2):
        for j in range(y - 1, y + 2):
            inside = 0 < i < width and 0 < j < height
            if inside and (i, j) != (x, y) and ground_map[i, j]:
                mask |= int(NEIGHBOR_BITS[position])
            position += 1
    return mask

@njit
def encode_neighbor_masks(ground_map):
    """
    Encodes the neighbour mask of every cell at once.
    Ground cells are encoded too; callers decide which cells use the result.
    """
    width, height = ground_map.shape
    masks = np.zeros((width, height), dtype=np.uint8)

    for x in range(width):
        for y in range(height):
            mask = 0
            position = 0
            for i in range(x - 1, x + 2):
                for j in range(y - 1, y + 2):
                    if position != 4 and 0 < i < width and 0 < j < height and ground_map[i, j]:
                        mask |= NEIGHBOR_BITS[position]
                    position += 1
            masks[x, y] = mask

    return masks


# --- Tile Variant Resolver ---
def resolve_variant(mask: int, rules: Sequence[TileRule] = TILE_RULES) -> Optional[int]:
    """
    Returns the index of the first rule matching `mask`, or None.
    The solid ground slot is skipped whatever it contains.
    """
    for index, rule in enumerate(rules):
        if index == GROUND_TILE_INDEX:
            continue
        if rule.matches(mask):
            return index
    return None


def needs_overlay(mask: int) -> bool:
    """A boundary cell gets the overlay tile when any neighbour is ground."""
    return mask != 0


def create_variant_lut(rules: Sequence[TileRule] = TILE_RULES) -> np.ndarray:
    """Creates a 256-entry LUT where the index is the mask and the value the variant (or UNMATCHED)."""
    lut = np.full(256, UNMATCHED, dtype=np.int16)
    for mask in range(256):
        variant = resolve_variant(mask, rules)
        if variant is not None:
            lut[mask] = variant
    return lut


VARIANT_LUT = create_variant_lut()


def resolve_variants(masks: np.ndarray, lut: np.ndarray = VARIANT_LUT) -> np.ndarray:
    """Resolves a whole array of masks through a variant LUT."""
    return lut[masks]
