# bake_islands.py

"""
================================================================================
OFFLINE ISLAND BAKER SCRIPT
================================================================================
This script is a command-line tool for generating a batch of islands and
saving each one as a composed PNG of placeholder tiles, together with a
manifest describing the seed and tile statistics of every island.

Usage:
    python bake_islands.py --config path/to/config.json --count 8 --output baked_islands
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import hashlib
import time

import numpy as np
from tqdm import tqdm

from island_tiler import config as DEFAULTS
from island_tiler.errors import ConfigurationError
from island_tiler.generator import IslandGenerator, draw_seed
from island_tiler.settings import IslandConfig, load_config
from island_tiler.tileset import compose_island_image, create_overlay_tile, create_placeholder_tileset


def result_hash(result) -> str:
    """Identifies an island by its tile assignment."""
    digest = hashlib.md5()
    digest.update(np.ascontiguousarray(result.variant_map).tobytes())
    digest.update(np.ascontiguousarray(result.overlay_map).tobytes())
    return digest.hexdigest()


def plan_seeds(first_seed: float, count: int, rng_seed: int = None) -> list:
    """The configured seed first, then seeds drawn from a seeded generator."""
    rng = np.random.default_rng(rng_seed)
    return [first_seed] + [draw_seed(rng) for _ in range(count - 1)]


def bake_islands(island_config: IslandConfig, count: int, output_dir: str,
                 rng_seed: int = None, tile_size: int = DEFAULTS.TILE_PIXEL_SIZE,
                 logger: logging.Logger = None) -> dict:
    """
    Generates `count` islands and writes PNGs plus manifest.json and
    generation_config.json into output_dir. Returns the manifest.
    """
    logger = logger or logging.getLogger("Baker")
    if count < 1:
        raise ConfigurationError(f"count must be >= 1, got {count}")

    generator = IslandGenerator(island_config, logger=logger)
    tiles = create_placeholder_tileset(tile_size)
    overlay_tile = create_overlay_tile(tile_size)

    image_dir = os.path.join(output_dir, "islands")
    os.makedirs(image_dir, exist_ok=True)

    start_time = time.perf_counter()
    entries = []
    saved_hashes = set()

    for seed in tqdm(plan_seeds(island_config.seed, count, rng_seed), desc="Baking Islands"):
        generator.update_config(seed=seed)
        result = generator.generate()
        island_hash = result_hash(result)
        filename = f"{island_hash}.png"

        if island_hash not in saved_hashes:
            saved_hashes.add(island_hash)
            compose_island_image(result, tiles, overlay_tile).save(os.path.join(image_dir, filename), 'PNG')

        entries.append({"seed": seed, "file": f"islands/{filename}", "hash": island_hash, **result.counts()})

    manifest = {
        "grid_dimensions": [island_config.width, island_config.height],
        "tile_pixel_size": tile_size,
        "islands": entries,
    }
    with open(os.path.join(output_dir, "manifest.json"), 'w') as f:
        json.dump(manifest, f, indent=2)
    with open(os.path.join(output_dir, "generation_config.json"), 'w') as f:
        json.dump({"island_generation_parameters": island_config.to_dict()}, f, indent=2)

    end_time = time.perf_counter()
    logger.info(f"Baking complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(f"  - {count} islands -> {len(saved_hashes)} unique images saved to: {output_dir}")
    return manifest


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Offline Island Baker for the island tiler.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON file with an 'island_generation_parameters' object.")
    parser.add_argument("--count", type=int, default=1, help="Number of islands to bake.")
    parser.add_argument("--rng-seed", type=int, default=None,
                        help="Seed for drawing the seeds of islands after the first.")
    parser.add_argument("--output", type=str, default="baked_islands", help="Output directory.")
    parser.add_argument("--tile-size", type=int, default=DEFAULTS.TILE_PIXEL_SIZE,
                        help="Edge length of one tile in pixels.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Baker")

    try:
        if args.config:
            logger.info(f"Loading configuration from: {args.config}")
            island_config = load_config(args.config)
        else:
            logger.info("No configuration given, using defaults.")
            island_config = IslandConfig()
        bake_islands(island_config, args.count, args.output, args.rng_seed, args.tile_size, logger)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
