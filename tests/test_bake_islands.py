# ==============================================================================
# File: tests/test_bake_islands.py
# Purpose: Integration tests for the offline island baker.
# ==============================================================================
import unittest
import json
import logging
import os
import tempfile

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from bake_islands import bake_islands, main, plan_seeds
from island_tiler.errors import ConfigurationError
from island_tiler.settings import IslandConfig, load_config


class TestBakeIslands(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.logger = logging.getLogger("test_baker")

    def test_plan_seeds(self):
        seeds = plan_seeds(12.5, 4, rng_seed=2)
        self.assertEqual(len(seeds), 4)
        self.assertEqual(seeds[0], 12.5)
        self.assertEqual(seeds, plan_seeds(12.5, 4, rng_seed=2))

    def test_bake_writes_manifest_and_images(self):
        # Without noise every seed yields the same island.
        cfg = IslandConfig(seed=3.0, magnitude=0.0, cutoff=1.0, border_fade_offset=0.0)
        manifest = bake_islands(cfg, 3, self.tmp.name, rng_seed=7, tile_size=8, logger=self.logger)

        self.assertEqual(manifest["grid_dimensions"], [16, 16])
        self.assertEqual(manifest["tile_pixel_size"], 8)
        islands = manifest["islands"]
        self.assertEqual(len(islands), 3)
        self.assertEqual(islands[0]["seed"], 3.0)
        self.assertEqual(len({entry["hash"] for entry in islands}), 1)
        self.assertEqual(islands[0]["ground"], 192)

        image_dir = os.path.join(self.tmp.name, "islands")
        self.assertEqual(os.listdir(image_dir), [f"{islands[0]['hash']}.png"])

        with open(os.path.join(self.tmp.name, "manifest.json")) as f:
            self.assertEqual(json.load(f), manifest)
        self.assertEqual(load_config(os.path.join(self.tmp.name, "generation_config.json")), cfg)

    def test_count_must_be_positive(self):
        with self.assertRaises(ConfigurationError):
            bake_islands(IslandConfig(), 0, self.tmp.name, logger=self.logger)


class TestBakeMain(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_missing_config_file(self):
        missing = os.path.join(self.tmp.name, "missing.json")
        self.assertEqual(main(["--config", missing, "--output", self.tmp.name]), 1)

    def test_invalid_config_values(self):
        path = os.path.join(self.tmp.name, "odd.json")
        with open(path, 'w') as f:
            json.dump({"island_generation_parameters": {"width": 15}}, f)
        self.assertEqual(main(["--config", path, "--output", self.tmp.name]), 1)

    def _write(self, data) -> str:
        path = os.path.join(self.tmp.name, "config.json")
        with open(path, 'w') as f:
            json.dump(data, f)
        return path

    def test_non_numeric_value(self):
        path = self._write({"island_generation_parameters": {"width": "sixteen"}})
        self.assertEqual(main(["--config", path, "--output", self.tmp.name]), 1)

    def test_non_object_config(self):
        path = self._write([1, 2])
        self.assertEqual(main(["--config", path, "--output", self.tmp.name]), 1)

    def test_successful_run(self):
        out = os.path.join(self.tmp.name, "baked")
        self.assertEqual(main(["--count", "2", "--rng-seed", "1", "--tile-size", "4", "--output", out]), 0)
        self.assertTrue(os.path.exists(os.path.join(out, "manifest.json")))


if __name__ == '__main__':
    unittest.main()
