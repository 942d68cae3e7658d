# preview.py

"""
================================================================================
LIVE ISLAND PREVIEW
================================================================================
A Pygame window that regenerates the island on a fixed step and draws it with
the placeholder tileset. A side panel exposes the generation parameters as
sliders and a button to draw a new seed.

Usage:
    python preview.py [--config path/to/config.json]

Controls: R = new seed, SPACE = pause/resume regeneration, ESC = quit.
================================================================================
"""
import sys
import json
import logging
import argparse

import pygame
import pygame_gui

from island_tiler.errors import ConfigurationError
from island_tiler.generator import IslandGenerator
from island_tiler.runtime import FixedStepTicker, TileMapRenderer
from island_tiler.settings import IslandConfig, load_config

# --- UI Constants ---
SCREEN_WIDTH = 960
SCREEN_HEIGHT = 640
UI_PANEL_WIDTH = 300
UI_ELEMENT_HEIGHT = 25
UI_SLIDER_HEIGHT = 25
UI_PADDING = 10
UI_BUTTON_HEIGHT = 40
FRAME_RATE = 60
BACKGROUND_COLOR = (10, 10, 20)

# (config field, label, slider range)
SLIDER_SPECS = [
    ('magnitude', "Magnitude", (0.0, 1.0)),
    ('cutoff', "Cut Off", (0.0, 1.0)),
    ('scale', "Scale", (0.001, 1.0)),
    ('border_fade_offset', "Border Fade Offset", (-1.0, 0.0)),
]


class PreviewApp:
    """The main application class for the live island preview."""

    def __init__(self, island_config: IslandConfig):
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        self.logger = logging.getLogger(__name__)

        self.logger.info("Initializing Pygame...")
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Island Tiler Preview")
        self.clock = pygame.time.Clock()
        self.is_running = True

        self.generator = IslandGenerator(island_config, logger=self.logger)
        self.ticker = FixedStepTicker()
        self.renderer = TileMapRenderer(logger=self.logger)
        self.result = self.generator.generate()

        self.sliders = {}
        self._setup_ui()

    def _setup_ui(self):
        """Initializes the pygame_gui manager and creates the parameter panel."""
        self.ui_manager = pygame_gui.UIManager((SCREEN_WIDTH, SCREEN_HEIGHT))
        panel_rect = pygame.Rect(SCREEN_WIDTH - UI_PANEL_WIDTH, 0, UI_PANEL_WIDTH, SCREEN_HEIGHT)
        self.ui_panel = pygame_gui.elements.UIPanel(
            relative_rect=panel_rect,
            manager=self.ui_manager,
            starting_height=1
        )

        current_y = UI_PADDING
        element_width = UI_PANEL_WIDTH - (3 * UI_PADDING)
        settings = self.generator.config

        for field, label, value_range in SLIDER_SPECS:
            pygame_gui.elements.UILabel(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_ELEMENT_HEIGHT),
                text=label,
                manager=self.ui_manager,
                container=self.ui_panel
            )
            current_y += UI_ELEMENT_HEIGHT

            slider = pygame_gui.elements.UIHorizontalSlider(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_SLIDER_HEIGHT),
                start_value=getattr(settings, field),
                value_range=value_range,
                manager=self.ui_manager,
                container=self.ui_panel
            )
            self.sliders[slider] = field
            current_y += UI_SLIDER_HEIGHT + UI_PADDING

        self.seed_label = pygame_gui.elements.UILabel(
            relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_ELEMENT_HEIGHT),
            text=self._seed_text(),
            manager=self.ui_manager,
            container=self.ui_panel
        )
        current_y += UI_ELEMENT_HEIGHT + UI_PADDING

        self.seed_button = pygame_gui.elements.UIButton(
            relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_BUTTON_HEIGHT),
            text="New Seed",
            manager=self.ui_manager,
            container=self.ui_panel
        )
        current_y += UI_BUTTON_HEIGHT + UI_PADDING

        self.pause_button = pygame_gui.elements.UIButton(
            relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_BUTTON_HEIGHT),
            text="Pause",
            manager=self.ui_manager,
            container=self.ui_panel
        )

    def _seed_text(self) -> str:
        return f"Seed: {self.generator.config.seed:.3f}"

    def run(self):
        """The main application loop."""
        try:
            while self.is_running:
                time_delta = self.clock.tick(FRAME_RATE) / 1000.0
                self.handle_events()
                self.update(time_delta)
                self.draw()
        finally:
            self.logger.info("Exiting preview.")
            pygame.quit()

    def handle_events(self):
        """Processes user input and other events."""
        for event in pygame.event.get():
            self.ui_manager.process_events(event)

            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.is_running = False
                elif event.key == pygame.K_r:
                    self._reseed()
                elif event.key == pygame.K_SPACE:
                    self._toggle_pause()
            elif event.type == pygame_gui.UI_HORIZONTAL_SLIDER_MOVED:
                field = self.sliders.get(event.ui_element)
                if field:
                    self._update_parameter(field, event.value)
            elif event.type == pygame_gui.UI_BUTTON_PRESSED:
                if event.ui_element == self.seed_button:
                    self._reseed()
                elif event.ui_element == self.pause_button:
                    self._toggle_pause()

    def _update_parameter(self, field: str, value: float):
        try:
            self.generator.update_config(**{field: float(value)})
        except ConfigurationError as e:
            self.logger.warning(f"Rejected {field}={value}: {e}")

    def _reseed(self):
        self.generator.reseed()
        self.seed_label.set_text(self._seed_text())

    def _toggle_pause(self):
        if self.ticker.paused:
            self.ticker.resume()
            self.pause_button.set_text("Pause")
        else:
            self.ticker.pause()
            self.pause_button.set_text("Resume")
        self.logger.info(f"Regeneration {'paused' if self.ticker.paused else 'resumed'}.")

    def update(self, time_delta: float):
        # Identical inputs give identical maps, so one regeneration covers all due steps.
        if self.ticker.update(time_delta) > 0:
            self.result = self.generator.generate()
        self.ui_manager.update(time_delta)

    def draw(self):
        """Handles all rendering for the application."""
        self.screen.fill(BACKGROUND_COLOR)
        map_rect = pygame.Rect(0, 0, SCREEN_WIDTH - UI_PANEL_WIDTH, SCREEN_HEIGHT)
        self.renderer.draw(self.screen, self.result, self.renderer.centered_origin(map_rect, self.result))
        self.ui_manager.draw_ui(self.screen)

        counts = self.result.counts()
        pygame.display.set_caption(
            f"Island Tiler Preview | {counts['ground']} ground, {counts['boundary']} boundary, "
            f"{counts['unmatched']} unmatched"
        )
        pygame.display.flip()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Live preview for the island tiler.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON file with an 'island_generation_parameters' object.")
    args = parser.parse_args(argv)

    try:
        island_config = load_config(args.config) if args.config else IslandConfig()
    except (FileNotFoundError, json.JSONDecodeError, ConfigurationError) as e:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        logging.getLogger(__name__).critical(f"Could not load configuration: {e}")
        return 1

    PreviewApp(island_config).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
