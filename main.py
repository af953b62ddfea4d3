# main.py
# A cavern-crawling ASCII roguelike using Pygame.

import logging
import os
import sys

import pygame

from config import GameConfig, BASE_DIR
from engine import Engine
from game_state import GameState
from input_system import InputSystem, QUIT
from logging_config import configure_logging
from render_system import RenderSystem

logger = logging.getLogger(__name__)

CONFIG_FILE = os.path.join(BASE_DIR, 'config.json')


class Game:
    """Initializes Pygame, sets up the level, and runs the main game loop."""
    def __init__(self, config=None):
        self.config = config or GameConfig.from_json(CONFIG_FILE)
        configure_logging(logging.DEBUG if self.config.debug else logging.INFO)

        pygame.init()
        self.fullscreen = False
        self.screen = pygame.display.set_mode((self.config.window_width, self.config.window_height),
                                              pygame.RESIZABLE)
        pygame.display.set_caption("ASCII Cavern")
        self.clock = pygame.time.Clock()
        self.font = self.load_font()

        self.game_state = GameState.from_config(self.config)
        self.engine = Engine(self.game_state)
        self.input_system = InputSystem(self.engine)
        self.render_system = RenderSystem(self.game_state, self.screen, self.font, self.config.tile_size)

    def load_font(self):
        font_path = os.path.join(BASE_DIR, self.config.font_name)
        try:
            return pygame.font.Font(font_path, self.config.font_size)
        except (pygame.error, FileNotFoundError, OSError):
            logger.warning("Font '%s' not found. Using default.", self.config.font_name)
            return pygame.font.Font(None, self.config.font_size)

    def setup(self, player_name=None, class_key=None):
        if not self.engine.setup(player_name, class_key):
            logger.error("Could not set up the level, exiting")
            return False
        return True

    def toggle_fullscreen(self):
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode((self.config.window_width, self.config.window_height),
                                                  pygame.RESIZABLE)
        self.render_system.screen = self.screen

    def run(self):
        running = True
        while running:
            events = pygame.event.get()
            for event in events:
                if event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                    self.toggle_fullscreen()

            if self.input_system.handle_events(events) == QUIT:
                running = False

            self.render_system.update(engine=self.engine,
                                      show_inventory=self.input_system.show_inventory,
                                      drop_mode=self.input_system.drop_mode)
            pygame.display.flip()
            self.clock.tick(self.config.fps)

        pygame.quit()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    player_name = argv[0] if len(argv) > 0 else None
    class_key = argv[1] if len(argv) > 1 else None

    game = Game()
    if not game.setup(player_name, class_key):
        pygame.quit()
        return 1
    game.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
