# config.py
# World configuration and tunable constants, with optional JSON overrides.

import json
import logging
import os

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class GameConfig:
    """Every setting a system may need. Defaults match the stock game."""
    def __init__(self, **overrides):
        # --- World ---
        self.world_height = 240
        self.world_width = 250

        # --- Area generation ---
        self.wall_probability = 0.30
        self.generation_passes = 4
        self.wall_threshold = 4

        # --- Creature placement ---
        self.spawn_mode = "table"  # "table" or "simple"
        self.default_species = "dog"
        self.placement_attempts_per_creature = 200

        # --- AI ---
        self.perception_radius = 6

        # --- Player ---
        self.player_name = "Anonymous"
        self.player_class = "warrior"

        # --- Misc ---
        self.message_log_size = 100
        self.seed = None
        self.debug = False

        # --- Window ---
        self.window_width = 1280
        self.window_height = 720
        self.tile_size = 16
        self.font_size = 16
        self.font_name = 'JetBrainsMonoNL-Regular.ttf'
        self.fps = 60

        # --- Data files ---
        self.creatures_file = os.path.join(BASE_DIR, 'creatures.json')
        self.items_file = os.path.join(BASE_DIR, 'items.json')
        self.classes_file = os.path.join(BASE_DIR, 'classes.json')

        self.apply(overrides)

    def apply(self, overrides):
        """Sets known keys from a mapping, ignoring (and logging) unknown ones."""
        for key, value in overrides.items():
            if not hasattr(self, key):
                logger.warning("Unknown config key '%s' ignored", key)
                continue
            setattr(self, key, value)

    @classmethod
    def from_json(cls, file_path):
        """Builds a config from a JSON object of overrides. A missing file gives the defaults."""
        config = cls()
        try:
            with open(file_path, 'r') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("No config file at %s, using defaults", file_path)
            return config
        except json.JSONDecodeError as e:
            logger.error("Error parsing config file %s: %s", file_path, e)
            return config

        if not isinstance(data, dict):
            logger.error("Config file %s must hold a JSON object", file_path)
            return config

        config.apply(data)
        return config
