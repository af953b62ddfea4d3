# game_state.py
# The shared context handed to every system: config, RNG, type tables and the message log.

import logging
import random

from character_creation import load_classes
from config import GameConfig
from type_tables import load_creature_types, load_item_types

logger = logging.getLogger(__name__)

PLAYER_TURN = 'PLAYER_TURN'
MONSTER_TURN = 'MONSTER_TURN'
GAME_OVER = 'GAME_OVER'


class GameState:
    """
    One consistent world configuration for every system.

    Systems never reach for globals: the RNG, the type tables and the
    message log all hang off this object, so a test can inject a seeded RNG
    and hand-made tables.
    """
    def __init__(self, config=None, rng=None, creature_types=None, item_types=None, class_types=None):
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.creature_types = creature_types if creature_types is not None else {}
        self.item_types = item_types if item_types is not None else {}
        self.class_types = class_types if class_types is not None else {}
        self.message_log = []
        self.game_state = PLAYER_TURN

    @classmethod
    def from_config(cls, config):
        """Builds a context with the type tables loaded from the configured data files."""
        return cls(config,
                   creature_types=load_creature_types(config.creatures_file),
                   item_types=load_item_types(config.items_file),
                   class_types=load_classes(config.classes_file))

    def add_message(self, message):
        """Appends a player-facing line to the in-game log, keeping only the newest ones."""
        if not message:
            return
        self.message_log.append(message)
        if len(self.message_log) > self.config.message_log_size:
            self.message_log.pop(0)

    def game_over(self):
        """Stops the simulation after the player's death."""
        if self.game_state == GAME_OVER:
            return
        self.game_state = GAME_OVER
        self.add_message("Death overcomes you...")
        self.add_message("Banished from the realm of the living for all time.")
        logger.info("Game over")

    @property
    def is_over(self):
        return self.game_state == GAME_OVER
