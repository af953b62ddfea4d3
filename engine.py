# engine.py
# Turn orchestration: the player's action, then one pursuit pass over every other creature.

import logging

from ai_system import AISystem
from character_creation import create_player
from combat_systems import CombatSystem
from core_systems import MovementSystem, ActionSystem
from factory import populate_area
from game_state import PLAYER_TURN, MONSTER_TURN
from world_generator import AreaGenerator

logger = logging.getLogger(__name__)


class Engine:
    """
    Drives the simulation one player action at a time.

    Every action that spends the player's turn is followed by a single
    pursuit pass. Once the game is over no further turns are processed.
    """
    def __init__(self, game_state):
        self.game_state = game_state
        self.action_system = ActionSystem(game_state)
        self.combat_system = CombatSystem(game_state, self.action_system)
        self.movement_system = MovementSystem(game_state, self.combat_system)
        self.ai_system = AISystem(game_state, self.movement_system)
        self.area = None
        self.player = None

    def setup(self, player_name=None, class_key=None):
        """Generates a level, creates the player at the spawn point and populates the level."""
        config = self.game_state.config
        generator = AreaGenerator(config, self.game_state.rng)
        result = generator.generate_area(config.world_height, config.world_width)
        if result is None:
            logger.error("setup() --> could not generate a %sx%s area", config.world_height, config.world_width)
            return False

        self.area, spawn_row, spawn_col = result
        self.player = create_player(player_name, class_key or config.player_class,
                                    spawn_row, spawn_col, self.area, self.game_state)
        if self.player is None:
            return False

        populate_area(self.area, self.game_state)
        # The player's own square is never shared with a freshly spawned creature.
        for creature in list(self.area.creatures):
            if creature is not self.player and creature.position == self.player.position:
                self.area.remove_creature(creature)

        self.game_state.add_message(f"Welcome, {self.player.name}. The cavern is dark and damp.")
        logger.info("Level ready: %d creatures, player at (%d, %d)",
                    len(self.area.creatures) - 1, spawn_row, spawn_col)
        return True

    @property
    def is_running(self):
        return self.player is not None and not self.game_state.is_over

    def player_move(self, d_row, d_col):
        if not self.is_running:
            return False
        spent = self.movement_system.move(self.player, d_row, d_col, self.game_state)
        return self._end_turn(spent)

    def player_pickup(self, index=0):
        if not self.is_running:
            return False
        spent = self.action_system.pickup(self.player, index, self.game_state)
        return self._end_turn(spent)

    def player_equip(self, index):
        """Equips the index-th inventory item."""
        if not self.is_running:
            return False
        if index < 0 or index >= len(self.player.inventory):
            return False
        item = self.player.inventory[index]
        spent = self.action_system.equip(self.player, item, self.game_state)
        return self._end_turn(spent)

    def player_unequip(self, slot):
        if not self.is_running:
            return False
        spent = self.action_system.unequip(self.player, slot, self.game_state)
        return self._end_turn(spent)

    def player_drop(self, index):
        """Drops the index-th inventory item."""
        if not self.is_running:
            return False
        if index < 0 or index >= len(self.player.inventory):
            return False
        item = self.player.inventory[index]
        spent = self.action_system.drop(self.player, item, self.game_state)
        return self._end_turn(spent)

    def _end_turn(self, spent):
        if not spent:
            return False
        # The player may have died during its own action.
        if self.game_state.is_over:
            return True
        self.game_state.game_state = MONSTER_TURN
        self.ai_system.update(self.player, self.game_state)
        if not self.game_state.is_over:
            self.game_state.game_state = PLAYER_TURN
        return True
