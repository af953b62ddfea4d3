# ai_system.py
# AI behavior system for non-player creatures

import logging
import math

from core_systems import System
from area import NEIGHBOUR_OFFSETS

logger = logging.getLogger(__name__)


def round_half_away(value):
    """Rounds to the nearest integer, with halves going away from zero."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def toss_coin(rng):
    """A fair coin toss. True is heads."""
    return rng.random() < 0.5


class AISystem(System):
    """Moves every creature other than the player, chasing the player when it is close enough."""
    def __init__(self, game_state, movement_system):
        super().__init__(game_state)
        self.movement_system = movement_system

    def update(self, player, game_state=None):
        """Gives each creature in the player's area one move."""
        game_state = game_state or self.game_state
        if player is None or player.area is None:
            logger.warning("AISystem.update() --> no player or player is not in an area")
            return

        radius = game_state.config.perception_radius

        # Creatures killed earlier in the pass are skipped, not iterated over.
        for creature in list(player.area.creatures):
            # The player's death halts the rest of the pass.
            if game_state.is_over:
                break
            if creature is player or not creature.is_alive or creature.area is None:
                continue

            d_row = player.row - creature.row
            d_col = player.col - creature.col
            if d_row == 0 and d_col == 0:
                continue

            distance = math.sqrt(d_row * d_row + d_col * d_col)
            if distance == 0:
                continue

            if distance > radius:
                # Out of sight, so wander about.
                if toss_coin(game_state.rng):
                    continue
                move_row, move_col = game_state.rng.choice(NEIGHBOUR_OFFSETS)
            else:
                steps = round_half_away(distance)
                move_row = round_half_away(d_row / steps)
                move_col = round_half_away(d_col / steps)

            self.movement_system.move(creature, move_row, move_col, game_state)
